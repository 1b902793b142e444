"""Review service."""

from __future__ import annotations

import logging

from ..exceptions import ApiError, ValidationError
from ..models import Review
from .base import BaseService
from .const import REVIEW_CREATE_ENDPOINT, REVIEW_ENDPOINT, REVIEW_MINE_ENDPOINT
from .mapping import map_items, map_review

_LOGGER = logging.getLogger(__name__)


def _validate_rating(rating: int) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
        raise ValidationError("rating must be an integer between 1 and 5.")
    return rating


def _validate_content(content: str) -> str:
    if not isinstance(content, str) or not content.strip():
        raise ValidationError("Review content is required.")
    return content.strip()


def _unwrap_review(data: object) -> object:
    if isinstance(data, dict) and isinstance(data.get("review"), dict):
        return data["review"]
    return data


class ReviewsService(BaseService):
    """Traveler reviews of guides."""

    name = "reviews"

    async def create_review(self, guide_id: str, content: str, rating: int) -> Review:
        _LOGGER.debug("Service %s create_review started", self.name)
        payload = {
            "guide": self._require_id(guide_id, "guide_id"),
            "content": _validate_content(content),
            "rating": _validate_rating(rating),
        }
        data = await self._request_json(
            "POST",
            REVIEW_CREATE_ENDPOINT,
            json=payload,
            auth_required=True,
        )
        review = _unwrap_review(data)
        if not isinstance(review, dict):
            raise ApiError("Review was not returned by the backend.")
        return map_review(review)

    async def list_my_reviews(self) -> list[Review]:
        data = await self._request_json("GET", REVIEW_MINE_ENDPOINT, auth_required=True)
        return map_items(data, map_review, "reviews")

    async def update_review(
        self,
        review_id: str,
        *,
        content: str | None = None,
        rating: int | None = None,
    ) -> Review:
        review_id_value = self._require_id(review_id, "review_id")
        payload: dict[str, object] = {}
        if content is not None:
            payload["content"] = _validate_content(content)
        if rating is not None:
            payload["rating"] = _validate_rating(rating)
        if not payload:
            raise ValidationError("content or rating is required.")
        data = await self._request_json(
            "PUT",
            REVIEW_ENDPOINT.format(review_id=review_id_value),
            json=payload,
            auth_required=True,
        )
        review = _unwrap_review(data)
        if not isinstance(review, dict):
            raise ApiError("Review was not returned by the backend.")
        return map_review(review)

    async def delete_review(self, review_id: str) -> None:
        review_id_value = self._require_id(review_id, "review_id")
        await self._request_text(
            "DELETE",
            REVIEW_ENDPOINT.format(review_id=review_id_value),
            auth_required=True,
        )
