"""Guide service."""

from __future__ import annotations

import logging

from ..models import Guide, Post, Review
from .base import BaseService
from .const import (
    GUIDE_ENDPOINT,
    GUIDE_MY_POSTS_ENDPOINT,
    GUIDE_POST_ENDPOINT,
    GUIDE_POSTS_ENDPOINT,
    GUIDE_REVIEWS_ENDPOINT,
)
from .mapping import map_guide, map_items, map_post, map_review

_LOGGER = logging.getLogger(__name__)


class GuidesService(BaseService):
    """Guide profiles, their reviews and posts."""

    name = "guides"

    async def get_guide(self, guide_id: str) -> Guide:
        guide_id_value = self._require_id(guide_id, "guide_id")
        data = await self._request_json("GET", GUIDE_ENDPOINT.format(guide_id=guide_id_value))
        if isinstance(data, dict) and isinstance(data.get("guide"), dict):
            data = data["guide"]
        return map_guide(data)

    async def list_guide_reviews(self, guide_id: str) -> list[Review]:
        guide_id_value = self._require_id(guide_id, "guide_id")
        data = await self._request_json(
            "GET", GUIDE_REVIEWS_ENDPOINT.format(guide_id=guide_id_value)
        )
        return map_items(data, map_review, "reviews")

    async def list_guide_posts(self, guide_id: str) -> list[Post]:
        guide_id_value = self._require_id(guide_id, "guide_id")
        data = await self._request_json("GET", GUIDE_POSTS_ENDPOINT.format(guide_id=guide_id_value))
        return map_items(data, map_post, "posts")

    async def list_my_posts(self) -> list[Post]:
        data = await self._request_json("GET", GUIDE_MY_POSTS_ENDPOINT, auth_required=True)
        posts = map_items(data, map_post, "posts")
        _LOGGER.debug("Service %s list_my_posts completed count=%s", self.name, len(posts))
        return posts

    async def delete_post(self, post_id: str) -> None:
        post_id_value = self._require_id(post_id, "post_id")
        await self._request_text(
            "DELETE",
            GUIDE_POST_ENDPOINT.format(post_id=post_id_value),
            auth_required=True,
        )
