"""User service: own profile, contact details and post interactions."""

from __future__ import annotations

import logging
from typing import Any

from ..exceptions import ApiError, ValidationError
from ..models import Comment, Post, User
from ..util import is_valid_email, is_valid_phone, mask_phone
from .base import BaseService
from .const import (
    USER_CONTACT_ENDPOINT,
    USER_POST_COMMENT_ENDPOINT,
    USER_POST_COMMENTS_ENDPOINT,
    USER_POST_LIKE_ENDPOINT,
    USER_PROFILE_ENDPOINT,
)
from .mapping import map_comment, map_post, map_user

_LOGGER = logging.getLogger(__name__)

_PROFILE_FIELDS = ("name", "email", "phone")


def _unwrap(data: Any, key: str, label: str) -> dict[str, Any]:
    if isinstance(data, dict) and isinstance(data.get(key), dict):
        return data[key]
    raise ApiError(f"Response did not include the {label}.")


def _check_phone(phone: Any) -> str:
    if not isinstance(phone, str) or not is_valid_phone(phone):
        raise ValidationError("Please enter a valid phone number.")
    return phone.strip()


class UsersService(BaseService):
    """The signed-in user's profile and their likes and comments on posts."""

    name = "users"

    async def get_profile(self) -> User:
        data = await self._request_json("GET", USER_PROFILE_ENDPOINT, auth_required=True)
        return map_user(_unwrap(data, "user", "user"))

    async def update_profile(self, **fields: Any) -> User:
        """Update ``name``, ``email`` and/or ``phone`` of the signed-in user."""
        unknown = sorted(set(fields) - set(_PROFILE_FIELDS))
        if unknown:
            raise ValidationError(f"Profile fields cannot be updated: {', '.join(unknown)}.")
        payload = {key: value for key, value in fields.items() if value is not None}
        if not payload:
            raise ValidationError("No profile fields to update.")
        if "name" in payload:
            if not isinstance(payload["name"], str) or not payload["name"].strip():
                raise ValidationError("Name must be a non-empty string.")
            payload["name"] = payload["name"].strip()
        if "email" in payload:
            if not isinstance(payload["email"], str) or not is_valid_email(payload["email"]):
                raise ValidationError("Please enter a valid email address.")
            payload["email"] = payload["email"].strip()
        if "phone" in payload:
            payload["phone"] = _check_phone(payload["phone"])
        _LOGGER.debug("Service %s update_profile started fields=%s", self.name, sorted(payload))
        data = await self._request_json(
            "PUT",
            USER_PROFILE_ENDPOINT,
            json=payload,
            auth_required=True,
        )
        return map_user(_unwrap(data, "user", "user"))

    async def update_contact_info(self, user_id: str, phone: str) -> User:
        user_id_value = self._require_id(user_id, "user_id")
        phone_value = _check_phone(phone)
        _LOGGER.debug(
            "Service %s update_contact_info started phone=%s", self.name, mask_phone(phone_value)
        )
        data = await self._request_json(
            "PUT",
            USER_CONTACT_ENDPOINT.format(user_id=user_id_value),
            json={"phone": phone_value},
            auth_required=True,
        )
        return map_user(_unwrap(data, "user", "user"))

    async def toggle_like(self, user_id: str, post_id: str) -> Post:
        """Like the post, or remove the like if the user already liked it."""
        data = await self._request_json(
            "POST",
            USER_POST_LIKE_ENDPOINT.format(
                user_id=self._require_id(user_id, "user_id"),
                post_id=self._require_id(post_id, "post_id"),
            ),
            auth_required=True,
        )
        post = map_post(_unwrap(data, "post", "post"))
        _LOGGER.debug("Service %s toggle_like completed likes=%s", self.name, post.like_count)
        return post

    async def add_comment(self, user_id: str, post_id: str, content: str) -> Comment:
        if not isinstance(content, str) or not content.strip():
            raise ValidationError("Comment content is required.")
        data = await self._request_json(
            "POST",
            USER_POST_COMMENTS_ENDPOINT.format(
                user_id=self._require_id(user_id, "user_id"),
                post_id=self._require_id(post_id, "post_id"),
            ),
            json={"content": content.strip()},
            auth_required=True,
        )
        return map_comment(_unwrap(data, "comment", "comment"))

    async def delete_comment(self, user_id: str, post_id: str, comment_id: str) -> None:
        await self._request_text(
            "DELETE",
            USER_POST_COMMENT_ENDPOINT.format(
                user_id=self._require_id(user_id, "user_id"),
                post_id=self._require_id(post_id, "post_id"),
                comment_id=self._require_id(comment_id, "comment_id"),
            ),
            auth_required=True,
        )
