"""Service base class and shared request behavior."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import aiohttp

from ..exceptions import (
    ApiError,
    AuthError,
    ConfigError,
    ConflictError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServiceUnavailableError,
    ValidationError,
)
from .const import AUTH_HEADER, AUTH_PREFIX, DEFAULT_HEADERS

_LOGGER = logging.getLogger(__name__)
_DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=30)


class BaseService:
    """Base class for backend resource services."""

    name = "base"

    def __init__(
        self,
        session: aiohttp.ClientSession,
        *,
        base_url: str | None = None,
        api_uri: str | None = None,
        token: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
    ) -> None:
        if session is None:
            raise ConfigError("Session is required.")
        self._session = session
        self._base_url = self._normalize_base_url(base_url)
        self._api_uri = self._normalize_api_uri(api_uri)
        self._token: str | None = None
        self.set_token(token)
        self._timeout = timeout or _DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)

    def set_token(self, token: str | None) -> None:
        self._token = token.strip() if isinstance(token, str) and token.strip() else None

    @property
    def has_token(self) -> bool:
        return bool(self._token)

    def _build_url(self, path: str) -> str:
        if not isinstance(path, str) or not path:
            raise ValidationError("Path must be a non-empty string.")
        if path.startswith("http://") or path.startswith("https://"):
            raise ValidationError("Use relative paths when building API requests.")
        if self._base_url is None:
            raise ConfigError("base_url is required to build API requests.")
        normalized_path = path if path.startswith("/") else f"/{path}"
        return f"{self._base_url}{self._api_uri}{normalized_path}"

    def _build_headers(self, *, auth_required: bool) -> dict[str, str]:
        headers = dict(DEFAULT_HEADERS)
        if self._token:
            headers[AUTH_HEADER] = f"{AUTH_PREFIX}{self._token}"
        elif auth_required:
            raise AuthError("Authentication required.", user_message="Please log in first.")
        return headers

    def _require_id(self, value: Any, field: str) -> str:
        if value is None or isinstance(value, bool):
            raise ValidationError(f"{field} is required.")
        text = str(value).strip()
        if not text:
            raise ValidationError(f"{field} is required.")
        return quote(text, safe="")

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        auth_required: bool = False,
        **kwargs: Any,
    ) -> Any:
        url = self._build_url(path)
        headers = self._build_headers(auth_required=auth_required)
        return await self._request(method, url, expect_json=True, headers=headers, **kwargs)

    async def _request_text(
        self,
        method: str,
        path: str,
        *,
        auth_required: bool = False,
        **kwargs: Any,
    ) -> str:
        url = self._build_url(path)
        headers = self._build_headers(auth_required=auth_required)
        return await self._request(method, url, expect_json=False, headers=headers, **kwargs)

    async def _request(self, method: str, url: str, *, expect_json: bool, **kwargs: Any) -> Any:
        retries = self._retry_count if method.upper() == "GET" else 0
        attempts = retries + 1
        timeout = kwargs.pop("timeout", None) or self._timeout
        for attempt in range(attempts):
            try:
                async with self._session.request(
                    method,
                    url,
                    timeout=timeout,
                    **kwargs,
                ) as response:
                    await self._raise_for_status(response)
                    if expect_json:
                        try:
                            return await response.json()
                        except (aiohttp.ContentTypeError, ValueError) as exc:
                            raise ApiError("Response did not contain valid JSON.") from exc
                    return await response.text()
            except TimeoutError as exc:
                if attempt >= attempts - 1:
                    raise RequestTimeoutError("Request timed out.") from exc
                _LOGGER.warning("Service %s retrying %s after timeout", self.name, method)
            except aiohttp.ClientError as exc:
                if attempt >= attempts - 1:
                    raise NetworkError("Network request failed.") from exc
                _LOGGER.warning("Service %s retrying %s after network error", self.name, method)
        raise ApiError("Request failed.")

    async def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        status = response.status
        if 200 <= status < 300:
            return
        message = await self._error_message_from_response(response)
        detail = f"Request failed with status {status}."
        if status in (401, 403):
            raise AuthError(message or "Authentication failed.", detail=detail)
        if status == 404:
            raise NotFoundError(message or "Resource not found.", detail=detail)
        if status == 409:
            raise ConflictError(message or "Request conflicts with current state.", detail=detail)
        if status == 429:
            raise RateLimitError(message or "Too many requests.", detail=detail)
        if status in (502, 503, 504):
            raise ServiceUnavailableError(message or "Service unavailable.", detail=detail)
        raise ApiError(message or detail, detail=detail)

    async def _error_message_from_response(self, response: aiohttp.ClientResponse) -> str | None:
        try:
            data = await response.json()
        except (aiohttp.ContentTypeError, ValueError):
            return None
        if isinstance(data, dict):
            message = data.get("message") or data.get("error")
            if isinstance(message, str):
                trimmed = message.strip()
                if trimmed:
                    return trimmed
        return None

    def _normalize_base_url(self, base_url: str | None) -> str | None:
        if base_url is None:
            return None
        if not isinstance(base_url, str) or not base_url.strip():
            raise ConfigError("base_url must be a non-empty string.")
        return base_url.strip().rstrip("/")

    def _normalize_api_uri(self, api_uri: str | None) -> str:
        if api_uri is None:
            return ""
        if not isinstance(api_uri, str):
            raise ConfigError("api_uri must be a string.")
        normalized = api_uri.strip().strip("/")
        if not normalized:
            return ""
        return f"/{normalized}"
