"""Client facade bundling the backend services."""

from __future__ import annotations

from typing import TypeVar

import aiohttp

from .api import (
    ApplicationsService,
    BaseService,
    BookingsService,
    CitiesService,
    GuidesService,
    ReviewsService,
    TripsService,
    UsersService,
)

_DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=30)
_S = TypeVar("_S", bound=BaseService)


class Client:
    """Single entry point to the marketplace backend.

    Every service shares one ``aiohttp.ClientSession`` and the same
    configuration. A session passed in by the caller is never closed by the
    client.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        base_url: str | None = None,
        api_uri: str | None = None,
        token: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._base_url = base_url
        self._api_uri = api_uri
        self._token = token
        self._timeout = timeout or _DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)
        self._services: dict[type[BaseService], BaseService] = {}

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            self._services.clear()

    def set_token(self, token: str | None) -> None:
        self._token = token
        for service in self._services.values():
            service.set_token(token)

    @property
    def trips(self) -> TripsService:
        return self._service(TripsService)

    @property
    def bookings(self) -> BookingsService:
        return self._service(BookingsService)

    @property
    def cities(self) -> CitiesService:
        return self._service(CitiesService)

    @property
    def guides(self) -> GuidesService:
        return self._service(GuidesService)

    @property
    def reviews(self) -> ReviewsService:
        return self._service(ReviewsService)

    @property
    def applications(self) -> ApplicationsService:
        return self._service(ApplicationsService)

    @property
    def users(self) -> UsersService:
        return self._service(UsersService)

    def _service(self, service_cls: type[_S]) -> _S:
        service = self._services.get(service_cls)
        if service is None:
            service = service_cls(
                self._ensure_session(),
                base_url=self._base_url,
                api_uri=self._api_uri,
                token=self._token,
                timeout=self._timeout,
                retry_count=self._retry_count,
            )
            self._services[service_cls] = service
        return service  # type: ignore[return-value]

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session
