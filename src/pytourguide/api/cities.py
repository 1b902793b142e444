"""City service."""

from __future__ import annotations

import logging
from urllib.parse import quote

from ..exceptions import ValidationError
from ..models import City, Guide, Trip
from .base import BaseService
from .const import CITY_ENDPOINT, CITY_GUIDES_ENDPOINT, CITY_TRIPS_ENDPOINT
from .mapping import map_city, map_guide, map_items, map_trip

_LOGGER = logging.getLogger(__name__)


class CitiesService(BaseService):
    """Read city pages: the city itself, its trips and its guides."""

    name = "cities"

    async def get_city(self, city_name: str) -> City:
        data = await self._request_json("GET", CITY_ENDPOINT.format(city=self._city(city_name)))
        return map_city(data)

    async def list_city_trips(self, city_name: str) -> list[Trip]:
        data = await self._request_json(
            "GET", CITY_TRIPS_ENDPOINT.format(city=self._city(city_name))
        )
        trips = map_items(data, map_trip, "trips")
        _LOGGER.debug("Service %s list_city_trips completed count=%s", self.name, len(trips))
        return trips

    async def list_city_guides(self, city_name: str) -> list[Guide]:
        data = await self._request_json(
            "GET", CITY_GUIDES_ENDPOINT.format(city=self._city(city_name))
        )
        guides = map_items(data, map_guide, "guides")
        _LOGGER.debug("Service %s list_city_guides completed count=%s", self.name, len(guides))
        return guides

    def _city(self, city_name: str) -> str:
        if not isinstance(city_name, str) or not city_name.strip():
            raise ValidationError("city_name must be a non-empty string.")
        return quote(city_name.strip(), safe="")
