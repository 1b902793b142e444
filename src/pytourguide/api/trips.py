"""Trip service."""

from __future__ import annotations

import logging

from ..draft import TripDraft, validate_trip
from ..exceptions import ValidationError
from ..models import ScheduleSlot, Trip, TripPage
from ..schedule import ScheduleSet
from .base import BaseService
from .const import (
    TRIP_CREATE_ENDPOINT,
    TRIP_ENDPOINT,
    TRIP_GUIDE_LIST_ENDPOINT,
    TRIP_LIST_ENDPOINT,
)
from .mapping import map_items, map_trip, map_trip_page, map_trip_response

_LOGGER = logging.getLogger(__name__)


class TripsService(BaseService):
    """Browse, author and maintain trips."""

    name = "trips"

    async def list_trips(self, page: int = 1) -> TripPage:
        _LOGGER.debug("Service %s list_trips started page=%s", self.name, page)
        if page < 1:
            raise ValidationError("page must be 1 or greater.")
        data = await self._request_json("GET", TRIP_LIST_ENDPOINT, params={"page": page})
        result = map_trip_page(data)
        _LOGGER.debug(
            "Service %s list_trips completed count=%s", self.name, len(result.trips)
        )
        return result

    async def get_trip(self, trip_id: str) -> Trip:
        _LOGGER.debug("Service %s get_trip started", self.name)
        trip_id_value = self._require_id(trip_id, "trip_id")
        data = await self._request_json("GET", TRIP_ENDPOINT.format(trip_id=trip_id_value))
        trip = map_trip_response(data)
        _LOGGER.debug("Service %s get_trip completed", self.name)
        return trip

    async def list_guide_trips(self, guide_id: str) -> list[Trip]:
        guide_id_value = self._require_id(guide_id, "guide_id")
        data = await self._request_json(
            "GET", TRIP_GUIDE_LIST_ENDPOINT.format(guide_id=guide_id_value)
        )
        trips = map_items(data, map_trip, "trips")
        _LOGGER.debug("Service %s list_guide_trips completed count=%s", self.name, len(trips))
        return trips

    async def create_trip(self, draft: TripDraft) -> Trip:
        """Publish a draft; the draft must pass every wizard check first."""
        _LOGGER.debug("Service %s create_trip started", self.name)
        self._ensure_valid(draft)
        data = await self._request_json(
            "POST",
            TRIP_CREATE_ENDPOINT,
            json=draft.to_payload(),
            auth_required=True,
        )
        trip = map_trip_response(data)
        _LOGGER.debug("Service %s create_trip completed", self.name)
        return trip

    async def update_trip(self, trip_id: str, draft: TripDraft) -> Trip:
        _LOGGER.debug("Service %s update_trip started", self.name)
        trip_id_value = self._require_id(trip_id, "trip_id")
        self._ensure_valid(draft)
        data = await self._request_json(
            "PUT",
            TRIP_ENDPOINT.format(trip_id=trip_id_value),
            json=draft.to_payload(),
            auth_required=True,
        )
        trip = map_trip_response(data)
        _LOGGER.debug("Service %s update_trip completed", self.name)
        return trip

    async def update_schedule(self, trip_id: str, schedule: ScheduleSet) -> Trip:
        """Replace the schedule of a persisted trip."""
        trip_id_value = self._require_id(trip_id, "trip_id")
        issues = schedule.validate()
        if issues:
            raise ValidationError(issues[0].message, error_code=issues[0].code)
        data = await self._request_json(
            "PUT",
            TRIP_ENDPOINT.format(trip_id=trip_id_value),
            json={"schedule": schedule.to_payload()},
            auth_required=True,
        )
        return map_trip_response(data)

    async def delete_trip(self, trip_id: str) -> None:
        _LOGGER.debug("Service %s delete_trip started", self.name)
        trip_id_value = self._require_id(trip_id, "trip_id")
        await self._request_text(
            "DELETE",
            TRIP_ENDPOINT.format(trip_id=trip_id_value),
            auth_required=True,
        )
        _LOGGER.debug("Service %s delete_trip completed", self.name)

    async def get_available_slots(self, trip_id: str) -> list[ScheduleSlot]:
        trip = await self.get_trip(trip_id)
        if not trip.is_available:
            return []
        return trip.schedule.available_slots()

    async def search_trips(self, query: str, page: int = 1) -> TripPage:
        # The backend has no search endpoint; filter the requested page locally.
        needle = query.strip().lower()
        result = await self.list_trips(page)
        trips = [
            trip
            for trip in result.trips
            if needle in trip.title.lower()
            or needle in trip.city.lower()
            or needle in trip.description.lower()
        ]
        return TripPage(trips=trips, has_next_page=result.has_next_page)

    async def filter_trips_by_type(self, trip_type: str, page: int = 1) -> TripPage:
        result = await self.list_trips(page)
        trips = [trip for trip in result.trips if trip.type == trip_type]
        return TripPage(trips=trips, has_next_page=result.has_next_page)

    async def filter_trips_by_price(
        self,
        min_price: float,
        max_price: float,
        page: int = 1,
    ) -> TripPage:
        if min_price > max_price:
            raise ValidationError("min_price must not exceed max_price.")
        result = await self.list_trips(page)
        trips = [trip for trip in result.trips if min_price <= trip.price <= max_price]
        return TripPage(trips=trips, has_next_page=result.has_next_page)

    def _ensure_valid(self, draft: TripDraft) -> None:
        issues = validate_trip(draft)
        if issues:
            raise ValidationError(
                "; ".join(issue.message for issue in issues),
                error_code=issues[0].code,
                user_message=issues[0].message,
            )
