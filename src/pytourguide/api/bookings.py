"""Booking service."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

from ..booking import build_booking_request
from ..exceptions import ConflictError, SlotUnavailableError, ValidationError
from ..models import Booking, Trip
from ..util import mask_email
from .base import BaseService
from .const import (
    BOOKING_CANCEL_ENDPOINT,
    BOOKING_CREATE_ENDPOINT,
    BOOKING_ENDPOINT,
    BOOKING_MINE_ENDPOINT,
)
from .mapping import map_booking, map_booking_response, map_items

_LOGGER = logging.getLogger(__name__)

_UPDATABLE_FIELDS = {
    "contact_phone": "contactPhone",
    "contact_email": "contactEmail",
    "status": "status",
}


class BookingsService(BaseService):
    """Book trip slots and manage the traveler's bookings."""

    name = "bookings"

    async def book_slot(
        self,
        trip: Trip,
        day: date | datetime | None,
        time: str | None,
        contact_phone: str | None,
        contact_email: str | None,
    ) -> Booking:
        """Book one slot of ``trip``.

        The slot is checked against ``trip.schedule`` as loaded by the caller;
        it is not re-fetched before submitting. A conflict reported by the
        backend is raised as ``SlotUnavailableError``.
        """
        _LOGGER.debug("Service %s book_slot started", self.name)
        request = build_booking_request(trip, day, time, contact_phone, contact_email)
        try:
            data = await self._request_json(
                "POST",
                BOOKING_CREATE_ENDPOINT.format(trip_id=self._require_id(trip.id, "trip_id")),
                json=request.to_payload(),
                auth_required=True,
            )
        except ConflictError as exc:
            _LOGGER.warning(
                "Service %s book_slot rejected by backend for %s",
                self.name,
                mask_email(request.contact_email),
            )
            raise SlotUnavailableError(
                str(exc) or "The selected slot is no longer available.",
                detail=exc.detail,
                user_message=str(exc) or "The selected slot is no longer available.",
            ) from exc
        booking = map_booking_response(data)
        _LOGGER.debug("Service %s book_slot completed", self.name)
        return booking

    async def list_my_bookings(self) -> list[Booking]:
        _LOGGER.debug("Service %s list_my_bookings started", self.name)
        data = await self._request_json("GET", BOOKING_MINE_ENDPOINT, auth_required=True)
        bookings = map_items(data, map_booking, "bookings", "data")
        _LOGGER.debug(
            "Service %s list_my_bookings completed count=%s", self.name, len(bookings)
        )
        return bookings

    async def cancel_booking(self, booking_id: str) -> None:
        _LOGGER.debug("Service %s cancel_booking started", self.name)
        booking_id_value = self._require_id(booking_id, "booking_id")
        await self._request_text(
            "PATCH",
            BOOKING_CANCEL_ENDPOINT.format(booking_id=booking_id_value),
            auth_required=True,
        )
        _LOGGER.debug("Service %s cancel_booking completed", self.name)

    async def update_booking(self, booking_id: str, **fields: Any) -> Booking:
        booking_id_value = self._require_id(booking_id, "booking_id")
        unknown = sorted(set(fields) - set(_UPDATABLE_FIELDS))
        if unknown:
            raise ValidationError(f"Booking fields cannot be updated: {', '.join(unknown)}.")
        if not fields:
            raise ValidationError("No booking fields to update.")
        payload = {_UPDATABLE_FIELDS[key]: value for key, value in fields.items()}
        data = await self._request_json(
            "PATCH",
            BOOKING_ENDPOINT.format(booking_id=booking_id_value),
            json=payload,
            auth_required=True,
        )
        return map_booking_response(data)
