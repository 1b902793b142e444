"""Booking slot selection and request building."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from .exceptions import SlotUnavailableError, ValidationError
from .models import Trip, ValidationIssue
from .schedule import ScheduleSet
from .util import format_date, is_valid_email, is_valid_phone, to_day


@dataclass(frozen=True, slots=True)
class BookingRequest:
    trip_id: str
    guide_id: str | None
    scheduled_date: date
    scheduled_time: str
    contact_phone: str
    contact_email: str

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "scheduledDate": format_date(self.scheduled_date),
            "scheduledTime": self.scheduled_time,
            "contactPhone": self.contact_phone,
            "contactEmail": self.contact_email,
        }
        if self.guide_id:
            payload["guide"] = self.guide_id
        return payload


def check_slot(
    schedule: ScheduleSet,
    day: date | datetime | None,
    time: str | None,
) -> list[ValidationIssue]:
    """Check a chosen slot against the locally cached schedule."""
    if day is None or not time:
        return [
            ValidationIssue(
                field="schedule",
                code="slot_not_selected",
                message="Please select a date and time for your trip.",
            )
        ]
    key_day = to_day(day)
    for slot in schedule.available_slots():
        if slot.date == key_day and slot.time == time:
            return []
    return [
        ValidationIssue(
            field="schedule",
            code="slot_unavailable",
            message="The selected slot is no longer available.",
        )
    ]


def validate_contact(phone: str | None, email: str | None) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    phone_value = (phone or "").strip()
    email_value = (email or "").strip()
    if not phone_value:
        issues.append(
            ValidationIssue("contact_phone", "required", "Phone number is required.")
        )
    elif not is_valid_phone(phone_value):
        issues.append(
            ValidationIssue("contact_phone", "invalid", "Please enter a valid phone number.")
        )
    if not email_value:
        issues.append(
            ValidationIssue("contact_email", "required", "Email address is required.")
        )
    elif not is_valid_email(email_value):
        issues.append(
            ValidationIssue("contact_email", "invalid", "Please enter a valid email address.")
        )
    return issues


def build_booking_request(
    trip: Trip,
    day: date | datetime | None,
    time: str | None,
    contact_phone: str | None,
    contact_email: str | None,
) -> BookingRequest:
    """Validate a traveler's choice and return the request to submit.

    Raises ``SlotUnavailableError`` when the trip is closed for booking or the
    slot is not available in ``trip.schedule`` and ``ValidationError`` for
    missing selections and contact field problems.
    """
    if not trip.is_available:
        raise SlotUnavailableError(
            "This trip is not available for booking.",
            detail=f"Trip {trip.id} is marked unavailable.",
            user_message="This trip is not available for booking.",
        )
    slot_issues = check_slot(trip.schedule, day, time)
    if slot_issues:
        issue = slot_issues[0]
        if issue.code == "slot_unavailable":
            raise SlotUnavailableError(
                issue.message,
                detail=f"Slot {format_date(day)} {time} is not available for trip {trip.id}.",
                user_message=issue.message,
            )
        raise ValidationError(issue.message, error_code=issue.code, user_message=issue.message)
    contact_issues = validate_contact(contact_phone, contact_email)
    if contact_issues:
        raise ValidationError(
            "; ".join(issue.message for issue in contact_issues),
            user_message=contact_issues[0].message,
        )
    return BookingRequest(
        trip_id=trip.id,
        guide_id=trip.guide.id if trip.guide is not None else None,
        scheduled_date=to_day(day),  # type: ignore[arg-type]
        scheduled_time=str(time),
        contact_phone=(contact_phone or "").strip(),
        contact_email=(contact_email or "").strip(),
    )
