"""Trip draft state and the trip authoring wizard."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from .exceptions import ValidationError
from .models import TRIP_TYPES, Location, StartLocation, Trip, ValidationIssue
from .schedule import ScheduleSet
from .util import is_past_date

STEP_DETAILS = 1
STEP_SCHEDULE = 2
STEP_PATH = 3
STEP_CONFIRM = 4
LAST_STEP = STEP_CONFIRM

MIN_DESCRIPTION_LENGTH = 10

_DRAFT_FIELDS = (
    "title",
    "city",
    "price",
    "description",
    "type",
    "schedule",
    "path",
    "start_location",
)


@dataclass(frozen=True, slots=True)
class TripDraft:
    title: str = ""
    city: str = ""
    price: float = 0
    description: str = ""
    type: str = ""
    schedule: ScheduleSet = ScheduleSet()
    path: tuple[Location, ...] = ()
    start_location: StartLocation = StartLocation()

    @classmethod
    def empty(cls) -> TripDraft:
        return cls()

    @classmethod
    def from_trip(cls, trip: Trip) -> TripDraft:
        """Load a persisted trip into an editable draft."""
        return cls(
            title=trip.title,
            city=trip.city,
            price=trip.price,
            description=trip.description,
            type=trip.type,
            schedule=trip.schedule,
            path=tuple(trip.path),
            start_location=trip.start_location or StartLocation(),
        )

    def to_payload(self) -> dict[str, Any]:
        city = self.city.strip()
        return {
            "title": self.title.strip() or f"{city} Trip",
            "city": city,
            "price": self.price,
            "description": self.description,
            "type": self.type,
            "schedule": self.schedule.to_payload(),
            "path": [
                {"name": loc.name, "position": {"lat": loc.lat, "lng": loc.lng}}
                for loc in self.path
            ],
            "startLocation": {
                "type": "Point",
                "coordinates": [
                    self.start_location.longitude,
                    self.start_location.latitude,
                ],
                "description": self.start_location.description,
            },
        }


def update(draft: TripDraft, **changes: Any) -> TripDraft:
    """Return a copy of the draft with the given fields replaced."""
    unknown = sorted(set(changes) - set(_DRAFT_FIELDS))
    if unknown:
        raise ValidationError(f"Unknown draft fields: {', '.join(unknown)}.")
    if "schedule" in changes and not isinstance(changes["schedule"], ScheduleSet):
        raise ValidationError("schedule must be a ScheduleSet.")
    if "path" in changes:
        changes["path"] = tuple(changes["path"])
    return dataclasses.replace(draft, **changes)


def _ensure_selectable(day: date | datetime, today: date | None) -> None:
    if is_past_date(day, today=today):
        raise ValidationError("Past dates cannot be scheduled.")


def toggle_slot(
    draft: TripDraft,
    day: date | datetime,
    time: str,
    *,
    today: date | None = None,
) -> TripDraft:
    """Toggle one slot; only adding a slot requires a date that is not past."""
    if not draft.schedule.is_slot_selected(day, time):
        _ensure_selectable(day, today)
    return update(draft, schedule=draft.schedule.toggle(day, time))


def set_times_for_date(
    draft: TripDraft,
    day: date | datetime,
    times: Iterable[str],
    *,
    today: date | None = None,
) -> TripDraft:
    _ensure_selectable(day, today)
    return update(draft, schedule=draft.schedule.set_times_for_date(day, times))


def clear_date(draft: TripDraft, day: date | datetime) -> TripDraft:
    return update(draft, schedule=draft.schedule.remove_all_for_date(day))


def add_location(draft: TripDraft, location: Location) -> TripDraft:
    if not location.name.strip():
        raise ValidationError("Location name is required.")
    return update(draft, path=(*draft.path, location))


def remove_location(draft: TripDraft, index: int) -> TripDraft:
    if not 0 <= index < len(draft.path):
        raise ValidationError("Location index is out of range.")
    return update(draft, path=draft.path[:index] + draft.path[index + 1 :])


def move_location(draft: TripDraft, index: int, offset: int) -> TripDraft:
    """Move a path stop by ``offset`` positions; moves past either end are no-ops."""
    if not 0 <= index < len(draft.path):
        raise ValidationError("Location index is out of range.")
    target = index + offset
    if target < 0 or target >= len(draft.path) or target == index:
        return draft
    path = list(draft.path)
    path.insert(target, path.pop(index))
    return update(draft, path=path)


def _validate_details(draft: TripDraft) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    if not draft.city.strip():
        issues.append(ValidationIssue("city", "required", "City is required."))
    if not isinstance(draft.price, int | float) or draft.price <= 0:
        issues.append(ValidationIssue("price", "invalid", "Price must be greater than 0."))
    if not draft.type:
        issues.append(ValidationIssue("type", "required", "Type is required."))
    elif draft.type not in TRIP_TYPES:
        issues.append(ValidationIssue("type", "invalid", f"Unknown trip type {draft.type!r}."))
    if len(draft.description.strip()) < MIN_DESCRIPTION_LENGTH:
        issues.append(
            ValidationIssue(
                "description",
                "too_short",
                f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters.",
            )
        )
    return issues


def _validate_path(draft: TripDraft) -> list[ValidationIssue]:
    if not draft.path:
        return [
            ValidationIssue("path", "required", "At least one location in path is required.")
        ]
    return []


def _validate_start_location(draft: TripDraft) -> list[ValidationIssue]:
    start = draft.start_location
    if not -180 <= start.longitude <= 180 or not -90 <= start.latitude <= 90:
        return [
            ValidationIssue(
                "start_location",
                "invalid",
                "Start location must have valid coordinates [longitude, latitude].",
            )
        ]
    return []


def validate_step(draft: TripDraft, step: int) -> list[ValidationIssue]:
    if step == STEP_DETAILS:
        return _validate_details(draft)
    if step == STEP_SCHEDULE:
        return draft.schedule.validate()
    if step == STEP_PATH:
        return _validate_path(draft)
    return []


def validate_trip(draft: TripDraft) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for step in range(STEP_DETAILS, LAST_STEP + 1):
        issues.extend(validate_step(draft, step))
    issues.extend(_validate_start_location(draft))
    return issues


@dataclass(frozen=True, slots=True)
class Wizard:
    """Step navigation over a trip draft."""

    draft: TripDraft = TripDraft()
    step: int = STEP_DETAILS

    def edit(self, **changes: Any) -> Wizard:
        return dataclasses.replace(self, draft=update(self.draft, **changes))

    def with_draft(self, draft: TripDraft) -> Wizard:
        return dataclasses.replace(self, draft=draft)

    def go_to(self, step: int) -> tuple[Wizard, list[ValidationIssue]]:
        """Move to ``step``; moving forward requires every step passed over to validate."""
        if step < STEP_DETAILS or step > LAST_STEP:
            return self, []
        if step <= self.step:
            return dataclasses.replace(self, step=step), []
        for current in range(self.step, step):
            issues = validate_step(self.draft, current)
            if issues:
                return self, issues
        return dataclasses.replace(self, step=step), []

    def next(self) -> tuple[Wizard, list[ValidationIssue]]:
        return self.go_to(self.step + 1)

    def back(self) -> Wizard:
        if self.step > STEP_DETAILS:
            return dataclasses.replace(self, step=self.step - 1)
        return self

    @property
    def is_last_step(self) -> bool:
        return self.step == LAST_STEP
