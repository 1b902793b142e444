"""Trip schedule model.

A schedule is the set of bookable (date, time) slots of a trip. The
collection is immutable: every mutating operation returns a new
``ScheduleSet``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from .exceptions import ValidationError
from .models import ScheduleSlot, ValidationIssue
from .util import (
    ensure_time_slot,
    format_date,
    normalize_time_label,
    parse_date,
    time_sort_key,
    to_day,
)

SCHEDULE_EMPTY = ValidationIssue(
    field="schedule",
    code="schedule_empty",
    message="At least one schedule item is required.",
)


@dataclass(frozen=True, slots=True, eq=False)
class ScheduleSet:
    """Ordered collection of unique (date, time) slots.

    Two sets are equal when they hold the same slots, whatever their order.
    """

    entries: tuple[ScheduleSlot, ...] = ()

    @classmethod
    def from_slots(cls, slots: Iterable[ScheduleSlot]) -> ScheduleSet:
        """Build a set from existing slots, keeping the first of any duplicates."""
        seen: set[tuple[date, str]] = set()
        entries: list[ScheduleSlot] = []
        for slot in slots:
            if not isinstance(slot, ScheduleSlot):
                raise ValidationError("Schedule entries must be ScheduleSlot values.")
            normalized = ScheduleSlot(
                date=to_day(slot.date),
                time=normalize_time_label(slot.time),
                is_available=slot.is_available is True,
            )
            if normalized.key in seen:
                continue
            seen.add(normalized.key)
            entries.append(normalized)
        return cls(tuple(entries))

    @classmethod
    def from_payload(cls, payload: Any) -> ScheduleSet:
        """Deserialize the wire ``schedule`` field."""
        if payload is None:
            return cls()
        if not isinstance(payload, list):
            raise ValidationError("Schedule payload must be a list.")
        slots: list[ScheduleSlot] = []
        for item in payload:
            if not isinstance(item, Mapping):
                raise ValidationError("Schedule payload items must be objects.")
            raw_date = item.get("date")
            raw_time = item.get("time")
            if raw_date is None or raw_time is None:
                raise ValidationError("Schedule payload items need date and time.")
            available = item.get("isAvailable", True)
            if not isinstance(available, bool):
                raise ValidationError("Schedule isAvailable must be a boolean.")
            slots.append(
                ScheduleSlot(
                    date=parse_date(str(raw_date)),
                    time=str(raw_time),
                    is_available=available,
                )
            )
        return cls.from_slots(slots)

    def to_payload(self) -> list[dict[str, Any]]:
        return [
            {
                "date": format_date(slot.date),
                "time": slot.time,
                "isAvailable": slot.is_available,
            }
            for slot in self.entries
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScheduleSet):
            return NotImplemented
        return frozenset(self.entries) == frozenset(other.entries)

    def __hash__(self) -> int:
        return hash(frozenset(self.entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ScheduleSlot]:
        return iter(self.entries)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, ScheduleSlot):
            return self._find(item.date, item.time) is not None
        if isinstance(item, tuple) and len(item) == 2:
            day, time = item
            if isinstance(day, date) and isinstance(time, str):
                return self._find(to_day(day), time) is not None
        return False

    def add(
        self,
        day: date | datetime,
        time: str,
        *,
        is_available: bool = True,
    ) -> ScheduleSet:
        """Add a slot; adding a pair that is already present changes nothing."""
        key_day = to_day(day)
        label = ensure_time_slot(time)
        if self._find(key_day, label) is not None:
            return self
        slot = ScheduleSlot(date=key_day, time=label, is_available=is_available)
        return ScheduleSet((*self.entries, slot))

    def remove(self, day: date | datetime, time: str) -> ScheduleSet:
        key_day = to_day(day)
        if self._find(key_day, time) is None:
            return self
        return ScheduleSet(
            tuple(slot for slot in self.entries if slot.key != (key_day, time))
        )

    def toggle(self, day: date | datetime, time: str) -> ScheduleSet:
        if self.is_slot_selected(day, time):
            return self.remove(day, time)
        return self.add(day, time)

    def remove_all_for_date(self, day: date | datetime) -> ScheduleSet:
        key_day = to_day(day)
        if not self.has_date(key_day):
            return self
        return ScheduleSet(tuple(slot for slot in self.entries if slot.date != key_day))

    def set_times_for_date(self, day: date | datetime, times: Iterable[str]) -> ScheduleSet:
        """Replace the labels scheduled on one day.

        Labels that stay keep their slot (and availability); new labels are
        appended as available; labels not listed are dropped.
        """
        key_day = to_day(day)
        wanted = {ensure_time_slot(label) for label in times}
        kept = tuple(
            slot for slot in self.entries if slot.date != key_day or slot.time in wanted
        )
        result = ScheduleSet(kept)
        for label in sorted(wanted, key=time_sort_key):
            result = result.add(key_day, label)
        return result

    def slots_for_date(self, day: date | datetime) -> list[str]:
        key_day = to_day(day)
        labels = [slot.time for slot in self.entries if slot.date == key_day]
        return sorted(labels, key=time_sort_key)

    def is_slot_selected(self, day: date | datetime, time: str) -> bool:
        return self._find(to_day(day), time) is not None

    def has_date(self, day: date | datetime) -> bool:
        key_day = to_day(day)
        return any(slot.date == key_day for slot in self.entries)

    def dates(self) -> list[date]:
        return sorted({slot.date for slot in self.entries})

    def grouped_by_date(self) -> dict[date, list[ScheduleSlot]]:
        grouped: dict[date, list[ScheduleSlot]] = {}
        for slot in self.entries:
            grouped.setdefault(slot.date, []).append(slot)
        return {
            day: sorted(grouped[day], key=lambda slot: time_sort_key(slot.time))
            for day in sorted(grouped)
        }

    def available_slots(self) -> list[ScheduleSlot]:
        """Return bookable slots in insertion order."""
        return [slot for slot in self.entries if slot.is_available]

    def is_bookable(self) -> bool:
        return any(slot.is_available for slot in self.entries)

    def validate(self) -> list[ValidationIssue]:
        if not self.entries:
            return [SCHEDULE_EMPTY]
        return []

    def _find(self, day: date, time: str) -> ScheduleSlot | None:
        for slot in self.entries:
            if slot.date == day and slot.time == time:
                return slot
        return None
