"""Shared utilities for validation and normalization."""

from __future__ import annotations

import re
from datetime import date, datetime

from .exceptions import ValidationError

TIME_SLOTS: tuple[str, ...] = (
    "09:00",
    "10:00",
    "11:00",
    "12:00",
    "13:00",
    "14:00",
    "15:00",
    "16:00",
    "17:00",
)

_TIME_LABEL_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_PHONE_RE = re.compile(r"^\+?[\d\s\-()]{8,}$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def to_day(value: date | datetime) -> date:
    """Return the calendar day of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError("Schedule date must be a date or datetime.")


def parse_date(value: str) -> date:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Date must be a non-empty string.")
    raw = value.strip()
    if raw.endswith("Z"):
        raw = f"{raw[:-1]}+00:00"
    try:
        if "T" in raw or " " in raw:
            return datetime.fromisoformat(raw).date()
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise ValidationError("Date is not a valid ISO 8601 value.") from exc


def format_date(value: date | datetime) -> str:
    return to_day(value).isoformat()


def normalize_time_label(value: str) -> str:
    if not isinstance(value, str):
        raise ValidationError("Time label must be a string.")
    label = value.strip()
    if not _TIME_LABEL_RE.match(label):
        raise ValidationError(f"Time label {value!r} is not in HH:MM format.")
    return label


def ensure_time_slot(value: str) -> str:
    label = normalize_time_label(value)
    if label not in TIME_SLOTS:
        raise ValidationError(f"Time label {value!r} is not an offered time slot.")
    return label


def time_sort_key(label: str) -> tuple[int, str]:
    # Offered labels first, in their fixed order; anything else after them.
    try:
        return (TIME_SLOTS.index(label), label)
    except ValueError:
        return (len(TIME_SLOTS), label)


def is_past_date(value: date | datetime, *, today: date | None = None) -> bool:
    reference = today if today is not None else date.today()
    return to_day(value) < reference


def is_valid_phone(value: str) -> bool:
    return isinstance(value, str) and bool(_PHONE_RE.match(value.strip()))


def is_valid_email(value: str) -> bool:
    return isinstance(value, str) and bool(_EMAIL_RE.match(value.strip()))


def mask_email(email: str) -> str:
    if not isinstance(email, str) or "@" not in email:
        return "***"
    local, _, domain = email.strip().partition("@")
    if len(local) <= 2:
        return f"{'*' * len(local)}@{domain}"
    return f"{local[:1]}{'*' * (len(local) - 2)}{local[-1:]}@{domain}"


def mask_phone(phone: str) -> str:
    if not isinstance(phone, str):
        return "***"
    digits = [ch for ch in phone if ch.isdigit()]
    if len(digits) <= 4:
        return "*" * len(digits)
    return f"{'*' * (len(digits) - 2)}{''.join(digits[-2:])}"
