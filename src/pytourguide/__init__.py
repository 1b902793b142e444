"""pyTourGuide package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .booking import BookingRequest, build_booking_request, check_slot, validate_contact
from .client import Client
from .draft import TripDraft, Wizard, update, validate_step, validate_trip
from .exceptions import (
    ApiError,
    AuthError,
    ConfigError,
    ConflictError,
    NetworkError,
    NotFoundError,
    SlotUnavailableError,
    TourGuideError,
    ValidationError,
)
from .models import (
    Booking,
    City,
    Comment,
    Guide,
    GuideApplication,
    GuideContact,
    Location,
    Populated,
    Post,
    Raw,
    Review,
    ScheduleSlot,
    StartLocation,
    Trip,
    TripPage,
    User,
    ValidationIssue,
)
from .schedule import ScheduleSet
from .util import TIME_SLOTS

try:
    __version__ = version("pytourguide")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "ApiError",
    "AuthError",
    "Booking",
    "BookingRequest",
    "City",
    "Client",
    "Comment",
    "ConfigError",
    "ConflictError",
    "Guide",
    "GuideApplication",
    "GuideContact",
    "Location",
    "NetworkError",
    "NotFoundError",
    "Populated",
    "Post",
    "Raw",
    "Review",
    "ScheduleSet",
    "ScheduleSlot",
    "SlotUnavailableError",
    "StartLocation",
    "TIME_SLOTS",
    "TourGuideError",
    "Trip",
    "TripDraft",
    "TripPage",
    "User",
    "ValidationError",
    "ValidationIssue",
    "Wizard",
    "__version__",
    "build_booking_request",
    "check_slot",
    "update",
    "validate_contact",
    "validate_step",
    "validate_trip",
]
