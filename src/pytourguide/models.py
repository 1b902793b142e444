"""Public data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any, Generic, Literal, TypeVar

if TYPE_CHECKING:
    from .schedule import ScheduleSet

T = TypeVar("T")

TripType = Literal["Adventure", "Cultural", "Food", "Historical", "Nature", "Relaxation", "Group"]
BookingStatus = Literal["pending", "confirmed", "canceled"]
ApplicationStatus = Literal["pending", "approved", "rejected"]
UserRole = Literal["tourist", "guide", "admin"]

TRIP_TYPES: tuple[str, ...] = (
    "Adventure",
    "Cultural",
    "Food",
    "Historical",
    "Nature",
    "Relaxation",
    "Group",
)


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    field: str
    code: str
    message: str


@dataclass(frozen=True, slots=True)
class ScheduleSlot:
    date: date
    time: str
    is_available: bool = True

    @property
    def key(self) -> tuple[date, str]:
        return (self.date, self.time)


@dataclass(frozen=True, slots=True)
class Raw:
    """Reference the backend returned as a bare id."""

    id: str


@dataclass(frozen=True, slots=True)
class Populated(Generic[T]):
    """Reference the backend returned as a full record."""

    record: T

    @property
    def id(self) -> str:
        return getattr(self.record, "id")


Ref = Raw | Populated


@dataclass(frozen=True, slots=True)
class Location:
    name: str
    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class StartLocation:
    longitude: float = 0.0
    latitude: float = 0.0
    description: str = ""


@dataclass(frozen=True, slots=True)
class User:
    id: str
    name: str
    email: str = ""
    role: str = "tourist"
    phone: str | None = None
    profile_picture: str | None = None


@dataclass(frozen=True, slots=True)
class GuideContact:
    """Contact card of the guide, sent alongside a single trip."""

    name: str
    phone: str | None = None
    profile_picture: str | None = None


@dataclass(frozen=True, slots=True)
class Guide:
    id: str
    user: Ref | None
    city: str
    languages: list[str] = field(default_factory=list)
    bio: str = ""
    rating: float | None = None


@dataclass(frozen=True, slots=True)
class Trip:
    id: str
    title: str
    guide: Ref | None
    city: str
    path: list[Location]
    schedule: ScheduleSet
    start_location: StartLocation | None
    is_available: bool
    price: float
    description: str
    type: str
    image_url: str | None = None
    guide_user: GuideContact | None = None


@dataclass(frozen=True, slots=True)
class TripPage:
    trips: list[Trip]
    has_next_page: bool


@dataclass(frozen=True, slots=True)
class Booking:
    id: str
    tourist: Ref | None
    trip: Ref | None
    guide: Ref | None
    status: str
    scheduled_date: date
    scheduled_time: str
    contact_phone: str
    contact_email: str


@dataclass(frozen=True, slots=True)
class Review:
    id: str
    content: str
    rating: int
    author: Ref | None
    guide: Ref | None
    images: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Post:
    id: str
    title: str
    content: str
    images: list[str]
    author: Ref | None
    like_count: int = 0
    liked_by: list[str] = field(default_factory=list)
    comments: list[Ref] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Comment:
    id: str
    content: str
    author: Ref | None
    post_id: str = ""


@dataclass(frozen=True, slots=True)
class City:
    name: str
    description: str = ""
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class GuideApplication:
    id: str
    user_id: str
    city: str
    languages: list[str]
    specialties: list[str]
    status: str
