"""Mapping of backend JSON documents onto library models.

The backend returns references either as bare ids or as populated
documents, depending on the endpoint. Every reference is normalised here
into ``Raw`` or ``Populated`` so callers never inspect the payload shape.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import Any, TypeVar

from ..exceptions import ApiError, ValidationError
from ..models import (
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
    Ref,
    Review,
    StartLocation,
    Trip,
    TripPage,
    User,
)
from ..schedule import ScheduleSet
from ..util import parse_date

T = TypeVar("T")


def coerce_id(value: Any, field: str) -> str:
    if value is None or isinstance(value, bool):
        raise ApiError(f"Response missing {field}.")
    text = str(value).strip()
    if not text:
        raise ApiError(f"Response missing {field}.")
    return text


def _document_id(item: dict[str, Any], field: str) -> str:
    return coerce_id(item.get("_id") or item.get("id"), field)


def _ref_id(value: Any, field: str) -> str:
    if isinstance(value, dict):
        return _document_id(value, field)
    return coerce_id(value, field)


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


def _float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _flag(value: Any, field: str) -> bool:
    if not isinstance(value, bool):
        raise ApiError(f"Response included a non-boolean {field}.")
    return value


def _int(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return 0


def map_ref(value: Any, mapper: Callable[[dict[str, Any]], T]) -> Ref | None:
    if value is None:
        return None
    if isinstance(value, dict):
        return Populated(mapper(value))
    if isinstance(value, str | int) and not isinstance(value, bool):
        return Raw(coerce_id(value, "reference id"))
    raise ApiError("Response included an invalid reference.")


def map_items(data: Any, mapper: Callable[[dict[str, Any]], T], *keys: str) -> list[T]:
    """Map a list response, unwrapping it from the first matching envelope key."""
    items: Any = data
    if isinstance(data, dict):
        items = None
        for key in keys:
            if key in data:
                items = data[key]
                break
        if items is None:
            return []
    if not isinstance(items, list):
        raise ApiError("Response included an invalid list.")
    return [mapper(item) for item in items if isinstance(item, dict)]


def map_user(item: dict[str, Any]) -> User:
    return User(
        id=_document_id(item, "user id"),
        name=str(item.get("name") or item.get("fullName") or "").strip(),
        email=str(item.get("email") or "").strip(),
        role=str(item.get("role") or "tourist"),
        phone=item.get("phone") or None,
        profile_picture=item.get("profilePicture") or None,
    )


def map_guide(item: dict[str, Any]) -> Guide:
    rating = item.get("rating")
    if isinstance(rating, list):
        values = [_float(entry.get("value")) for entry in rating if isinstance(entry, dict)]
        rating_value = sum(values) / len(values) if values else None
    elif rating is None:
        rating_value = None
    else:
        rating_value = _float(rating)
    return Guide(
        id=_document_id(item, "guide id"),
        user=map_ref(item.get("user"), map_user),
        city=str(item.get("city") or ""),
        languages=_str_list(item.get("languages")),
        bio=str(item.get("bio") or ""),
        rating=rating_value,
    )


def map_location(item: Any) -> Location:
    if not isinstance(item, dict):
        raise ApiError("Response included an invalid path location.")
    position = item.get("position") if isinstance(item.get("position"), dict) else {}
    return Location(
        name=str(item.get("name") or ""),
        lat=_float(position.get("lat")),
        lng=_float(position.get("lng")),
    )


def map_start_location(item: Any) -> StartLocation | None:
    if not isinstance(item, dict):
        return None
    coordinates = item.get("coordinates")
    if not isinstance(coordinates, list) or len(coordinates) != 2:
        return None
    return StartLocation(
        longitude=_float(coordinates[0]),
        latitude=_float(coordinates[1]),
        description=str(item.get("description") or ""),
    )


def map_schedule(value: Any) -> ScheduleSet:
    try:
        return ScheduleSet.from_payload(value)
    except ValidationError as exc:
        raise ApiError("Response included an invalid schedule.") from exc


def map_trip(item: dict[str, Any]) -> Trip:
    if not isinstance(item, dict):
        raise ApiError("Response included invalid trip data.")
    path = item.get("path")
    return Trip(
        id=_document_id(item, "trip id"),
        title=str(item.get("title") or ""),
        guide=map_ref(item.get("guide"), map_guide),
        city=str(item.get("city") or ""),
        path=[map_location(loc) for loc in path] if isinstance(path, list) else [],
        schedule=map_schedule(item.get("schedule")),
        start_location=map_start_location(item.get("startLocation")),
        is_available=_flag(item.get("isAvailable", True), "isAvailable"),
        price=_float(item.get("price")),
        description=str(item.get("description") or ""),
        type=str(item.get("type") or ""),
        image_url=item.get("imageUrl") or None,
    )


def map_guide_contact(item: Any) -> GuideContact | None:
    if not isinstance(item, dict):
        return None
    return GuideContact(
        name=str(item.get("name") or "").strip(),
        phone=item.get("phone") or None,
        profile_picture=item.get("profilePicture") or None,
    )


def map_trip_response(data: Any) -> Trip:
    """Map a single-trip response, which may wrap the trip with its guide user."""
    if not isinstance(data, dict):
        raise ApiError("Response included invalid trip data.")
    if isinstance(data.get("trip"), dict):
        trip = map_trip(data["trip"])
        contact = map_guide_contact(data.get("guideUser"))
        if contact is not None:
            trip = dataclasses.replace(trip, guide_user=contact)
        return trip
    return map_trip(data)


def map_trip_page(data: Any) -> TripPage:
    if isinstance(data, list):
        return TripPage(trips=map_items(data, map_trip), has_next_page=False)
    if not isinstance(data, dict):
        raise ApiError("Response included invalid trip list.")
    return TripPage(
        trips=map_items(data, map_trip, "trips"),
        has_next_page=data.get("hasNextPage") is True,
    )


def map_booking(item: dict[str, Any]) -> Booking:
    raw_date = item.get("scheduledDate")
    if not raw_date:
        raise ApiError("Response missing booking date.")
    try:
        scheduled_date = parse_date(str(raw_date))
    except ValidationError as exc:
        raise ApiError("Response included invalid booking date.") from exc
    return Booking(
        id=_document_id(item, "booking id"),
        tourist=map_ref(item.get("tourist"), map_user),
        trip=map_ref(item.get("trip"), map_trip),
        guide=map_ref(item.get("guide"), map_guide),
        status=str(item.get("status") or "pending"),
        scheduled_date=scheduled_date,
        scheduled_time=str(item.get("scheduledTime") or ""),
        contact_phone=str(item.get("contactPhone") or ""),
        contact_email=str(item.get("contactEmail") or ""),
    )


def map_booking_response(data: Any) -> Booking:
    if isinstance(data, dict) and isinstance(data.get("booking"), dict):
        return map_booking(data["booking"])
    if isinstance(data, dict):
        return map_booking(data)
    raise ApiError("Response included invalid booking data.")


def map_review(item: dict[str, Any]) -> Review:
    return Review(
        id=_document_id(item, "review id"),
        content=str(item.get("content") or ""),
        rating=_int(item.get("rating")),
        author=map_ref(item.get("author"), map_user),
        guide=map_ref(item.get("guide"), map_guide),
        images=_str_list(item.get("images")),
    )


def map_post(item: dict[str, Any]) -> Post:
    likes = item.get("likes")
    comments = item.get("comments")
    return Post(
        id=_document_id(item, "post id"),
        title=str(item.get("title") or ""),
        content=str(item.get("content") or ""),
        images=_str_list(item.get("images")),
        author=map_ref(item.get("author"), map_user),
        like_count=len(likes) if isinstance(likes, list) else _int(item.get("likeCount")),
        liked_by=[_ref_id(like, "like user id") for like in likes if like is not None]
        if isinstance(likes, list)
        else [],
        comments=[map_ref(comment, map_comment) for comment in comments if comment is not None]
        if isinstance(comments, list)
        else [],
    )


def map_comment(item: dict[str, Any]) -> Comment:
    return Comment(
        id=_document_id(item, "comment id"),
        content=str(item.get("content") or ""),
        author=map_ref(item.get("author"), map_user),
        post_id=str(item.get("post") or ""),
    )


def map_city(item: Any) -> City:
    if not isinstance(item, dict):
        raise ApiError("Response included invalid city data.")
    name = str(item.get("name") or "").strip()
    if not name:
        raise ApiError("Response missing city name.")
    extra = {key: value for key, value in item.items() if key not in {"name", "description"}}
    return City(name=name, description=str(item.get("description") or ""), extra=extra)


def map_application(item: dict[str, Any]) -> GuideApplication:
    user = item.get("userId")
    if isinstance(user, dict):
        user = user.get("_id") or user.get("id")
    return GuideApplication(
        id=_document_id(item, "application id"),
        user_id=str(user or ""),
        city=str(item.get("city") or ""),
        languages=_str_list(item.get("languages")),
        specialties=_str_list(item.get("specialties")),
        status=str(item.get("status") or "pending"),
    )
