from datetime import date

import pytest

from pytourguide.api import mapping
from pytourguide.exceptions import ApiError
from pytourguide.models import (
    Guide,
    GuideContact,
    Populated,
    Raw,
    ScheduleSlot,
    StartLocation,
    User,
)

GUIDE_SAMPLE = {
    "_id": "g1",
    "user": {"_id": "u1", "name": "Sara", "email": "sara@example.com", "role": "guide"},
    "city": "Cairo",
    "languages": ["en", "ar"],
    "rating": [{"value": 4}, {"value": 5}],
}

TRIP_SAMPLE = {
    "_id": "t1",
    "title": "Old Cairo Walk",
    "guide": "g1",
    "city": "Cairo",
    "path": [
        {"name": "Citadel", "position": {"lat": 30.03, "lng": 31.26}},
        {"name": "Khan el-Khalili", "position": {"lat": "30.05", "lng": "31.26"}},
    ],
    "schedule": [
        {"date": "2025-06-01T00:00:00.000Z", "time": "09:00", "isAvailable": True},
        {"date": "2025-06-01T00:00:00.000Z", "time": "10:00", "isAvailable": False},
    ],
    "startLocation": {
        "type": "Point",
        "coordinates": [31.26, 30.03],
        "description": "Citadel gate",
    },
    "price": 150,
    "description": "A walk through the old city.",
    "type": "Historical",
}

BOOKING_SAMPLE = {
    "_id": "b1",
    "tourist": {"_id": "u2", "name": "Lee"},
    "trip": TRIP_SAMPLE,
    "guide": "g1",
    "status": "pending",
    "scheduledDate": "2025-06-01T00:00:00.000Z",
    "scheduledTime": "09:00",
    "contactPhone": "+201234567890",
    "contactEmail": "lee@example.com",
}


def test_map_ref_raw_and_populated() -> None:
    assert mapping.map_ref("g1", mapping.map_guide) == Raw("g1")
    assert mapping.map_ref(42, mapping.map_guide) == Raw("42")
    assert mapping.map_ref(None, mapping.map_guide) is None

    populated = mapping.map_ref(GUIDE_SAMPLE, mapping.map_guide)
    assert isinstance(populated, Populated)
    assert isinstance(populated.record, Guide)
    assert populated.id == "g1"

    with pytest.raises(ApiError):
        mapping.map_ref(["g1"], mapping.map_guide)


def test_map_guide_averages_ratings() -> None:
    guide = mapping.map_guide(GUIDE_SAMPLE)
    assert guide.rating == 4.5
    assert guide.languages == ["en", "ar"]
    assert isinstance(guide.user, Populated)
    assert isinstance(guide.user.record, User)
    assert guide.user.record.role == "guide"


def test_map_trip() -> None:
    trip = mapping.map_trip(TRIP_SAMPLE)
    assert trip.id == "t1"
    assert trip.guide == Raw("g1")
    assert [loc.name for loc in trip.path] == ["Citadel", "Khan el-Khalili"]
    assert trip.path[1].lat == 30.05
    assert trip.start_location == StartLocation(31.26, 30.03, "Citadel gate")
    assert trip.is_available is True
    assert trip.price == 150.0
    assert trip.schedule.available_slots() == [ScheduleSlot(date(2025, 6, 1), "09:00", True)]
    assert trip.schedule.is_slot_selected(date(2025, 6, 1), "10:00")


def test_map_trip_requires_id() -> None:
    with pytest.raises(ApiError):
        mapping.map_trip({"title": "No id"})


def test_map_trip_invalid_schedule() -> None:
    with pytest.raises(ApiError):
        mapping.map_trip({**TRIP_SAMPLE, "schedule": [{"date": "soon", "time": "09:00"}]})


def test_map_trip_response_unwraps_trip() -> None:
    trip = mapping.map_trip_response({"trip": TRIP_SAMPLE, "guideUser": {"name": "Sara"}})
    assert trip.id == "t1"


def test_map_trip_page() -> None:
    page = mapping.map_trip_page({"trips": [TRIP_SAMPLE], "hasNextPage": True})
    assert len(page.trips) == 1
    assert page.has_next_page is True

    bare = mapping.map_trip_page([TRIP_SAMPLE, "skipped"])
    assert len(bare.trips) == 1
    assert bare.has_next_page is False

    with pytest.raises(ApiError):
        mapping.map_trip_page("nope")


def test_map_booking() -> None:
    booking = mapping.map_booking_response({"booking": BOOKING_SAMPLE})
    assert booking.id == "b1"
    assert booking.scheduled_date == date(2025, 6, 1)
    assert booking.scheduled_time == "09:00"
    assert isinstance(booking.trip, Populated)
    assert booking.trip.id == "t1"
    assert booking.guide == Raw("g1")
    assert isinstance(booking.tourist, Populated)


def test_map_booking_requires_date() -> None:
    with pytest.raises(ApiError):
        mapping.map_booking({**BOOKING_SAMPLE, "scheduledDate": None})
    with pytest.raises(ApiError):
        mapping.map_booking({**BOOKING_SAMPLE, "scheduledDate": "tomorrow"})


def test_map_items_unwraps_envelopes() -> None:
    data = {"data": [BOOKING_SAMPLE]}
    bookings = mapping.map_items(data, mapping.map_booking, "bookings", "data")
    assert [booking.id for booking in bookings] == ["b1"]
    assert mapping.map_items({"other": []}, mapping.map_booking, "bookings") == []
    with pytest.raises(ApiError):
        mapping.map_items({"bookings": "x"}, mapping.map_booking, "bookings")


def test_map_city_keeps_extra_fields() -> None:
    city = mapping.map_city({"name": "Luxor", "description": "Temples", "image": "luxor.jpg"})
    assert city.name == "Luxor"
    assert city.extra == {"image": "luxor.jpg"}
    with pytest.raises(ApiError):
        mapping.map_city({"description": "nameless"})


def test_map_application_accepts_populated_user() -> None:
    application = mapping.map_application(
        {
            "_id": "a1",
            "userId": {"_id": "u3", "name": "Omar"},
            "city": "Aswan",
            "languages": ["en"],
            "specialties": ["Nature"],
            "status": "approved",
        }
    )
    assert application.user_id == "u3"
    assert application.status == "approved"


def test_map_review_and_post() -> None:
    review = mapping.map_review(
        {"_id": "r1", "content": "Great", "rating": "5", "author": "u2", "guide": "g1"}
    )
    assert review.rating == 5
    assert review.author == Raw("u2")

    post = mapping.map_post({"id": "p1", "title": "Hello", "images": None, "likeCount": 3})
    assert post.id == "p1"
    assert post.images == []
    assert post.like_count == 3


def test_map_trip_rejects_non_boolean_flags() -> None:
    with pytest.raises(ApiError):
        mapping.map_trip({**TRIP_SAMPLE, "isAvailable": "false"})
    with pytest.raises(ApiError):
        mapping.map_trip(
            {**TRIP_SAMPLE, "schedule": [{"date": "2025-06-01", "time": "09:00", "isAvailable": 0}]}
        )
    assert mapping.map_trip({**TRIP_SAMPLE, "isAvailable": False}).is_available is False


def test_map_trip_response_keeps_guide_contact() -> None:
    trip = mapping.map_trip_response(
        {
            "trip": TRIP_SAMPLE,
            "guideUser": {"name": "Sara", "phone": "+201000000000", "profilePicture": "sara.jpg"},
        }
    )
    assert trip.guide_user == GuideContact("Sara", "+201000000000", "sara.jpg")
    assert mapping.map_trip_response(TRIP_SAMPLE).guide_user is None


def test_map_post_counts_likes_and_comments() -> None:
    post = mapping.map_post(
        {
            "_id": "p1",
            "title": "Hello",
            "likes": ["u1", {"_id": "u2"}],
            "comments": ["c1", {"_id": "c2", "content": "Nice", "author": "u1", "post": "p1"}],
        }
    )
    assert post.like_count == 2
    assert post.liked_by == ["u1", "u2"]
    assert post.comments[0] == Raw("c1")
    assert isinstance(post.comments[1], Populated)
    assert post.comments[1].record.content == "Nice"
    assert post.comments[1].record.post_id == "p1"
