from __future__ import annotations

from datetime import date

import pytest

from pytourguide.api import (
    ApplicationsService,
    BookingsService,
    CitiesService,
    GuidesService,
    ReviewsService,
    TripsService,
    UsersService,
)
from pytourguide.draft import TripDraft
from pytourguide.exceptions import (
    ApiError,
    NotFoundError,
    SlotUnavailableError,
    ValidationError,
)
from pytourguide.models import GuideContact, Location, Raw, ScheduleSlot, StartLocation
from pytourguide.schedule import ScheduleSet

JUNE_1 = date(2025, 6, 1)

TRIP_SAMPLE = {
    "_id": "t1",
    "title": "Old Cairo Walk",
    "guide": "g1",
    "city": "Cairo",
    "path": [{"name": "Citadel", "position": {"lat": 30.03, "lng": 31.26}}],
    "schedule": [
        {"date": "2025-06-01", "time": "09:00", "isAvailable": True},
        {"date": "2025-06-01", "time": "10:00", "isAvailable": False},
    ],
    "startLocation": {"type": "Point", "coordinates": [31.26, 30.03]},
    "price": 150,
    "description": "A walk through the old city.",
    "type": "Historical",
    "isAvailable": True,
}

SECOND_TRIP = {
    **TRIP_SAMPLE,
    "_id": "t2",
    "title": "Nile Felucca",
    "city": "Aswan",
    "price": 40,
    "description": "Sunset sailing.",
    "type": "Relaxation",
}

BOOKING_SAMPLE = {
    "_id": "b1",
    "tourist": "u2",
    "trip": "t1",
    "guide": "g1",
    "status": "pending",
    "scheduledDate": "2025-06-01T00:00:00.000Z",
    "scheduledTime": "09:00",
    "contactPhone": "+201234567890",
    "contactEmail": "lee@example.com",
}


class _FakeResponse:
    def __init__(
        self,
        *,
        status: int = 200,
        json_data: object | None = None,
        text_data: str = "",
    ) -> None:
        self.status = status
        self._json_data = json_data
        self._text_data = text_data

    async def json(self) -> object:
        return self._json_data

    async def text(self) -> str:
        return self._text_data


class _FakeRequestContext:
    def __init__(self, response: _FakeResponse) -> None:
        self._response = response

    async def __aenter__(self) -> _FakeResponse:
        return self._response

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return False


class _SequenceSession:
    def __init__(self, results: list[object]) -> None:
        self._results = results
        self.requests: list[tuple[str, str, dict]] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def request(self, method: str, url: str, **kwargs) -> _FakeRequestContext:
        self.requests.append((method, url, kwargs))
        result = self._results[len(self.requests) - 1]
        if isinstance(result, Exception):
            raise result
        return _FakeRequestContext(result)


def _make(service_cls, session: _SequenceSession, token: str | None = "secret"):
    return service_cls(session, base_url="https://example.com", api_uri="/api", token=token)


def _complete_draft() -> TripDraft:
    return TripDraft(
        title="Old Cairo Walk",
        city="Cairo",
        price=150,
        description="A walk through the old city.",
        type="Historical",
        schedule=ScheduleSet().add(JUNE_1, "09:00"),
        path=(Location("Citadel", 30.03, 31.26),),
        start_location=StartLocation(31.26, 30.03),
    )


@pytest.mark.asyncio
async def test_list_trips_pages() -> None:
    session = _SequenceSession(
        [_FakeResponse(json_data={"trips": [TRIP_SAMPLE], "hasNextPage": True})]
    )
    service = _make(TripsService, session, token=None)
    page = await service.list_trips(2)
    assert [trip.id for trip in page.trips] == ["t1"]
    assert page.has_next_page is True
    method, url, kwargs = session.requests[0]
    assert (method, url) == ("GET", "https://example.com/api/trip/trips")
    assert kwargs["params"] == {"page": 2}
    assert "Authorization" not in kwargs["headers"]


@pytest.mark.asyncio
async def test_list_trips_rejects_page_zero() -> None:
    session = _SequenceSession([])
    with pytest.raises(ValidationError):
        await _make(TripsService, session).list_trips(0)
    assert session.calls == 0


@pytest.mark.asyncio
async def test_get_available_slots() -> None:
    session = _SequenceSession(
        [
            _FakeResponse(json_data={"trip": TRIP_SAMPLE}),
            _FakeResponse(json_data={**TRIP_SAMPLE, "isAvailable": False}),
        ]
    )
    service = _make(TripsService, session)
    slots = await service.get_available_slots("t1")
    assert slots == [ScheduleSlot(JUNE_1, "09:00", True)]
    assert session.requests[0][1] == "https://example.com/api/trip/t1"
    assert await service.get_available_slots("t1") == []


@pytest.mark.asyncio
async def test_create_trip_posts_payload() -> None:
    session = _SequenceSession([_FakeResponse(json_data=TRIP_SAMPLE)])
    service = _make(TripsService, session)
    trip = await service.create_trip(_complete_draft())
    assert trip.id == "t1"
    method, url, kwargs = session.requests[0]
    assert (method, url) == ("POST", "https://example.com/api/trip/create")
    assert kwargs["json"]["schedule"] == [
        {"date": "2025-06-01", "time": "09:00", "isAvailable": True}
    ]
    assert kwargs["headers"]["Authorization"] == "Bearer secret"


@pytest.mark.asyncio
async def test_create_trip_rejects_invalid_draft() -> None:
    session = _SequenceSession([])
    service = _make(TripsService, session)
    with pytest.raises(ValidationError) as excinfo:
        await service.create_trip(TripDraft(city="Cairo"))
    assert excinfo.value.user_message
    assert session.calls == 0


@pytest.mark.asyncio
async def test_update_schedule() -> None:
    session = _SequenceSession([_FakeResponse(json_data=TRIP_SAMPLE)])
    service = _make(TripsService, session)
    schedule = ScheduleSet().add(JUNE_1, "09:00")
    await service.update_schedule("t1", schedule)
    method, url, kwargs = session.requests[0]
    assert (method, url) == ("PUT", "https://example.com/api/trip/t1")
    assert kwargs["json"] == {"schedule": schedule.to_payload()}

    with pytest.raises(ValidationError) as excinfo:
        await service.update_schedule("t1", ScheduleSet())
    assert excinfo.value.error_code == "schedule_empty"


@pytest.mark.asyncio
async def test_delete_trip() -> None:
    session = _SequenceSession([_FakeResponse(text_data="")])
    await _make(TripsService, session).delete_trip("t1")
    assert session.requests[0][:2] == ("DELETE", "https://example.com/api/trip/t1")


@pytest.mark.asyncio
async def test_search_and_filter_trips() -> None:
    listing = {"trips": [TRIP_SAMPLE, SECOND_TRIP], "hasNextPage": False}
    session = _SequenceSession([_FakeResponse(json_data=listing) for _ in range(3)])
    service = _make(TripsService, session)

    found = await service.search_trips("aswan")
    assert [trip.id for trip in found.trips] == ["t2"]
    by_type = await service.filter_trips_by_type("Historical")
    assert [trip.id for trip in by_type.trips] == ["t1"]
    by_price = await service.filter_trips_by_price(0, 50)
    assert [trip.id for trip in by_price.trips] == ["t2"]
    with pytest.raises(ValidationError):
        await service.filter_trips_by_price(100, 10)


@pytest.mark.asyncio
async def test_book_slot_submits_request() -> None:
    session = _SequenceSession(
        [
            _FakeResponse(json_data=TRIP_SAMPLE),
            _FakeResponse(status=201, json_data={"booking": BOOKING_SAMPLE}),
        ]
    )
    trip = await _make(TripsService, session).get_trip("t1")
    booking = await _make(BookingsService, session).book_slot(
        trip, JUNE_1, "09:00", "+201234567890", "lee@example.com"
    )
    assert booking.id == "b1"
    assert booking.trip == Raw("t1")
    method, url, kwargs = session.requests[1]
    assert (method, url) == ("POST", "https://example.com/api/booking/t1")
    assert kwargs["json"] == {
        "scheduledDate": "2025-06-01",
        "scheduledTime": "09:00",
        "contactPhone": "+201234567890",
        "contactEmail": "lee@example.com",
        "guide": "g1",
    }


@pytest.mark.asyncio
async def test_book_slot_rejects_unavailable_slot_locally() -> None:
    session = _SequenceSession([_FakeResponse(json_data=TRIP_SAMPLE)])
    trip = await _make(TripsService, session).get_trip("t1")
    with pytest.raises(SlotUnavailableError):
        await _make(BookingsService, session).book_slot(
            trip, JUNE_1, "10:00", "+201234567890", "lee@example.com"
        )
    assert session.calls == 1


@pytest.mark.asyncio
async def test_book_slot_conflict_becomes_slot_unavailable() -> None:
    session = _SequenceSession(
        [
            _FakeResponse(json_data=TRIP_SAMPLE),
            _FakeResponse(status=409, json_data={"message": "Slot already booked"}),
        ]
    )
    trip = await _make(TripsService, session).get_trip("t1")
    with pytest.raises(SlotUnavailableError) as excinfo:
        await _make(BookingsService, session).book_slot(
            trip, JUNE_1, "09:00", "+201234567890", "lee@example.com"
        )
    assert str(excinfo.value) == "Slot already booked"
    assert excinfo.value.detail == "Request failed with status 409."


@pytest.mark.asyncio
async def test_list_cancel_and_update_bookings() -> None:
    session = _SequenceSession(
        [
            _FakeResponse(json_data={"data": [BOOKING_SAMPLE]}),
            _FakeResponse(text_data=""),
            _FakeResponse(json_data={**BOOKING_SAMPLE, "contactPhone": "+201111111111"}),
        ]
    )
    service = _make(BookingsService, session)
    bookings = await service.list_my_bookings()
    assert [booking.scheduled_date for booking in bookings] == [JUNE_1]

    await service.cancel_booking("b1")
    assert session.requests[1][:2] == ("PATCH", "https://example.com/api/booking/b1/cancel")

    updated = await service.update_booking("b1", contact_phone="+201111111111")
    assert updated.contact_phone == "+201111111111"
    assert session.requests[2][2]["json"] == {"contactPhone": "+201111111111"}

    with pytest.raises(ValidationError):
        await service.update_booking("b1", scheduled_time="10:00")
    with pytest.raises(ValidationError):
        await service.update_booking("b1")


@pytest.mark.asyncio
async def test_city_endpoints_quote_names() -> None:
    session = _SequenceSession(
        [
            _FakeResponse(json_data={"name": "Sharm El Sheikh", "description": "Reefs"}),
            _FakeResponse(json_data={"trips": [TRIP_SAMPLE]}),
            _FakeResponse(json_data=[{"_id": "g1", "city": "Sharm El Sheikh"}]),
        ]
    )
    service = _make(CitiesService, session, token=None)
    city = await service.get_city("Sharm El Sheikh")
    assert city.description == "Reefs"
    assert session.requests[0][1] == "https://example.com/api/city/Sharm%20El%20Sheikh"
    assert len(await service.list_city_trips("Sharm El Sheikh")) == 1
    guides = await service.list_city_guides("Sharm El Sheikh")
    assert guides[0].id == "g1"
    with pytest.raises(ValidationError):
        await service.get_city(" ")


@pytest.mark.asyncio
async def test_guide_endpoints() -> None:
    session = _SequenceSession(
        [
            _FakeResponse(json_data={"guide": {"_id": "g1", "user": "u1", "rating": 4.8}}),
            _FakeResponse(json_data={"reviews": [{"_id": "r1", "rating": 5, "author": "u2"}]}),
            _FakeResponse(json_data={"posts": [{"_id": "p1", "title": "Hi"}]}),
            _FakeResponse(text_data=""),
        ]
    )
    service = _make(GuidesService, session)
    guide = await service.get_guide("g1")
    assert guide.rating == 4.8
    assert guide.user == Raw("u1")
    reviews = await service.list_guide_reviews("g1")
    assert reviews[0].rating == 5
    posts = await service.list_my_posts()
    assert posts[0].title == "Hi"
    await service.delete_post("p1")
    assert session.requests[3][:2] == ("DELETE", "https://example.com/api/guide/posts/p1")


@pytest.mark.asyncio
async def test_create_review_validates_rating() -> None:
    session = _SequenceSession(
        [_FakeResponse(json_data={"review": {"_id": "r1", "content": "Great", "rating": 5}})]
    )
    service = _make(ReviewsService, session)
    with pytest.raises(ValidationError):
        await service.create_review("g1", "Great", 6)
    with pytest.raises(ValidationError):
        await service.create_review("g1", " ", 5)
    review = await service.create_review("g1", " Great ", 5)
    assert review.id == "r1"
    assert session.requests[0][2]["json"] == {"guide": "g1", "content": "Great", "rating": 5}


@pytest.mark.asyncio
async def test_update_review_requires_fields() -> None:
    session = _SequenceSession([_FakeResponse(json_data={"message": "ok"})])
    service = _make(ReviewsService, session)
    with pytest.raises(ValidationError):
        await service.update_review("r1")
    with pytest.raises(ApiError):
        await service.update_review("r1", rating=4)


@pytest.mark.asyncio
async def test_my_application_missing_returns_none() -> None:
    session = _SequenceSession(
        [
            _FakeResponse(status=404, json_data={"message": "No application found"}),
            _FakeResponse(
                json_data={"application": {"_id": "a1", "userId": "u1", "status": "pending"}}
            ),
        ]
    )
    service = _make(ApplicationsService, session)
    assert await service.get_my_application() is None
    application = await service.get_my_application()
    assert application is not None
    assert application.status == "pending"


@pytest.mark.asyncio
async def test_application_decisions() -> None:
    session = _SequenceSession(
        [
            _FakeResponse(json_data={"applications": [{"_id": "a1", "userId": "u1"}]}),
            _FakeResponse(text_data=""),
            _FakeResponse(text_data=""),
            _FakeResponse(status=404),
        ]
    )
    service = _make(ApplicationsService, session)
    assert [item.id for item in await service.list_applications()] == ["a1"]
    await service.approve("a1")
    await service.reject("a1")
    assert session.requests[1][:2] == (
        "PATCH",
        "https://example.com/api/admin/applications/a1/approved",
    )
    assert session.requests[2][1].endswith("/a1/rejected")
    with pytest.raises(NotFoundError):
        await service.approve("missing")


USER_SAMPLE = {
    "_id": "u1",
    "name": "Lee",
    "email": "lee@example.com",
    "role": "tourist",
    "phone": "+201234567890",
}


@pytest.mark.asyncio
async def test_get_trip_keeps_guide_contact() -> None:
    session = _SequenceSession(
        [
            _FakeResponse(
                json_data={
                    "trip": TRIP_SAMPLE,
                    "guideUser": {"name": "Sara", "phone": "+201000000000"},
                }
            )
        ]
    )
    trip = await _make(TripsService, session).get_trip("t1")
    assert trip.guide_user == GuideContact("Sara", "+201000000000")


@pytest.mark.asyncio
async def test_book_slot_rejects_closed_trip_locally() -> None:
    session = _SequenceSession([_FakeResponse(json_data={**TRIP_SAMPLE, "isAvailable": False})])
    trip = await _make(TripsService, session).get_trip("t1")
    with pytest.raises(SlotUnavailableError):
        await _make(BookingsService, session).book_slot(
            trip, JUNE_1, "09:00", "+201234567890", "lee@example.com"
        )
    assert session.calls == 1


@pytest.mark.asyncio
async def test_get_trip_rejects_non_boolean_availability() -> None:
    session = _SequenceSession([_FakeResponse(json_data={**TRIP_SAMPLE, "isAvailable": "false"})])
    with pytest.raises(ApiError):
        await _make(TripsService, session).get_trip("t1")


@pytest.mark.asyncio
async def test_get_and_update_profile() -> None:
    session = _SequenceSession(
        [
            _FakeResponse(json_data={"user": USER_SAMPLE}),
            _FakeResponse(json_data={"user": {**USER_SAMPLE, "name": "Lee Chen"}}),
        ]
    )
    service = _make(UsersService, session)
    user = await service.get_profile()
    assert user.id == "u1"
    assert session.requests[0][:2] == ("GET", "https://example.com/api/user/profile")

    updated = await service.update_profile(name=" Lee Chen ", phone=None)
    assert updated.name == "Lee Chen"
    method, url, kwargs = session.requests[1]
    assert (method, url) == ("PUT", "https://example.com/api/user/profile")
    assert kwargs["json"] == {"name": "Lee Chen"}
    assert kwargs["headers"]["Authorization"] == "Bearer secret"


@pytest.mark.asyncio
async def test_update_profile_validates_locally() -> None:
    session = _SequenceSession([])
    service = _make(UsersService, session)
    with pytest.raises(ValidationError):
        await service.update_profile(role="admin")
    with pytest.raises(ValidationError):
        await service.update_profile(email="lee@example")
    with pytest.raises(ValidationError):
        await service.update_profile(name=None)
    assert session.calls == 0


@pytest.mark.asyncio
async def test_update_contact_info() -> None:
    session = _SequenceSession([_FakeResponse(json_data={"user": USER_SAMPLE})])
    service = _make(UsersService, session)
    user = await service.update_contact_info("u1", " +201234567890 ")
    assert user.phone == "+201234567890"
    method, url, kwargs = session.requests[0]
    assert (method, url) == ("PUT", "https://example.com/api/user/u1/contact")
    assert kwargs["json"] == {"phone": "+201234567890"}

    with pytest.raises(ValidationError):
        await service.update_contact_info("u1", "12")
    assert session.calls == 1


@pytest.mark.asyncio
async def test_toggle_like_returns_post() -> None:
    post = {"_id": "p1", "title": "Hello", "likes": ["u1", "u2"], "comments": []}
    session = _SequenceSession(
        [
            _FakeResponse(json_data={"message": "Post liked", "post": post}),
            _FakeResponse(json_data={"message": "Post liked"}),
        ]
    )
    service = _make(UsersService, session)
    liked = await service.toggle_like("u1", "p1")
    assert liked.like_count == 2
    assert liked.liked_by == ["u1", "u2"]
    assert session.requests[0][:2] == ("POST", "https://example.com/api/user/u1/posts/p1/like")
    with pytest.raises(ApiError):
        await service.toggle_like("u1", "p1")


@pytest.mark.asyncio
async def test_add_and_delete_comment() -> None:
    comment = {"_id": "c1", "content": "Lovely view", "author": "u1", "post": "p1"}
    session = _SequenceSession(
        [
            _FakeResponse(status=201, json_data={"comment": comment}),
            _FakeResponse(text_data=""),
        ]
    )
    service = _make(UsersService, session)
    created = await service.add_comment("u1", "p1", "  Lovely view ")
    assert created.id == "c1"
    assert created.author == Raw("u1")
    method, url, kwargs = session.requests[0]
    assert (method, url) == ("POST", "https://example.com/api/user/u1/posts/p1/comments")
    assert kwargs["json"] == {"content": "Lovely view"}

    await service.delete_comment("u1", "p1", "c1")
    assert session.requests[1][:2] == (
        "DELETE",
        "https://example.com/api/user/u1/posts/p1/comments/c1",
    )

    with pytest.raises(ValidationError):
        await service.add_comment("u1", "p1", "   ")
    assert session.calls == 2
