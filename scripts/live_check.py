"""Manual live check against a running marketplace backend.

Run from the repository root with:
  PYTHONPATH=src BASE_URL=http://localhost:5000 API_URI=api \
  python scripts/live_check.py

Show the bookable slots of one trip:
  PYTHONPATH=src BASE_URL=... TRIP_ID=... python scripts/live_check.py

Book a slot (requires TOKEN, TRIP_ID and contact details):
  PYTHONPATH=src BASE_URL=... TOKEN=... TRIP_ID=... \
    python scripts/live_check.py --book 2025-06-01@09:00 \
    --phone "+201234567890" --email traveler@example.com

Optional environment variables:
  API_URI
  TOKEN
  TRIP_ID

--sanitize-output masks contact details and tokens in printed output.
--traceback prints full tracebacks on errors.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
import traceback
from typing import Any

from sanitize import mask_email as _mask_email
from sanitize import sanitize_data as _sanitize_data

from pytourguide import Booking, Client, Trip
from pytourguide.exceptions import TourGuideError, ValidationError
from pytourguide.util import parse_date

_LOGGER = logging.getLogger(__name__)


def _require_value(name: str, value: str | None) -> str:
    if not value:
        print(f"Missing required value: {name}", file=sys.stderr)
        raise SystemExit(2)
    return value


def _print_exception(label: str, exc: Exception, *, trace: bool) -> None:
    print(f"{label}: {exc.__class__.__name__}: {exc}", file=sys.stderr)
    if trace:
        traceback.print_exc()


def _format_trip(trip: Trip) -> str:
    return (
        f"{trip.id} | {trip.title or '-'} | {trip.city} | {trip.type or '-'} | "
        f"{trip.price:g} | slots={len(trip.schedule.available_slots())}"
    )


def _format_booking(booking: Booking, *, sanitize: bool = False) -> str:
    data: dict[str, Any] = {
        "id": booking.id,
        "status": booking.status,
        "scheduledDate": booking.scheduled_date.isoformat(),
        "scheduledTime": booking.scheduled_time,
        "contactEmail": booking.contact_email,
        "contactPhone": booking.contact_phone,
    }
    if sanitize:
        data = _sanitize_data(data)
    return (
        f"{data['id']} | {data['status']} | {data['scheduledDate']} {data['scheduledTime']} | "
        f"{data['contactEmail']} | {data['contactPhone']}"
    )


def _parse_slot(value: str) -> tuple[Any, str]:
    day_text, sep, time_text = value.partition("@")
    if not sep:
        raise ValidationError("Slot must look like YYYY-MM-DD@HH:MM.")
    return parse_date(day_text), time_text.strip()


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Live check for the marketplace backend.")
    parser.add_argument("--base-url", dest="base_url", help="Backend base URL.")
    parser.add_argument("--api-uri", dest="api_uri", help="Backend API URI.")
    parser.add_argument("--token", dest="token", help="Bearer token for authenticated calls.")
    parser.add_argument("--trip-id", dest="trip_id", help="Trip to inspect.")
    parser.add_argument("--page", dest="page", type=int, default=1, help="Trip list page.")
    parser.add_argument(
        "--book",
        dest="book",
        help="Book the given slot of --trip-id, formatted YYYY-MM-DD@HH:MM.",
    )
    parser.add_argument("--phone", dest="phone", help="Contact phone for --book.")
    parser.add_argument("--email", dest="email", help="Contact email for --book.")
    parser.add_argument(
        "--retry-count",
        dest="retry_count",
        type=int,
        default=1,
        help="Retries for GET requests (default: 1).",
    )
    parser.add_argument(
        "--sanitize-output",
        dest="sanitize_output",
        action="store_true",
        help="Mask contact details in printed output.",
    )
    parser.add_argument(
        "--traceback",
        dest="traceback",
        action="store_true",
        help="Print full tracebacks on errors.",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="INFO",
        help="Logging level (default: INFO).",
    )
    return parser.parse_args()


async def main() -> int:
    args = _parse_args()
    logging.basicConfig(level=args.log_level.upper())
    base_url = _require_value("base_url", args.base_url or os.getenv("BASE_URL"))
    api_uri = args.api_uri or os.getenv("API_URI")
    token = args.token or os.getenv("TOKEN")
    trip_id = args.trip_id or os.getenv("TRIP_ID")
    if args.book:
        trip_id = _require_value("trip_id", trip_id)
        token = _require_value("token", token)

    try:
        async with Client(
            base_url=base_url,
            api_uri=api_uri,
            token=token,
            retry_count=args.retry_count,
        ) as client:
            page = await client.trips.list_trips(args.page)
            print(f"Trips page {args.page}: {len(page.trips)} (next={page.has_next_page})")
            for trip in page.trips:
                print(f"- {_format_trip(trip)}")
            if not trip_id:
                return 0

            trip = await client.trips.get_trip(trip_id)
            print(f"Trip: {_format_trip(trip)}")
            for day, slots in trip.schedule.grouped_by_date().items():
                labels = ", ".join(
                    slot.time if slot.is_available else f"{slot.time} (taken)" for slot in slots
                )
                print(f"  {day.isoformat()}: {labels}")

            if args.book:
                day, time = _parse_slot(args.book)
                email = args.email or ""
                shown = _mask_email(email) if args.sanitize_output else email
                _LOGGER.info("Booking %s %s for %s", day.isoformat(), time, shown)
                booking = await client.bookings.book_slot(
                    trip, day, time, args.phone, args.email
                )
                print(f"Booked: {_format_booking(booking, sanitize=args.sanitize_output)}")
                bookings = await client.bookings.list_my_bookings()
                print(f"My bookings: {len(bookings)}")
                for item in bookings:
                    print(f"- {_format_booking(item, sanitize=args.sanitize_output)}")
    except TourGuideError as exc:
        _print_exception("Error", exc, trace=args.traceback)
        if exc.user_message:
            print(exc.user_message, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
