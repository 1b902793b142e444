import json
from datetime import date
from importlib import resources

import jsonschema
import pytest

from pytourguide.schedule import ScheduleSet


def _schema() -> dict:
    root = resources.files("pytourguide")
    return json.loads((root / "schedule.schema.json").read_text(encoding="utf-8"))


def test_schedule_payload_matches_schema() -> None:
    schedule = (
        ScheduleSet()
        .add(date(2025, 6, 1), "09:00")
        .add(date(2025, 6, 2), "17:00", is_available=False)
    )
    jsonschema.validate(instance=schedule.to_payload(), schema=_schema())


def test_empty_schedule_payload_matches_schema() -> None:
    jsonschema.validate(instance=ScheduleSet().to_payload(), schema=_schema())


def test_schema_rejects_timestamp_dates() -> None:
    payload = [{"date": "2025-06-01T00:00:00Z", "time": "09:00", "isAvailable": True}]
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance=payload, schema=_schema())
