from datetime import datetime, timedelta, timezone

from p75search import timeapi
from p75search.timeapi import current_time, iso_millis


def parse_iso(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_timestamp_matches_iso_string():
    data = current_time()
    parsed = parse_iso(data["currentTime"])
    assert (parsed - timeapi.EPOCH) // timedelta(milliseconds=1) == data["timestamp"]


def test_fixed_instant():
    now = datetime(2024, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)
    data = current_time(now)
    assert data["currentTime"] == "2024-01-01T12:00:00.123Z"
    assert data["timestamp"] == 1704110400123


def test_iso_millis_converts_to_utc():
    moment = datetime(2024, 6, 1, 9, 30, tzinfo=timezone(timedelta(hours=2)))
    assert iso_millis(moment) == "2024-06-01T07:30:00.000Z"


def test_timezone_from_env(monkeypatch):
    monkeypatch.setenv("TZ", "America/New_York")
    assert timeapi.resolve_timezone() == "America/New_York"


def test_unknown_timezone_falls_back(monkeypatch, tmp_path):
    monkeypatch.setenv("TZ", "Not/AZone")
    monkeypatch.setattr(timeapi, "Path", lambda p: tmp_path / "missing")
    assert timeapi.resolve_timezone() == "UTC"
