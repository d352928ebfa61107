"""Minutes-since-midnight helpers."""

import pytest

from campus_delivery.utils.time import current_minutes, format_minutes


@pytest.mark.parametrize(
    ("minutes", "expected"),
    [(0, "12:00 AM"), (545, "09:05 AM"), (720, "12:00 PM"), (780, "01:00 PM"), (1439, "11:59 PM")],
)
def test_format_minutes(minutes: int, expected: str) -> None:
    assert format_minutes(minutes) == expected


def test_current_minutes_is_within_day() -> None:
    assert 0 <= current_minutes() < 1440
    assert 0 <= current_minutes("UTC") < 1440


def test_unknown_timezone_falls_back_to_local_time() -> None:
    assert 0 <= current_minutes("Mars/Olympus_Mons") < 1440
