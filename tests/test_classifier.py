from datetime import date

import pytest

from src.ojt_tracker.ojt_tracker.core.enums import DayStatus
from src.ojt_tracker.ojt_tracker.dtr.classifier import (
    classify_day,
    is_late,
    is_late_text,
    is_no_show,
    session_status,
)
from src.ojt_tracker.ojt_tracker.dtr.duration import parse_hms
from src.ojt_tracker.ojt_tracker.dtr.model import DTREntry


def _entry(am_in=None, am_out=None, pm_in=None, pm_out=None) -> DTREntry:
    return DTREntry(
        entry_id=1,
        intern_id=1,
        user_id=1,
        supervisor_id=1,
        work_date=date(2026, 3, 2),
        time_in_am=parse_hms(am_in),
        time_out_am=parse_hms(am_out),
        time_in_pm=parse_hms(pm_in),
        time_out_pm=parse_hms(pm_out),
    )


def test_classify_present():
    assert classify_day(_entry("08:00:00", "12:00:00", "13:00:00", "17:00:00")) == DayStatus.PRESENT


def test_classify_half_day_am():
    assert classify_day(_entry("08:00:00", "12:00:00")) == DayStatus.HALF_DAY_AM


def test_classify_half_day_pm():
    assert classify_day(_entry(pm_in="13:00:00", pm_out="17:00:00")) == DayStatus.HALF_DAY_PM


def test_classify_absent_when_empty():
    assert classify_day(_entry()) == DayStatus.ABSENT


@pytest.mark.parametrize(
    "slots",
    [
        ("08:00:00", None, None, None),
        ("08:00:00", "12:00:00", "13:00:00", None),
        (None, "12:00:00", "13:00:00", "17:00:00"),
    ],
)
def test_classify_partial_day_counts_as_absent(slots):
    assert classify_day(_entry(*slots)) == DayStatus.ABSENT


@pytest.mark.parametrize(
    "time_in, late",
    [
        ("08:00:00", False),
        ("08:00:59", False),
        ("08:01:00", False),
        ("08:01:01", True),
        ("11:59:59", True),
        ("12:00:00", False),
        ("13:00:00", False),
    ],
)
def test_late_window_bounds_are_exclusive(time_in, late):
    assert is_late(parse_hms(time_in)) is late


def test_missing_or_garbage_time_in_is_not_late():
    assert is_late(None) is False
    assert is_late_text("") is False
    assert is_late_text("not-a-time") is False
    assert is_late_text("09:15:00") is True


def test_session_status_uses_time_ins():
    assert session_status(_entry("08:00:00")) == "half-day-am"
    assert session_status(_entry(pm_in="13:00:00")) == "half-day-pm"
    assert session_status(_entry("08:00:00", pm_in="13:00:00")) == "full-day"


def test_no_show_has_no_time_in():
    assert is_no_show(_entry()) is True
    assert is_no_show(_entry(pm_in="13:00:00")) is False
