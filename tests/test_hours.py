from datetime import date, timedelta

from src.ojt_tracker.ojt_tracker.dtr.duration import format_hms, parse_hms
from src.ojt_tracker.ojt_tracker.dtr.hours import day_total, remaining_seconds, sum_rendered, summarize
from src.ojt_tracker.ojt_tracker.dtr.model import DTREntry


def test_sum_rendered_adds_day_totals():
    totals = [parse_hms("08:00:00"), parse_hms("04:30:00"), parse_hms("00:00:00")]
    assert format_hms(sum_rendered(totals)) == "12:30:00"


def test_remaining_never_negative():
    assert remaining_seconds(10, parse_hms("12:00:00")) == 0
    assert format_hms(remaining_seconds(500, parse_hms("478:00:00"))) == "22:00:00"


def test_summarize_over_entries():
    start = date(2026, 3, 2)
    entries = [
        DTREntry(entry_id=i, intern_id=7, user_id=1, supervisor_id=1, work_date=start + timedelta(days=i), total_seconds=8 * 3600)
        for i in range(3)
    ]

    summary = summarize(7, 40, entries)

    assert summary.to_dict() == {
        "intern_id": 7,
        "ojt_hours_required": 40,
        "ojt_hours_rendered": "24:00:00",
        "remaining_hours": "16:00:00",
    }


def test_day_total_is_both_spans_minus_deduction():
    entry = DTREntry(
        entry_id=1,
        intern_id=1,
        user_id=1,
        supervisor_id=1,
        work_date=date(2026, 3, 2),
        time_in_am=parse_hms("08:00:00"),
        time_out_am=parse_hms("12:00:00"),
        time_in_pm=parse_hms("13:00:00"),
        time_out_pm=parse_hms("17:30:00"),
    )

    assert format_hms(day_total(entry)) == "08:30:00"
    assert format_hms(day_total(entry, deducted_seconds=parse_hms("02:00:00"))) == "06:30:00"
    assert day_total(entry, deducted_seconds=parse_hms("10:00:00")) == 0
