from __future__ import annotations

import csv
import io
from datetime import date

import pytest

from fakes import FakeDTRRepo, FakeInternRepo, make_intern
from src.ojt_tracker.ojt_tracker.core.enums import InternStatus
from src.ojt_tracker.ojt_tracker.core.exceptions import ValidationError
from src.ojt_tracker.ojt_tracker.dtr.model import DTREntry
from src.ojt_tracker.ojt_tracker.reports.export import sheet_csv, summary_csv
from src.ojt_tracker.ojt_tracker.reports.service import AttendanceReportService, weekday_ranges

H = 3600
MONDAY = date(2026, 3, 2)


def entry(intern_id, work_date=MONDAY, am=(None, None), pm=(None, None), total=0):
    return DTREntry(
        entry_id=0,
        intern_id=intern_id,
        user_id=100 + intern_id,
        supervisor_id=1,
        work_date=work_date,
        time_in_am=am[0],
        time_out_am=am[1],
        time_in_pm=pm[0],
        time_out_pm=pm[1],
        total_seconds=total,
    )


def build():
    interns = FakeInternRepo(
        [
            make_intern(1, custom_intern_id="Intern-2026-001"),
            make_intern(2, first_name="Ana", school_name="Other College"),
            make_intern(3, first_name="Ben"),
            make_intern(4, first_name="Cora"),
            make_intern(5, first_name="Dan"),
            make_intern(6, first_name="Pending", status=InternStatus.PENDING),
        ]
    )
    dtr = FakeDTRRepo(interns)
    return AttendanceReportService(dtr, interns), dtr


def seed_monday(dtr):
    dtr.add(entry(1, am=(8 * H, 12 * H), pm=(13 * H, 17 * H), total=8 * H))
    dtr.add(entry(2, am=(8 * H + 1800, 12 * H), total=3 * H + 1800))
    dtr.add(entry(3, pm=(13 * H, 17 * H), total=4 * H))
    dtr.add(entry(4))


def test_summary_groups_and_counts_missing_rows_as_absent():
    svc, dtr = build()
    seed_monday(dtr)

    summary = svc.attendance_summary(MONDAY)

    assert [r["intern_id"] for r in summary["present"]] == [1]
    assert [r["intern_id"] for r in summary["half_day_am"]] == [2]
    assert [r["intern_id"] for r in summary["half_day_pm"]] == [3]
    assert [r["intern_id"] for r in summary["absent"]] == [4]
    assert summary["absent_without_record"] == [5]
    assert summary["totals"] == {"present": 1, "half_day_am": 1, "half_day_pm": 1, "absent": 2}
    assert summary["present"][0]["total_hours"] == "08:00:00"
    assert summary["present"][0]["custom_intern_id"] == "Intern-2026-001"


def test_status_filter():
    svc, dtr = build()
    seed_monday(dtr)

    late = svc.status_filter("late", MONDAY)
    assert [r["intern_id"] for r in late["records"]] == [2]
    assert late["records"][0]["remaining_hours"] == "500:00:00"

    assert [r["intern_id"] for r in svc.status_filter("half-day-am", MONDAY)["records"]] == [2]
    assert [r["intern_id"] for r in svc.status_filter("HALF-DAY-PM", MONDAY)["records"]] == [3]

    full = svc.status_filter("full-day", MONDAY)
    assert [r["intern_id"] for r in full["records"]] == [1]
    assert "absent_ids" not in full

    with pytest.raises(ValidationError):
        svc.status_filter("early", MONDAY)


def test_full_day_without_matches_lists_absent_interns():
    svc, dtr = build()
    dtr.add(entry(4))

    result = svc.status_filter("full-day", MONDAY)

    assert result["records"] == []
    assert result["absent_ids"] == [1, 2, 3, 4, 5]


def test_weekly_late_counts_monday_to_friday():
    svc, dtr = build()
    late = (8 * H + 1800, 12 * H)
    for d in (2, 3, 4):
        dtr.add(entry(2, work_date=date(2026, 3, d), am=late))
    dtr.add(entry(2, work_date=date(2026, 3, 9), am=late))
    dtr.add(entry(1, work_date=date(2026, 3, 5), am=(8 * H, 12 * H)))

    result = svc.weekly_late(date(2026, 3, 4))

    assert result == [
        {"intern_id": 2, "full_name": "Ana Dela Cruz", "late_count": 3},
        {"intern_id": 1, "full_name": "Juan Dela Cruz", "late_count": 0},
    ]


def test_weekday_ranges_trim_to_month():
    weeks = weekday_ranges(2026, 3)

    assert [(w.start, w.end) for w in weeks] == [
        (date(2026, 3, 2), date(2026, 3, 6)),
        (date(2026, 3, 9), date(2026, 3, 13)),
        (date(2026, 3, 16), date(2026, 3, 20)),
        (date(2026, 3, 23), date(2026, 3, 27)),
        (date(2026, 3, 30), date(2026, 3, 31)),
    ]
    assert [w.week for w in weeks] == [1, 2, 3, 4, 5]


def test_monthly_breakdown():
    svc, dtr = build()
    seed_monday(dtr)
    dtr.add(entry(1, work_date=date(2026, 3, 10), am=(9 * H, 12 * H), pm=(13 * H, 17 * H)))

    weeks = svc.monthly_breakdown(2026, 3)

    assert weeks[0] == {
        "week": 1,
        "start": "2026-03-02",
        "end": "2026-03-06",
        "absent": 1,
        "late": 1,
        "half_day_am": 1,
        "half_day_pm": 1,
    }
    assert weeks[1]["late"] == 1 and weeks[1]["absent"] == 0
    with pytest.raises(ValidationError):
        svc.monthly_breakdown(2026, 13)


def test_sheet_and_csv_export():
    svc, dtr = build()
    seed_monday(dtr)
    dtr.add(entry(1, work_date=date(2026, 3, 3), am=(8 * H, 12 * H), total=4 * H))

    rows = svc.sheet(intern_id=1, start=date(2026, 3, 1), end=date(2026, 3, 31))
    parsed = list(csv.DictReader(io.StringIO(sheet_csv(rows))))

    assert [r["work_date"] for r in parsed] == ["2026-03-02", "2026-03-03"]
    assert parsed[1]["time_out_pm"] == ""
    assert parsed[1]["status"] == "Half-Day-AM"

    with pytest.raises(ValidationError):
        svc.sheet(intern_id=1, start=date(2026, 3, 31), end=date(2026, 3, 1))


def test_summary_csv_tags_group():
    svc, dtr = build()
    seed_monday(dtr)

    parsed = list(csv.DictReader(io.StringIO(summary_csv(svc.attendance_summary(MONDAY)))))

    assert [(r["group"], r["intern_id"]) for r in parsed] == [
        ("present", "1"),
        ("half_day_am", "2"),
        ("half_day_pm", "3"),
        ("absent", "4"),
    ]
