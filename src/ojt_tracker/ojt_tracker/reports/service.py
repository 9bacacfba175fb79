from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence

from ..core.enums import DayStatus, InternStatus
from ..core.exceptions import ValidationError
from ..dtr.classifier import (
    SESSION_FULL_DAY,
    SESSION_HALF_DAY_AM,
    SESSION_HALF_DAY_PM,
    classify_day,
    is_late,
    is_no_show,
    session_status,
)
from ..dtr.duration import format_hms, format_optional_hms
from ..dtr.hours import remaining_seconds
from ..dtr.model import DTRSheetRow
from ..dtr.repository import DTRRepository
from ..interns.repository import InternRepository

STATUS_LATE = "late"
STATUS_FILTERS = (STATUS_LATE, SESSION_HALF_DAY_AM, SESSION_HALF_DAY_PM, SESSION_FULL_DAY)

_SUMMARY_GROUPS = {
    DayStatus.PRESENT: "present",
    DayStatus.HALF_DAY_AM: "half_day_am",
    DayStatus.HALF_DAY_PM: "half_day_pm",
    DayStatus.ABSENT: "absent",
}


def sheet_row_to_dict(row: DTRSheetRow) -> dict:
    e = row.entry
    return {
        "intern_id": e.intern_id,
        "custom_intern_id": row.custom_intern_id or "",
        "full_name": row.full_name,
        "school_name": row.school_name,
        "work_date": e.work_date.strftime("%Y-%m-%d"),
        "time_in_am": format_optional_hms(e.time_in_am),
        "time_out_am": format_optional_hms(e.time_out_am),
        "time_in_pm": format_optional_hms(e.time_in_pm),
        "time_out_pm": format_optional_hms(e.time_out_pm),
        "total_hours": format_hms(e.total_seconds),
        "status": classify_day(e).value,
        "ojt_hours_rendered": format_hms(row.ojt_hours_rendered),
        "remaining_hours": format_hms(remaining_seconds(row.ojt_hours_required, row.ojt_hours_rendered)),
    }


@dataclass(frozen=True)
class WeekRange:
    week: int
    start: date
    end: date


def weekday_ranges(year: int, month: int) -> list[WeekRange]:
    """Mon-Fri ranges covering a month, each trimmed to the month's bounds.

    Weeks with no weekday inside the month are dropped.
    """

    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])

    out: list[WeekRange] = []
    monday = first - timedelta(days=first.weekday())
    while monday <= last:
        start = max(monday, first)
        end = min(monday + timedelta(days=4), last)
        while start.weekday() > 4 and start <= end:
            start += timedelta(days=1)
        if start <= end:
            out.append(WeekRange(week=len(out) + 1, start=start, end=end))
        monday += timedelta(days=7)
    return out


class AttendanceReportService:
    """Read-side analytics over the daily time record."""

    def __init__(self, dtr: DTRRepository, interns: InternRepository):
        self._dtr = dtr
        self._interns = interns

    def _rows(self, start: date, end: date, intern_id: Optional[int] = None) -> Sequence[DTRSheetRow]:
        return self._dtr.list_sheet_rows(start_date=start, end_date=end, intern_id=intern_id)

    def _approved_without_row(self, rows: Sequence[DTRSheetRow]) -> list[int]:
        seen = {r.entry.intern_id for r in rows}
        return [i.intern_id for i in self._interns.list_interns(status=InternStatus.APPROVED) if i.intern_id not in seen]

    def attendance_summary(self, work_date: date) -> dict:
        rows = self._rows(work_date, work_date)
        groups: dict[str, list[dict]] = {name: [] for name in _SUMMARY_GROUPS.values()}
        for r in rows:
            groups[_SUMMARY_GROUPS[classify_day(r.entry)]].append(sheet_row_to_dict(r))

        missing = self._approved_without_row(rows)
        totals = {name: len(items) for name, items in groups.items()}
        totals["absent"] += len(missing)

        return {
            "date": work_date.strftime("%Y-%m-%d"),
            **groups,
            "absent_without_record": missing,
            "totals": totals,
        }

    def status_filter(self, status: str, today: date) -> dict:
        status = (status or "").strip().lower()
        if status not in STATUS_FILTERS:
            raise ValidationError(f"Invalid status (use one of: {', '.join(STATUS_FILTERS)})")

        rows = self._rows(today, today)
        if status == STATUS_LATE:
            matched = [r for r in rows if is_late(r.entry.time_in_am)]
        else:
            matched = [r for r in rows if not is_no_show(r.entry) and session_status(r.entry) == status]

        result = {"status": status, "date": today.strftime("%Y-%m-%d"), "records": [sheet_row_to_dict(r) for r in matched]}
        if status == SESSION_FULL_DAY and not matched:
            no_shows = [r.entry.intern_id for r in rows if is_no_show(r.entry)]
            result["absent_ids"] = sorted(set(no_shows + self._approved_without_row(rows)))
        return result

    def weekly_late(self, week_start: date) -> list[dict]:
        """Late-day counts per intern for Monday to Friday of the given week."""

        monday = week_start - timedelta(days=week_start.weekday())
        friday = monday + timedelta(days=4)

        counts: dict[int, dict] = {}
        for r in self._rows(monday, friday):
            item = counts.setdefault(
                r.entry.intern_id,
                {"intern_id": r.entry.intern_id, "full_name": r.full_name, "late_count": 0},
            )
            if is_late(r.entry.time_in_am):
                item["late_count"] += 1

        out = list(counts.values())
        out.sort(key=lambda x: (-x["late_count"], x["intern_id"]))
        return out

    def monthly_breakdown(self, year: int, month: int) -> list[dict]:
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12")

        out: list[dict] = []
        for wr in weekday_ranges(int(year), int(month)):
            item = {
                "week": wr.week,
                "start": wr.start.strftime("%Y-%m-%d"),
                "end": wr.end.strftime("%Y-%m-%d"),
                "absent": 0,
                "late": 0,
                "half_day_am": 0,
                "half_day_pm": 0,
            }
            for r in self._rows(wr.start, wr.end):
                e = r.entry
                if is_no_show(e):
                    item["absent"] += 1
                    continue
                if is_late(e.time_in_am):
                    item["late"] += 1
                shape = session_status(e)
                if shape == SESSION_HALF_DAY_AM:
                    item["half_day_am"] += 1
                elif shape == SESSION_HALF_DAY_PM:
                    item["half_day_pm"] += 1
            out.append(item)
        return out

    def school_counts(self) -> Sequence[dict]:
        return self._interns.school_counts()

    def sheet(self, *, intern_id: int, start: date, end: date) -> list[dict]:
        if end < start:
            raise ValidationError("End date must not be before start date")
        return [sheet_row_to_dict(r) for r in self._rows(start, end, intern_id=int(intern_id))]
