from __future__ import annotations

import csv
import io
from typing import Iterable

SHEET_FIELDS = [
    "work_date",
    "intern_id",
    "custom_intern_id",
    "full_name",
    "school_name",
    "time_in_am",
    "time_out_am",
    "time_in_pm",
    "time_out_pm",
    "total_hours",
    "status",
]

SUMMARY_FIELDS = ["group", *SHEET_FIELDS]


def write_csv(rows: Iterable[dict], fieldnames: list[str]) -> str:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=fieldnames, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return out.getvalue()


def sheet_csv(rows: Iterable[dict]) -> str:
    """DTR sheet of one intern, one line per day."""
    return write_csv(rows, SHEET_FIELDS)


def summary_csv(summary: dict) -> str:
    """Daily attendance summary flattened to one line per intern, tagged with its group."""

    def _rows():
        for group in ("present", "half_day_am", "half_day_pm", "absent"):
            for row in summary.get(group, []):
                yield {"group": group, **row}

    return write_csv(_rows(), SUMMARY_FIELDS)
