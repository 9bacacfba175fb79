from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .duration import format_hms, span
from .model import DTREntry


@dataclass(frozen=True)
class HoursSummary:
    intern_id: int
    required_hours: int
    rendered_seconds: int
    remaining_seconds: int

    def to_dict(self) -> dict:
        return {
            "intern_id": self.intern_id,
            "ojt_hours_required": self.required_hours,
            "ojt_hours_rendered": format_hms(self.rendered_seconds),
            "remaining_hours": format_hms(self.remaining_seconds),
        }


def sum_rendered(totals: Iterable[int]) -> int:
    return sum(max(0, int(t or 0)) for t in totals)


def remaining_seconds(required_hours: int, rendered: int) -> int:
    return max(0, int(required_hours) * 3600 - int(rendered))


def summarize(intern_id: int, required_hours: int, entries: Iterable[DTREntry]) -> HoursSummary:
    rendered = sum_rendered(e.total_seconds for e in entries)
    return HoursSummary(
        intern_id=intern_id,
        required_hours=int(required_hours),
        rendered_seconds=rendered,
        remaining_seconds=remaining_seconds(required_hours, rendered),
    )


def day_total(entry: DTREntry, *, deducted_seconds: int = 0) -> int:
    """Worked seconds of one day: AM span plus PM span, minus deductions, floored at zero."""

    worked = span(entry.time_in_am, entry.time_out_am) + span(entry.time_in_pm, entry.time_out_pm)
    return max(0, worked - int(deducted_seconds))
