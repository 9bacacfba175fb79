from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from ..core.enums import Slot


@dataclass(frozen=True)
class DTREntry:
    """Domain entity: one daily time record row (one per intern per day).

    Slot times are seconds since midnight, ``None`` when not recorded.
    """

    entry_id: int
    intern_id: int
    user_id: int
    supervisor_id: Optional[int]
    work_date: date
    time_in_am: Optional[int] = None
    time_out_am: Optional[int] = None
    time_in_pm: Optional[int] = None
    time_out_pm: Optional[int] = None
    total_seconds: int = 0

    def slot(self, slot: Slot) -> Optional[int]:
        return getattr(self, slot.value)

    def with_slot(self, slot: Slot, seconds: int) -> "DTREntry":
        return replace(self, **{slot.value: seconds})

    def with_total(self, total_seconds: int) -> "DTREntry":
        return replace(self, total_seconds=max(0, int(total_seconds)))


@dataclass(frozen=True)
class DTRSheetRow:
    """Read-model for exports and summaries (entry joined with intern/user)."""

    entry: DTREntry
    custom_intern_id: Optional[str]
    first_name: str
    middle_name: str
    last_name: str
    suffix_name: str
    school_name: str
    handler_id: Optional[int]
    ojt_hours_required: int
    ojt_hours_rendered: int

    @property
    def full_name(self) -> str:
        middle_initial = f"{self.middle_name[0]}." if self.middle_name else ""
        parts = [self.first_name, middle_initial, self.last_name, self.suffix_name]
        return " ".join(p for p in parts if p)
