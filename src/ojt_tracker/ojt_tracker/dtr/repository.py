from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DTREntry, DTRSheetRow


class DTRRepository(Protocol):
    def get_for_intern_and_date(self, intern_id: int, work_date: date) -> Optional[DTREntry]:
        raise NotImplementedError

    def list_for_intern(self, intern_id: int) -> Sequence[DTREntry]:
        raise NotImplementedError

    def create_entry(
        self,
        *,
        intern_id: int,
        user_id: int,
        supervisor_id: Optional[int],
        work_date: date,
        total_seconds: int = 0,
    ) -> DTREntry:
        raise NotImplementedError

    def save_entry(self, entry: DTREntry) -> bool:
        """Persist the four slots and the total of an existing row."""

        raise NotImplementedError

    def list_sheet_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        intern_id: Optional[int] = None,
    ) -> Sequence[DTRSheetRow]:
        raise NotImplementedError
