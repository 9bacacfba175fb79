from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create_leave(
        self,
        *,
        intern_id: int,
        leave_date: date,
        reason: str,
        leave_seconds: int,
        excuse_letter: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_leave_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        intern_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide_leave(self, *, request_id: int, status: RequestStatus, decided_by: Optional[int]) -> bool:
        """Move a PENDING request to ``status``; returns False if it was not pending."""

        raise NotImplementedError

    def approved_seconds_for(self, *, intern_id: int, leave_date: date) -> int:
        raise NotImplementedError
