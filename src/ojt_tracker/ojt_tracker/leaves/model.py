from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus
from ..dtr.duration import format_hms


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    intern_id: int
    leave_date: date
    reason: str
    leave_seconds: int
    status: RequestStatus
    created_at: datetime
    excuse_letter: Optional[str] = None
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "intern_id": self.intern_id,
            "leave_date": self.leave_date.strftime("%Y-%m-%d"),
            "reason": self.reason,
            "leave_hours": format_hms(self.leave_seconds),
            "status": self.status.value,
            "excuse_letter": self.excuse_letter,
            "created_at": self.created_at.strftime("%Y-%m-%d %H:%M:%S") if self.created_at else None,
            "decided_by": self.decided_by,
            "decided_at": self.decided_at.strftime("%Y-%m-%d %H:%M:%S") if self.decided_at else None,
        }
