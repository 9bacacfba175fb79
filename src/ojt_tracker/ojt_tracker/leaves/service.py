from __future__ import annotations

import logging
import os
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LEAVE_HOURS, DEFAULT_TIMEZONE, EXCUSE_LETTER_EXTENSIONS
from ..core.enums import RequestStatus, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..database.transaction import NullTransactionManager, TransactionManager
from ..dtr.duration import format_hms, require_hms
from ..dtr.repository import DTRRepository
from ..dtr.service import HoursService, intern_lock_key
from ..dtr.hours import HoursSummary
from ..interns.repository import InternRepository
from ..notifications.service import NotificationService
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

APPROVER_ROLES = frozenset({Role.SUPERVISOR, Role.HANDLER})


def validate_excuse_letter_name(filename: str) -> str:
    ext = os.path.splitext(filename or "")[1].lower()
    if ext not in EXCUSE_LETTER_EXTENSIONS:
        raise ValidationError("Invalid file format. Only PDF, DOCX, JPG, and PNG allowed.")
    return ext


class LeaveService:
    def __init__(
        self,
        leaves: LeaveRepository,
        dtr: DTRRepository,
        interns: InternRepository,
        hours: HoursService,
        notifications: NotificationService | None = None,
        *,
        tx: TransactionManager | None = None,
        tz_name: str = DEFAULT_TIMEZONE,
    ):
        self._leaves = leaves
        self._dtr = dtr
        self._interns = interns
        self._hours = hours
        self._notifications = notifications
        self._tx = tx or NullTransactionManager()
        self._tz_name = tz_name

    @staticmethod
    def _require_approver(current_role: Role) -> None:
        if current_role not in APPROVER_ROLES:
            raise AuthorizationError("Only supervisors and handlers can decide leave requests")

    def create_leave(
        self,
        *,
        intern_id: int,
        leave_date: date,
        reason: str,
        leave_hours: str = "",
        excuse_letter: Optional[str] = None,
    ) -> int:
        if not self._interns.get_by_id(int(intern_id)):
            raise NotFoundError("Intern not found")

        reason = require_non_empty(reason, "Reason")
        leave_seconds = require_hms((leave_hours or "").strip() or DEFAULT_LEAVE_HOURS, "Leave hours")
        if leave_seconds <= 0:
            raise ValidationError("Leave hours must be greater than zero")
        if excuse_letter:
            validate_excuse_letter_name(excuse_letter)

        request_id = self._leaves.create_leave(
            intern_id=int(intern_id),
            leave_date=leave_date,
            reason=reason,
            leave_seconds=leave_seconds,
            excuse_letter=excuse_letter,
        )
        logger.info("Leave request %s created for intern %s on %s", request_id, intern_id, leave_date)
        return request_id

    def create_same_day_leave(
        self,
        *,
        intern_id: int,
        leave_time: str,
        return_time: str,
        reason: str,
        now: datetime | None = None,
    ) -> LeaveRequest:
        """Leave window inside today's attendance; hours are deducted only on approval."""

        today = (now or now_local(self._tz_name)).date()
        if not self._dtr.get_for_intern_and_date(int(intern_id), today):
            raise NotFoundError("DTR entry not found for today")

        start = require_hms(leave_time, "Leave request time")
        end = require_hms(return_time, "Return time")
        if end < start:
            raise ValidationError("Return time must be after leave request time")

        request_id = self.create_leave(
            intern_id=intern_id,
            leave_date=today,
            reason=reason,
            leave_hours=format_hms(end - start),
        )
        created = self._leaves.get_leave(request_id=request_id)
        if not created:
            raise NotFoundError("Leave request not found")
        return created

    def approve_leave(self, *, current_role: Role, request_id: int, decided_by: Optional[int] = None) -> HoursSummary:
        """Approve a pending request and deduct its hours from the matching DTR day."""

        self._require_approver(current_role)

        req = self._leaves.get_leave(request_id=int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        if req.status != RequestStatus.PENDING:
            raise ConflictError("Leave request status is not pending")

        with self._tx.begin(intern_lock_key(req.intern_id)):
            entry = self._dtr.get_for_intern_and_date(req.intern_id, req.leave_date)
            if not entry:
                raise NotFoundError("DTR not found for that date")

            new_total = max(0, entry.total_seconds - req.leave_seconds)
            self._dtr.save_entry(entry.with_total(new_total))

            if not self._leaves.decide_leave(request_id=req.request_id, status=RequestStatus.APPROVED, decided_by=decided_by):
                raise ConflictError("Leave request status is not pending")

            summary = self._hours.recompute(req.intern_id)

        logger.info(
            "Leave request %s approved: %s day total %s -> %s",
            req.request_id,
            req.leave_date,
            format_hms(entry.total_seconds),
            format_hms(new_total),
        )
        self._notify(req.intern_id, "Leave Request Approved", "your leave request has been approved.")
        return summary

    def reject_leave(self, *, current_role: Role, request_id: int, decided_by: Optional[int] = None) -> None:
        self._require_approver(current_role)

        req = self._leaves.get_leave(request_id=int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        if not self._leaves.decide_leave(request_id=req.request_id, status=RequestStatus.REJECTED, decided_by=decided_by):
            raise ConflictError("Leave request status is not pending")

        self._notify(req.intern_id, "Leave Request Rejected", "your leave request has been rejected.")

    def list_leaves(self, *, status: Optional[RequestStatus] = None, intern_id: Optional[int] = None) -> Sequence[LeaveRequest]:
        return self._leaves.list_leave_requests(status=status, intern_id=intern_id)

    def _notify(self, intern_id: int, title: str, message: str) -> None:
        if not self._notifications:
            return
        intern = self._interns.get_by_id(intern_id)
        name = intern.first_name if intern and intern.first_name else "there"
        self._notifications.notify_intern(intern_id, title, f"Hi {name}, {message}")
