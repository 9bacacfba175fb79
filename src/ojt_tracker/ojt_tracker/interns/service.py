from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import optional_positive_id, require_non_empty, require_positive_int
from ..core.constants import CUSTOM_INTERN_ID_PREFIX, DEFAULT_TIMEZONE
from ..core.enums import InternStatus, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..database.transaction import NullTransactionManager, TransactionManager
from ..dtr.duration import format_hms
from ..dtr.hours import HoursSummary
from ..dtr.service import HoursService
from ..notifications.service import NotificationService
from ..users.model import NewUser
from ..users.service import UserService
from .model import Intern, NewIntern
from .repository import InternRepository

logger = logging.getLogger(__name__)

_CUSTOM_ID_RE = re.compile(rf"^{CUSTOM_INTERN_ID_PREFIX}-(\d{{4}})-(\d+)$")


def generate_custom_intern_id(latest: Optional[str], year: int) -> str:
    """Next ``Intern-<year>-NNN``; numbering restarts at 001 every year."""

    seq = 1
    m = _CUSTOM_ID_RE.match(latest or "")
    if m and int(m.group(1)) == int(year):
        seq = int(m.group(2)) + 1
    return f"{CUSTOM_INTERN_ID_PREFIX}-{int(year)}-{seq:03d}"


def intern_to_dict(intern: Intern) -> dict:
    required_seconds = intern.ojt_hours_required * 3600
    return {
        "id": intern.intern_id,
        "user_id": intern.user_id,
        "custom_intern_id": intern.custom_intern_id or "",
        "first_name": intern.first_name,
        "middle_name": intern.middle_name,
        "last_name": intern.last_name,
        "suffix_name": intern.suffix_name,
        "full_name": intern.full_name,
        "email": intern.email,
        "student_id": intern.student_id,
        "school_name": intern.school_name,
        "course": intern.course,
        "address": intern.address,
        "supervisor_id": intern.supervisor_id,
        "handler_id": intern.handler_id,
        "ojt_hours_required": intern.ojt_hours_required,
        "ojt_hours_rendered": format_hms(intern.ojt_hours_rendered),
        "remaining_hours": format_hms(required_seconds - intern.ojt_hours_rendered),
        "status": intern.status.value,
    }


def clean_new_intern(data: NewIntern) -> NewIntern:
    return NewIntern(
        student_id=require_non_empty(data.student_id, "Student ID"),
        school_name=require_non_empty(data.school_name, "School name"),
        course=require_non_empty(data.course, "Course"),
        address=(data.address or "").strip(),
        supervisor_id=optional_positive_id(data.supervisor_id, "Supervisor ID"),
        handler_id=optional_positive_id(data.handler_id, "Handler ID"),
        ojt_hours_required=require_positive_int(data.ojt_hours_required, "OJT hours required"),
    )


class InternService:
    """Use case: intern registration, approval and lookups."""

    def __init__(
        self,
        interns: InternRepository,
        users: UserService,
        hours: HoursService,
        notifications: NotificationService | None = None,
        *,
        tx: TransactionManager | None = None,
        tz_name: str = DEFAULT_TIMEZONE,
    ):
        self._interns = interns
        self._users = users
        self._hours = hours
        self._notifications = notifications
        self._tx = tx or NullTransactionManager()
        self._tz_name = tz_name

    @staticmethod
    def _require_staff(current_role: Role) -> None:
        if current_role not in (Role.SUPERVISOR, Role.HANDLER):
            raise AuthorizationError("Only supervisors and handlers can manage interns")

    def register_intern(self, *, user: NewUser, password: str, confirm_password: str, intern: NewIntern) -> int:
        """Create the intern's account and a PENDING intern record together."""

        intern = clean_new_intern(intern)
        with self._tx.begin():
            user_id = self._users.create_user(
                data=user,
                password=password,
                confirm_password=confirm_password,
                role=Role.INTERN,
            )
            intern_id = self._interns.create_intern(user_id=user_id, data=intern)

        logger.info("Registered intern %s (user %s) from %s", intern_id, user_id, intern.school_name)
        return intern_id

    def get_intern(self, intern_id: int) -> Intern:
        intern = self._interns.get_by_id(int(intern_id))
        if not intern:
            raise NotFoundError("Intern not found")
        return intern

    def approve_interns(self, *, current_role: Role, intern_ids: Sequence[int], now: datetime | None = None) -> list[str]:
        """Approve pending interns and hand out the next custom IDs of the year."""

        self._require_staff(current_role)
        year = (now or now_local(self._tz_name)).year

        pending = [self.get_intern(i) for i in dict.fromkeys(int(i) for i in intern_ids)]
        for intern in pending:
            if intern.status != InternStatus.PENDING:
                raise ConflictError(f"Intern {intern.intern_id} is not pending")

        assigned: list[str] = []
        for intern in pending:
            with self._tx.begin(f"custom_intern_id:{year}"):
                if self.get_intern(intern.intern_id).status != InternStatus.PENDING:
                    raise ConflictError(f"Intern {intern.intern_id} is not pending")
                custom_id = generate_custom_intern_id(self._interns.latest_custom_id(year=year), year)
                self._interns.set_status(intern.intern_id, status=InternStatus.APPROVED, custom_intern_id=custom_id)
            assigned.append(custom_id)
            logger.info("Approved intern %s as %s", intern.intern_id, custom_id)

            if self._notifications:
                self._notifications.notify_intern(
                    intern.intern_id,
                    "Internship Approved",
                    f"Congratulations {intern.first_name}! Your internship request has been approved.",
                )
        return assigned

    def archive_interns(self, *, current_role: Role, intern_ids: Sequence[int]) -> None:
        self._require_staff(current_role)
        interns = [self.get_intern(i) for i in dict.fromkeys(int(i) for i in intern_ids)]
        for intern in interns:
            if intern.status == InternStatus.ARCHIVED:
                raise ConflictError(f"Intern {intern.intern_id} is already archived")

        for intern in interns:
            self._interns.set_status(intern.intern_id, status=InternStatus.ARCHIVED, custom_intern_id=intern.custom_intern_id)
        logger.info("Archived interns %s", [i.intern_id for i in interns])

    def edit_intern(self, *, current_role: Role, intern_id: int, data: NewIntern) -> Intern:
        self._require_staff(current_role)
        intern = self.get_intern(intern_id)
        data = clean_new_intern(data)
        if not self._interns.update_intern(intern.intern_id, data=data):
            raise ValidationError("Failed to update intern")
        return self.get_intern(intern.intern_id)

    def list_interns(self, *, status: Optional[InternStatus] = None) -> Sequence[Intern]:
        return self._interns.list_interns(status=status)

    def search(self, value: str) -> Sequence[Intern]:
        value = require_non_empty(value, "Search value")
        return self._interns.list_interns(search=value)

    def list_by_supervisor(self, supervisor_id: int) -> Sequence[Intern]:
        return self._interns.list_interns(supervisor_id=int(supervisor_id))

    def hours_summary(self, intern_id: int) -> HoursSummary:
        return self._hours.summary(intern_id)

    def school_counts(self) -> Sequence[dict]:
        return self._interns.school_counts()
