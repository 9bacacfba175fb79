from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from ..dtr.duration import format_hms, parse_hms
from .model import LeaveRequest
from .repository import LeaveRepository

_SELECT = """
    SELECT leave_id, intern_id, leave_date, reason, excuse_letter, leave_hours,
           status, created_at, decided_by, decided_at
    FROM leave_requests
"""


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _row_to_leave(r: dict) -> LeaveRequest:
        return LeaveRequest(
            request_id=int(r["leave_id"]),
            intern_id=int(r["intern_id"]),
            leave_date=normalize_mysql_date(r["leave_date"]),
            reason=r.get("reason") or "",
            leave_seconds=parse_hms(r.get("leave_hours")) or 0,
            status=RequestStatus(r["status"]),
            created_at=r.get("created_at"),
            excuse_letter=r.get("excuse_letter"),
            decided_by=int(r["decided_by"]) if r.get("decided_by") else None,
            decided_at=r.get("decided_at"),
        )

    def create_leave(
        self,
        *,
        intern_id: int,
        leave_date: date,
        reason: str,
        leave_seconds: int,
        excuse_letter: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(intern_id, leave_date, reason, excuse_letter, leave_hours, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (intern_id, leave_date, reason, excuse_letter, format_hms(leave_seconds), RequestStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE leave_id=%s", (request_id,))
            row = fetchone(cur)
            return self._row_to_leave(row) if row else None

    def list_leave_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        intern_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        where: list[str] = []
        params: list = []
        if status is not None:
            where.append("status=%s")
            params.append(status.value)
        if intern_id is not None:
            where.append("intern_id=%s")
            params.append(int(intern_id))

        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY created_at DESC, leave_id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [self._row_to_leave(r) for r in fetchall(cur)]

    def decide_leave(self, *, request_id: int, status: RequestStatus, decided_by: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, decided_by=%s, decided_at=NOW()
                WHERE leave_id=%s AND status=%s
                """,
                (status.value, decided_by, request_id, RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def approved_seconds_for(self, *, intern_id: int, leave_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT leave_hours FROM leave_requests WHERE intern_id=%s AND leave_date=%s AND status=%s",
                (intern_id, leave_date, RequestStatus.APPROVED.value),
            )
            return sum(parse_hms(r.get("leave_hours")) or 0 for r in fetchall(cur))
