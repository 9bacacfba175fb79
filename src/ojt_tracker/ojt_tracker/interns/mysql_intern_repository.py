from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import CUSTOM_INTERN_ID_PREFIX
from ..core.enums import InternStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..dtr.duration import format_hms, parse_hms
from .model import Intern, NewIntern
from .repository import InternRepository

_SELECT = """
    SELECT i.intern_id, i.user_id, i.custom_intern_id, i.student_id, i.school_name, i.course,
           i.address, i.supervisor_id, i.handler_id, i.ojt_hours_required, i.ojt_hours_rendered,
           i.status, u.first_name, u.middle_name, u.last_name, u.suffix_name, u.email
    FROM interns i
    JOIN users u ON u.user_id = i.user_id
"""


class MySQLInternRepository(InternRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _row_to_intern(r: dict) -> Intern:
        return Intern(
            intern_id=int(r["intern_id"]),
            user_id=int(r["user_id"]),
            student_id=r.get("student_id") or "",
            school_name=r.get("school_name") or "",
            course=r.get("course") or "",
            address=r.get("address") or "",
            supervisor_id=int(r["supervisor_id"]) if r.get("supervisor_id") else None,
            handler_id=int(r["handler_id"]) if r.get("handler_id") else None,
            ojt_hours_required=int(r.get("ojt_hours_required") or 0),
            ojt_hours_rendered=parse_hms(r.get("ojt_hours_rendered")) or 0,
            status=InternStatus(r["status"]),
            custom_intern_id=r.get("custom_intern_id"),
            first_name=r.get("first_name") or "",
            middle_name=r.get("middle_name") or "",
            last_name=r.get("last_name") or "",
            suffix_name=r.get("suffix_name") or "",
            email=r.get("email") or "",
        )

    def get_by_id(self, intern_id: int) -> Optional[Intern]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE i.intern_id=%s", (intern_id,))
            row = fetchone(cur)
            return self._row_to_intern(row) if row else None

    def get_by_user_id(self, user_id: int) -> Optional[Intern]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE i.user_id=%s", (user_id,))
            row = fetchone(cur)
            return self._row_to_intern(row) if row else None

    def list_interns(
        self,
        *,
        status: Optional[InternStatus] = None,
        supervisor_id: Optional[int] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Sequence[Intern]:
        where: list[str] = []
        params: list = []
        if status is not None:
            where.append("i.status=%s")
            params.append(status.value)
        if supervisor_id is not None:
            where.append("i.supervisor_id=%s")
            params.append(int(supervisor_id))
        if search:
            like = f"%{search.strip()}%"
            where.append("(u.first_name LIKE %s OR u.last_name LIKE %s OR i.school_name LIKE %s)")
            params.extend([like, like, like])

        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY i.intern_id ASC"
        if limit:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [self._row_to_intern(r) for r in fetchall(cur)]

    def create_intern(self, *, user_id: int, data: NewIntern) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO interns(user_id, student_id, school_name, course, address,
                                    supervisor_id, handler_id, ojt_hours_required, ojt_hours_rendered, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    user_id,
                    data.student_id,
                    data.school_name,
                    data.course,
                    data.address,
                    data.supervisor_id,
                    data.handler_id,
                    data.ojt_hours_required,
                    format_hms(0),
                    InternStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def update_intern(self, intern_id: int, *, data: NewIntern) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE interns
                SET student_id=%s, school_name=%s, course=%s, address=%s,
                    supervisor_id=%s, handler_id=%s, ojt_hours_required=%s
                WHERE intern_id=%s
                """,
                (
                    data.student_id,
                    data.school_name,
                    data.course,
                    data.address,
                    data.supervisor_id,
                    data.handler_id,
                    data.ojt_hours_required,
                    intern_id,
                ),
            )
            # rowcount is 0 when nothing changed; existence was checked by the caller
            return cur.rowcount >= 0

    def set_status(self, intern_id: int, *, status: InternStatus, custom_intern_id: Optional[str] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE interns SET status=%s, custom_intern_id=COALESCE(%s, custom_intern_id) WHERE intern_id=%s",
                (status.value, custom_intern_id, intern_id),
            )
            return cur.rowcount > 0

    def latest_custom_id(self, *, year: int) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT custom_intern_id
                FROM interns
                WHERE custom_intern_id LIKE %s
                ORDER BY CAST(SUBSTRING_INDEX(custom_intern_id, '-', -1) AS UNSIGNED) DESC
                LIMIT 1
                FOR UPDATE
                """,
                (f"{CUSTOM_INTERN_ID_PREFIX}-{int(year)}-%",),
            )
            row = fetchone(cur)
            return row["custom_intern_id"] if row else None

    def update_rendered(self, intern_id: int, *, rendered_seconds: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE interns SET ojt_hours_rendered=%s WHERE intern_id=%s",
                (format_hms(rendered_seconds), intern_id),
            )
            return cur.rowcount > 0

    def school_counts(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT school_name, COUNT(*) AS intern_count
                FROM interns
                WHERE status <> %s
                GROUP BY school_name
                ORDER BY intern_count DESC, school_name ASC
                """,
                (InternStatus.ARCHIVED.value,),
            )
            return [
                {"school_name": r["school_name"], "intern_count": int(r["intern_count"])}
                for r in fetchall(cur)
            ]
