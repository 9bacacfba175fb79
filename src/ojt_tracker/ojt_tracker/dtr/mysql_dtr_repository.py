from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .duration import format_hms, parse_hms
from .model import DTREntry, DTRSheetRow
from .repository import DTRRepository

_ENTRY_COLUMNS = """
    d.dtr_id, d.intern_id, d.user_id, d.supervisor_id, d.work_date,
    d.time_in_am, d.time_out_am, d.time_in_pm, d.time_out_pm, d.total_hours
"""


def _to_db_time(seconds: Optional[int]) -> Optional[str]:
    return format_hms(seconds) if seconds is not None else None


class MySQLDTRRepository(DTRRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _row_to_entry(r: dict) -> DTREntry:
        work_date = normalize_mysql_date(r.get("work_date"))
        if work_date is None:
            raise ValueError("DTR row is missing work_date")
        return DTREntry(
            entry_id=int(r["dtr_id"]),
            intern_id=int(r["intern_id"]),
            user_id=int(r["user_id"]),
            supervisor_id=int(r["supervisor_id"]) if r.get("supervisor_id") else None,
            work_date=work_date,
            time_in_am=parse_hms(r.get("time_in_am")),
            time_out_am=parse_hms(r.get("time_out_am")),
            time_in_pm=parse_hms(r.get("time_in_pm")),
            time_out_pm=parse_hms(r.get("time_out_pm")),
            total_seconds=parse_hms(r.get("total_hours")) or 0,
        )

    def get_for_intern_and_date(self, intern_id: int, work_date: date) -> Optional[DTREntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_ENTRY_COLUMNS}
                FROM dtr_entries d
                WHERE d.intern_id=%s AND d.work_date=%s
                FOR UPDATE
                """,
                (intern_id, work_date),
            )
            row = fetchone(cur)
            return self._row_to_entry(row) if row else None

    def list_for_intern(self, intern_id: int) -> Sequence[DTREntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_ENTRY_COLUMNS}
                FROM dtr_entries d
                WHERE d.intern_id=%s
                ORDER BY d.work_date ASC
                """,
                (intern_id,),
            )
            return [self._row_to_entry(r) for r in fetchall(cur)]

    def create_entry(
        self,
        *,
        intern_id: int,
        user_id: int,
        supervisor_id: Optional[int],
        work_date: date,
        total_seconds: int = 0,
    ) -> DTREntry:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO dtr_entries(intern_id, user_id, supervisor_id, work_date, total_hours)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (intern_id, user_id, supervisor_id, work_date, format_hms(total_seconds)),
            )
            entry_id = int(cur.lastrowid)
        return DTREntry(
            entry_id=entry_id,
            intern_id=int(intern_id),
            user_id=int(user_id),
            supervisor_id=supervisor_id,
            work_date=work_date,
            total_seconds=max(0, int(total_seconds)),
        )

    def save_entry(self, entry: DTREntry) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE dtr_entries
                SET time_in_am=%s, time_out_am=%s, time_in_pm=%s, time_out_pm=%s, total_hours=%s
                WHERE dtr_id=%s
                """,
                (
                    _to_db_time(entry.time_in_am),
                    _to_db_time(entry.time_out_am),
                    _to_db_time(entry.time_in_pm),
                    _to_db_time(entry.time_out_pm),
                    format_hms(entry.total_seconds),
                    entry.entry_id,
                ),
            )
            return cur.rowcount > 0

    def list_sheet_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        intern_id: Optional[int] = None,
    ) -> Sequence[DTRSheetRow]:
        where = ["d.work_date BETWEEN %s AND %s"]
        params: list = [start_date, end_date]
        if intern_id is not None:
            where.append("d.intern_id=%s")
            params.append(int(intern_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_ENTRY_COLUMNS},
                       i.custom_intern_id, i.school_name, i.handler_id,
                       i.ojt_hours_required, i.ojt_hours_rendered,
                       u.first_name, u.middle_name, u.last_name, u.suffix_name
                FROM dtr_entries d
                JOIN interns i ON i.intern_id = d.intern_id
                JOIN users u ON u.user_id = i.user_id
                WHERE {' AND '.join(where)}
                ORDER BY d.work_date ASC, u.last_name ASC
                """,
                tuple(params),
            )
            out: list[DTRSheetRow] = []
            for r in fetchall(cur):
                out.append(
                    DTRSheetRow(
                        entry=self._row_to_entry(r),
                        custom_intern_id=r.get("custom_intern_id"),
                        first_name=r.get("first_name") or "",
                        middle_name=r.get("middle_name") or "",
                        last_name=r.get("last_name") or "",
                        suffix_name=r.get("suffix_name") or "",
                        school_name=r.get("school_name") or "",
                        handler_id=int(r["handler_id"]) if r.get("handler_id") else None,
                        ojt_hours_required=int(r.get("ojt_hours_required") or 0),
                        ojt_hours_rendered=parse_hms(r.get("ojt_hours_rendered")) or 0,
                    )
                )
            return out
