from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import QRCodeRepository


class MySQLQRCodeRepository(QRCodeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_payload(self, intern_id: int) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT payload FROM qr_codes WHERE intern_id=%s", (intern_id,))
            row = fetchone(cur)
            return row["payload"] if row else None

    def save_payload(self, *, intern_id: int, payload: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO qr_codes(intern_id, payload) VALUES(%s,%s)", (intern_id, payload))
            return int(cur.lastrowid)
