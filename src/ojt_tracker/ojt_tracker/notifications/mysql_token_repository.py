from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import DeviceTokenRepository


class MySQLDeviceTokenRepository(DeviceTokenRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_token(self, intern_id: int) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT token FROM device_tokens WHERE intern_id=%s", (intern_id,))
            row = fetchone(cur)
            return row["token"] if row else None

    def save_token(self, *, intern_id: int, token: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO device_tokens(intern_id, token) VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE token=VALUES(token)
                """,
                (intern_id, token),
            )
