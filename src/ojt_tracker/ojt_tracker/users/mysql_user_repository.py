from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ProfileStatus, Role
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewUser, StaffProfile, User
from .repository import UserRepository

# role -> (table, id column)
_PROFILE_TABLES = {
    Role.SUPERVISOR: ("supervisors", "supervisor_id"),
    Role.HANDLER: ("handlers", "handler_id"),
}

_USER_COLUMNS = """
    user_id, first_name, middle_name, last_name, suffix_name,
    email, phone, password_hash, role, is_active
"""


def _profile_table(role: Role) -> tuple[str, str]:
    try:
        return _PROFILE_TABLES[role]
    except KeyError:
        raise ValidationError(f"No profile table for role {role.value}")


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _row_to_user(r: dict) -> User:
        return User(
            user_id=int(r["user_id"]),
            first_name=r.get("first_name") or "",
            middle_name=r.get("middle_name") or "",
            last_name=r.get("last_name") or "",
            suffix_name=r.get("suffix_name") or "",
            email=r["email"],
            phone=r.get("phone") or "",
            password_hash=r["password_hash"],
            role=Role(r["role"]),
            is_active=bool(r.get("is_active", True)),
        )

    @staticmethod
    def _row_to_profile(role: Role, r: dict) -> StaffProfile:
        name_parts = [r.get("first_name"), r.get("middle_name"), r.get("last_name"), r.get("suffix_name")]
        return StaffProfile(
            profile_id=int(r["profile_id"]),
            user_id=int(r["user_id"]),
            role=role,
            department=r.get("department") or "",
            status=ProfileStatus(r["status"]),
            full_name=" ".join(p for p in name_parts if p),
            email=r.get("email") or "",
        )

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return self._row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return self._row_to_user(row) if row else None

    def create_user(self, *, data: NewUser, password_hash: str, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(first_name, middle_name, last_name, suffix_name, email, phone,
                                  password_hash, role, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,1)
                """,
                (
                    data.first_name,
                    data.middle_name,
                    data.last_name,
                    data.suffix_name,
                    data.email,
                    data.phone,
                    password_hash,
                    role.value,
                ),
            )
            return int(cur.lastrowid)

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, user_id))
            return cur.rowcount > 0

    def set_active(self, user_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET is_active=%s WHERE user_id=%s", (1 if is_active else 0, user_id))
            return cur.rowcount > 0

    def create_profile(self, *, role: Role, user_id: int, department: str) -> int:
        table, _ = _profile_table(role)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO {table}(user_id, department, status) VALUES(%s,%s,%s)",
                (user_id, department, ProfileStatus.ACTIVE.value),
            )
            return int(cur.lastrowid)

    def _select_profiles(self, role: Role, where: str, params: tuple) -> list[StaffProfile]:
        table, id_col = _profile_table(role)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT p.{id_col} AS profile_id, p.user_id, p.department, p.status,
                       u.first_name, u.middle_name, u.last_name, u.suffix_name, u.email
                FROM {table} p
                JOIN users u ON u.user_id = p.user_id
                {where}
                ORDER BY p.{id_col} ASC
                """,
                params,
            )
            return [self._row_to_profile(role, r) for r in fetchall(cur)]

    def get_profile(self, *, role: Role, profile_id: int) -> Optional[StaffProfile]:
        _, id_col = _profile_table(role)
        rows = self._select_profiles(role, f"WHERE p.{id_col}=%s", (profile_id,))
        return rows[0] if rows else None

    def get_profile_by_user(self, *, role: Role, user_id: int) -> Optional[StaffProfile]:
        rows = self._select_profiles(role, "WHERE p.user_id=%s", (user_id,))
        return rows[0] if rows else None

    def update_profile(self, *, role: Role, profile_id: int, department: str) -> bool:
        table, id_col = _profile_table(role)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE {table} SET department=%s WHERE {id_col}=%s", (department, profile_id))
            return cur.rowcount > 0

    def set_profile_status(self, *, role: Role, profile_id: int, status: ProfileStatus) -> bool:
        table, id_col = _profile_table(role)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE {table} SET status=%s WHERE {id_col}=%s", (status.value, profile_id))
            return cur.rowcount > 0

    def list_profiles(self, *, role: Role, status: Optional[ProfileStatus] = None) -> Sequence[StaffProfile]:
        if status is None:
            return self._select_profiles(role, "", ())
        return self._select_profiles(role, "WHERE p.status=%s", (status.value,))
