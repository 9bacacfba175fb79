from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ProfileStatus, Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account that can log in.

    Plain data, no database access.
    """

    user_id: int
    first_name: str
    middle_name: str
    last_name: str
    suffix_name: str
    email: str
    phone: str
    password_hash: str
    role: Role
    is_active: bool = True

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name, self.suffix_name]
        return " ".join(p for p in parts if p)


@dataclass(frozen=True)
class NewUser:
    first_name: str
    middle_name: str
    last_name: str
    suffix_name: str
    email: str
    phone: str


@dataclass(frozen=True)
class StaffProfile:
    """Supervisor or handler record attached to a user."""

    profile_id: int
    user_id: int
    role: Role
    department: str
    status: ProfileStatus
    full_name: str = ""
    email: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.profile_id,
            "user_id": self.user_id,
            "role": self.role.value,
            "department": self.department,
            "status": self.status.value,
            "full_name": self.full_name,
            "email": self.email,
        }


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    full_name: str
    email: str
    role: Role
    profile_id: Optional[int]
