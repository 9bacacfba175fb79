from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ProfileStatus, Role
from .model import NewUser, StaffProfile, User


class UserRepository(Protocol):
    """Repository interface for users and their supervisor/handler profiles.

    The service layer depends on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, data: NewUser, password_hash: str, role: Role) -> int:
        raise NotImplementedError

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError

    def set_active(self, user_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def create_profile(self, *, role: Role, user_id: int, department: str) -> int:
        raise NotImplementedError

    def get_profile(self, *, role: Role, profile_id: int) -> Optional[StaffProfile]:
        raise NotImplementedError

    def get_profile_by_user(self, *, role: Role, user_id: int) -> Optional[StaffProfile]:
        raise NotImplementedError

    def update_profile(self, *, role: Role, profile_id: int, department: str) -> bool:
        raise NotImplementedError

    def set_profile_status(self, *, role: Role, profile_id: int, status: ProfileStatus) -> bool:
        raise NotImplementedError

    def list_profiles(self, *, role: Role, status: Optional[ProfileStatus] = None) -> Sequence[StaffProfile]:
        raise NotImplementedError
