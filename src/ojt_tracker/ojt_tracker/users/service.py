from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.enums import InternStatus, ProfileStatus, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..interns.repository import InternRepository
from .model import NewUser, SessionUser, StaffProfile, User
from .repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
STAFF_ROLES = frozenset({Role.SUPERVISOR, Role.HANDLER})


def hash_password(password: str, confirm_password: str) -> str:
    require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
    if password != confirm_password:
        raise ValidationError("Passwords do not match")
    return generate_password_hash(password)


def clean_new_user(data: NewUser) -> NewUser:
    return NewUser(
        first_name=require_non_empty(data.first_name, "First name"),
        middle_name=(data.middle_name or "").strip(),
        last_name=require_non_empty(data.last_name, "Last name"),
        suffix_name=(data.suffix_name or "").strip(),
        email=require_email(data.email),
        phone=(data.phone or "").strip(),
    )


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository, interns: Optional[InternRepository] = None):
        self._users = users
        self._interns = interns

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder hashes such as 'CHANGE_ME'
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        profile_id: Optional[int] = None
        if user.role in STAFF_ROLES:
            profile = self._users.get_profile_by_user(role=user.role, user_id=user.user_id)
            if profile and profile.status == ProfileStatus.ARCHIVED:
                raise AuthenticationError("Account is archived")
            profile_id = profile.profile_id if profile else None
        elif user.role == Role.INTERN and self._interns:
            intern = self._interns.get_by_user_id(user.user_id)
            if intern and intern.status == InternStatus.ARCHIVED:
                raise AuthenticationError("Account is archived")
            profile_id = intern.intern_id if intern else None

        logger.info("User %s logged in as %s", user.user_id, user.role.value)
        return SessionUser(
            user_id=user.user_id,
            full_name=user.full_name,
            email=user.email,
            role=user.role,
            profile_id=profile_id,
        )


class UserService:
    """Use case: manage accounts and supervisor / handler profiles."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_user(self, *, data: NewUser, password: str, confirm_password: str, role: Role) -> int:
        data = clean_new_user(data)
        password_hash = hash_password(password, confirm_password)

        if self._users.get_by_email(data.email):
            raise ConflictError("Email already exists")

        user_id = self._users.create_user(data=data, password_hash=password_hash, role=role)
        logger.info("Created %s account %s", role.value, user_id)
        return user_id

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def change_password(self, *, user_id: int, old_password: str, new_password: str, confirm_password: str) -> None:
        user = self.get_user(user_id)
        if not check_password_hash(user.password_hash, old_password or ""):
            raise AuthenticationError("Old password is incorrect")

        password_hash = hash_password(new_password, confirm_password)
        if not self._users.update_password(user.user_id, password_hash=password_hash):
            raise ValidationError("Failed to update password")

    def _create_profile(
        self,
        *,
        role: Role,
        data: NewUser,
        password: str,
        confirm_password: str,
        department: str,
    ) -> int:
        department = require_non_empty(department, "Department")
        user_id = self.create_user(data=data, password=password, confirm_password=confirm_password, role=role)
        return self._users.create_profile(role=role, user_id=user_id, department=department)

    def create_supervisor_profile(self, *, data: NewUser, password: str, confirm_password: str, department: str) -> int:
        return self._create_profile(
            role=Role.SUPERVISOR,
            data=data,
            password=password,
            confirm_password=confirm_password,
            department=department,
        )

    def create_handler_profile(self, *, data: NewUser, password: str, confirm_password: str, department: str) -> int:
        return self._create_profile(
            role=Role.HANDLER,
            data=data,
            password=password,
            confirm_password=confirm_password,
            department=department,
        )

    def get_profile(self, *, role: Role, profile_id: int) -> StaffProfile:
        if role not in STAFF_ROLES:
            raise ValidationError("Only supervisor and handler profiles exist")
        profile = self._users.get_profile(role=role, profile_id=int(profile_id))
        if not profile:
            raise NotFoundError(f"{role.value.capitalize()} not found")
        return profile

    def edit_profile(self, *, current_role: Role, role: Role, profile_id: int, department: str) -> None:
        if current_role != Role.SUPERVISOR:
            raise AuthorizationError("Only supervisors can edit profiles")
        profile = self.get_profile(role=role, profile_id=profile_id)
        department = require_non_empty(department, "Department")
        self._users.update_profile(role=role, profile_id=profile.profile_id, department=department)

    def archive_profile(self, *, current_role: Role, role: Role, profile_id: int) -> None:
        if current_role != Role.SUPERVISOR:
            raise AuthorizationError("Only supervisors can archive profiles")
        profile = self.get_profile(role=role, profile_id=profile_id)
        if profile.status == ProfileStatus.ARCHIVED:
            raise ConflictError(f"{role.value.capitalize()} is already archived")

        self._users.set_profile_status(role=role, profile_id=profile.profile_id, status=ProfileStatus.ARCHIVED)
        self._users.set_active(profile.user_id, is_active=False)
        logger.info("Archived %s profile %s", role.value, profile.profile_id)

    def list_profiles(self, *, role: Role, status: Optional[ProfileStatus] = None) -> Sequence[StaffProfile]:
        return self._users.list_profiles(role=role, status=status)
