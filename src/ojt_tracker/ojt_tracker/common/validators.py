from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: str) -> str:
    email = require_non_empty(value, "Email").lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Email is not valid")
    return email


def require_positive_id(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if number <= 0:
        raise ValidationError(f"{field_name} is required")
    return number


def parse_id_list(value: str, field_name: str = "IDs") -> list[int]:
    """Parse a comma separated id list such as ``"1,2,3"``."""

    raw = [p.strip() for p in (value or "").split(",") if p.strip()]
    if not raw:
        raise ValidationError(f"{field_name} are required")
    return [require_positive_id(p, field_name) for p in raw]


def parse_optional_enum(enum_cls, value, field_name: str):
    """``None`` for an empty value, else the enum member; unknown values are a ValidationError."""

    if value is None or str(value).strip() == "":
        return None
    try:
        return enum_cls(str(value).strip())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field_name} (use one of: {allowed})")


def require_positive_int(value, field_name: str) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return number


def optional_positive_id(value, field_name: str) -> Optional[int]:
    if value is None or str(value).strip() == "":
        return None
    return require_positive_id(value, field_name)
