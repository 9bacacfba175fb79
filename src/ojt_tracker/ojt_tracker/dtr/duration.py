"""Conversion between ``HH:MM:SS`` strings and integer seconds.

Inside the application every time of day and every duration is an ``int``
number of seconds; ``None`` means "not recorded". Strings only exist at the
database and API boundary.
"""

from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import ValidationError

_HMS_RE = re.compile(r"(\d{2,}):([0-5]\d):([0-5]\d)", re.ASCII)


def parse_hms(value: Optional[str]) -> Optional[int]:
    """Parse ``HH:MM:SS`` into seconds.

    Empty / ``None`` and malformed values return ``None`` instead of raising.
    Hours may exceed 24 (accumulated durations such as ``480:00:00``).
    """

    if value is None:
        return None
    m = _HMS_RE.fullmatch(str(value).strip())
    if not m:
        return None
    hours, minutes, seconds = (int(p) for p in m.groups())
    return hours * 3600 + minutes * 60 + seconds


def require_hms(value: Optional[str], field_name: str) -> int:
    seconds = parse_hms(value)
    if seconds is None:
        raise ValidationError(f"{field_name} must be in HH:MM:SS format")
    return seconds


def format_hms(seconds: int) -> str:
    """Format seconds as zero padded ``HH:MM:SS``; negatives clamp to ``00:00:00``."""

    total = max(0, int(seconds))
    return f"{total // 3600:02d}:{(total % 3600) // 60:02d}:{total % 60:02d}"


def format_optional_hms(seconds: Optional[int]) -> str:
    return "" if seconds is None else format_hms(seconds)


def span(start: Optional[int], end: Optional[int]) -> int:
    """Seconds from ``start`` to ``end``; zero if either is missing or end precedes start."""

    if start is None or end is None:
        return 0
    return max(0, end - start)
