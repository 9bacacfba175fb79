from __future__ import annotations

from datetime import date, datetime

import pytz

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError

_DATE_FORMATS = ("%Y-%m-%d", "%m-%d-%Y")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_api_date(value: str) -> date:
    """Parse a date coming from a client.

    ISO ``YYYY-MM-DD`` is canonical; ``MM-DD-YYYY`` is still accepted and
    converted here so nothing past the controller sees it.
    """

    v = (value or "").strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(v, fmt).date()
        except ValueError:
            continue
    raise ValidationError("Invalid date (use YYYY-MM-DD)")


def format_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def now_local(tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Current local time in the configured timezone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(pytz.timezone(tz_name))


def seconds_since_midnight(moment: datetime) -> int:
    return moment.hour * 3600 + moment.minute * 60 + moment.second
