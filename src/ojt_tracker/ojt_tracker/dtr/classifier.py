from __future__ import annotations

import logging
from typing import Optional

from ..core.constants import LATE_WINDOW_END, LATE_WINDOW_START
from ..core.enums import DayStatus
from .duration import parse_hms
from .model import DTREntry

logger = logging.getLogger(__name__)

_LATE_START = parse_hms(LATE_WINDOW_START)
_LATE_END = parse_hms(LATE_WINDOW_END)

SESSION_HALF_DAY_AM = "half-day-am"
SESSION_HALF_DAY_PM = "half-day-pm"
SESSION_FULL_DAY = "full-day"


def classify_day(entry: DTREntry) -> DayStatus:
    """Classify a day from its four slots.

    Only the four exact shapes below are recognised; any partial combination
    (e.g. an AM time-in with no time-out) counts as absent.
    """

    am_in = entry.time_in_am is not None
    am_out = entry.time_out_am is not None
    pm_in = entry.time_in_pm is not None
    pm_out = entry.time_out_pm is not None

    if am_in and am_out and pm_in and pm_out:
        return DayStatus.PRESENT
    if am_in and am_out and not pm_in and not pm_out:
        return DayStatus.HALF_DAY_AM
    if not am_in and not am_out and pm_in and pm_out:
        return DayStatus.HALF_DAY_PM
    return DayStatus.ABSENT


def is_late(time_in_am: Optional[int]) -> bool:
    """True when AM time-in falls strictly inside (08:01:00, 12:00:00)."""

    if time_in_am is None:
        return False
    return _LATE_START < time_in_am < _LATE_END


def is_late_text(time_in_am: Optional[str]) -> bool:
    """String variant for raw column values; unparseable input is never late."""

    seconds = parse_hms(time_in_am)
    if seconds is None:
        if time_in_am:
            logger.warning("Cannot parse time-in %r, treating as not late", time_in_am)
        return False
    return is_late(seconds)


def session_status(entry: DTREntry) -> str:
    """Coarse session shape used by the status filter (time-ins only)."""

    if entry.time_in_am is not None and entry.time_in_pm is None:
        return SESSION_HALF_DAY_AM
    if entry.time_in_am is None and entry.time_in_pm is not None:
        return SESSION_HALF_DAY_PM
    return SESSION_FULL_DAY


def is_no_show(entry: DTREntry) -> bool:
    return entry.time_in_am is None and entry.time_in_pm is None
