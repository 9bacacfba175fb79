from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_AM_PM_SPLIT
from ..core.enums import ScanEvent, Session, Slot
from .duration import require_hms
from .strategies.auto_strategy import AutoDetectStrategy
from .strategies.base import ScanStrategy
from .strategies.event_strategy import EventStrategy, FixedSlotStrategy


@dataclass
class ScanStrategyFactory:
    """Factory Pattern: pick the session and the slot strategy for a scan."""

    am_pm_split: str = DEFAULT_AM_PM_SPLIT

    def __post_init__(self) -> None:
        self._split_seconds = require_hms(self.am_pm_split, "AM/PM split")

    def session_for(self, clock_seconds: int) -> Session:
        return Session.AM if clock_seconds < self._split_seconds else Session.PM

    def for_scan(self, *, event: Optional[ScanEvent] = None, slot: Optional[Slot] = None) -> ScanStrategy:
        if slot is not None:
            return FixedSlotStrategy(slot)
        if event is not None:
            return EventStrategy(event)
        return AutoDetectStrategy()
