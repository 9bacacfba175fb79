from __future__ import annotations

from typing import Optional

from ...core.enums import ScanEvent, Session, Slot
from ..model import DTREntry
from .base import ScanStrategy, SlotDecision, open_session


class EventStrategy(ScanStrategy):
    """Explicit time-in (session of the scan) or time-out (open session)."""

    def __init__(self, event: ScanEvent):
        self._event = event

    def decide(self, *, entry: Optional[DTREntry], session: Session) -> SlotDecision:
        if self._event == ScanEvent.TIME_OUT:
            session = open_session(entry) or session
        return self._ensure_free(entry, Slot.for_event(session, self._event))


class FixedSlotStrategy(ScanStrategy):
    """A caller-chosen slot, regardless of the time of day."""

    def __init__(self, slot: Slot):
        self._slot = slot

    def decide(self, *, entry: Optional[DTREntry], session: Session) -> SlotDecision:
        return self._ensure_free(entry, self._slot)
