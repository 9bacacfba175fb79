from __future__ import annotations

from typing import Optional

from ...core.enums import ScanEvent, Session, Slot
from ..model import DTREntry
from .base import ScanStrategy, SlotDecision, open_session


class AutoDetectStrategy(ScanStrategy):
    """QR scan: close the open session, else time-in for the current one."""

    def decide(self, *, entry: Optional[DTREntry], session: Session) -> SlotDecision:
        current = open_session(entry)
        if current is not None:
            return SlotDecision(slot=Slot.for_event(current, ScanEvent.TIME_OUT))

        time_in = Slot.for_event(session, ScanEvent.TIME_IN)
        if entry is None or entry.slot(time_in) is None:
            return SlotDecision(slot=time_in)
        return self._ensure_free(entry, Slot.for_event(session, ScanEvent.TIME_OUT))
