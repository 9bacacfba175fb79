from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import Session, Slot
from ...core.exceptions import ConflictError
from ..model import DTREntry


@dataclass(frozen=True)
class SlotDecision:
    slot: Slot

    @property
    def is_time_out(self) -> bool:
        return self.slot in (Slot.TIME_OUT_AM, Slot.TIME_OUT_PM)


def open_session(entry: Optional[DTREntry]) -> Optional[Session]:
    """Session with a time-in but no time-out yet, if any.

    AM only counts as open while PM has not started.
    """

    if entry is None:
        return None
    if entry.time_in_am is not None and entry.time_out_am is None and entry.time_in_pm is None:
        return Session.AM
    if entry.time_in_pm is not None and entry.time_out_pm is None:
        return Session.PM
    return None


class ScanStrategy(ABC):
    """Strategy Pattern: decide which DTR slot a scan writes.

    ``session`` is the session of the scan's time of day; it picks the
    time-in slot. Time-outs close whichever session is open.
    """

    @abstractmethod
    def decide(self, *, entry: Optional[DTREntry], session: Session) -> SlotDecision:
        raise NotImplementedError

    @staticmethod
    def _ensure_free(entry: Optional[DTREntry], slot: Slot) -> SlotDecision:
        if entry is not None and entry.slot(slot) is not None:
            label = slot.value.replace("_", " ").upper()
            raise ConflictError(f"{label} already set for today")
        return SlotDecision(slot=slot)
