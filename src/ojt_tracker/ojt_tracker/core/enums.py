from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    SUPERVISOR = "supervisor"
    HANDLER = "handler"
    INTERN = "intern"


class InternStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    ARCHIVED = "Archived"


class ProfileStatus(str, Enum):
    """Status of supervisor / handler profiles."""

    ACTIVE = "Active"
    ARCHIVED = "Archived"


class DayStatus(str, Enum):
    """Per-day attendance classification of a DTR row."""

    PRESENT = "Present"
    HALF_DAY_AM = "Half-Day-AM"
    HALF_DAY_PM = "Half-Day-PM"
    ABSENT = "Absent"


class Session(str, Enum):
    AM = "AM"
    PM = "PM"


class ScanEvent(str, Enum):
    TIME_IN = "time_in"
    TIME_OUT = "time_out"


class Slot(str, Enum):
    """One of the four time columns of a DTR row."""

    TIME_IN_AM = "time_in_am"
    TIME_OUT_AM = "time_out_am"
    TIME_IN_PM = "time_in_pm"
    TIME_OUT_PM = "time_out_pm"

    @classmethod
    def for_event(cls, session: Session, event: ScanEvent) -> "Slot":
        return cls(f"{event.value}_{session.value.lower()}")

    @property
    def session(self) -> Session:
        return Session.AM if self.value.endswith("_am") else Session.PM

    @property
    def event(self) -> ScanEvent:
        return ScanEvent.TIME_IN if self.value.startswith("time_in") else ScanEvent.TIME_OUT


class RequestStatus(str, Enum):
    """Approval workflow status of a leave request."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
