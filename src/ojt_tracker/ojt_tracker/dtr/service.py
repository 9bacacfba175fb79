from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, seconds_since_midnight
from ..core.constants import DEFAULT_ABSENT_CUTOFF_HOUR, DEFAULT_TIMEZONE
from ..core.enums import InternStatus, ScanEvent, Slot
from ..core.exceptions import NotFoundError, ValidationError
from ..database.transaction import NullTransactionManager, TransactionManager
from ..interns.model import Intern
from ..interns.repository import InternRepository
from ..leaves.repository import LeaveRepository
from .classifier import classify_day, is_late
from .duration import format_hms, format_optional_hms
from .factory import ScanStrategyFactory
from .hours import HoursSummary, day_total, summarize
from .model import DTREntry
from .repository import DTRRepository
from .strategies.base import ScanStrategy

logger = logging.getLogger(__name__)


def intern_lock_key(intern_id: int) -> str:
    return f"intern:{int(intern_id)}"


def entry_to_dict(entry: DTREntry) -> dict:
    return {
        "id": entry.entry_id,
        "intern_id": entry.intern_id,
        "supervisor_id": entry.supervisor_id,
        "work_date": entry.work_date.strftime("%Y-%m-%d"),
        "time_in_am": format_optional_hms(entry.time_in_am),
        "time_out_am": format_optional_hms(entry.time_out_am),
        "time_in_pm": format_optional_hms(entry.time_in_pm),
        "time_out_pm": format_optional_hms(entry.time_out_pm),
        "total_hours": format_hms(entry.total_seconds),
        "status": classify_day(entry).value,
        "late": is_late(entry.time_in_am),
    }


@dataclass(frozen=True)
class ScanResult:
    intern_id: int
    slot: Slot
    recorded_at: str
    entry: DTREntry
    hours: Optional[HoursSummary] = None

    def to_dict(self) -> dict:
        data = {
            "intern_id": self.intern_id,
            "slot": self.slot.value,
            "recorded_at": self.recorded_at,
            "dtr": entry_to_dict(self.entry),
        }
        if self.hours is not None:
            data["hours"] = self.hours.to_dict()
        return data


class HoursService:
    """Use case: keep ``ojt_hours_rendered`` equal to the sum of the DTR rows."""

    def __init__(self, dtr: DTRRepository, interns: InternRepository, *, tx: TransactionManager | None = None):
        self._dtr = dtr
        self._interns = interns
        self._tx = tx or NullTransactionManager()

    def recompute(self, intern_id: int) -> HoursSummary:
        """Full recompute over every DTR row of the intern, persisted in one transaction."""

        with self._tx.begin(intern_lock_key(intern_id)):
            intern = self._interns.get_by_id(int(intern_id))
            if not intern:
                raise NotFoundError("Intern not found")

            summary = summarize(intern.intern_id, intern.ojt_hours_required, self._dtr.list_for_intern(intern.intern_id))
            self._interns.update_rendered(intern.intern_id, rendered_seconds=summary.rendered_seconds)

        logger.info(
            "Recomputed hours for intern %s: rendered=%s remaining=%s",
            intern_id,
            format_hms(summary.rendered_seconds),
            format_hms(summary.remaining_seconds),
        )
        return summary

    def summary(self, intern_id: int) -> HoursSummary:
        intern = self._interns.get_by_id(int(intern_id))
        if not intern:
            raise NotFoundError("Intern not found")
        return summarize(intern.intern_id, intern.ojt_hours_required, self._dtr.list_for_intern(intern.intern_id))


class DTRService:
    """Use case: record QR scans into the daily time record."""

    def __init__(
        self,
        dtr: DTRRepository,
        interns: InternRepository,
        hours: HoursService,
        *,
        leaves: LeaveRepository | None = None,
        tx: TransactionManager | None = None,
        strategy_factory: ScanStrategyFactory | None = None,
        tz_name: str = DEFAULT_TIMEZONE,
        absent_cutoff_hour: int = DEFAULT_ABSENT_CUTOFF_HOUR,
    ):
        self._dtr = dtr
        self._interns = interns
        self._hours = hours
        self._leaves = leaves
        self._tx = tx or NullTransactionManager()
        self._factory = strategy_factory or ScanStrategyFactory()
        self._tz_name = tz_name
        self._absent_cutoff_hour = int(absent_cutoff_hour)

    def _require_scannable(self, intern_id: int) -> Intern:
        intern = self._interns.get_by_id(int(intern_id))
        if not intern:
            raise NotFoundError("Intern not found")
        if intern.status != InternStatus.APPROVED:
            raise ValidationError(f"Intern {intern.intern_id} is not approved")
        if not intern.supervisor_id:
            raise ValidationError(f"Supervisor ID missing for intern ID {intern.intern_id}")
        return intern

    def scan(self, intern_id: int, *, now: datetime | None = None) -> ScanResult:
        """QR scan: time-in for the current session, or time-out when already in."""
        return self._record(intern_id, self._factory.for_scan(), now)

    def time_in(self, intern_id: int, *, now: datetime | None = None) -> ScanResult:
        return self._record(intern_id, self._factory.for_scan(event=ScanEvent.TIME_IN), now)

    def time_out(self, intern_id: int, *, now: datetime | None = None) -> ScanResult:
        return self._record(intern_id, self._factory.for_scan(event=ScanEvent.TIME_OUT), now)

    def record_slot(self, intern_id: int, slot: Slot, *, now: datetime | None = None) -> ScanResult:
        return self._record(intern_id, self._factory.for_scan(slot=slot), now)

    def _record(self, intern_id: int, strategy: ScanStrategy, now: datetime | None) -> ScanResult:
        now = now or now_local(self._tz_name)
        today = now.date()
        clock = seconds_since_midnight(now)
        intern = self._require_scannable(intern_id)

        with self._tx.begin(intern_lock_key(intern.intern_id)):
            entry = self._dtr.get_for_intern_and_date(intern.intern_id, today)
            decision = strategy.decide(entry=entry, session=self._factory.session_for(clock))

            if decision.is_time_out:
                time_in_slot = Slot.for_event(decision.slot.session, ScanEvent.TIME_IN)
                if entry is None or entry.slot(time_in_slot) is None:
                    raise ValidationError(f"No {decision.slot.session.value} time-in recorded today")

            if entry is None:
                entry = self._dtr.create_entry(
                    intern_id=intern.intern_id,
                    user_id=intern.user_id,
                    supervisor_id=intern.supervisor_id,
                    work_date=today,
                )

            entry = entry.with_slot(decision.slot, clock)
            if decision.is_time_out:
                deducted = self._approved_leave_seconds(intern.intern_id, today)
                entry = entry.with_total(day_total(entry, deducted_seconds=deducted))
            self._dtr.save_entry(entry)

            hours = self._hours.recompute(intern.intern_id) if decision.is_time_out else None

        logger.info("Recorded %s=%s for intern %s on %s", decision.slot.value, format_hms(clock), intern.intern_id, today)
        return ScanResult(
            intern_id=intern.intern_id,
            slot=decision.slot,
            recorded_at=format_hms(clock),
            entry=entry,
            hours=hours,
        )

    def _approved_leave_seconds(self, intern_id: int, work_date: date) -> int:
        if not self._leaves:
            return 0
        return int(self._leaves.approved_seconds_for(intern_id=intern_id, leave_date=work_date))

    def insert_absent_entries(self, *, now: datetime | None = None) -> list[int]:
        """Scheduled sweep: give every approved intern without a row today an empty one."""

        now = now or now_local(self._tz_name)
        if now.hour < self._absent_cutoff_hour:
            logger.info("Before %02d:00, skipping absent sweep", self._absent_cutoff_hour)
            return []

        today = now.date()
        inserted: list[int] = []
        for intern in self._interns.list_interns(status=InternStatus.APPROVED):
            if not intern.supervisor_id:
                logger.warning("Skipping intern %s in absent sweep: missing supervisor", intern.intern_id)
                continue
            with self._tx.begin(intern_lock_key(intern.intern_id)):
                if self._dtr.get_for_intern_and_date(intern.intern_id, today):
                    continue
                self._dtr.create_entry(
                    intern_id=intern.intern_id,
                    user_id=intern.user_id,
                    supervisor_id=intern.supervisor_id,
                    work_date=today,
                    total_seconds=0,
                )
            inserted.append(intern.intern_id)

        logger.info("Absent sweep for %s inserted %d rows", today, len(inserted))
        return inserted

    def get_for_date(self, intern_id: int, work_date: date) -> Optional[DTREntry]:
        return self._dtr.get_for_intern_and_date(int(intern_id), work_date)

    def list_for_intern(self, intern_id: int) -> Sequence[DTREntry]:
        if not self._interns.get_by_id(int(intern_id)):
            raise NotFoundError("Intern not found")
        return self._dtr.list_for_intern(int(intern_id))
