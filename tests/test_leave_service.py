from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from fakes import FakeDTRRepo, FakeInternRepo, FakeLeaveRepo, FakeTokenRepo, RecordingNotifier, make_intern
from src.ojt_tracker.ojt_tracker.core.enums import RequestStatus, Role
from src.ojt_tracker.ojt_tracker.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.ojt_tracker.ojt_tracker.dtr.duration import format_hms, parse_hms
from src.ojt_tracker.ojt_tracker.dtr.model import DTREntry
from src.ojt_tracker.ojt_tracker.dtr.service import HoursService
from src.ojt_tracker.ojt_tracker.leaves.service import LeaveService
from src.ojt_tracker.ojt_tracker.notifications.service import NotificationService

LEAVE_DAY = date(2026, 3, 2)


def build(*, notifier=None, tokens=None, day_totals=None):
    interns = FakeInternRepo([make_intern(1, ojt_hours_required=500)])
    dtr = FakeDTRRepo(interns)
    for i, total in enumerate(day_totals or []):
        dtr.add(
            DTREntry(
                entry_id=i + 1,
                intern_id=1,
                user_id=101,
                supervisor_id=1,
                work_date=LEAVE_DAY - timedelta(days=i),
                total_seconds=parse_hms(total),
            )
        )
    leaves = FakeLeaveRepo()
    hours = HoursService(dtr, interns)
    notifications = NotificationService(FakeTokenRepo(tokens if tokens is not None else {1: "device-1"}), notifier or RecordingNotifier())
    svc = LeaveService(leaves, dtr, interns, hours, notifications)
    return svc, leaves, dtr, interns


def test_approval_deducts_leave_and_recomputes_hours():
    # 60 days of 8h = 480:00:00 rendered, first one is the leave day
    svc, leaves, dtr, interns = build(day_totals=["08:00:00"] * 60)
    rid = svc.create_leave(intern_id=1, leave_date=LEAVE_DAY, reason="Medical", leave_hours="02:00:00")

    summary = svc.approve_leave(current_role=Role.SUPERVISOR, request_id=rid, decided_by=5)

    assert format_hms(dtr.get_for_intern_and_date(1, LEAVE_DAY).total_seconds) == "06:00:00"
    assert summary.to_dict()["ojt_hours_rendered"] == "478:00:00"
    assert summary.to_dict()["remaining_hours"] == "22:00:00"
    assert format_hms(interns.get_by_id(1).ojt_hours_rendered) == "478:00:00"
    assert leaves.get_leave(request_id=rid).status == RequestStatus.APPROVED
    assert leaves.get_leave(request_id=rid).decided_by == 5


def test_second_approval_is_a_conflict_and_deducts_nothing():
    svc, _, dtr, _ = build(day_totals=["08:00:00"])
    rid = svc.create_leave(intern_id=1, leave_date=LEAVE_DAY, reason="Medical", leave_hours="02:00:00")
    svc.approve_leave(current_role=Role.SUPERVISOR, request_id=rid)

    with pytest.raises(ConflictError):
        svc.approve_leave(current_role=Role.SUPERVISOR, request_id=rid)

    assert format_hms(dtr.get_for_intern_and_date(1, LEAVE_DAY).total_seconds) == "06:00:00"


def test_deduction_floors_at_zero():
    svc, _, dtr, _ = build(day_totals=["01:00:00"])
    rid = svc.create_leave(intern_id=1, leave_date=LEAVE_DAY, reason="Family", leave_hours="08:00:00")

    svc.approve_leave(current_role=Role.HANDLER, request_id=rid)

    assert dtr.get_for_intern_and_date(1, LEAVE_DAY).total_seconds == 0


def test_missing_request_and_missing_dtr_row():
    svc, leaves, _, _ = build()
    with pytest.raises(NotFoundError):
        svc.approve_leave(current_role=Role.SUPERVISOR, request_id=404)

    rid = svc.create_leave(intern_id=1, leave_date=LEAVE_DAY, reason="Medical")
    with pytest.raises(NotFoundError, match="DTR"):
        svc.approve_leave(current_role=Role.SUPERVISOR, request_id=rid)
    assert leaves.get_leave(request_id=rid).status == RequestStatus.PENDING


def test_interns_cannot_approve():
    svc, _, _, _ = build(day_totals=["08:00:00"])
    rid = svc.create_leave(intern_id=1, leave_date=LEAVE_DAY, reason="Medical")
    with pytest.raises(AuthorizationError):
        svc.approve_leave(current_role=Role.INTERN, request_id=rid)


def test_default_leave_hours_is_a_full_day():
    svc, leaves, _, _ = build()
    rid = svc.create_leave(intern_id=1, leave_date=LEAVE_DAY, reason="Medical")
    assert format_hms(leaves.get_leave(request_id=rid).leave_seconds) == "08:00:00"


def test_create_leave_validation():
    svc, _, _, _ = build()
    with pytest.raises(ValidationError):
        svc.create_leave(intern_id=1, leave_date=LEAVE_DAY, reason="  ")
    with pytest.raises(ValidationError):
        svc.create_leave(intern_id=1, leave_date=LEAVE_DAY, reason="x", leave_hours="2h")
    with pytest.raises(ValidationError, match="file format"):
        svc.create_leave(intern_id=1, leave_date=LEAVE_DAY, reason="x", excuse_letter="letter.exe")
    with pytest.raises(NotFoundError):
        svc.create_leave(intern_id=9, leave_date=LEAVE_DAY, reason="x")


def test_notification_sent_on_approval():
    notifier = RecordingNotifier()
    svc, _, _, _ = build(notifier=notifier, day_totals=["08:00:00"])
    rid = svc.create_leave(intern_id=1, leave_date=LEAVE_DAY, reason="Medical")

    svc.approve_leave(current_role=Role.SUPERVISOR, request_id=rid)

    assert notifier.sent == [("device-1", "Leave Request Approved", "Hi Juan, your leave request has been approved.")]


def test_notification_failure_does_not_fail_approval():
    svc, leaves, _, _ = build(notifier=RecordingNotifier(fail=True), day_totals=["08:00:00"])
    rid = svc.create_leave(intern_id=1, leave_date=LEAVE_DAY, reason="Medical")

    svc.approve_leave(current_role=Role.SUPERVISOR, request_id=rid)

    assert leaves.get_leave(request_id=rid).status == RequestStatus.APPROVED


def test_missing_device_token_does_not_fail_approval():
    svc, leaves, _, _ = build(tokens={}, day_totals=["08:00:00"])
    rid = svc.create_leave(intern_id=1, leave_date=LEAVE_DAY, reason="Medical")

    svc.approve_leave(current_role=Role.SUPERVISOR, request_id=rid)

    assert leaves.get_leave(request_id=rid).status == RequestStatus.APPROVED


def test_reject_leaves_hours_untouched():
    svc, leaves, dtr, _ = build(day_totals=["08:00:00"])
    rid = svc.create_leave(intern_id=1, leave_date=LEAVE_DAY, reason="Medical")

    svc.reject_leave(current_role=Role.SUPERVISOR, request_id=rid)

    assert leaves.get_leave(request_id=rid).status == RequestStatus.REJECTED
    assert format_hms(dtr.get_for_intern_and_date(1, LEAVE_DAY).total_seconds) == "08:00:00"
    with pytest.raises(ConflictError):
        svc.approve_leave(current_role=Role.SUPERVISOR, request_id=rid)


def test_same_day_leave_uses_window_length():
    svc, _, _, _ = build(day_totals=["00:00:00"])
    now = datetime(LEAVE_DAY.year, LEAVE_DAY.month, LEAVE_DAY.day, 10, 0, 0)

    leave = svc.create_same_day_leave(
        intern_id=1, leave_time="13:00:00", return_time="15:30:00", reason="Errand", now=now
    )

    assert leave.leave_date == LEAVE_DAY
    assert format_hms(leave.leave_seconds) == "02:30:00"
    assert leave.status == RequestStatus.PENDING


def test_same_day_leave_checks_order_and_todays_row():
    svc, _, _, _ = build()
    now = datetime(LEAVE_DAY.year, LEAVE_DAY.month, LEAVE_DAY.day, 10, 0, 0)
    with pytest.raises(NotFoundError):
        svc.create_same_day_leave(intern_id=1, leave_time="13:00:00", return_time="15:00:00", reason="x", now=now)

    svc, _, _, _ = build(day_totals=["00:00:00"])
    with pytest.raises(ValidationError):
        svc.create_same_day_leave(intern_id=1, leave_time="15:00:00", return_time="13:00:00", reason="x", now=now)
