from __future__ import annotations

import io
from datetime import date, timedelta

import pytest
from flask import Flask
from werkzeug.security import generate_password_hash

from fakes import (
    FakeDTRRepo,
    FakeInternRepo,
    FakeLeaveRepo,
    FakeQRRepo,
    FakeTokenRepo,
    FakeUserRepo,
    RecordingMailer,
    RecordingNotifier,
    make_intern,
)
from src.ojt_tracker.ojt_tracker.common.http import register_error_handlers
from src.ojt_tracker.ojt_tracker.container import Container
from src.ojt_tracker.ojt_tracker.core.enums import Role
from src.ojt_tracker.ojt_tracker.dtr.controller import register as register_dtr
from src.ojt_tracker.ojt_tracker.dtr.model import DTREntry
from src.ojt_tracker.ojt_tracker.dtr.service import DTRService, HoursService
from src.ojt_tracker.ojt_tracker.interns.controller import register as register_interns
from src.ojt_tracker.ojt_tracker.interns.service import InternService
from src.ojt_tracker.ojt_tracker.leaves.controller import register as register_leaves
from src.ojt_tracker.ojt_tracker.leaves.service import LeaveService
from src.ojt_tracker.ojt_tracker.notifications.controller import register as register_notifications
from src.ojt_tracker.ojt_tracker.notifications.service import NotificationService
from src.ojt_tracker.ojt_tracker.qr.controller import register as register_qr
from src.ojt_tracker.ojt_tracker.qr.service import QRService
from src.ojt_tracker.ojt_tracker.reports.controller import register as register_reports
from src.ojt_tracker.ojt_tracker.reports.service import AttendanceReportService
from src.ojt_tracker.ojt_tracker.users.controller import register as register_users
from src.ojt_tracker.ojt_tracker.users.model import User
from src.ojt_tracker.ojt_tracker.users.password_reset import PasswordResetService
from src.ojt_tracker.ojt_tracker.users.reset_codes import ResetCodeStore
from src.ojt_tracker.ojt_tracker.users.service import AuthService, UserService

PASSWORD = "secret123"
WORK_DATE = date(2026, 3, 2)


def _user(user_id, email, role):
    return User(
        user_id=user_id,
        first_name="Test",
        middle_name="",
        last_name=role.value.title(),
        suffix_name="",
        email=email,
        phone="",
        password_hash=generate_password_hash(PASSWORD),
        role=role,
    )


@pytest.fixture()
def container(tmp_path):
    users = FakeUserRepo(
        [
            _user(1, "handler@example.com", Role.HANDLER),
            _user(101, "juan@example.com", Role.INTERN),
        ]
    )
    users.create_profile(role=Role.HANDLER, user_id=1, department="IT")
    interns = FakeInternRepo([make_intern(1)])
    dtr = FakeDTRRepo(interns)
    dtr.add(DTREntry(1, 1, 101, 1, WORK_DATE, time_in_am=8 * 3600, time_out_pm=17 * 3600, total_seconds=8 * 3600))
    leaves = FakeLeaveRepo()
    qr = FakeQRRepo()
    tokens = FakeTokenRepo()

    user_service = UserService(users)
    notifications = NotificationService(tokens, RecordingNotifier())
    hours = HoursService(dtr, interns)
    return Container(
        conn=None,
        tz_name="Asia/Manila",
        upload_folder=str(tmp_path / "uploads"),
        users_repo=users,
        interns_repo=interns,
        dtr_repo=dtr,
        leaves_repo=leaves,
        qr_repo=qr,
        tokens_repo=tokens,
        auth_service=AuthService(users, interns),
        user_service=user_service,
        password_reset_service=PasswordResetService(users, ResetCodeStore(), RecordingMailer()),
        notification_service=notifications,
        hours_service=hours,
        dtr_service=DTRService(dtr, interns, hours, leaves=leaves),
        intern_service=InternService(interns, user_service, hours, notifications),
        leave_service=LeaveService(leaves, dtr, interns, hours, notifications),
        qr_service=QRService(qr, interns),
        report_service=AttendanceReportService(dtr, interns),
    )


@pytest.fixture()
def client(container):
    app = Flask(__name__)
    app.secret_key = "test"
    app.permanent_session_lifetime = timedelta(days=1)
    register_error_handlers(app)
    register_users(app, container)
    register_interns(app, container)
    register_dtr(app, container)
    register_qr(app, container)
    register_leaves(app, container)
    register_reports(app, container)
    register_notifications(app, container)
    return app.test_client()


def login(client, email):
    return client.post("/api/login", json={"email": email, "password": PASSWORD})


def test_login_and_me(client):
    assert client.get("/api/me").status_code == 401

    resp = login(client, "handler@example.com")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["role"] == "handler"
    assert resp.get_json()["data"]["profile_id"] == 1

    me = client.get("/api/me").get_json()
    assert me["success"] is True
    assert me["data"]["role"] == "handler"


def test_bad_login_is_json_401(client):
    resp = client.post("/api/login", json={"email": "handler@example.com", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Invalid email or password"}


def test_intern_session_uses_intern_id(client):
    data = login(client, "juan@example.com").get_json()["data"]
    assert data["role"] == "intern"
    assert data["profile_id"] == 1

    resp = client.post("/api/qr/1")
    assert resp.status_code == 403


def test_qr_generate_then_scan(client):
    login(client, "handler@example.com")

    created = client.post("/api/qr/1")
    assert created.status_code == 201
    payload = created.get_json()["data"]["payload"]

    again = client.post("/api/qr/1")
    assert again.status_code == 409
    assert again.get_json()["success"] is False

    image = client.get("/api/qr/1/image")
    assert image.status_code == 200
    assert image.mimetype == "image/png"

    scanned = client.post("/api/dtr/scan", json={"code": payload})
    assert scanned.status_code == 200
    assert scanned.get_json()["data"]["slot"] in ("time_in_am", "time_in_pm")

    bad = client.post("/api/dtr/scan", json={"code": "InternID: 1\nFirstName: Nobody"})
    assert bad.status_code == 400


def test_unknown_intern_is_404(client):
    login(client, "handler@example.com")

    resp = client.get("/api/interns/99")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_leave_create_then_approve_once(client):
    login(client, "juan@example.com")
    created = client.post(
        "/api/leaves",
        json={"leave_date": "2026-03-02", "reason": "Medical checkup", "leave_hours": "03:00:00"},
    )
    assert created.status_code == 201
    request_id = created.get_json()["data"]["id"]

    assert client.post(f"/api/leaves/{request_id}/approve").status_code == 403

    login(client, "handler@example.com")
    approved = client.post(f"/api/leaves/{request_id}/approve")
    assert approved.status_code == 200
    assert approved.get_json()["data"]["ojt_hours_rendered"] == "05:00:00"

    again = client.post(f"/api/leaves/{request_id}/approve")
    assert again.status_code == 409
    assert again.get_json()["success"] is False

    listed = client.get("/api/leaves?status=Approved").get_json()["data"]
    assert [lr["request_id"] for lr in listed] == [request_id]


def test_leave_with_excuse_letter_keeps_the_upload(client, container, tmp_path):
    login(client, "juan@example.com")

    resp = client.post(
        "/api/leaves",
        data={
            "leave_date": "2026-03-02",
            "reason": "Fever",
            "excuse_letter": (io.BytesIO(b"%PDF-1.4"), "note.pdf"),
        },
        content_type="multipart/form-data",
    )

    assert resp.status_code == 201
    saved = container.leaves_repo.get_leave(request_id=resp.get_json()["data"]["id"]).excuse_letter
    assert saved.endswith("_note.pdf")
    assert [p.name for p in (tmp_path / "uploads").iterdir()] == [saved.rsplit("/", 1)[-1]]


def test_rejected_leave_leaves_no_upload_behind(client, container, tmp_path):
    login(client, "juan@example.com")

    resp = client.post(
        "/api/leaves",
        data={
            "leave_date": "2026-03-02",
            "reason": "",
            "excuse_letter": (io.BytesIO(b"%PDF-1.4"), "note.pdf"),
        },
        content_type="multipart/form-data",
    )

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert container.leaves_repo.leaves == {}
    uploads = tmp_path / "uploads"
    assert not uploads.exists() or list(uploads.iterdir()) == []


def test_dtr_sheet_csv_download(client):
    login(client, "handler@example.com")

    resp = client.get("/api/reports/dtr/1.csv?start=2026-03-01&end=2026-03-31")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "dtr_1_20260301_20260331.csv" in resp.headers["Content-Disposition"]
    assert resp.data.startswith(b"\xef\xbb\xbf")
    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0].startswith("work_date,")
    assert lines[1].startswith("2026-03-02,1,")


def test_reports_are_staff_only(client):
    login(client, "juan@example.com")

    assert client.get("/api/reports/summary?date=2026-03-02").status_code == 403
    assert client.get("/api/reports/dtr/1.csv").status_code == 403


def test_intern_registers_device_token(client, container):
    login(client, "juan@example.com")

    resp = client.post("/api/device-token", json={"token": "fcm-abc"})

    assert resp.status_code == 200
    assert container.tokens_repo.tokens[1] == "fcm-abc"


def test_register_rejects_non_numeric_hours(client, container):
    resp = client.post(
        "/api/interns/register",
        json={
            "first_name": "Maria",
            "last_name": "Santos",
            "email": "maria@example.com",
            "password": PASSWORD,
            "confirm_password": PASSWORD,
            "student_id": "S-9000",
            "school_name": "Demo University",
            "course": "BSIT",
            "ojt_hours_required": "abc",
        },
    )

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "OJT hours required must be a number"}
    assert list(container.interns_repo.interns) == [1]


def test_remember_me_login_keeps_configured_lifetime(client):
    resp = client.post(
        "/api/login",
        json={"email": "handler@example.com", "password": PASSWORD, "remember_me": True},
    )

    assert resp.status_code == 200
    assert client.application.permanent_session_lifetime == timedelta(days=1)
    assert "Expires=" in resp.headers["Set-Cookie"]
