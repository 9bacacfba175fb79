from __future__ import annotations

from dataclasses import dataclass

from .core.constants import DEFAULT_ABSENT_CUTOFF_HOUR, DEFAULT_AM_PM_SPLIT, DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .database.transaction import MySQLTransactionManager
from .dtr.factory import ScanStrategyFactory
from .dtr.mysql_dtr_repository import MySQLDTRRepository
from .dtr.service import DTRService, HoursService
from .interns.mysql_intern_repository import MySQLInternRepository
from .interns.service import InternService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .notifications.mysql_token_repository import MySQLDeviceTokenRepository
from .notifications.notifier import LoggingNotifier
from .notifications.service import NotificationService
from .qr.mysql_qr_repository import MySQLQRCodeRepository
from .qr.service import QRService
from .reports.service import AttendanceReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.password_reset import LoggingMailer, Mailer, PasswordResetService, SMTPMailer
from .users.reset_codes import ResetCodeStore
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    tz_name: str
    upload_folder: str

    users_repo: MySQLUserRepository
    interns_repo: MySQLInternRepository
    dtr_repo: MySQLDTRRepository
    leaves_repo: MySQLLeaveRepository
    qr_repo: MySQLQRCodeRepository
    tokens_repo: MySQLDeviceTokenRepository

    auth_service: AuthService
    user_service: UserService
    password_reset_service: PasswordResetService
    notification_service: NotificationService
    hours_service: HoursService
    dtr_service: DTRService
    intern_service: InternService
    leave_service: LeaveService
    qr_service: QRService
    report_service: AttendanceReportService


def _build_mailer(settings) -> Mailer:
    host = getattr(settings, "SMTP_HOST", "")
    if not host:
        return LoggingMailer()
    return SMTPMailer(
        host=host,
        port=int(getattr(settings, "SMTP_PORT", 587)),
        username=getattr(settings, "SMTP_USERNAME", ""),
        password=getattr(settings, "SMTP_PASSWORD", ""),
        sender=getattr(settings, "SMTP_SENDER", ""),
    )


def build_container(*, db_config: dict, settings=None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    tx = MySQLTransactionManager(conn)

    tz_name = getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)
    am_pm_split = getattr(settings, "AM_PM_SPLIT", DEFAULT_AM_PM_SPLIT)
    absent_cutoff_hour = int(getattr(settings, "ABSENT_CUTOFF_HOUR", DEFAULT_ABSENT_CUTOFF_HOUR))

    users_repo = MySQLUserRepository(conn)
    interns_repo = MySQLInternRepository(conn)
    dtr_repo = MySQLDTRRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    qr_repo = MySQLQRCodeRepository(conn)
    tokens_repo = MySQLDeviceTokenRepository(conn)

    auth_service = AuthService(users_repo, interns_repo)
    user_service = UserService(users_repo)
    password_reset_service = PasswordResetService(users_repo, ResetCodeStore(), _build_mailer(settings))
    notification_service = NotificationService(tokens_repo, LoggingNotifier())
    hours_service = HoursService(dtr_repo, interns_repo, tx=tx)
    dtr_service = DTRService(
        dtr_repo,
        interns_repo,
        hours_service,
        leaves=leaves_repo,
        tx=tx,
        strategy_factory=ScanStrategyFactory(am_pm_split=am_pm_split),
        tz_name=tz_name,
        absent_cutoff_hour=absent_cutoff_hour,
    )
    intern_service = InternService(
        interns_repo,
        user_service,
        hours_service,
        notification_service,
        tx=tx,
        tz_name=tz_name,
    )
    leave_service = LeaveService(
        leaves_repo,
        dtr_repo,
        interns_repo,
        hours_service,
        notification_service,
        tx=tx,
        tz_name=tz_name,
    )
    qr_service = QRService(qr_repo, interns_repo)
    report_service = AttendanceReportService(dtr_repo, interns_repo)

    return Container(
        conn=conn,
        tz_name=tz_name,
        upload_folder=getattr(settings, "UPLOAD_FOLDER", "uploads/excuse_letters"),
        users_repo=users_repo,
        interns_repo=interns_repo,
        dtr_repo=dtr_repo,
        leaves_repo=leaves_repo,
        qr_repo=qr_repo,
        tokens_repo=tokens_repo,
        auth_service=auth_service,
        user_service=user_service,
        password_reset_service=password_reset_service,
        notification_service=notification_service,
        hours_service=hours_service,
        dtr_service=dtr_service,
        intern_service=intern_service,
        leave_service=leave_service,
        qr_service=qr_service,
        report_service=report_service,
    )
