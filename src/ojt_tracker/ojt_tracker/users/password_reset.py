from __future__ import annotations

import logging
import secrets
import smtplib
from email.message import EmailMessage
from typing import Protocol

from ..common.validators import require_email, require_non_empty
from ..core.constants import RESET_CODE_TTL_SECONDS, RESET_VERIFIED_MARKER, RESET_VERIFIED_TTL_SECONDS
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .repository import UserRepository
from .reset_codes import CodeStore
from .service import hash_password

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    def send(self, to: str, subject: str, body: str) -> None:
        raise NotImplementedError


class LoggingMailer:
    """Development mailer: writes the message to the log instead of sending it."""

    def send(self, to: str, subject: str, body: str) -> None:
        logger.info("Mail to %s: %s\n%s", to, subject, body)


class SMTPMailer:
    def __init__(self, *, host: str, port: int, username: str = "", password: str = "", sender: str = "", use_tls: bool = True):
        self._host = host
        self._port = int(port)
        self._username = username
        self._password = password
        self._sender = sender or username
        self._use_tls = use_tls

    def send(self, to: str, subject: str, body: str) -> None:
        msg = EmailMessage()
        msg["From"] = self._sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(body)

        with smtplib.SMTP(self._host, self._port, timeout=10) as smtp:
            if self._use_tls:
                smtp.starttls()
            if self._username:
                smtp.login(self._username, self._password)
            smtp.send_message(msg)
        logger.info("Sent '%s' mail to %s", subject, to)


def generate_reset_code() -> str:
    return f"{secrets.randbelow(1_000_000):06d}"


class PasswordResetService:
    """Forgot password flow: email a code, verify it, then set a new password."""

    def __init__(self, users: UserRepository, codes: CodeStore, mailer: Mailer):
        self._users = users
        self._codes = codes
        self._mailer = mailer

    def forgot_password(self, email: str) -> None:
        email = require_email(email)
        if not self._users.get_by_email(email):
            raise NotFoundError("Email not found")

        code = generate_reset_code()
        self._codes.put(email, code, ttl_seconds=RESET_CODE_TTL_SECONDS)
        self._mailer.send(
            email,
            "Password Reset Code",
            f"Your password reset code is: {code}\nThis code will expire in {RESET_CODE_TTL_SECONDS // 60} minutes.",
        )
        logger.info("Password reset code issued for %s", email)

    def verify_code(self, email: str, code: str) -> None:
        email = require_email(email)
        code = require_non_empty(code, "Code")

        stored = self._codes.get(email)
        if not stored or stored == RESET_VERIFIED_MARKER or not secrets.compare_digest(stored, code):
            raise AuthenticationError("Invalid or expired code")

        self._codes.put(email, RESET_VERIFIED_MARKER, ttl_seconds=RESET_VERIFIED_TTL_SECONDS)

    def reset_password(self, email: str, new_password: str, confirm_password: str) -> None:
        email = require_email(email)
        if self._codes.get(email) != RESET_VERIFIED_MARKER:
            raise AuthenticationError("Reset code not verified or expired")

        user = self._users.get_by_email(email)
        if not user:
            raise NotFoundError("Email not found")

        password_hash = hash_password(new_password, confirm_password)
        if not self._users.update_password(user.user_id, password_hash=password_hash):
            raise ValidationError("Failed to update password")

        self._codes.delete(email)
        logger.info("Password reset completed for user %s", user.user_id)
