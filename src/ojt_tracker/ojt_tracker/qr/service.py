from __future__ import annotations

import base64
import io
import logging
import re

import qrcode

from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..interns.model import Intern
from ..interns.repository import InternRepository
from .repository import QRCodeRepository

logger = logging.getLogger(__name__)

_INTERN_ID_LINE = re.compile(r"^InternID:\s*(\d+)\s*$", re.MULTILINE)


def build_payload(intern: Intern) -> str:
    return (
        f"InternID: {intern.intern_id}\n"
        f"FirstName: {intern.first_name}\n"
        f"MiddleName: {intern.middle_name}\n"
        f"LastName: {intern.last_name}"
    )


def parse_intern_id(payload: str) -> int:
    m = _INTERN_ID_LINE.search(payload or "")
    if not m:
        raise ValidationError("Invalid QR code")
    return int(m.group(1))


def render_png(payload: str) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


class QRService:
    """Use case: one attendance QR code per intern."""

    def __init__(self, codes: QRCodeRepository, interns: InternRepository):
        self._codes = codes
        self._interns = interns

    def generate_for_intern(self, intern_id: int) -> str:
        intern = self._interns.get_by_id(int(intern_id))
        if not intern:
            raise NotFoundError("Intern not found")
        if self._codes.get_payload(intern.intern_id) is not None:
            raise ConflictError("QRCode already exists")

        payload = build_payload(intern)
        self._codes.save_payload(intern_id=intern.intern_id, payload=payload)
        logger.info("Generated QR code for intern %s", intern.intern_id)
        return payload

    def get_payload(self, intern_id: int) -> str:
        payload = self._codes.get_payload(int(intern_id))
        if payload is None:
            raise NotFoundError("QR code not found")
        return payload

    def image_png(self, intern_id: int) -> bytes:
        return render_png(self.get_payload(intern_id))

    def image_base64(self, intern_id: int) -> str:
        return base64.b64encode(self.image_png(intern_id)).decode("ascii")

    def resolve_intern(self, payload: str) -> int:
        """Map scanned QR text back to an intern, checking it against the stored code."""

        intern_id = parse_intern_id(payload)
        stored = self._codes.get_payload(intern_id)
        if stored is None or stored.strip() != (payload or "").strip():
            raise ValidationError("Invalid QR code")
        return intern_id
