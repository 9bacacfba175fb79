from __future__ import annotations

import io

from flask import Flask, send_file

from ..common.http import current_profile_id, current_role, login_required, ok, roles_required
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/qr/<int:intern_id>", methods=["POST"], endpoint="generate_qr")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def generate_qr(intern_id: int):
        payload = container.qr_service.generate_for_intern(intern_id)
        return ok(
            {"intern_id": intern_id, "payload": payload, "image_base64": container.qr_service.image_base64(intern_id)},
            message="QR code generated",
            status=201,
        )

    @app.route("/api/qr/<int:intern_id>/image", methods=["GET"], endpoint="qr_image")
    @login_required
    def qr_image(intern_id: int):
        """PNG of the intern's attendance QR code."""

        if current_role() == Role.INTERN and current_profile_id() != intern_id:
            raise AuthorizationError("Interns can only view their own QR code")
        buf = io.BytesIO(container.qr_service.image_png(intern_id))
        return send_file(buf, mimetype="image/png")
