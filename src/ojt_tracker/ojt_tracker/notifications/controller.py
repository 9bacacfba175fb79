from __future__ import annotations

from flask import Flask

from ..common.http import current_profile_id, json_body, ok, roles_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/device-token", methods=["POST"], endpoint="register_device_token")
    @roles_required(Role.INTERN)
    def register_device_token():
        container.notification_service.register_token(
            intern_id=current_profile_id(),
            token=json_body().get("token", ""),
        )
        return ok(message="Device token saved")
