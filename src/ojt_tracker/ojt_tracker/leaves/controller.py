from __future__ import annotations

import os
import uuid

from flask import Flask, request, session
from werkzeug.utils import secure_filename

from ..common.datetime_utils import parse_api_date
from ..common.http import current_profile_id, current_role, json_body, login_required, ok, roles_required
from ..common.validators import parse_optional_enum, require_positive_id
from ..core.enums import RequestStatus, Role
from ..container import Container
from .service import validate_excuse_letter_name


def register(app: Flask, container: Container) -> None:
    def _intern_id_from(data: dict) -> int:
        if current_role() == Role.INTERN:
            return current_profile_id()
        return require_positive_id(data.get("intern_id"), "Intern ID")

    def _save_excuse_letter():
        upload = request.files.get("excuse_letter")
        if not upload or not upload.filename:
            return None
        ext = validate_excuse_letter_name(upload.filename)
        os.makedirs(container.upload_folder, exist_ok=True)
        filename = f"{uuid.uuid4().hex}_{secure_filename(os.path.splitext(upload.filename)[0])}{ext}"
        path = os.path.join(container.upload_folder, filename)
        upload.save(path)
        return path

    @app.route("/api/leaves", methods=["POST"], endpoint="create_leave")
    @login_required
    def create_leave():
        data = json_body()
        intern_id = _intern_id_from(data)
        leave_date = parse_api_date(data.get("leave_date", ""))
        excuse_letter = _save_excuse_letter()
        try:
            request_id = container.leave_service.create_leave(
                intern_id=intern_id,
                leave_date=leave_date,
                reason=data.get("reason", ""),
                leave_hours=data.get("leave_hours", ""),
                excuse_letter=excuse_letter,
            )
        except Exception:
            if excuse_letter:
                os.remove(excuse_letter)
            raise
        return ok({"id": request_id}, message="Leave request submitted", status=201)

    @app.route("/api/leaves/same-day", methods=["POST"], endpoint="create_same_day_leave")
    @login_required
    def create_same_day_leave():
        data = json_body()
        leave = container.leave_service.create_same_day_leave(
            intern_id=_intern_id_from(data),
            leave_time=data.get("leave_request_time", ""),
            return_time=data.get("return_in_ojt", ""),
            reason=data.get("reason", ""),
        )
        return ok(leave.to_dict(), message="Leave request submitted", status=201)

    @app.route("/api/leaves", methods=["GET"], endpoint="list_leaves")
    @login_required
    def list_leaves():
        status = parse_optional_enum(RequestStatus, request.args.get("status"), "status")
        if current_role() == Role.INTERN:
            intern_id = current_profile_id()
        else:
            intern_id = int(request.args["intern_id"]) if request.args.get("intern_id", "").isdigit() else None
        leaves = container.leave_service.list_leaves(status=status, intern_id=intern_id)
        return ok([lr.to_dict() for lr in leaves])

    @app.route("/api/leaves/<int:request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def approve_leave(request_id: int):
        summary = container.leave_service.approve_leave(
            current_role=current_role(),
            request_id=request_id,
            decided_by=int(session["user_id"]),
        )
        return ok(summary.to_dict(), message="Leave request approved")

    @app.route("/api/leaves/<int:request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def reject_leave(request_id: int):
        container.leave_service.reject_leave(
            current_role=current_role(),
            request_id=request_id,
            decided_by=int(session["user_id"]),
        )
        return ok(message="Leave request rejected")
