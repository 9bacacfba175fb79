from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local, parse_api_date
from ..common.http import current_profile_id, current_role, json_body, login_required, ok, roles_required
from ..common.validators import parse_optional_enum, require_positive_id
from ..core.enums import Role, Slot
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..container import Container
from .service import entry_to_dict


def register(app: Flask, container: Container) -> None:
    def _intern_id_from(data: dict) -> int:
        if current_role() == Role.INTERN:
            return current_profile_id()
        return require_positive_id(data.get("intern_id"), "Intern ID")

    @app.route("/api/dtr/scan", methods=["POST"], endpoint="dtr_scan")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def dtr_scan():
        """QR scanner endpoint: the code's text identifies the intern."""

        code = (json_body().get("code") or "").strip()
        if not code:
            raise ValidationError("QR code is required")
        intern_id = container.qr_service.resolve_intern(code)
        result = container.dtr_service.scan(intern_id)
        return ok(result.to_dict(), message=f"Recorded {result.slot.value.replace('_', ' ')}")

    @app.route("/api/dtr/time-in", methods=["POST"], endpoint="dtr_time_in")
    @login_required
    def dtr_time_in():
        result = container.dtr_service.time_in(_intern_id_from(json_body()))
        return ok(result.to_dict(), message="Time-in recorded")

    @app.route("/api/dtr/time-out", methods=["POST"], endpoint="dtr_time_out")
    @login_required
    def dtr_time_out():
        result = container.dtr_service.time_out(_intern_id_from(json_body()))
        return ok(result.to_dict(), message="Time-out recorded")

    @app.route("/api/dtr/slots/<slot>", methods=["POST"], endpoint="dtr_record_slot")
    @login_required
    def dtr_record_slot(slot: str):
        parsed = parse_optional_enum(Slot, slot, "slot")
        if parsed is None:
            raise ValidationError("Slot is required")
        result = container.dtr_service.record_slot(_intern_id_from(json_body()), parsed)
        return ok(result.to_dict(), message=f"Recorded {parsed.value.replace('_', ' ')}")

    @app.route("/api/dtr/<int:intern_id>", methods=["GET"], endpoint="dtr_for_date")
    @login_required
    def dtr_for_date(intern_id: int):
        if current_role() == Role.INTERN and current_profile_id() != intern_id:
            raise AuthorizationError("Interns can only view their own records")

        date_s = request.args.get("date")
        work_date = parse_api_date(date_s) if date_s else now_local(container.tz_name).date()
        entry = container.dtr_service.get_for_date(intern_id, work_date)
        if not entry:
            raise NotFoundError("DTR entry not found")
        return ok(entry_to_dict(entry))

    @app.route("/api/dtr/<int:intern_id>/entries", methods=["GET"], endpoint="dtr_entries")
    @login_required
    def dtr_entries(intern_id: int):
        if current_role() == Role.INTERN and current_profile_id() != intern_id:
            raise AuthorizationError("Interns can only view their own records")
        return ok([entry_to_dict(e) for e in container.dtr_service.list_for_intern(intern_id)])

    @app.route("/api/dtr/absent-sweep", methods=["POST"], endpoint="dtr_absent_sweep")
    @roles_required(Role.SUPERVISOR)
    def dtr_absent_sweep():
        inserted = container.dtr_service.insert_absent_entries()
        return ok({"inserted": inserted}, message=f"Inserted {len(inserted)} absent rows")
