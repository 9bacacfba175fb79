from __future__ import annotations

from flask import Flask, request

from ..common.http import current_profile_id, current_role, json_body, login_required, ok, roles_required
from ..common.validators import parse_id_list, parse_optional_enum
from ..core.enums import InternStatus, Role
from ..core.exceptions import AuthorizationError
from ..container import Container
from ..users.controller import new_user_from
from .model import NewIntern
from .service import intern_to_dict


def new_intern_from(data: dict) -> NewIntern:
    return NewIntern(
        student_id=data.get("student_id", ""),
        school_name=data.get("school_name", ""),
        course=data.get("course", ""),
        address=data.get("address", ""),
        supervisor_id=data.get("supervisor_id") or None,
        handler_id=data.get("handler_id") or None,
        ojt_hours_required=data.get("ojt_hours_required"),
    )


def _ids_from(data: dict) -> list[int]:
    ids = data.get("ids", "")
    if isinstance(ids, list):
        ids = ",".join(str(i) for i in ids)
    return parse_id_list(str(ids), "Intern IDs")


def register(app: Flask, container: Container) -> None:
    def _require_self_or_staff(intern_id: int) -> None:
        if current_role() == Role.INTERN and current_profile_id() != int(intern_id):
            raise AuthorizationError("Interns can only view their own records")

    @app.route("/api/interns/register", methods=["POST"], endpoint="register_intern")
    def register_intern():
        data = json_body()
        intern_id = container.intern_service.register_intern(
            user=new_user_from(data),
            password=data.get("password", ""),
            confirm_password=data.get("confirm_password", ""),
            intern=new_intern_from(data),
        )
        return ok({"id": intern_id}, message="Registration submitted, waiting for approval", status=201)

    @app.route("/api/interns", methods=["GET"], endpoint="list_interns")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def list_interns():
        status = parse_optional_enum(InternStatus, request.args.get("status"), "status")
        return ok([intern_to_dict(i) for i in container.intern_service.list_interns(status=status)])

    @app.route("/api/interns/search", methods=["GET"], endpoint="search_interns")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def search_interns():
        interns = container.intern_service.search(request.args.get("q", ""))
        return ok([intern_to_dict(i) for i in interns])

    @app.route("/api/interns/<int:intern_id>", methods=["GET"], endpoint="get_intern")
    @login_required
    def get_intern(intern_id: int):
        _require_self_or_staff(intern_id)
        return ok(intern_to_dict(container.intern_service.get_intern(intern_id)))

    @app.route("/api/interns/<int:intern_id>", methods=["PUT"], endpoint="edit_intern")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def edit_intern(intern_id: int):
        intern = container.intern_service.edit_intern(
            current_role=current_role(),
            intern_id=intern_id,
            data=new_intern_from(json_body()),
        )
        return ok(intern_to_dict(intern), message="Intern updated")

    @app.route("/api/interns/approve", methods=["POST"], endpoint="approve_interns")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def approve_interns():
        custom_ids = container.intern_service.approve_interns(
            current_role=current_role(),
            intern_ids=_ids_from(json_body()),
        )
        return ok({"custom_intern_ids": custom_ids}, message="Interns approved")

    @app.route("/api/interns/archive", methods=["POST"], endpoint="archive_interns")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def archive_interns():
        container.intern_service.archive_interns(current_role=current_role(), intern_ids=_ids_from(json_body()))
        return ok(message="Interns archived")

    @app.route("/api/interns/<int:intern_id>/hours", methods=["GET"], endpoint="intern_hours")
    @login_required
    def intern_hours(intern_id: int):
        _require_self_or_staff(intern_id)
        return ok(container.intern_service.hours_summary(intern_id).to_dict())

    @app.route("/api/supervisors/<int:supervisor_id>/interns", methods=["GET"], endpoint="supervisor_interns")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def supervisor_interns(supervisor_id: int):
        return ok([intern_to_dict(i) for i in container.intern_service.list_by_supervisor(supervisor_id)])

    @app.route("/api/my/interns", methods=["GET"], endpoint="my_interns")
    @roles_required(Role.SUPERVISOR)
    def my_interns():
        interns = container.intern_service.list_by_supervisor(current_profile_id())
        return ok([intern_to_dict(i) for i in interns])
