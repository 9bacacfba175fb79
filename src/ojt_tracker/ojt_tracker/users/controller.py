from __future__ import annotations

from flask import Flask, request, session

from ..common.http import json_body, login_required, ok, roles_required
from ..common.validators import parse_optional_enum
from ..core.enums import ProfileStatus, Role
from ..core.exceptions import ValidationError
from ..container import Container
from .model import NewUser

_PROFILE_ROLES = {"supervisors": Role.SUPERVISOR, "handlers": Role.HANDLER}


def new_user_from(data: dict) -> NewUser:
    return NewUser(
        first_name=data.get("first_name", ""),
        middle_name=data.get("middle_name", ""),
        last_name=data.get("last_name", ""),
        suffix_name=data.get("suffix_name", ""),
        email=data.get("email", ""),
        phone=data.get("phone", ""),
    )


def _profile_role(kind: str) -> Role:
    role = _PROFILE_ROLES.get(kind)
    if not role:
        raise ValidationError("Unknown profile type")
    return role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        session["profile_id"] = s_user.profile_id

        return ok(
            {
                "user_id": s_user.user_id,
                "full_name": s_user.full_name,
                "email": s_user.email,
                "role": s_user.role.value,
                "profile_id": s_user.profile_id,
            },
            message="Login successful",
        )

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(message="Logged out")

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok(
            {
                "user_id": session["user_id"],
                "full_name": session.get("name"),
                "role": session.get("role"),
                "profile_id": session.get("profile_id"),
            }
        )

    @app.route("/api/change-password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        data = json_body()
        container.user_service.change_password(
            user_id=int(session["user_id"]),
            old_password=data.get("old_password", ""),
            new_password=data.get("new_password", ""),
            confirm_password=data.get("confirm_password", ""),
        )
        return ok(message="Password updated")

    @app.route("/api/forgot-password", methods=["POST"], endpoint="forgot_password")
    def forgot_password():
        container.password_reset_service.forgot_password(json_body().get("email", ""))
        return ok(message="Reset code sent to your email")

    @app.route("/api/verify-code", methods=["POST"], endpoint="verify_code")
    def verify_code():
        data = json_body()
        container.password_reset_service.verify_code(data.get("email", ""), str(data.get("code", "")))
        return ok(message="Code verified")

    @app.route("/api/reset-password", methods=["POST"], endpoint="reset_password")
    def reset_password():
        data = json_body()
        container.password_reset_service.reset_password(
            data.get("email", ""),
            data.get("new_password", ""),
            data.get("confirm_password", ""),
        )
        return ok(message="Password reset successful")

    @app.route("/api/profiles/<kind>", methods=["GET"], endpoint="list_profiles")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def list_profiles(kind: str):
        status = parse_optional_enum(ProfileStatus, request.args.get("status"), "status")
        profiles = container.user_service.list_profiles(role=_profile_role(kind), status=status)
        return ok([p.to_dict() for p in profiles])

    @app.route("/api/profiles/<kind>", methods=["POST"], endpoint="create_profile")
    @roles_required(Role.SUPERVISOR)
    def create_profile(kind: str):
        data = json_body()
        role = _profile_role(kind)
        create = (
            container.user_service.create_supervisor_profile
            if role == Role.SUPERVISOR
            else container.user_service.create_handler_profile
        )
        profile_id = create(
            data=new_user_from(data),
            password=data.get("password", ""),
            confirm_password=data.get("confirm_password", ""),
            department=data.get("department", ""),
        )
        return ok({"id": profile_id}, message=f"{role.value.capitalize()} created", status=201)

    @app.route("/api/profiles/<kind>/<int:profile_id>", methods=["GET"], endpoint="get_profile")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def get_profile(kind: str, profile_id: int):
        return ok(container.user_service.get_profile(role=_profile_role(kind), profile_id=profile_id).to_dict())

    @app.route("/api/profiles/<kind>/<int:profile_id>", methods=["PUT"], endpoint="edit_profile")
    @roles_required(Role.SUPERVISOR)
    def edit_profile(kind: str, profile_id: int):
        container.user_service.edit_profile(
            current_role=Role(session.get("role")),
            role=_profile_role(kind),
            profile_id=profile_id,
            department=json_body().get("department", ""),
        )
        return ok(message="Profile updated")

    @app.route("/api/profiles/<kind>/<int:profile_id>/archive", methods=["POST"], endpoint="archive_profile")
    @roles_required(Role.SUPERVISOR)
    def archive_profile(kind: str, profile_id: int):
        container.user_service.archive_profile(
            current_role=Role(session.get("role")),
            role=_profile_role(kind),
            profile_id=profile_id,
        )
        return ok(message="Profile archived")
