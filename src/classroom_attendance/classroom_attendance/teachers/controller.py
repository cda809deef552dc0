from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import error_response, json_body, login_required
from ..core.exceptions import DomainError
from ..container import Container
from .service import SessionTeacher


def register(app: Flask, container: Container) -> None:
    def _start_session(s_teacher: SessionTeacher, *, remember: bool) -> None:
        session.clear()
        session.permanent = bool(remember)

        session["teacher_id"] = s_teacher.teacher_id
        session["email"] = s_teacher.email
        session["name"] = s_teacher.full_name

    def _me() -> dict:
        return {"id": session["teacher_id"], "email": session.get("email"), "full_name": session.get("name")}

    @app.route("/auth/sign-up", methods=["POST"], endpoint="sign_up")
    def sign_up():
        try:
            data = json_body()
            s_teacher = container.auth_service.sign_up(
                data.get("email", ""),
                data.get("password", ""),
                full_name=data.get("full_name"),
            )
            _start_session(s_teacher, remember=False)
            return jsonify({"success": True, "teacher": _me()}), 201
        except DomainError as e:
            return error_response(e)

    @app.route("/auth/sign-in", methods=["POST"], endpoint="sign_in")
    def sign_in():
        try:
            data = json_body()
            s_teacher = container.auth_service.sign_in(data.get("email", ""), data.get("password", ""))
            _start_session(s_teacher, remember=bool(data.get("remember_me")))
            return jsonify({"success": True, "teacher": _me()}), 200
        except DomainError as e:
            return error_response(e)

    @app.route("/auth/sign-out", methods=["POST"], endpoint="sign_out")
    def sign_out():
        session.clear()
        return jsonify({"success": True, "message": "Signed out"}), 200

    @app.route("/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify({"success": True, "teacher": _me()}), 200
