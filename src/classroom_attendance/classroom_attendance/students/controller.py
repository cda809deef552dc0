from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_teacher_id, error_response, json_body, login_required
from ..core.exceptions import DomainError
from ..container import Container
from .model import student_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/students", methods=["GET"], endpoint="list_students")
    @login_required
    def list_students():
        try:
            students = container.roster_service.list_students(current_teacher_id())
            return jsonify({"success": True, "students": [student_to_dict(s) for s in students]}), 200
        except DomainError as e:
            return error_response(e)

    @app.route("/students", methods=["POST"], endpoint="add_student")
    @login_required
    def add_student():
        try:
            data = json_body()
            student = container.roster_service.add_student(
                teacher_id=current_teacher_id(),
                name=data.get("name", ""),
                roll_number=data.get("roll_number", ""),
                email=data.get("email", ""),
            )
            return jsonify({"success": True, "student": student_to_dict(student)}), 201
        except DomainError as e:
            return error_response(e)

    @app.route("/students/<int:student_id>", methods=["PUT"], endpoint="update_student")
    @login_required
    def update_student(student_id: int):
        try:
            data = json_body()
            student = container.roster_service.update_student(
                teacher_id=current_teacher_id(),
                student_id=student_id,
                name=data.get("name", ""),
                roll_number=data.get("roll_number", ""),
                email=data.get("email", ""),
            )
            return jsonify({"success": True, "student": student_to_dict(student)}), 200
        except DomainError as e:
            return error_response(e)

    @app.route("/students/<int:student_id>", methods=["DELETE"], endpoint="delete_student")
    @login_required
    def delete_student(student_id: int):
        try:
            container.roster_service.delete_student(teacher_id=current_teacher_id(), student_id=student_id)
            return jsonify({"success": True, "message": "Student deleted"}), 200
        except DomainError as e:
            return error_response(e)
