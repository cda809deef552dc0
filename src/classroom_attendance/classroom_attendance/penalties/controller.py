from __future__ import annotations

from flask import Flask, jsonify

from ..attendance.model import record_to_dict
from ..common.web import current_teacher_id, error_response, json_body, login_required
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/students/<int:student_id>/absences", methods=["GET"], endpoint="student_absences")
    @login_required
    def student_absences(student_id: int):
        try:
            records = container.penalty_service.list_absences(teacher_id=current_teacher_id(), student_id=student_id)
            return jsonify(
                {
                    "success": True,
                    "penalty_amount": container.penalty_service.policy.amount,
                    "records": [record_to_dict(r) for r in records],
                }
            ), 200
        except DomainError as e:
            return error_response(e)

    @app.route("/attendance/<int:record_id>/excuse", methods=["POST"], endpoint="excuse_absence")
    @login_required
    def excuse_absence(record_id: int):
        try:
            data = json_body()
            record = container.penalty_service.excuse_absence(
                teacher_id=current_teacher_id(),
                record_id=record_id,
                reason=data.get("reason", ""),
            )
            return jsonify(
                {
                    "success": True,
                    "message": "Absence excused and penalty removed",
                    "record": record_to_dict(record),
                }
            ), 200
        except DomainError as e:
            return error_response(e)

    @app.route("/attendance/<int:record_id>/reinstate", methods=["POST"], endpoint="reinstate_penalty")
    @login_required
    def reinstate_penalty(record_id: int):
        try:
            data = json_body()
            record = container.penalty_service.reinstate_penalty(
                teacher_id=current_teacher_id(),
                record_id=record_id,
                confirm=str(data.get("confirm", "")).lower() in {"1", "true", "yes"},
            )
            return jsonify(
                {
                    "success": True,
                    "message": "Excuse removed and penalty reinstated",
                    "record": record_to_dict(record),
                }
            ), 200
        except DomainError as e:
            return error_response(e)
