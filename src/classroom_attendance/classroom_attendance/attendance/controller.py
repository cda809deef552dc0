from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.web import current_teacher_id, error_response, json_body, login_required
from ..core.exceptions import DomainError
from ..container import Container
from ..students.model import student_to_dict
from .model import record_to_dict


def register(app: Flask, container: Container) -> None:
    def _date_arg(value) -> date:
        return parse_iso_date(value) if value else today_local()

    @app.route("/attendance", methods=["GET"], endpoint="day_sheet")
    @login_required
    def day_sheet():
        try:
            attendance_date = _date_arg(request.args.get("date"))
            sheet = container.attendance_service.get_day_sheet(current_teacher_id(), attendance_date)
            return jsonify(
                {
                    "success": True,
                    "date": sheet.attendance_date.isoformat(),
                    "present": sheet.present,
                    "absent": sheet.absent,
                    "unmarked": sheet.unmarked,
                    "rows": [
                        {
                            "student": student_to_dict(row.student),
                            "status": row.status.value if row.status else None,
                            "record": record_to_dict(row.record) if row.record else None,
                        }
                        for row in sheet.rows
                    ],
                }
            ), 200
        except DomainError as e:
            return error_response(e)

    @app.route("/attendance", methods=["POST"], endpoint="submit_attendance")
    @login_required
    def submit_attendance():
        """Body: ``{"date": "YYYY-MM-DD", "marks": {"<student_id>": "present"|"absent"}}``.

        ``"mark_all": "present"`` may replace ``marks`` to mark the whole roster.
        """

        try:
            data = json_body()
            result = container.attendance_service.submit_day(
                teacher_id=current_teacher_id(),
                attendance_date=_date_arg(data.get("date")),
                marks=data.get("marks"),
                mark_all=data.get("mark_all"),
            )
            return jsonify(
                {
                    "success": True,
                    "message": "Attendance saved successfully",
                    "date": result.attendance_date.isoformat(),
                    "present": result.present,
                    "absent": result.absent,
                    "replaced": result.replaced,
                    "record_ids": result.record_ids,
                }
            ), 201
        except DomainError as e:
            return error_response(e)
