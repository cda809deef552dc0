from __future__ import annotations

import csv
import io

from flask import Flask, jsonify

from ..common.web import current_teacher_id, error_response, login_required
from ..core.exceptions import DomainError
from ..container import Container
from .service import CSV_FIELDS


def register(app: Flask, container: Container) -> None:
    @app.route("/students/stats", methods=["GET"], endpoint="student_stats")
    @login_required
    def student_stats():
        try:
            stats = container.stats_service.student_stats(current_teacher_id())
            return jsonify({"success": True, "students": [s.to_dict() for s in stats]}), 200
        except DomainError as e:
            return error_response(e)

    @app.route("/students/stats.csv", methods=["GET"], endpoint="student_stats_csv")
    @login_required
    def student_stats_csv():
        try:
            rows = container.stats_service.export_rows(current_teacher_id())
        except DomainError as e:
            return error_response(e)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=student_stats.csv"},
        )

    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        try:
            board = container.stats_service.dashboard(current_teacher_id())
            totals = board.totals
            return jsonify(
                {
                    "success": True,
                    "today": board.today.isoformat(),
                    "totals": {
                        "total_students": totals.total_students,
                        "today_present": totals.today_present,
                        "today_absent": totals.today_absent,
                        "unmarked_today": totals.unmarked_today,
                        "total_penalties": totals.total_penalties,
                    },
                    "most_present": [s.to_dict() for s in board.most_present],
                    "most_absent": [s.to_dict() for s in board.most_absent],
                    "students": [s.to_dict() for s in board.students],
                }
            ), 200
        except DomainError as e:
            return error_response(e)
