"""Flask helpers shared by the feature controllers."""

from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    InvalidTransitionError,
    NotFoundError,
    PartialFailureError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order: subclasses first.
_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (InvalidTransitionError, 409),
    (PartialFailureError, 500),
    (StoreError, 503),
)


def error_response(e: DomainError):
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(e, error_type):
            break
    else:
        status = 400

    body = {"success": False, "message": str(e)}
    if isinstance(e, PartialFailureError):
        body["error"] = "partial_failure"
        body["date"] = e.attendance_date.isoformat()
        body["student_ids"] = e.student_ids
    elif isinstance(e, StoreError):
        body["error"] = "store_unavailable"
    return jsonify(body), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "teacher_id" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def current_teacher_id() -> int:
    return int(session["teacher_id"])


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
