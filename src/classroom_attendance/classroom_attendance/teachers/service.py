from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, ValidationError
from .repository import TeacherRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionTeacher:
    """What we store into Flask session after sign-in."""

    teacher_id: int
    email: str
    full_name: Optional[str]


class AuthService:
    """Use case: sign a teacher up or in.

    The returned ``teacher_id`` is the scoping key for every roster and
    attendance query.
    """

    def __init__(self, teachers: TeacherRepository):
        self._teachers = teachers

    def sign_up(self, email: str, password: str, *, full_name: Optional[str] = None) -> SessionTeacher:
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._teachers.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        full_name = (full_name or "").strip() or None
        teacher_id = self._teachers.create_teacher(
            email=email,
            password_hash=generate_password_hash(password),
            full_name=full_name,
        )
        logger.info("Teacher %s signed up", teacher_id)
        return SessionTeacher(teacher_id=teacher_id, email=email, full_name=full_name)

    def sign_in(self, email: str, password: str) -> SessionTeacher:
        teacher = self._teachers.get_by_email((email or "").strip().lower())
        if not teacher or not teacher.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(teacher.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionTeacher(teacher_id=teacher.teacher_id, email=teacher.email, full_name=teacher.full_name)
