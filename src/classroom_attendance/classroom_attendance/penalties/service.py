from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.validators import require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from ..students.repository import StudentRepository
from . import state_machine
from .model import Excused, PenaltyPolicy

logger = logging.getLogger(__name__)


class PenaltyService:
    """Use case: excuse an absence or reinstate its penalty."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        policy: PenaltyPolicy | None = None,
    ):
        self._attendance = attendance
        self._students = students
        self._policy = policy or PenaltyPolicy()

    @property
    def policy(self) -> PenaltyPolicy:
        return self._policy

    def _get_owned_record(self, *, teacher_id: int, record_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(record_id))
        if not record or record.teacher_id != int(teacher_id):
            raise NotFoundError("Attendance record not found")
        return record

    def list_absences(self, *, teacher_id: int, student_id: int) -> Sequence[AttendanceRecord]:
        student = self._students.get_by_id(int(student_id))
        if not student or student.teacher_id != int(teacher_id):
            raise NotFoundError("Student not found")

        records = self._attendance.list_for_student_and_status(student.student_id, AttendanceStatus.ABSENT)
        return [r for r in records if r.teacher_id == int(teacher_id)]

    def excuse_absence(self, *, teacher_id: int, record_id: int, reason: str) -> AttendanceRecord:
        reason = require_non_empty(reason, "Excuse reason")
        record = self._get_owned_record(teacher_id=teacher_id, record_id=record_id)

        if isinstance(record.standing, Excused):
            if record.standing.reason == reason:
                return record
            raise InvalidTransitionError("Absence is already excused")

        standing = state_machine.excuse(record.standing, reason)
        self._attendance.update_standing(record_id=record.record_id, standing=standing)
        logger.info("Teacher %s excused attendance record %s", teacher_id, record.record_id)
        return replace(record, standing=standing)

    def reinstate_penalty(self, *, teacher_id: int, record_id: int, confirm: bool = False) -> AttendanceRecord:
        if not confirm:
            raise ValidationError("Reinstating a penalty must be confirmed")
        record = self._get_owned_record(teacher_id=teacher_id, record_id=record_id)

        standing = state_machine.reinstate(record.standing, self._policy)
        self._attendance.update_standing(record_id=record.record_id, standing=standing)
        logger.info("Teacher %s reinstated penalty on attendance record %s", teacher_id, record.record_id)
        return replace(record, standing=standing)
