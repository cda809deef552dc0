from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_email, require_non_empty
from ..core.exceptions import NotFoundError
from .model import Student, StudentFields
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class RosterService:
    """Use case: a teacher manages their own roster.

    Deleting a student cascades to their attendance records.
    """

    def __init__(self, students: StudentRepository):
        self._students = students

    @staticmethod
    def _clean(*, name: str, roll_number: str, email: str) -> StudentFields:
        return StudentFields(
            name=require_non_empty(name, "Name"),
            roll_number=require_non_empty(roll_number, "Roll number"),
            email=require_email(email),
        )

    def list_students(self, teacher_id: int) -> Sequence[Student]:
        return list(self._students.list_for_teacher(int(teacher_id)))

    def get_owned(self, *, teacher_id: int, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student or student.teacher_id != int(teacher_id):
            raise NotFoundError("Student not found")
        return student

    def add_student(self, *, teacher_id: int, name: str, roll_number: str, email: str) -> Student:
        fields = self._clean(name=name, roll_number=roll_number, email=email)
        student_id = self._students.create(teacher_id=int(teacher_id), fields=fields)
        logger.info("Teacher %s added student %s", teacher_id, student_id)
        return Student(
            student_id=student_id,
            name=fields.name,
            roll_number=fields.roll_number,
            email=fields.email,
            teacher_id=int(teacher_id),
        )

    def update_student(self, *, teacher_id: int, student_id: int, name: str, roll_number: str, email: str) -> Student:
        fields = self._clean(name=name, roll_number=roll_number, email=email)
        current = self.get_owned(teacher_id=teacher_id, student_id=student_id)

        self._students.update(student_id=current.student_id, fields=fields)

        logger.info("Teacher %s updated student %s", teacher_id, student_id)
        return Student(
            student_id=current.student_id,
            name=fields.name,
            roll_number=fields.roll_number,
            email=fields.email,
            teacher_id=current.teacher_id,
            created_at=current.created_at,
        )

    def delete_student(self, *, teacher_id: int, student_id: int) -> None:
        current = self.get_owned(teacher_id=teacher_id, student_id=student_id)
        if not self._students.delete_with_attendance(current.student_id):
            raise NotFoundError("Student not found")
        logger.info("Teacher %s deleted student %s with their attendance", teacher_id, student_id)
