from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student, StudentFields


class StudentRepository(Protocol):
    def list_for_teacher(self, teacher_id: int) -> Sequence[Student]:
        """All students of a teacher ordered by roll number."""

        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def create(self, *, teacher_id: int, fields: StudentFields) -> int:
        raise NotImplementedError

    def update(self, *, student_id: int, fields: StudentFields) -> None:
        raise NotImplementedError

    def delete_with_attendance(self, student_id: int) -> bool:
        """Delete the student and every attendance record that references them."""

        raise NotImplementedError
