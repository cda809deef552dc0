from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from ..penalties.model import Standing
from .model import AttendanceEntry, AttendanceRecord


class AttendanceRepository(Protocol):
    # True when replace_for_date runs its delete and inserts atomically.
    transactional: bool

    def list_for_teacher(self, teacher_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_teacher_and_date(self, teacher_id: int, attendance_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student_and_status(self, student_id: int, status: AttendanceStatus) -> Sequence[AttendanceRecord]:
        """Newest first."""

        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def delete_for_date(self, *, teacher_id: int, attendance_date: date, student_ids: Sequence[int]) -> int:
        raise NotImplementedError

    def insert_many(self, *, teacher_id: int, attendance_date: date, entries: Sequence[AttendanceEntry]) -> list[int]:
        raise NotImplementedError

    def replace_for_date(
        self,
        *,
        teacher_id: int,
        attendance_date: date,
        entries: Sequence[AttendanceEntry],
    ) -> tuple[int, list[int]]:
        """Delete the date's records for the entries' students, then insert the entries.

        Returns ``(replaced, new_ids)``.
        """

        raise NotImplementedError

    def restore(self, records: Sequence[AttendanceRecord]) -> None:
        """Re-insert previously deleted records with their original ids."""

        raise NotImplementedError

    def update_standing(self, *, record_id: int, standing: Standing) -> None:
        raise NotImplementedError
