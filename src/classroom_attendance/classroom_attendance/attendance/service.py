from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import PartialFailureError, StoreError, ValidationError
from ..penalties.model import PenaltyPolicy
from ..penalties.state_machine import initial_standing
from ..stats.aggregator import count_by_status
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import AttendanceEntry, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def parse_status(value) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError(f"Invalid attendance status: {value!r}")


@dataclass(frozen=True)
class DaySheetRow:
    student: Student
    record: Optional[AttendanceRecord]

    @property
    def status(self) -> Optional[AttendanceStatus]:
        return self.record.status if self.record else None


@dataclass(frozen=True)
class DaySheet:
    attendance_date: date
    rows: list[DaySheetRow]
    present: int
    absent: int
    unmarked: int


@dataclass(frozen=True)
class SubmissionResult:
    attendance_date: date
    record_ids: list[int]
    present: int
    absent: int
    replaced: int


class AttendanceService:
    """Use case: take the daily roll for one date.

    A submission replaces any existing record for the same (date, student),
    resetting a previous excuse on that date.
    """

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

    def get_day_sheet(self, teacher_id: int, attendance_date: date) -> DaySheet:
        roster = self._students.list_for_teacher(int(teacher_id))
        by_student = {
            r.student_id: r for r in self._attendance.list_for_teacher_and_date(int(teacher_id), attendance_date)
        }

        rows = [DaySheetRow(student=s, record=by_student.get(s.student_id)) for s in roster]
        present, absent = count_by_status(row.record for row in rows if row.record)
        return DaySheet(
            attendance_date=attendance_date,
            rows=rows,
            present=present,
            absent=absent,
            unmarked=len(rows) - present - absent,
        )

    def _resolve_marks(
        self,
        roster: Sequence[Student],
        marks: Optional[Mapping[int, object]],
        mark_all,
    ) -> dict[int, AttendanceStatus]:
        if mark_all is not None:
            status = parse_status(mark_all)
            resolved = {s.student_id: status for s in roster}
        else:
            if marks is not None and not isinstance(marks, Mapping):
                raise ValidationError("marks must be an object of student id -> status")
            resolved = {}
            for student_id, value in (marks or {}).items():
                try:
                    sid = int(student_id)
                except (TypeError, ValueError):
                    raise ValidationError(f"Invalid student id: {student_id!r}")
                resolved[sid] = parse_status(value)

        if not resolved:
            raise ValidationError("Please mark attendance for at least one student")

        owned = {s.student_id for s in roster}
        unknown = sorted(sid for sid in resolved if sid not in owned)
        if unknown:
            raise ValidationError(f"Unknown students: {', '.join(str(s) for s in unknown)}")
        return resolved

    def submit_day(
        self,
        *,
        teacher_id: int,
        attendance_date: date,
        marks: Optional[Mapping[int, object]] = None,
        mark_all=None,
    ) -> SubmissionResult:
        teacher_id = int(teacher_id)
        roster = self._students.list_for_teacher(teacher_id)
        resolved = self._resolve_marks(roster, marks, mark_all)

        entries = [
            AttendanceEntry(student_id=sid, status=status, standing=initial_standing(status, self._policy))
            for sid, status in resolved.items()
        ]
        if self._attendance.transactional:
            replaced, record_ids = self._replace_atomically(
                teacher_id=teacher_id, attendance_date=attendance_date, entries=entries
            )
        else:
            replaced, record_ids = self._replace_with_restore(
                teacher_id=teacher_id, attendance_date=attendance_date, entries=entries
            )

        present = sum(1 for e in entries if e.status == AttendanceStatus.PRESENT)
        logger.info(
            "Teacher %s submitted attendance for %s (%s present, %s absent, %s replaced)",
            teacher_id,
            attendance_date,
            present,
            len(entries) - present,
            replaced,
        )
        return SubmissionResult(
            attendance_date=attendance_date,
            record_ids=list(record_ids),
            present=present,
            absent=len(entries) - present,
            replaced=int(replaced),
        )

    def _replace_atomically(
        self,
        *,
        teacher_id: int,
        attendance_date: date,
        entries: Sequence[AttendanceEntry],
    ) -> tuple[int, list[int]]:
        try:
            return self._attendance.replace_for_date(
                teacher_id=teacher_id,
                attendance_date=attendance_date,
                entries=entries,
            )
        except StoreError as e:
            logger.error("Replacing attendance for %s was rolled back", attendance_date, exc_info=True)
            raise StoreError("Attendance was not saved; previous records were kept") from e

    def _replace_with_restore(
        self,
        *,
        teacher_id: int,
        attendance_date: date,
        entries: Sequence[AttendanceEntry],
    ) -> tuple[int, list[int]]:
        """Delete then insert, re-inserting the deleted records if the insert fails."""

        student_ids = [e.student_id for e in entries]
        wanted = set(student_ids)
        prior = [r for r in self._attendance.list_for_teacher_and_date(teacher_id, attendance_date) if r.student_id in wanted]

        replaced = self._attendance.delete_for_date(
            teacher_id=teacher_id,
            attendance_date=attendance_date,
            student_ids=student_ids,
        )
        try:
            record_ids = self._attendance.insert_many(
                teacher_id=teacher_id,
                attendance_date=attendance_date,
                entries=entries,
            )
        except StoreError as e:
            logger.error("Insert failed after deleting %s record(s) for %s", replaced, attendance_date, exc_info=True)
            self._restore_after_failed_insert(prior, attendance_date=attendance_date, student_ids=student_ids, cause=e)
            raise StoreError("Attendance was not saved; previous records were kept") from e
        return replaced, record_ids

    def _restore_after_failed_insert(
        self,
        prior: Sequence[AttendanceRecord],
        *,
        attendance_date: date,
        student_ids: Sequence[int],
        cause: StoreError,
    ) -> None:
        if not prior:
            return
        try:
            self._attendance.restore(prior)
        except StoreError:
            logger.error(
                "Could not restore %s record(s) for %s; students %s have no attendance",
                len(prior),
                attendance_date,
                student_ids,
                exc_info=True,
            )
            raise PartialFailureError(
                f"Attendance for {attendance_date.isoformat()} was partially lost; please submit it again",
                attendance_date=attendance_date,
                student_ids=student_ids,
            ) from cause
