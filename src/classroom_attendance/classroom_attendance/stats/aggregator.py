"""Derived attendance statistics.

Everything here is pure: given a teacher's roster and their attendance
records, recompute the numbers from scratch. Nothing is cached or stored.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..core.constants import DEFAULT_RANKING_LIMIT
from ..core.enums import AttendanceStatus
from ..students.model import Student


@dataclass(frozen=True)
class StudentWithStats:
    student: Student
    present_days: int
    absent_days: int
    total_days: int
    attendance_percentage: float
    total_penalty: int

    @property
    def student_id(self) -> int:
        return self.student.student_id

    def to_dict(self) -> dict:
        return {
            "id": self.student.student_id,
            "name": self.student.name,
            "roll_number": self.student.roll_number,
            "email": self.student.email,
            "present_days": self.present_days,
            "absent_days": self.absent_days,
            "total_days": self.total_days,
            "attendance_percentage": self.attendance_percentage,
            "total_penalty": self.total_penalty,
        }


@dataclass(frozen=True)
class DashboardTotals:
    total_students: int
    today_present: int
    today_absent: int
    unmarked_today: int
    total_penalties: int


def count_by_status(records: Iterable[AttendanceRecord]) -> tuple[int, int]:
    """Return ``(present, absent)`` counts."""

    present = absent = 0
    for r in records:
        if r.status == AttendanceStatus.PRESENT:
            present += 1
        elif r.status == AttendanceStatus.ABSENT:
            absent += 1
    return present, absent


def stats_for_student(student: Student, records: Sequence[AttendanceRecord]) -> StudentWithStats:
    present, absent = count_by_status(records)
    total = present + absent
    return StudentWithStats(
        student=student,
        present_days=present,
        absent_days=absent,
        total_days=total,
        attendance_percentage=(present / total * 100) if total else 0.0,
        # Excused records are filtered even though their penalty is already 0.
        total_penalty=sum(r.penalty for r in records if not r.is_excused),
    )


def compute_stats(students: Sequence[Student], records: Iterable[AttendanceRecord]) -> list[StudentWithStats]:
    """One :class:`StudentWithStats` per student, in roster order.

    Records whose ``student_id`` matches no student are ignored.
    """

    by_student: dict[int, list[AttendanceRecord]] = defaultdict(list)
    for r in records:
        by_student[r.student_id].append(r)

    return [stats_for_student(s, by_student.get(s.student_id, [])) for s in students]


def compute_totals(
    students: Sequence[Student],
    records: Iterable[AttendanceRecord],
    stats: Sequence[StudentWithStats],
    *,
    today: date,
) -> DashboardTotals:
    today_present, today_absent = count_by_status(r for r in records if r.attendance_date == today)
    total_students = len(students)
    return DashboardTotals(
        total_students=total_students,
        today_present=today_present,
        today_absent=today_absent,
        unmarked_today=max(total_students - today_present - today_absent, 0),
        total_penalties=sum(s.total_penalty for s in stats),
    )


def _rank(
    stats: Sequence[StudentWithStats],
    key: Callable[[StudentWithStats], int],
    limit: int,
) -> list[StudentWithStats]:
    # sorted() is stable, so ties keep roster order.
    ranked = sorted((s for s in stats if key(s) > 0), key=key, reverse=True)
    return ranked[: max(int(limit), 0)]


def rank_most_present(stats: Sequence[StudentWithStats], limit: int = DEFAULT_RANKING_LIMIT) -> list[StudentWithStats]:
    return _rank(stats, lambda s: s.present_days, limit)


def rank_most_absent(stats: Sequence[StudentWithStats], limit: int = DEFAULT_RANKING_LIMIT) -> list[StudentWithStats]:
    return _rank(stats, lambda s: s.absent_days, limit)
