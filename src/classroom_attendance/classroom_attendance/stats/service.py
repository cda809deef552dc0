from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import today_local
from ..core.constants import DEFAULT_RANKING_LIMIT
from ..students.repository import StudentRepository
from .aggregator import (
    DashboardTotals,
    StudentWithStats,
    compute_stats,
    compute_totals,
    rank_most_absent,
    rank_most_present,
)

CSV_FIELDS = [
    "roll_number",
    "name",
    "email",
    "present_days",
    "absent_days",
    "total_days",
    "attendance_percentage",
    "total_penalty",
]


@dataclass(frozen=True)
class Dashboard:
    today: date
    totals: DashboardTotals
    students: list[StudentWithStats]
    most_present: list[StudentWithStats]
    most_absent: list[StudentWithStats]


class StatsService:
    """Loads a teacher's roster and records, then hands them to the aggregator."""

    def __init__(
        self,
        students: StudentRepository,
        attendance: AttendanceRepository,
        *,
        ranking_limit: int = DEFAULT_RANKING_LIMIT,
        clock: Callable[[], date] = today_local,
    ):
        self._students = students
        self._attendance = attendance
        self._ranking_limit = int(ranking_limit)
        self._clock = clock

    def student_stats(self, teacher_id: int) -> list[StudentWithStats]:
        students = self._students.list_for_teacher(int(teacher_id))
        records = self._attendance.list_for_teacher(int(teacher_id))
        return compute_stats(students, records)

    def dashboard(self, teacher_id: int, *, today: Optional[date] = None) -> Dashboard:
        today = today or self._clock()
        students = self._students.list_for_teacher(int(teacher_id))
        records = list(self._attendance.list_for_teacher(int(teacher_id)))

        stats = compute_stats(students, records)
        return Dashboard(
            today=today,
            totals=compute_totals(students, records, stats, today=today),
            students=stats,
            most_present=rank_most_present(stats, self._ranking_limit),
            most_absent=rank_most_absent(stats, self._ranking_limit),
        )

    def export_rows(self, teacher_id: int) -> list[dict]:
        """Rows for the CSV export; percentage formatted to one decimal."""

        out: list[dict] = []
        for s in self.student_stats(teacher_id):
            out.append(
                {
                    "roll_number": s.student.roll_number,
                    "name": s.student.name,
                    "email": s.student.email,
                    "present_days": s.present_days,
                    "absent_days": s.absent_days,
                    "total_days": s.total_days,
                    "attendance_percentage": f"{s.attendance_percentage:.1f}",
                    "total_penalty": s.total_penalty,
                }
            )
        return out
