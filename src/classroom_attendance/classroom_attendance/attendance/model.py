from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from ..penalties.model import Excused, Standing, Unexcused


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's status on one day.

    ``penalty``, ``is_excused`` and ``excuse_reason`` are read from
    ``standing`` rather than stored, so they cannot disagree.
    """

    record_id: int
    student_id: int
    attendance_date: date
    status: AttendanceStatus
    teacher_id: int
    standing: Optional[Standing] = None
    created_at: Optional[datetime] = None

    @property
    def penalty(self) -> int:
        return self.standing.penalty if self.standing else 0

    @property
    def is_excused(self) -> bool:
        return bool(self.standing and self.standing.is_excused)

    @property
    def excuse_reason(self) -> Optional[str]:
        return self.standing.excuse_reason if self.standing else None


@dataclass(frozen=True)
class AttendanceEntry:
    """A row to insert as part of a daily submission."""

    student_id: int
    status: AttendanceStatus
    standing: Optional[Standing] = None


def standing_from_row(
    status: AttendanceStatus,
    *,
    penalty: Optional[int],
    is_excused: bool,
    excuse_reason: Optional[str],
) -> Optional[Standing]:
    """Fold the stored flag columns back into a standing."""

    if status == AttendanceStatus.PRESENT:
        return None
    if is_excused:
        return Excused(reason=excuse_reason or "")
    return Unexcused(penalty=max(int(penalty or 0), 0))


def record_to_dict(r: AttendanceRecord) -> dict:
    return {
        "id": r.record_id,
        "student_id": r.student_id,
        "date": r.attendance_date.isoformat(),
        "status": r.status.value,
        "penalty": r.penalty,
        "is_excused": r.is_excused,
        "excuse_reason": r.excuse_reason,
        "teacher_id": r.teacher_id,
    }
