from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a student on one teacher's roster."""

    student_id: int
    name: str
    roll_number: str
    email: str
    teacher_id: int
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class StudentFields:
    """Teacher-editable fields, already validated."""

    name: str
    roll_number: str
    email: str


def student_to_dict(s: Student) -> dict:
    return {
        "id": s.student_id,
        "name": s.name,
        "roll_number": s.roll_number,
        "email": s.email,
        "teacher_id": s.teacher_id,
        "created_at": s.created_at.isoformat() if s.created_at else None,
    }
