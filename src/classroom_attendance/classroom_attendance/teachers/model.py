from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Teacher:
    """Domain entity: a teacher account.

    Note: plain data object, no DB access here.
    """

    teacher_id: int
    email: str
    password_hash: str
    full_name: Optional[str] = None
    is_active: bool = True
