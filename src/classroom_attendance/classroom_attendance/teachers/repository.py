from __future__ import annotations

from typing import Optional, Protocol

from .model import Teacher


class TeacherRepository(Protocol):
    """Repository interface for teacher accounts.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Teacher]:
        raise NotImplementedError

    def create_teacher(self, *, email: str, password_hash: str, full_name: Optional[str] = None) -> int:
        raise NotImplementedError
