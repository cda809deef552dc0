from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Teacher
from .repository import TeacherRepository


def _to_teacher(row: dict) -> Teacher:
    return Teacher(
        teacher_id=int(row["id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        full_name=row.get("full_name"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, email, password_hash, full_name, is_active
                FROM teachers
                WHERE id=%s
                """,
                (teacher_id,),
            )
            row = fetchone(cur)
            return _to_teacher(row) if row else None

    def get_by_email(self, email: str) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, email, password_hash, full_name, is_active
                FROM teachers
                WHERE email=%s
                """,
                (email,),
            )
            row = fetchone(cur)
            return _to_teacher(row) if row else None

    def create_teacher(self, *, email: str, password_hash: str, full_name: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO teachers(email, password_hash, full_name, is_active)
                VALUES(%s,%s,%s,1)
                """,
                (email, password_hash, full_name),
            )
            return int(cur.lastrowid)
