from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student, StudentFields
from .repository import StudentRepository


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["id"]),
        name=r["name"],
        roll_number=r["roll_number"],
        email=r["email"],
        teacher_id=int(r["teacher_id"]),
        created_at=r.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_teacher(self, teacher_id: int) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, roll_number, email, teacher_id, created_at
                FROM students
                WHERE teacher_id=%s
                ORDER BY roll_number ASC
                """,
                (int(teacher_id),),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, roll_number, email, teacher_id, created_at
                FROM students
                WHERE id=%s
                """,
                (int(student_id),),
            )
            r = fetchone(cur)
            return _to_student(r) if r else None

    def create(self, *, teacher_id: int, fields: StudentFields) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(name, roll_number, email, teacher_id)
                VALUES(%s,%s,%s,%s)
                """,
                (fields.name, fields.roll_number, fields.email, int(teacher_id)),
            )
            return int(cur.lastrowid)

    def update(self, *, student_id: int, fields: StudentFields) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET name=%s, roll_number=%s, email=%s
                WHERE id=%s
                """,
                (fields.name, fields.roll_number, fields.email, int(student_id)),
            )

    def delete_with_attendance(self, student_id: int) -> bool:
        # Single transaction: both deletes commit together or not at all.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE student_id=%s", (int(student_id),))
            cur.execute("DELETE FROM students WHERE id=%s", (int(student_id),))
            return cur.rowcount > 0
