from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from ..penalties.model import Standing
from .model import AttendanceEntry, AttendanceRecord, standing_from_row
from .repository import AttendanceRepository

_COLUMNS = "id, student_id, `date`, status, penalty, is_excused, excuse_reason, teacher_id, created_at"


def _to_record(r: dict) -> AttendanceRecord:
    status = AttendanceStatus(r["status"])
    return AttendanceRecord(
        record_id=int(r["id"]),
        student_id=int(r["student_id"]),
        attendance_date=r["date"],
        status=status,
        teacher_id=int(r["teacher_id"]),
        standing=standing_from_row(
            status,
            penalty=r.get("penalty"),
            is_excused=bool(r.get("is_excused")),
            excuse_reason=r.get("excuse_reason"),
        ),
        created_at=r.get("created_at"),
    )


def _standing_columns(standing: Optional[Standing]) -> tuple:
    if standing is None:
        return (0, 0, None)
    return (int(standing.penalty), int(standing.is_excused), standing.excuse_reason)


def _delete_for_date(cur, *, teacher_id: int, attendance_date: date, student_ids: Sequence[int]) -> int:
    cur.execute(
        f"""
        DELETE FROM attendance
        WHERE teacher_id=%s AND `date`=%s AND student_id IN ({in_clause(student_ids)})
        """,
        (int(teacher_id), attendance_date, *[int(s) for s in student_ids]),
    )
    return int(cur.rowcount)


def _insert_entries(cur, *, teacher_id: int, attendance_date: date, entries: Sequence[AttendanceEntry]) -> list[int]:
    ids: list[int] = []
    for e in entries:
        cur.execute(
            """
            INSERT INTO attendance(student_id, `date`, status, penalty, is_excused, excuse_reason, teacher_id)
            VALUES(%s,%s,%s,%s,%s,%s,%s)
            """,
            (int(e.student_id), attendance_date, e.status.value, *_standing_columns(e.standing), int(teacher_id)),
        )
        ids.append(int(cur.lastrowid))
    return ids


class MySQLAttendanceRepository(AttendanceRepository):
    # DELETE and INSERTs of a submission share one transaction.
    transactional = True

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_teacher(self, teacher_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE teacher_id=%s
                """,
                (int(teacher_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_teacher_and_date(self, teacher_id: int, attendance_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE teacher_id=%s AND `date`=%s
                """,
                (int(teacher_id), attendance_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_student_and_status(self, student_id: int, status: AttendanceStatus) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE student_id=%s AND status=%s
                ORDER BY `date` DESC
                """,
                (int(student_id), status.value),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE id=%s
                """,
                (int(record_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def delete_for_date(self, *, teacher_id: int, attendance_date: date, student_ids: Sequence[int]) -> int:
        if not student_ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            return _delete_for_date(cur, teacher_id=teacher_id, attendance_date=attendance_date, student_ids=student_ids)

    def insert_many(self, *, teacher_id: int, attendance_date: date, entries: Sequence[AttendanceEntry]) -> list[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            return _insert_entries(cur, teacher_id=teacher_id, attendance_date=attendance_date, entries=entries)

    def replace_for_date(
        self,
        *,
        teacher_id: int,
        attendance_date: date,
        entries: Sequence[AttendanceEntry],
    ) -> tuple[int, list[int]]:
        student_ids = [e.student_id for e in entries]
        if not student_ids:
            return 0, []
        with db_cursor(self._conn_factory) as (_, cur):
            replaced = _delete_for_date(
                cur, teacher_id=teacher_id, attendance_date=attendance_date, student_ids=student_ids
            )
            ids = _insert_entries(cur, teacher_id=teacher_id, attendance_date=attendance_date, entries=entries)
        return replaced, ids

    def restore(self, records: Sequence[AttendanceRecord]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            for r in records:
                cur.execute(
                    """
                    INSERT INTO attendance(
                        id, student_id, `date`, status, penalty, is_excused, excuse_reason, teacher_id, created_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,COALESCE(%s, CURRENT_TIMESTAMP))
                    """,
                    (
                        int(r.record_id),
                        int(r.student_id),
                        r.attendance_date,
                        r.status.value,
                        *_standing_columns(r.standing),
                        int(r.teacher_id),
                        r.created_at,
                    ),
                )

    def update_standing(self, *, record_id: int, standing: Standing) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET penalty=%s, is_excused=%s, excuse_reason=%s
                WHERE id=%s
                """,
                (*_standing_columns(standing), int(record_id)),
            )
