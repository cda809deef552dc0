from __future__ import annotations

from datetime import date, datetime

import mysql.connector
import pytest

from src.classroom_attendance.classroom_attendance.attendance.model import (
    AttendanceEntry,
    AttendanceRecord,
    standing_from_row,
)
from src.classroom_attendance.classroom_attendance.attendance.mysql_attendance_repository import (
    MySQLAttendanceRepository,
)
from src.classroom_attendance.classroom_attendance.core.enums import AttendanceStatus
from src.classroom_attendance.classroom_attendance.core.exceptions import StoreError
from src.classroom_attendance.classroom_attendance.penalties.model import Excused, Unexcused

TEACHER_ID = 1
DAY = date(2026, 3, 10)
CREATED = datetime(2026, 3, 10, 8, 30)


def _row(**overrides) -> dict:
    row = {
        "id": 7,
        "student_id": 3,
        "date": DAY,
        "status": "absent",
        "penalty": 100,
        "is_excused": 0,
        "excuse_reason": None,
        "teacher_id": TEACHER_ID,
        "created_at": CREATED,
    }
    row.update(overrides)
    return row


@pytest.fixture
def repo(conn_factory):
    return MySQLAttendanceRepository(conn_factory)


def test_present_row_loads_without_penalty(repo, conn_factory):
    conn_factory.conn.rows = [_row(status="present", penalty=100)]

    record = repo.get_by_id(7)

    assert record.standing is None
    assert record.penalty == 0
    assert record.is_excused is False


def test_excused_row_never_carries_penalty(repo, conn_factory):
    conn_factory.conn.rows = [_row(penalty=100, is_excused=1, excuse_reason="medical")]

    record = repo.get_by_id(7)

    assert record.standing == Excused(reason="medical")
    assert record.penalty == 0
    assert record.excuse_reason == "medical"


def test_negative_stored_penalty_is_clamped(repo, conn_factory):
    conn_factory.conn.rows = [_row(penalty=-50)]

    [record] = repo.list_for_teacher(TEACHER_ID)

    assert record.standing == Unexcused(penalty=0)


def test_standing_from_row_keeps_unexcused_penalty():
    standing = standing_from_row(AttendanceStatus.ABSENT, penalty=100, is_excused=False, excuse_reason="ignored")

    assert standing == Unexcused(penalty=100)
    assert standing.excuse_reason is None


def test_excused_standing_is_written_as_zero_penalty(repo, conn_factory):
    repo.update_standing(record_id=7, standing=Excused(reason="medical"))

    [(sql, params)] = conn_factory.conn.executed
    assert sql.startswith("UPDATE attendance")
    assert params == (0, 1, "medical", 7)


def test_unexcused_standing_is_written_with_penalty(repo, conn_factory):
    repo.update_standing(record_id=7, standing=Unexcused(penalty=100))

    [(_, params)] = conn_factory.conn.executed
    assert params == (100, 0, None, 7)


def test_excused_row_round_trips_to_same_columns(repo, conn_factory):
    conn_factory.conn.rows = [_row(penalty=100, is_excused=1, excuse_reason="medical")]
    record = repo.get_by_id(7)

    repo.update_standing(record_id=record.record_id, standing=record.standing)

    assert conn_factory.conn.executed[-1][1] == (0, 1, "medical", 7)


def test_replace_for_date_runs_in_one_transaction(repo, conn_factory):
    conn_factory.conn.rowcount = 1
    entries = [
        AttendanceEntry(student_id=3, status=AttendanceStatus.PRESENT),
        AttendanceEntry(student_id=4, status=AttendanceStatus.ABSENT, standing=Unexcused(penalty=100)),
    ]

    replaced, ids = repo.replace_for_date(teacher_id=TEACHER_ID, attendance_date=DAY, entries=entries)

    statements = [sql.split()[0] for sql, _ in conn_factory.conn.executed]
    assert statements == ["DELETE", "INSERT", "INSERT"]
    assert conn_factory.connections == 1
    assert conn_factory.conn.commits == 1
    assert replaced == 1
    assert len(ids) == 2
    assert conn_factory.conn.executed[1][1] == (3, DAY, "present", 0, 0, None, TEACHER_ID)
    assert conn_factory.conn.executed[2][1] == (4, DAY, "absent", 100, 0, None, TEACHER_ID)


def test_lost_connection_during_replace_is_store_error(repo, conn_factory):
    conn_factory.conn.fail_with = mysql.connector.errors.OperationalError(msg="Lost connection to MySQL server")
    conn_factory.conn.rollback_error = mysql.connector.errors.OperationalError(msg="MySQL Connection not available")

    with pytest.raises(StoreError):
        repo.replace_for_date(
            teacher_id=TEACHER_ID,
            attendance_date=DAY,
            entries=[AttendanceEntry(student_id=3, status=AttendanceStatus.PRESENT)],
        )

    assert conn_factory.conn.commits == 0


def test_lost_connection_during_insert_is_store_error(repo, conn_factory):
    conn_factory.conn.fail_with = mysql.connector.errors.OperationalError(msg="Lost connection to MySQL server")
    conn_factory.conn.rollback_error = mysql.connector.errors.OperationalError(msg="MySQL Connection not available")

    with pytest.raises(StoreError):
        repo.insert_many(
            teacher_id=TEACHER_ID,
            attendance_date=DAY,
            entries=[AttendanceEntry(student_id=3, status=AttendanceStatus.PRESENT)],
        )


def test_restore_keeps_original_id_and_created_at(repo, conn_factory):
    record = AttendanceRecord(
        record_id=7,
        student_id=3,
        attendance_date=DAY,
        status=AttendanceStatus.ABSENT,
        teacher_id=TEACHER_ID,
        standing=Excused(reason="medical"),
        created_at=CREATED,
    )

    repo.restore([record])

    [(sql, params)] = conn_factory.conn.executed
    assert "created_at" in sql
    assert params == (7, 3, DAY, "absent", 0, 1, "medical", TEACHER_ID, CREATED)
