from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.classroom_attendance.classroom_attendance.attendance.model import AttendanceRecord
from src.classroom_attendance.classroom_attendance.core.enums import AttendanceStatus
from src.classroom_attendance.classroom_attendance.core.exceptions import StoreError
from src.classroom_attendance.classroom_attendance.students.model import Student
from src.classroom_attendance.classroom_attendance.teachers.model import Teacher

TEACHER_ID = 1
OTHER_TEACHER_ID = 2


class InMemoryTeachers:
    def __init__(self):
        self._by_id: dict[int, Teacher] = {}

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        return self._by_id.get(teacher_id)

    def get_by_email(self, email: str) -> Optional[Teacher]:
        return next((t for t in self._by_id.values() if t.email == email), None)

    def create_teacher(self, *, email: str, password_hash: str, full_name=None) -> int:
        teacher_id = len(self._by_id) + 1
        self._by_id[teacher_id] = Teacher(
            teacher_id=teacher_id, email=email, password_hash=password_hash, full_name=full_name
        )
        return teacher_id


class InMemoryAttendance:
    def __init__(self, *, transactional: bool = False):
        self.transactional = transactional
        self.records: dict[int, AttendanceRecord] = {}
        self._id = 0
        self.fail_insert = False
        self.fail_restore = False
        self.standing_updates = 0

    def add(self, *, student_id: int, attendance_date: date, status: AttendanceStatus, teacher_id: int = TEACHER_ID, standing=None) -> AttendanceRecord:
        self._id += 1
        rec = AttendanceRecord(
            record_id=self._id,
            student_id=student_id,
            attendance_date=attendance_date,
            status=status,
            teacher_id=teacher_id,
            standing=standing,
        )
        self.records[rec.record_id] = rec
        return rec

    def list_for_teacher(self, teacher_id: int):
        return [r for r in self.records.values() if r.teacher_id == teacher_id]

    def list_for_teacher_and_date(self, teacher_id: int, attendance_date: date):
        return [r for r in self.list_for_teacher(teacher_id) if r.attendance_date == attendance_date]

    def list_for_student_and_status(self, student_id: int, status: AttendanceStatus):
        items = [r for r in self.records.values() if r.student_id == student_id and r.status == status]
        items.sort(key=lambda r: r.attendance_date, reverse=True)
        return items

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        return self.records.get(record_id)

    def delete_for_date(self, *, teacher_id: int, attendance_date: date, student_ids) -> int:
        doomed = [
            r.record_id
            for r in self.list_for_teacher_and_date(teacher_id, attendance_date)
            if r.student_id in set(student_ids)
        ]
        for record_id in doomed:
            del self.records[record_id]
        return len(doomed)

    def delete_for_student(self, student_id: int) -> None:
        for record_id in [r.record_id for r in self.records.values() if r.student_id == student_id]:
            del self.records[record_id]

    def insert_many(self, *, teacher_id: int, attendance_date: date, entries) -> list[int]:
        if self.fail_insert:
            raise StoreError("insert failed")
        return [
            self.add(
                student_id=e.student_id,
                attendance_date=attendance_date,
                status=e.status,
                teacher_id=teacher_id,
                standing=e.standing,
            ).record_id
            for e in entries
        ]

    def replace_for_date(self, *, teacher_id: int, attendance_date: date, entries):
        if self.fail_insert:
            raise StoreError("transaction rolled back")
        replaced = self.delete_for_date(
            teacher_id=teacher_id,
            attendance_date=attendance_date,
            student_ids=[e.student_id for e in entries],
        )
        return replaced, self.insert_many(teacher_id=teacher_id, attendance_date=attendance_date, entries=entries)

    def restore(self, records) -> None:
        if self.fail_restore:
            raise StoreError("restore failed")
        for r in records:
            self.records[r.record_id] = r

    def update_standing(self, *, record_id: int, standing) -> None:
        self.standing_updates += 1
        self.records[record_id] = replace(self.records[record_id], standing=standing)


class InMemoryStudents:
    def __init__(self, attendance: InMemoryAttendance):
        self._attendance = attendance
        self.students: dict[int, Student] = {}
        self._id = 0

    def add(self, name: str, roll_number: str, teacher_id: int = TEACHER_ID) -> Student:
        self._id += 1
        s = Student(
            student_id=self._id,
            name=name,
            roll_number=roll_number,
            email=f"{name.lower().replace(' ', '.')}@example.com",
            teacher_id=teacher_id,
            created_at=datetime(2026, 1, 5, 8, 0),
        )
        self.students[s.student_id] = s
        return s

    def list_for_teacher(self, teacher_id: int):
        items = [s for s in self.students.values() if s.teacher_id == teacher_id]
        items.sort(key=lambda s: s.roll_number)
        return items

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self.students.get(student_id)

    def create(self, *, teacher_id: int, fields) -> int:
        self._id += 1
        self.students[self._id] = Student(
            student_id=self._id,
            name=fields.name,
            roll_number=fields.roll_number,
            email=fields.email,
            teacher_id=teacher_id,
        )
        return self._id

    def update(self, *, student_id: int, fields) -> None:
        self.students[student_id] = replace(
            self.students[student_id], name=fields.name, roll_number=fields.roll_number, email=fields.email
        )

    def delete_with_attendance(self, student_id: int) -> bool:
        if student_id not in self.students:
            return False
        self._attendance.delete_for_student(student_id)
        del self.students[student_id]
        return True


@pytest.fixture
def fixed_today() -> date:
    return date(2026, 3, 10)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def students_repo(attendance_repo) -> InMemoryStudents:
    return InMemoryStudents(attendance_repo)


@pytest.fixture
def teachers_repo() -> InMemoryTeachers:
    return InMemoryTeachers()


@pytest.fixture
def roster(students_repo) -> list[Student]:
    """Three students for TEACHER_ID plus one belonging to another teacher."""

    students = [
        students_repo.add("Alice Ng", "01"),
        students_repo.add("Bilal Khan", "02"),
        students_repo.add("Chiara Conti", "03"),
    ]
    students_repo.add("Dario Fo", "01", teacher_id=OTHER_TEACHER_ID)
    return students


class FakeCursor:
    """Records executed statements; ``fail_with`` makes ``execute`` raise."""

    def __init__(self, conn: "FakeConnection"):
        self._conn = conn
        self.rowcount = 0
        self.lastrowid = None

    def execute(self, sql: str, params=()) -> None:
        if self._conn.fail_with is not None:
            raise self._conn.fail_with
        self._conn.executed.append((" ".join(sql.split()), tuple(params)))
        self.rowcount = self._conn.rowcount
        self._conn.next_id += 1
        self.lastrowid = self._conn.next_id

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return list(self._conn.rows)

    def close(self) -> None:
        pass


class FakeConnection:
    def __init__(self):
        self.rows: list[dict] = []
        self.rowcount = 0
        self.next_id = 0
        self.executed: list[tuple[str, tuple]] = []
        self.fail_with: Optional[Exception] = None
        self.rollback_error: Optional[Exception] = None
        self.close_error: Optional[Exception] = None
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary: bool = True) -> FakeCursor:
        return FakeCursor(self)

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1
        if self.rollback_error is not None:
            raise self.rollback_error

    def close(self) -> None:
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


class FakeConnectionFactory:
    """Stands in for ``DatabaseConnection``; every ``connect`` returns the same connection."""

    def __init__(self):
        self.conn = FakeConnection()
        self.connections = 0
        self.connect_error: Optional[Exception] = None

    def connect(self) -> FakeConnection:
        if self.connect_error is not None:
            raise self.connect_error
        self.connections += 1
        return self.conn


@pytest.fixture
def conn_factory() -> FakeConnectionFactory:
    return FakeConnectionFactory()
