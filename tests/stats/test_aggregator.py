from __future__ import annotations

from datetime import date

import pytest

from src.classroom_attendance.classroom_attendance.attendance.model import AttendanceRecord
from src.classroom_attendance.classroom_attendance.core.enums import AttendanceStatus
from src.classroom_attendance.classroom_attendance.penalties.model import Excused, Unexcused
from src.classroom_attendance.classroom_attendance.stats.aggregator import (
    compute_stats,
    compute_totals,
    rank_most_absent,
    rank_most_present,
)
from src.classroom_attendance.classroom_attendance.students.model import Student

P = AttendanceStatus.PRESENT
A = AttendanceStatus.ABSENT


def _student(student_id: int, roll: str) -> Student:
    return Student(student_id=student_id, name=f"S{student_id}", roll_number=roll, email=f"s{student_id}@x.io", teacher_id=1)


_next_id = iter(range(1, 10_000))


def _rec(student_id: int, day: int, status: AttendanceStatus, standing=None) -> AttendanceRecord:
    if status == A and standing is None:
        standing = Unexcused(penalty=100)
    return AttendanceRecord(
        record_id=next(_next_id),
        student_id=student_id,
        attendance_date=date(2026, 3, day),
        status=status,
        teacher_id=1,
        standing=standing,
    )


def test_student_without_records_has_zero_percentage():
    [stats] = compute_stats([_student(1, "01")], [])

    assert stats.total_days == 0
    assert stats.attendance_percentage == 0
    assert stats.total_penalty == 0


def test_two_present_one_unexcused_absence():
    records = [_rec(1, 1, P), _rec(1, 2, P), _rec(1, 3, A)]

    [stats] = compute_stats([_student(1, "01")], records)

    assert (stats.present_days, stats.absent_days, stats.total_days) == (2, 1, 3)
    assert stats.attendance_percentage == pytest.approx(66.67, abs=0.01)
    assert stats.total_penalty == 100


def test_excused_absence_contributes_no_penalty():
    records = [_rec(1, 1, P), _rec(1, 2, P), _rec(1, 3, A, Excused(reason="medical"))]

    [stats] = compute_stats([_student(1, "01")], records)

    assert stats.absent_days == 1
    assert stats.total_penalty == 0


def test_present_plus_absent_equals_total_for_every_student():
    students = [_student(1, "01"), _student(2, "02"), _student(3, "03")]
    records = [_rec(1, 1, P), _rec(1, 2, A), _rec(2, 1, A), _rec(2, 2, A), _rec(2, 3, P)]

    for s in compute_stats(students, records):
        assert s.present_days + s.absent_days == s.total_days


def test_records_for_unknown_students_are_ignored():
    records = [_rec(1, 1, P), _rec(99, 1, A)]

    stats = compute_stats([_student(1, "01")], records)

    assert len(stats) == 1
    assert stats[0].total_days == 1


def test_results_follow_roster_order():
    students = [_student(3, "01"), _student(1, "02")]

    stats = compute_stats(students, [_rec(1, 1, P)])

    assert [s.student_id for s in stats] == [3, 1]


def test_totals_count_only_today(fixed_today):
    students = [_student(1, "01"), _student(2, "02"), _student(3, "03")]
    records = [_rec(1, 10, P), _rec(2, 10, P), _rec(3, 10, A), _rec(3, 9, A)]
    stats = compute_stats(students, records)

    totals = compute_totals(students, records, stats, today=fixed_today)

    assert totals.total_students == 3
    assert totals.today_present == 2
    assert totals.today_absent == 1
    assert totals.unmarked_today == 0
    assert totals.total_penalties == 200


def test_unmarked_counts_students_without_a_record_today(fixed_today):
    students = [_student(1, "01"), _student(2, "02"), _student(3, "03")]
    records = [_rec(1, 10, P)]

    totals = compute_totals(students, records, compute_stats(students, records), today=fixed_today)

    assert totals.unmarked_today == 2


def test_rankings_exclude_zero_counts_and_keep_roster_order_on_ties():
    students = [_student(i, f"0{i}") for i in range(1, 5)]
    records = [
        _rec(1, 1, P),
        _rec(2, 1, P), _rec(2, 2, P),
        _rec(3, 1, P),
        _rec(4, 1, A),
    ]
    stats = compute_stats(students, records)

    assert [s.student_id for s in rank_most_present(stats)] == [2, 1, 3]
    assert [s.student_id for s in rank_most_absent(stats)] == [4]


def test_rankings_truncate_to_limit():
    students = [_student(i, f"{i:02d}") for i in range(1, 9)]
    records = [_rec(i, 1, A) for i in range(1, 9)]
    stats = compute_stats(students, records)

    top = rank_most_absent(stats)

    assert [s.student_id for s in top] == [1, 2, 3, 4, 5]
    assert len(rank_most_absent(stats, limit=2)) == 2
