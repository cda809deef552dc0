from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_PENALTY_AMOUNT, DEFAULT_RANKING_LIMIT
from .database.connection import DBConfig, DatabaseConnection
from .penalties.model import PenaltyPolicy
from .penalties.service import PenaltyService
from .stats.service import StatsService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import RosterService
from .teachers.mysql_teacher_repository import MySQLTeacherRepository
from .teachers.repository import TeacherRepository
from .teachers.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    teachers_repo: TeacherRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    policy: PenaltyPolicy
    auth_service: AuthService
    roster_service: RosterService
    attendance_service: AttendanceService
    penalty_service: PenaltyService
    stats_service: StatsService


def wire_container(
    *,
    teachers_repo: TeacherRepository,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    penalty_amount: int = DEFAULT_PENALTY_AMOUNT,
    ranking_limit: int = DEFAULT_RANKING_LIMIT,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of any repository implementations (MySQL or in-memory)."""

    policy = PenaltyPolicy(amount=int(penalty_amount))

    return Container(
        conn=conn,
        teachers_repo=teachers_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        policy=policy,
        auth_service=AuthService(teachers_repo),
        roster_service=RosterService(students_repo),
        attendance_service=AttendanceService(attendance_repo, students_repo, policy=policy),
        penalty_service=PenaltyService(attendance_repo, students_repo, policy=policy),
        stats_service=StatsService(students_repo, attendance_repo, ranking_limit=ranking_limit),
    )


def build_container(
    *,
    db_config: dict,
    penalty_amount: int = DEFAULT_PENALTY_AMOUNT,
    ranking_limit: int = DEFAULT_RANKING_LIMIT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        teachers_repo=MySQLTeacherRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        penalty_amount=penalty_amount,
        ranking_limit=ranking_limit,
        conn=conn,
    )
