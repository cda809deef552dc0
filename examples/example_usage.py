"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the rules live in the services and the
aggregator.
"""

import importlib

from config import get_settings_module

from src.classroom_attendance.classroom_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, penalty_amount=settings.PENALTY_AMOUNT)

    board = container.stats_service.dashboard(teacher_id=1)
    print(board.totals)
    for s in board.most_absent:
        print(f"{s.student.roll_number} {s.student.name}: {s.absent_days} absent, penalty {s.total_penalty}")


if __name__ == "__main__":
    main()
