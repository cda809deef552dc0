from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.classroom_attendance.classroom_attendance.database.bootstrap import (
    DEMO_TEACHER_EMAIL,
    DEMO_TEACHER_PASSWORD,
    ensure_demo_teacher,
)


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    teacher_id = ensure_demo_teacher(db_config)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(teacher_id={teacher_id}, login={DEMO_TEACHER_EMAIL} / {DEMO_TEACHER_PASSWORD})"
    )


if __name__ == "__main__":
    main()
