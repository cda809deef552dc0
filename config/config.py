"""Environment helpers shared by the settings modules."""

import os


def env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def build_db_config(*, default_password: str = "", default_database: str = "classroom_attendance") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": env_int("DB_PORT", 3306),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", default_database),
    }


# Charge for one unexcused absence.
PENALTY_AMOUNT = env_int("PENALTY_AMOUNT", 100)
RANKING_LIMIT = env_int("RANKING_LIMIT", 5)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
