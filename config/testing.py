from .config import PENALTY_AMOUNT, RANKING_LIMIT, build_db_config

SECRET_KEY = "test-secret"

DB_CONFIG = build_db_config(default_database="classroom_attendance_test")

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
