import os

from .config import LOG_LEVEL, PENALTY_AMOUNT, RANKING_LIMIT, build_db_config, env_bool

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = build_db_config()

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "1")
# Optional: also seed a demo teacher on startup
AUTO_SEED_DB = env_bool("AUTO_SEED_DB", "0")
