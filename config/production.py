import os

from .config import LOG_LEVEL, PENALTY_AMOUNT, RANKING_LIMIT, build_db_config, env_bool

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = build_db_config()

DEBUG = False

AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_bool("AUTO_SEED_DB", "0")
