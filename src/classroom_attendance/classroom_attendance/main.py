from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, ensure_demo_teacher, list_tables
from .penalties.controller import register as register_penalties
from .stats.controller import register as register_stats
from .students.controller import register as register_students
from .teachers.controller import register as register_teachers

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    ``container`` lets tests inject services wired to in-memory repositories;
    otherwise MySQL repositories are built from ``DB_CONFIG``.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_teacher(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            penalty_amount=int(getattr(settings, "PENALTY_AMOUNT", 100)),
            ranking_limit=int(getattr(settings, "RANKING_LIMIT", 5)),
        )

    app.extensions["classroom_attendance"] = container

    register_teachers(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_penalties(app, container)
    register_stats(app, container)

    @app.errorhandler(404)
    def not_found(_e):
        return jsonify({"success": False, "message": "Not found"}), 404

    @app.errorhandler(500)
    def internal_error(_e):
        return jsonify({"success": False, "message": "Unexpected server error"}), 500

    return app
