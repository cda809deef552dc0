from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

DEMO_TEACHER_EMAIL = "teacher@example.com"
DEMO_TEACHER_PASSWORD = "teacher123"

DEMO_ROSTER = [
    ("Aarav Sharma", "01", "aarav@example.com"),
    ("Bianca Rossi", "02", "bianca@example.com"),
    ("Chen Wei", "03", "chen@example.com"),
]


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes and '--' comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for line in sql.splitlines(keepends=True):
        if not in_single and not in_double and line.lstrip().startswith("--"):
            continue

        for ch in line:
            if escape:
                buf.append(ch)
                escape = False
                continue

            if ch == "\\":
                buf.append(ch)
                escape = True
                continue

            if ch == "'" and not in_double:
                in_single = not in_single
                buf.append(ch)
                continue

            if ch == '"' and not in_single:
                in_double = not in_double
                buf.append(ch)
                continue

            if ch == ";" and not in_single and not in_double:
                stmt = "".join(buf).strip()
                buf.clear()
                if stmt:
                    yield stmt
                continue

            buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)

    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_demo_teacher(db_config: dict) -> int:
    """Create (or reset) the demo teacher and give them a small roster.

    Returns the demo teacher's id.
    """

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        password_hash = generate_password_hash(DEMO_TEACHER_PASSWORD)
        cur.execute("SELECT id FROM teachers WHERE email=%s", (DEMO_TEACHER_EMAIL,))
        existing = cur.fetchone()
        if existing:
            teacher_id = int(existing["id"])
            cur.execute(
                "UPDATE teachers SET password_hash=%s, is_active=1 WHERE id=%s",
                (password_hash, teacher_id),
            )
        else:
            cur.execute(
                "INSERT INTO teachers (email, password_hash, full_name) VALUES (%s, %s, %s)",
                (DEMO_TEACHER_EMAIL, password_hash, "Demo Teacher"),
            )
            teacher_id = int(cur.lastrowid)

        for name, roll_number, email in DEMO_ROSTER:
            cur.execute(
                "SELECT id FROM students WHERE teacher_id=%s AND roll_number=%s",
                (teacher_id, roll_number),
            )
            if cur.fetchone():
                continue
            cur.execute(
                "INSERT INTO students (name, roll_number, email, teacher_id) VALUES (%s, %s, %s, %s)",
                (name, roll_number, email, teacher_id),
            )

        conn.commit()
        return teacher_id
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
