from __future__ import annotations

import logging
import re
from datetime import time
from pathlib import Path
from typing import Iterable

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)


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


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes, skips -- comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False
    in_comment = False

    for i, ch in enumerate(sql):
        if in_comment:
            if ch == "\n":
                in_comment = False
                buf.append(ch)
            continue

        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "-" and not in_single and not in_double and sql[i : i + 2] == "--":
            in_comment = True
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


def _exec_sql(cur, sql: str) -> None:
    for stmt in _iter_sql_statements(sql):
        cur.execute(stmt)


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


def _apply_sql_file(db_config: dict, path: str | Path) -> None:
    target = DBConfig.from_dict(db_config)
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _apply_sql_file(db_config, schema_path)
    logger.info("Applied schema %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _apply_sql_file(db_config, seed_path)
    logger.info("Applied seed %s", seed_path)


def ensure_demo_directory(db_config: dict, *, branch_id: int = 1, branch_name: str = "Main Branch") -> None:
    """Upsert a branch, a morning/evening shift pair and two employees for local testing."""

    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)

        cur.execute(
            "INSERT INTO branches (branch_id, name) VALUES (%s, %s) ON DUPLICATE KEY UPDATE name=VALUES(name)",
            (branch_id, branch_name),
        )

        def upsert_shift(name: str, start: time, end: time) -> int:
            cur.execute("SELECT shift_id FROM shifts WHERE shift_name=%s", (name,))
            row = cur.fetchone()
            if row:
                return int(row["shift_id"])
            cur.execute(
                "INSERT INTO shifts (shift_name, start_time, end_time, branch_id) VALUES (%s, %s, %s, %s)",
                (name, start, end, branch_id),
            )
            return int(cur.lastrowid)

        morning_id = upsert_shift("Morning", time(8, 0), time(16, 0))
        upsert_shift("Evening", time(16, 0), time(0, 0))

        def upsert_employee(number: str, first_name: str, last_name: str) -> None:
            cur.execute("SELECT employee_id FROM employees WHERE employee_number=%s", (number,))
            if cur.fetchone():
                cur.execute(
                    "UPDATE employees SET first_name=%s, last_name=%s, is_active=1 WHERE employee_number=%s",
                    (first_name, last_name, number),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO employees (employee_number, first_name, last_name, branch_id, default_shift_id)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    (number, first_name, last_name, branch_id, morning_id),
                )

        upsert_employee("001", "Ayse", "Kaya")
        upsert_employee("002", "Mehmet", "Demir")

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
