from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, Optional

from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)


def strip_create_db_and_use(sql: str) -> str:
    # DB name comes from DB_CONFIG, not from the file
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a .sql file on ';' outside quotes; ``--`` line comments are dropped."""
    statement: list[str] = []
    quote: Optional[str] = None
    i, n = 0, len(sql)

    while i < n:
        ch = sql[i]
        if quote:
            statement.append(ch)
            if ch == "\\" and i + 1 < n:
                statement.append(sql[i + 1])
                i += 1
            elif ch == quote:
                quote = None
        elif ch in ("'", '"', "`"):
            quote = ch
            statement.append(ch)
        elif sql.startswith("--", i):
            newline = sql.find("\n", i)
            i = n if newline < 0 else newline
            continue
        elif ch == ";":
            text = "".join(statement).strip()
            if text:
                yield text
            statement = []
        else:
            statement.append(ch)
        i += 1

    text = "".join(statement).strip()
    if text:
        yield text


def _connect(target: DBConfig, *, with_database: bool = True):
    return DatabaseConnection(target).connect(with_database=with_database)


def _run_sql_file(db_config: dict, path: str | Path) -> int:
    target = DBConfig.from_dict(db_config)
    sql = strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    count = 0
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


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
    n = _run_sql_file(db_config, schema_path)
    logger.info("Applied schema %s (%d statements)", schema_path, n)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    n = _run_sql_file(db_config, seed_path)
    logger.info("Applied seed %s (%d statements)", seed_path, n)


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
