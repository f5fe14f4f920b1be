from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

from .connection import DatabaseConnection, DBConfig
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

# Quoted strings are kept whole so a ';' inside a literal never ends a statement.
_TOKEN = re.compile(
    r"""'(?:\\.|''|[^'\\])*'|"(?:\\.|[^"\\])*"|--[^\n]*|;|[^'";-]+|.""",
    re.DOTALL,
)
# The database name comes from DB_CONFIG, never from the schema file.
_DATABASE_STATEMENT = re.compile(r"(?i)^(CREATE\s+DATABASE|USE)\b")


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a schema script into statements, dropping ``--`` comments."""
    current: list[str] = []
    for match in _TOKEN.finditer(sql):
        token = match.group(0)
        if token.startswith("--"):
            continue
        if token != ";":
            current.append(token)
            continue
        statement = "".join(current).strip()
        current = []
        if statement:
            yield statement
    tail = "".join(current).strip()
    if tail:
        yield tail


def _ensure_database(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping[str, Any], *, schema_path: Optional[str | Path] = None) -> list[str]:
    """Create the database and the ``documents`` table if missing.

    Safe to run repeatedly. Returns the tables present afterwards.
    """

    conn_factory = DatabaseConnection(DBConfig.from_mapping(db_config))
    _ensure_database(conn_factory)

    script = Path(schema_path or SCHEMA_PATH).read_text(encoding="utf-8")
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for statement in iter_sql_statements(script):
            if _DATABASE_STATEMENT.match(statement):
                continue
            cur.execute(statement)
        cur.execute("SHOW TABLES")
        tables = [row[0] for row in cur.fetchall()]

    logger.info("Schema applied to %s (tables=%s)", conn_factory.config.describe(), len(tables))
    return tables
