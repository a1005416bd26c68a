"""Core database infrastructure: connect, execute, schema helpers."""

import logging
import sqlite3
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from .. import config

logger = logging.getLogger(__name__)

DB_PATH = config.DB_PATH
SCHEMA_PATH = Path(__file__).resolve().with_name("schema.sql")

REQUIRED_TABLES = {"users", "blogs", "blog_likes"}


def execute(con, sql: str, params: Mapping[str, Any] | Sequence[Any] | None = None):
    cur = con.cursor()
    if params is None:
        cur.execute(sql)
    else:
        cur.execute(sql, params)
    return cur


def table_exists(con, table_name: str) -> bool:
    cur = execute(
        con,
        "SELECT name FROM sqlite_master WHERE type='table' AND name=:table_name",
        {"table_name": table_name},
    )
    return cur.fetchone() is not None


def connect():
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    con = sqlite3.connect(DB_PATH, timeout=30)
    con.execute("PRAGMA journal_mode=WAL")
    con.execute("PRAGMA foreign_keys=ON")
    return con


def init_db():
    con = connect()
    con.executescript(SCHEMA_PATH.read_text(encoding="utf-8"))
    con.commit()
    con.close()
    logger.debug(f"Initialized schema at {DB_PATH}")
