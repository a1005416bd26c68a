"""Database access layer.

Public functions are re-exported here (``from blog_admin.db import connect``).
"""

from .core import (
    DB_PATH,
    SCHEMA_PATH,
    connect,
    execute,
    init_db,
    table_exists,
)
from .helpers import format_timestamp, parse_timestamp
from .blogs import (
    add_like,
    count_words,
    get_content_records,
    insert_blog,
    insert_user,
    record_view,
    slugify,
)

__all__ = [
    "DB_PATH",
    "SCHEMA_PATH",
    "connect",
    "execute",
    "init_db",
    "table_exists",
    "format_timestamp",
    "parse_timestamp",
    "add_like",
    "count_words",
    "get_content_records",
    "insert_blog",
    "insert_user",
    "record_view",
    "slugify",
]
