"""Runtime configuration.

Settings are read once from the environment at import time. Tests override
them with ``monkeypatch.setattr`` on this module.
"""

import os
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

# --- Storage ---

DB_PATH = Path(os.environ.get("BLOG_ADMIN_DB_PATH", str(ROOT / "data" / "blog_admin.db")))

# --- Analytics ---

DEFAULT_RANK_LIMIT = int(os.environ.get("BLOG_ADMIN_DEFAULT_RANK_LIMIT", "10"))
MAX_RANK_LIMIT = int(os.environ.get("BLOG_ADMIN_MAX_RANK_LIMIT", "100"))
DEFAULT_GRANULARITY = os.environ.get("BLOG_ADMIN_DEFAULT_GRANULARITY", "week")

# Average adult reading speed used for reading-time estimates
READING_WORDS_PER_MINUTE = 225

# Deadline shared by the four aggregations of a combined dashboard request
AGGREGATION_TIMEOUT_SECONDS = float(os.environ.get("BLOG_ADMIN_AGGREGATION_TIMEOUT", "10"))
AGGREGATION_WORKERS = 4

# --- API ---

LOG_LEVEL = os.environ.get("BLOG_ADMIN_LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("BLOG_ADMIN_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
