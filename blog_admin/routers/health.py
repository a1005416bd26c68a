"""Health check endpoint."""

import logging
import sqlite3

from fastapi import APIRouter
from pydantic import BaseModel

from ..db import connect, table_exists
from ..db.core import REQUIRED_TABLES
from ._helpers import utc_now_iso

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str  # "healthy", "degraded"
    database: bool
    missing_tables: list[str] = []
    checked_at: str


@router.get("/health", response_model=HealthResponse)
def get_health():
    """Report database reachability. Public."""
    try:
        con = connect()
        try:
            missing = sorted(name for name in REQUIRED_TABLES if not table_exists(con, name))
        finally:
            con.close()
    except sqlite3.Error as e:
        logger.error(f"Health check could not reach database: {e}")
        return HealthResponse(
            status="degraded",
            database=False,
            checked_at=utc_now_iso(),
        )

    return HealthResponse(
        status="degraded" if missing else "healthy",
        database=True,
        missing_tables=missing,
        checked_at=utc_now_iso(),
    )
