"""Shared helper functions for the db package."""

from datetime import UTC, datetime
from typing import Optional

# Fixed-width UTC format so stored timestamps sort lexicographically
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def _utc_now_iso() -> str:
    return datetime.now(UTC).strftime(TIMESTAMP_FORMAT)


def format_timestamp(ts: datetime) -> str:
    """Format a datetime for storage. Naive values are treated as UTC."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored timestamp. Empty values come back as None."""
    if not value:
        return None
    ts = datetime.fromisoformat(value)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC)
