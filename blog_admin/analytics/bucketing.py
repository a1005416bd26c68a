"""
Time Bucketer

Maps a record timestamp to the bucket key for a granularity. All date
arithmetic for trends lives here so day, week and month share one tested
implementation.
"""

from datetime import datetime

from .errors import DataIntegrityError
from .models import BucketKey, Granularity, to_utc


def bucket_key(timestamp: datetime, granularity: Granularity) -> BucketKey:
    """
    Get the bucket key for a timestamp.

    Args:
        timestamp: Record timestamp; naive values are treated as UTC
        granularity: Bucket resolution

    Returns:
        ``date`` for day buckets, ``(iso_year, iso_week)`` for week buckets,
        ``(year, month)`` for month buckets. Keys of one granularity sort
        chronologically.

    Raises:
        DataIntegrityError: If timestamp is None
    """
    if timestamp is None:
        raise DataIntegrityError(None, "cannot bucket a missing timestamp")

    ts = to_utc(timestamp)
    granularity = Granularity(granularity)

    if granularity is Granularity.DAY:
        return ts.date()
    if granularity is Granularity.WEEK:
        iso = ts.isocalendar()
        return (iso.year, iso.week)
    return (ts.year, ts.month)


def bucket_label(key: BucketKey, granularity: Granularity) -> str:
    """Format a bucket key for display (2023-01-15, 2023-W02, 2023-01)."""
    granularity = Granularity(granularity)
    if granularity is Granularity.DAY:
        return key.isoformat()
    year, number = key
    if granularity is Granularity.WEEK:
        return f"{year:04d}-W{number:02d}"
    return f"{year:04d}-{number:02d}"
