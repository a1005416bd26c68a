"""
Ranking Engine

Top-N leaderboards over a snapshot, ordered by a numeric metric with a
deterministic tie-break.
"""

from collections.abc import Iterable
from typing import Optional

from .models import ContentRecord, RankMetric, TimeWindow, to_utc
from .window import filter_window


def metric_value(record: ContentRecord, metric: RankMetric) -> int:
    """Get the value of a ranking metric for a record."""
    return getattr(record, RankMetric(metric).attribute)


def rank(
    records: Iterable[ContentRecord],
    metric: RankMetric,
    limit: int,
    window: Optional[TimeWindow] = None,
) -> list[ContentRecord]:
    """
    Rank records by a metric.

    Order is metric descending, then created_at descending (newest first),
    then id ascending. The input is not modified.

    Args:
        records: Snapshot to rank
        metric: viewCount or likeCount
        limit: Maximum number of records; zero or negative returns []
        window: Optional inclusive date range applied first

    Returns:
        New list of at most ``limit`` records
    """
    metric = RankMetric(metric)
    candidates = filter_window(records, window)
    if limit <= 0:
        return []

    # Stable sorts applied from the least to the most significant key
    ordered = sorted(candidates, key=lambda r: str(r.id))
    ordered.sort(key=lambda r: to_utc(r.created_at), reverse=True)
    ordered.sort(key=lambda r: metric_value(r, metric), reverse=True)
    return ordered[:limit]
