"""
Trend Aggregator

Groups a snapshot into day, week or month buckets and computes
per-bucket engagement totals and averages.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from .bucketing import bucket_key, bucket_label
from .models import (
    AggregateBucket,
    BucketKey,
    ContentRecord,
    ContentStatus,
    Granularity,
    TimeWindow,
)
from .window import filter_window

logger = logging.getLogger(__name__)


@dataclass
class _BucketAccumulator:
    count: int = 0
    sum_views: int = 0
    sum_likes: int = 0
    published_count: int = 0

    def add(self, record: ContentRecord) -> None:
        self.count += 1
        self.sum_views += record.view_count
        self.sum_likes += record.like_count
        if record.status is ContentStatus.PUBLISHED:
            self.published_count += 1

    def freeze(self, key: BucketKey, granularity: Granularity) -> AggregateBucket:
        return AggregateBucket(
            key=key,
            label=bucket_label(key, granularity),
            count=self.count,
            sum_views=self.sum_views,
            sum_likes=self.sum_likes,
            avg_views_per_record=round(self.sum_views / self.count, 2),
            avg_likes_per_record=round(self.sum_likes / self.count, 2),
            published_count=self.published_count,
        )


def trends(
    records: Iterable[ContentRecord],
    granularity: Granularity = Granularity.WEEK,
    window: Optional[TimeWindow] = None,
) -> list[AggregateBucket]:
    """
    Compute engagement trends over time.

    Buckets exist only for periods that contain records; callers wanting a
    continuous axis fill the gaps from the returned keys.

    Args:
        records: Snapshot to aggregate
        granularity: day, week or month
        window: Optional inclusive date range

    Returns:
        Buckets in chronological order
    """
    granularity = Granularity(granularity)
    accumulators: dict[BucketKey, _BucketAccumulator] = {}

    for record in filter_window(records, window):
        key = bucket_key(record.created_at, granularity)
        accumulators.setdefault(key, _BucketAccumulator()).add(record)

    buckets = [accumulators[key].freeze(key, granularity) for key in sorted(accumulators)]
    logger.debug(f"Built {len(buckets)} {granularity.value} buckets")
    return buckets
