"""
Category Aggregator

Per-category performance: counts, engagement totals, per-record averages
and an average reading-time estimate.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from .. import config
from .models import CategoryMetrics, ContentRecord, ContentStatus, TimeWindow
from .window import filter_window


def reading_minutes(content_length: int) -> int:
    """Estimated reading time in whole minutes, rounded up."""
    return math.ceil(content_length / config.READING_WORDS_PER_MINUTE)


@dataclass
class _CategoryAccumulator:
    count: int = 0
    sum_views: int = 0
    sum_likes: int = 0
    sum_reading_minutes: int = 0
    published_count: int = 0

    def add(self, record: ContentRecord) -> None:
        self.count += 1
        self.sum_views += record.view_count
        self.sum_likes += record.like_count
        self.sum_reading_minutes += reading_minutes(record.content_length)
        if record.status is ContentStatus.PUBLISHED:
            self.published_count += 1

    def freeze(self, category: str) -> CategoryMetrics:
        return CategoryMetrics(
            category=category,
            count=self.count,
            sum_views=self.sum_views,
            sum_likes=self.sum_likes,
            avg_views_per_record=round(self.sum_views / self.count, 2),
            avg_likes_per_record=round(self.sum_likes / self.count, 2),
            avg_reading_minutes=round(self.sum_reading_minutes / self.count, 2),
            published_count=self.published_count,
        )


def category_performance(
    records: Iterable[ContentRecord],
    window: Optional[TimeWindow] = None,
) -> list[CategoryMetrics]:
    """
    Aggregate engagement per category.

    The category string is used as-is: an empty category is its own group
    and no case folding or trimming happens here. Reading time is estimated
    per record and then averaged, so one very long post weighs the same as
    any other post.

    Args:
        records: Snapshot to aggregate
        window: Optional inclusive date range

    Returns:
        Metrics sorted by total views descending, then category name
    """
    accumulators: dict[str, _CategoryAccumulator] = {}
    for record in filter_window(records, window):
        category = record.category or ""
        accumulators.setdefault(category, _CategoryAccumulator()).add(record)

    metrics = [acc.freeze(category) for category, acc in accumulators.items()]
    metrics.sort(key=lambda m: (-m.sum_views, m.category))
    return metrics
