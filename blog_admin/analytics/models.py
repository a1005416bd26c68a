"""
Analytics Data Models

Input records, query enums and the immutable result types produced by the
aggregators. Every result is built fresh per call and never mutated.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional, Union


class ContentStatus(str, Enum):
    """Publication state of a blog post."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Granularity(str, Enum):
    """Time-bucketing resolution for trend queries."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class RankMetric(str, Enum):
    """Numeric metric a leaderboard is ordered by."""

    VIEW_COUNT = "viewCount"
    LIKE_COUNT = "likeCount"

    @property
    def attribute(self) -> str:
        """ContentRecord attribute holding this metric."""
        return _METRIC_ATTRIBUTES[self]


_METRIC_ATTRIBUTES = {
    RankMetric.VIEW_COUNT: "view_count",
    RankMetric.LIKE_COUNT: "like_count",
}

# Day buckets key on a date, week and month buckets on (year, number) pairs
BucketKey = Union[date, tuple[int, int]]


def to_utc(ts: datetime) -> datetime:
    """Normalize a datetime to UTC, treating naive values as already UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


@dataclass(frozen=True)
class ContentRecord:
    """
    Read-only view of one blog post as the engine sees it.

    ``created_at`` may be None only when upstream data is corrupt; the
    engine rejects such records with DataIntegrityError instead of
    dropping them.
    """

    id: str
    category: str
    status: ContentStatus
    view_count: int
    like_count: int
    content_length: int
    author_id: str
    created_at: Optional[datetime]
    title: str = ""
    slug: str = ""
    author_name: str = ""

    def __post_init__(self):
        if not isinstance(self.status, ContentStatus):
            object.__setattr__(self, "status", ContentStatus(self.status))


@dataclass(frozen=True)
class TimeWindow:
    """Date-range filter, inclusive on both ends. Open bounds are None."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self):
        if self.start is not None:
            object.__setattr__(self, "start", to_utc(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", to_utc(self.end))

    def contains(self, ts: datetime) -> bool:
        ts = to_utc(ts)
        if self.start is not None and ts < self.start:
            return False
        if self.end is not None and ts > self.end:
            return False
        return True


@dataclass(frozen=True)
class AggregateBucket:
    """Engagement totals for one time bucket."""

    key: BucketKey
    label: str
    count: int
    sum_views: int
    sum_likes: int
    avg_views_per_record: float
    avg_likes_per_record: float
    published_count: int


@dataclass(frozen=True)
class CategoryMetrics:
    """Engagement totals and averages for one category."""

    category: str
    count: int
    sum_views: int
    sum_likes: int
    avg_views_per_record: float
    avg_likes_per_record: float
    avg_reading_minutes: float
    published_count: int


@dataclass(frozen=True)
class OverviewTotals:
    """Corpus-wide totals for the filtered snapshot."""

    total_count: int
    counts_by_status: dict[str, int] = field(default_factory=dict)
    sum_views: int = 0
    sum_likes: int = 0
    distinct_author_count: int = 0
