"""
Analytics Aggregation Engine

Pure aggregations over an in-memory snapshot of content records:
- Overview totals (counts by status, sums, distinct authors)
- Ranked leaderboards by views or likes
- Day/week/month engagement trends
- Per-category performance
"""

from .bucketing import bucket_key, bucket_label
from .categories import category_performance, reading_minutes
from .errors import (
    AggregationTimeout,
    AnalyticsError,
    AnalyticsValidationError,
    DataIntegrityError,
)
from .models import (
    AggregateBucket,
    CategoryMetrics,
    ContentRecord,
    ContentStatus,
    Granularity,
    OverviewTotals,
    RankMetric,
    TimeWindow,
)
from .overview import overview
from .params import parse_granularity, parse_limit, parse_metric, parse_window
from .ranking import metric_value, rank
from .service import AnalyticsQuery, DashboardResult, compute_dashboard
from .trends import trends
from .window import filter_window

__all__ = [
    # Models
    "AggregateBucket",
    "CategoryMetrics",
    "ContentRecord",
    "ContentStatus",
    "Granularity",
    "OverviewTotals",
    "RankMetric",
    "TimeWindow",
    # Errors
    "AnalyticsError",
    "AnalyticsValidationError",
    "DataIntegrityError",
    "AggregationTimeout",
    # Aggregators
    "bucket_key",
    "bucket_label",
    "filter_window",
    "rank",
    "metric_value",
    "trends",
    "category_performance",
    "reading_minutes",
    "overview",
    # Orchestration
    "AnalyticsQuery",
    "DashboardResult",
    "compute_dashboard",
    # Parameters
    "parse_window",
    "parse_granularity",
    "parse_metric",
    "parse_limit",
]
