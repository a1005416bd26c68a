"""
Dashboard Orchestration

Runs the four aggregators against one snapshot and one window in parallel
and assembles a single, mutually consistent result.
"""

import logging
import time
from collections.abc import Iterable
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Optional

from .. import config
from .categories import category_performance
from .errors import AggregationTimeout
from .models import (
    AggregateBucket,
    CategoryMetrics,
    ContentRecord,
    Granularity,
    OverviewTotals,
    RankMetric,
    TimeWindow,
)
from .overview import overview
from .ranking import rank
from .trends import trends

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyticsQuery:
    """Parsed parameters shared by every aggregation of one request."""

    window: Optional[TimeWindow] = None
    granularity: Granularity = Granularity.WEEK
    metric: RankMetric = RankMetric.VIEW_COUNT
    limit: int = field(default_factory=lambda: config.DEFAULT_RANK_LIMIT)


@dataclass(frozen=True)
class DashboardResult:
    """Outputs of all four aggregators for the same snapshot and window."""

    query: AnalyticsQuery
    overview: OverviewTotals
    ranking: list[ContentRecord]
    trends: list[AggregateBucket]
    categories: list[CategoryMetrics]


def compute_dashboard(
    records: Iterable[ContentRecord],
    query: Optional[AnalyticsQuery] = None,
    timeout: Optional[float] = None,
) -> DashboardResult:
    """
    Compute overview, ranking, trends and category performance together.

    The aggregators share no mutable state, so they run concurrently over
    the same frozen snapshot. One deadline covers all of them: if it
    passes, outstanding work is cancelled and nothing is returned.

    Args:
        records: Snapshot to aggregate (materialized once here)
        query: Window, granularity, metric and limit (defaults if None)
        timeout: Deadline in seconds (default: AGGREGATION_TIMEOUT_SECONDS)

    Returns:
        DashboardResult

    Raises:
        AggregationTimeout: If the deadline passes first
        DataIntegrityError: If any record lacks created_at
    """
    query = query or AnalyticsQuery()
    timeout = config.AGGREGATION_TIMEOUT_SECONDS if timeout is None else timeout
    snapshot = tuple(records)
    started = time.monotonic()

    jobs = {
        "overview": lambda: overview(snapshot, query.window),
        "ranking": lambda: rank(snapshot, query.metric, query.limit, query.window),
        "trends": lambda: trends(snapshot, query.granularity, query.window),
        "categories": lambda: category_performance(snapshot, query.window),
    }

    executor = ThreadPoolExecutor(
        max_workers=config.AGGREGATION_WORKERS,
        thread_name_prefix="analytics",
    )
    try:
        futures = {name: executor.submit(job) for name, job in jobs.items()}
        done, pending = wait(futures.values(), timeout=timeout, return_when=FIRST_EXCEPTION)

        # Fail closed: a single failed aggregator voids the whole response
        for name, future in futures.items():
            if future in done and future.exception() is not None:
                for other in pending:
                    other.cancel()
                logger.error(f"Dashboard aggregation '{name}' failed: {future.exception()}")
                raise future.exception()

        if pending:
            for future in pending:
                future.cancel()
            logger.error(
                f"Dashboard aggregation timed out after {timeout}s "
                f"({len(pending)} of {len(futures)} pending)"
            )
            raise AggregationTimeout(timeout)

        results = {name: future.result() for name, future in futures.items()}
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    elapsed_ms = (time.monotonic() - started) * 1000
    logger.info(
        f"Computed dashboard over {len(snapshot)} records "
        f"({results['overview'].total_count} in window) in {elapsed_ms:.1f}ms"
    )

    return DashboardResult(query=query, **results)
