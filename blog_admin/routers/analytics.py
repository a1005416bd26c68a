"""
Analytics API Router

Admin-dashboard endpoints over the analytics engine. Each request loads one
snapshot from the database and aggregates it in-process; nothing computed
here is stored.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from .. import config
from ..analytics import (
    AggregateBucket,
    AnalyticsQuery,
    CategoryMetrics,
    ContentRecord,
    DashboardResult,
    OverviewTotals,
    RankMetric,
    category_performance,
    compute_dashboard,
    metric_value,
    overview,
    parse_granularity,
    parse_limit,
    parse_metric,
    parse_window,
    rank,
    trends,
)
from ..auth.models import UserRole
from ..auth.rbac import RoleChecker
from ..db import get_content_records
from ._helpers import iso_utc, utc_now_iso

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/analytics",
    tags=["Analytics"],
    dependencies=[Depends(RoleChecker(UserRole.EDITOR))],
)


# --- Pydantic Models ---


class DateRange(BaseModel):
    startDate: Optional[str] = None
    endDate: Optional[str] = None


class StatusCounts(BaseModel):
    draft: int
    published: int
    archived: int


class OverviewResponse(BaseModel):
    totalCount: int
    countsByStatus: StatusCounts
    sumViews: int
    sumLikes: int
    distinctAuthorCount: int
    dateRange: DateRange


class RankingEntry(BaseModel):
    id: str
    metricValue: int
    createdAt: str
    title: str
    slug: str
    category: str
    status: str
    viewCount: int
    likeCount: int
    authorName: str


class RankingResponse(BaseModel):
    metric: str
    limit: int
    items: list[RankingEntry]
    dateRange: DateRange


class TrendBucket(BaseModel):
    key: str
    count: int
    sumViews: int
    sumLikes: int
    avgViewsPerRecord: float
    avgLikesPerRecord: float
    publishedCount: int


class TrendsResponse(BaseModel):
    granularity: str
    buckets: list[TrendBucket]
    dateRange: DateRange


class CategoryPerformance(BaseModel):
    category: str
    count: int
    sumViews: int
    sumLikes: int
    avgViewsPerRecord: float
    avgLikesPerRecord: float
    avgReadingMinutes: float
    publishedCount: int


class CategoryPerformanceResponse(BaseModel):
    categories: list[CategoryPerformance]
    dateRange: DateRange


class DashboardResponse(BaseModel):
    overview: OverviewResponse
    ranking: RankingResponse
    trends: TrendsResponse
    categories: CategoryPerformanceResponse
    generatedAt: str


# --- Converters ---


def _overview_payload(totals: OverviewTotals, date_range: DateRange) -> OverviewResponse:
    return OverviewResponse(
        totalCount=totals.total_count,
        countsByStatus=StatusCounts(**totals.counts_by_status),
        sumViews=totals.sum_views,
        sumLikes=totals.sum_likes,
        distinctAuthorCount=totals.distinct_author_count,
        dateRange=date_range,
    )


def _ranking_payload(
    records: list[ContentRecord],
    metric: RankMetric,
    limit: int,
    date_range: DateRange,
) -> RankingResponse:
    items = [
        RankingEntry(
            id=str(record.id),
            metricValue=metric_value(record, metric),
            createdAt=iso_utc(record.created_at),
            title=record.title,
            slug=record.slug,
            category=record.category,
            status=record.status.value,
            viewCount=record.view_count,
            likeCount=record.like_count,
            authorName=record.author_name,
        )
        for record in records
    ]
    return RankingResponse(metric=metric.value, limit=limit, items=items, dateRange=date_range)


def _trends_payload(
    buckets: list[AggregateBucket],
    granularity: str,
    date_range: DateRange,
) -> TrendsResponse:
    return TrendsResponse(
        granularity=granularity,
        buckets=[
            TrendBucket(
                key=b.label,
                count=b.count,
                sumViews=b.sum_views,
                sumLikes=b.sum_likes,
                avgViewsPerRecord=b.avg_views_per_record,
                avgLikesPerRecord=b.avg_likes_per_record,
                publishedCount=b.published_count,
            )
            for b in buckets
        ],
        dateRange=date_range,
    )


def _categories_payload(
    metrics: list[CategoryMetrics],
    date_range: DateRange,
) -> CategoryPerformanceResponse:
    return CategoryPerformanceResponse(
        categories=[
            CategoryPerformance(
                category=m.category,
                count=m.count,
                sumViews=m.sum_views,
                sumLikes=m.sum_likes,
                avgViewsPerRecord=m.avg_views_per_record,
                avgLikesPerRecord=m.avg_likes_per_record,
                avgReadingMinutes=m.avg_reading_minutes,
                publishedCount=m.published_count,
            )
            for m in metrics
        ],
        dateRange=date_range,
    )


# --- Endpoints ---


@router.get("/overview", response_model=OverviewResponse)
def get_overview(
    start_date: Optional[str] = Query(default=None, alias="startDate", description="ISO 8601 start (inclusive)"),
    end_date: Optional[str] = Query(default=None, alias="endDate", description="ISO 8601 end (inclusive)"),
):
    """Corpus-wide totals: counts by status, views, likes, distinct authors."""
    window = parse_window(start_date, end_date)
    records = get_content_records(window)
    return _overview_payload(overview(records, window), DateRange(startDate=start_date, endDate=end_date))


@router.get("/top", response_model=RankingResponse)
def get_top_blogs(
    metric: Optional[str] = Query(default=None, description="viewCount or likeCount"),
    limit: Optional[str] = Query(default=None, description=f"Max entries (default {config.DEFAULT_RANK_LIMIT})"),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
):
    """Leaderboard by any supported metric."""
    return _ranked(parse_metric(metric), limit, start_date, end_date)


@router.get("/popular-blogs", response_model=RankingResponse)
def get_popular_blogs(
    limit: Optional[str] = Query(default=None),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
):
    """Most viewed posts."""
    return _ranked(RankMetric.VIEW_COUNT, limit, start_date, end_date)


@router.get("/liked-blogs", response_model=RankingResponse)
def get_liked_blogs(
    limit: Optional[str] = Query(default=None),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
):
    """Most liked posts."""
    return _ranked(RankMetric.LIKE_COUNT, limit, start_date, end_date)


def _ranked(
    metric: RankMetric,
    raw_limit: Optional[str],
    start_date: Optional[str],
    end_date: Optional[str],
) -> RankingResponse:
    limit = parse_limit(raw_limit)
    window = parse_window(start_date, end_date)
    records = get_content_records(window)
    return _ranking_payload(
        rank(records, metric, limit, window),
        metric,
        limit,
        DateRange(startDate=start_date, endDate=end_date),
    )


@router.get("/engagement-trends", response_model=TrendsResponse)
def get_engagement_trends(
    granularity: Optional[str] = Query(default=None, description="day, week or month"),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
):
    """
    Engagement per time bucket, oldest first.

    Periods without posts are omitted.
    """
    resolved = parse_granularity(granularity)
    window = parse_window(start_date, end_date)
    records = get_content_records(window)
    return _trends_payload(
        trends(records, resolved, window),
        resolved.value,
        DateRange(startDate=start_date, endDate=end_date),
    )


@router.get("/category-performance", response_model=CategoryPerformanceResponse)
def get_category_performance(
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
):
    """Per-category engagement, highest total views first."""
    window = parse_window(start_date, end_date)
    records = get_content_records(window)
    return _categories_payload(
        category_performance(records, window),
        DateRange(startDate=start_date, endDate=end_date),
    )


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    granularity: Optional[str] = Query(default=None),
    metric: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
):
    """
    All four analytics views from one snapshot.

    The aggregations run concurrently under a shared deadline; either all
    four are returned or the request fails.
    """
    query = AnalyticsQuery(
        window=parse_window(start_date, end_date),
        granularity=parse_granularity(granularity),
        metric=parse_metric(metric),
        limit=parse_limit(limit),
    )
    records = get_content_records(query.window)
    result = compute_dashboard(records, query)
    return dashboard_payload(result, start_date, end_date)


def dashboard_payload(
    result: DashboardResult,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> DashboardResponse:
    """Serialize a DashboardResult with the raw date bounds echoed back."""
    query = result.query
    date_range = DateRange(startDate=start_date, endDate=end_date)
    return DashboardResponse(
        overview=_overview_payload(result.overview, date_range),
        ranking=_ranking_payload(result.ranking, query.metric, query.limit, date_range),
        trends=_trends_payload(result.trends, query.granularity.value, date_range),
        categories=_categories_payload(result.categories, date_range),
        generatedAt=utc_now_iso(),
    )
