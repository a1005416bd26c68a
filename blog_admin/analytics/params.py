"""
Query Parameter Parsing

Turns raw boundary inputs (query strings, CLI flags) into typed engine
arguments. Anything malformed is rejected with AnalyticsValidationError
naming the parameter, before any aggregation runs.
"""

from datetime import date, datetime, time, timezone
from typing import Optional

from .. import config
from .errors import AnalyticsValidationError
from .models import Granularity, RankMetric, TimeWindow, to_utc


def _parse_timestamp(parameter: str, value: str, end_of_day: bool) -> datetime:
    value = value.strip()
    try:
        day = date.fromisoformat(value)
    except ValueError:
        day = None

    if day is not None:
        # A bare date covers the whole calendar day
        bound = time.max if end_of_day else time.min
        return datetime.combine(day, bound, tzinfo=timezone.utc)

    try:
        return to_utc(datetime.fromisoformat(value))
    except ValueError:
        raise AnalyticsValidationError(
            parameter, f"expected an ISO 8601 date or datetime, got {value!r}"
        ) from None


def parse_window(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> Optional[TimeWindow]:
    """
    Build an inclusive TimeWindow from optional ISO 8601 strings.

    Returns None when neither bound is given.
    """
    start = _parse_timestamp("startDate", start_date, end_of_day=False) if start_date else None
    end = _parse_timestamp("endDate", end_date, end_of_day=True) if end_date else None

    if start is None and end is None:
        return None
    if start is not None and end is not None and start > end:
        raise AnalyticsValidationError("startDate", "must not be after endDate")
    return TimeWindow(start=start, end=end)


def parse_granularity(value: Optional[str]) -> Granularity:
    if value is None or value == "":
        value = config.DEFAULT_GRANULARITY
    try:
        return Granularity(value)
    except ValueError:
        allowed = ", ".join(g.value for g in Granularity)
        raise AnalyticsValidationError(
            "granularity", f"must be one of {allowed}, got {value!r}"
        ) from None


def parse_metric(value: Optional[str]) -> RankMetric:
    if value is None or value == "":
        return RankMetric.VIEW_COUNT
    try:
        return RankMetric(value)
    except ValueError:
        allowed = ", ".join(m.value for m in RankMetric)
        raise AnalyticsValidationError("metric", f"must be one of {allowed}, got {value!r}") from None


def parse_limit(value) -> int:
    """Parse a leaderboard size. Zero is allowed and means "no results"."""
    if value is None or value == "":
        return config.DEFAULT_RANK_LIMIT
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise AnalyticsValidationError("limit", f"must be an integer, got {value!r}") from None
    if limit < 0:
        raise AnalyticsValidationError("limit", "must not be negative")
    if limit > config.MAX_RANK_LIMIT:
        raise AnalyticsValidationError("limit", f"must not exceed {config.MAX_RANK_LIMIT}")
    return limit
