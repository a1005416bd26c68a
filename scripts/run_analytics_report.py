"""
Analytics Report Runner

Computes the full analytics dashboard from the current database snapshot
and prints it as JSON.

Run with: python -m scripts.run_analytics_report [--start YYYY-MM-DD] [--end YYYY-MM-DD]
                                                  [--granularity day|week|month]
                                                  [--metric viewCount|likeCount] [--limit N]
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from blog_admin.analytics import (
    AggregationTimeout,
    AnalyticsQuery,
    AnalyticsValidationError,
    DataIntegrityError,
    compute_dashboard,
    parse_granularity,
    parse_limit,
    parse_metric,
    parse_window,
)
from blog_admin.db import get_content_records, init_db
from blog_admin.routers.analytics import dashboard_payload

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Print the analytics dashboard as JSON")
    parser.add_argument("--start", type=str, default=None, help="Window start (ISO 8601, inclusive)")
    parser.add_argument("--end", type=str, default=None, help="Window end (ISO 8601, inclusive)")
    parser.add_argument("--granularity", type=str, default=None, help="day, week or month (default: week)")
    parser.add_argument("--metric", type=str, default=None, help="viewCount or likeCount (default: viewCount)")
    parser.add_argument("--limit", type=str, default=None, help="Leaderboard size (default: 10)")
    parser.add_argument("--timeout", type=float, default=None, help="Deadline in seconds for all aggregations")
    args = parser.parse_args(argv)

    try:
        query = AnalyticsQuery(
            window=parse_window(args.start, args.end),
            granularity=parse_granularity(args.granularity),
            metric=parse_metric(args.metric),
            limit=parse_limit(args.limit),
        )
    except AnalyticsValidationError as e:
        logger.error(str(e))
        return 2

    init_db()
    try:
        records = get_content_records(query.window)
        logger.info(f"Loaded {len(records)} records for {args.start or '-'} .. {args.end or '-'}")
        result = compute_dashboard(records, query, timeout=args.timeout)
    except DataIntegrityError as e:
        logger.error(f"Integrity violation: {e}")
        return 1
    except AggregationTimeout as e:
        logger.error(str(e))
        return 1

    print(dashboard_payload(result, args.start, args.end).model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
