"""Overview Aggregator: corpus-wide totals for the filtered snapshot."""

from collections.abc import Iterable
from typing import Optional

from .models import ContentRecord, ContentStatus, OverviewTotals, TimeWindow
from .window import filter_window


def overview(
    records: Iterable[ContentRecord],
    window: Optional[TimeWindow] = None,
) -> OverviewTotals:
    """
    Compute totals across the filtered snapshot.

    ``counts_by_status`` always holds every known status, zero included.
    """
    counts_by_status = {status.value: 0 for status in ContentStatus}
    sum_views = 0
    sum_likes = 0
    authors = set()

    filtered = filter_window(records, window)
    for record in filtered:
        counts_by_status[record.status.value] += 1
        sum_views += record.view_count
        sum_likes += record.like_count
        authors.add(record.author_id)

    return OverviewTotals(
        total_count=len(filtered),
        counts_by_status=counts_by_status,
        sum_views=sum_views,
        sum_likes=sum_likes,
        distinct_author_count=len(authors),
    )
