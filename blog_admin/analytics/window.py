"""Date-range filtering shared by every aggregator."""

from collections.abc import Iterable
from typing import Optional

from .errors import DataIntegrityError
from .models import ContentRecord, TimeWindow


def require_created_at(record: ContentRecord) -> None:
    """Raise DataIntegrityError if the record has no creation timestamp."""
    if record.created_at is None:
        raise DataIntegrityError(record.id)


def filter_window(
    records: Iterable[ContentRecord],
    window: Optional[TimeWindow] = None,
) -> tuple[ContentRecord, ...]:
    """
    Keep the records created inside the window.

    Every record is checked for a timestamp, including ones the window
    would exclude, so all aggregators fail on the same snapshot.

    Args:
        records: Snapshot to filter
        window: Inclusive date range (None: keep everything)

    Returns:
        Tuple of matching records in input order
    """
    kept = []
    for record in records:
        require_created_at(record)
        if window is None or window.contains(record.created_at):
            kept.append(record)
    return tuple(kept)
