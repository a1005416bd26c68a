import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import blog_admin` works when tests run from any CWD/import mode.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
PROJECT_ROOT_STR = str(PROJECT_ROOT)
if PROJECT_ROOT_STR not in sys.path:
    sys.path.insert(0, PROJECT_ROOT_STR)

from blog_admin.analytics.models import ContentRecord, ContentStatus  # noqa: E402


@pytest.fixture(autouse=True)
def use_test_db(tmp_path, monkeypatch):
    """Use a temporary database for each test."""
    import blog_admin.db.core as db_core

    test_db = tmp_path / "test_blog_admin.db"
    monkeypatch.setattr(db_core, "DB_PATH", test_db)

    db_core.init_db()

    yield

    if test_db.exists():
        try:
            test_db.unlink()
        except PermissionError:
            pass  # Windows/locked file handling


def _make_record(
    record_id: str = "r1",
    category: str = "Tech",
    status: ContentStatus | str = ContentStatus.PUBLISHED,
    views: int = 0,
    likes: int = 0,
    length: int = 0,
    author: str = "author-1",
    created_at: datetime | None = datetime(2023, 1, 15, tzinfo=UTC),
    **kwargs,
) -> ContentRecord:
    return ContentRecord(
        id=record_id,
        category=category,
        status=status,
        view_count=views,
        like_count=likes,
        content_length=length,
        author_id=author,
        created_at=created_at,
        **kwargs,
    )


@pytest.fixture
def make_record():
    """Factory for ContentRecord with test-friendly defaults."""
    return _make_record


@pytest.fixture
def scenario_records() -> list[ContentRecord]:
    """Three posts across three months: two Tech, one Design."""
    return [
        _make_record("a", "Tech", "published", views=100, likes=2, length=450,
                     author="u1", created_at=datetime(2023, 1, 15, tzinfo=UTC)),
        _make_record("b", "Design", "published", views=200, likes=1, length=900,
                     author="u2", created_at=datetime(2023, 2, 15, tzinfo=UTC)),
        _make_record("c", "Tech", "draft", views=50, likes=0, length=0,
                     author="u1", created_at=datetime(2023, 3, 15, tzinfo=UTC)),
    ]
