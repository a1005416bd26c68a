"""Blog, user and like storage, and the analytics snapshot provider."""

import logging
import re
import uuid
from datetime import datetime
from typing import Optional

from ..analytics.errors import DataIntegrityError
from ..analytics.models import ContentRecord, ContentStatus, TimeWindow
from .core import connect, execute
from .helpers import _utc_now_iso, format_timestamp, parse_timestamp

logger = logging.getLogger(__name__)

_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_SLUG_SEPARATOR_RE = re.compile(r"[\s_-]+")


def count_words(content: str) -> int:
    """Whitespace-delimited word count of a post body."""
    return len(content.split())


def slugify(title: str, suffix: str = "") -> str:
    """URL slug from a title, with an optional uniqueness suffix."""
    slug = _SLUG_STRIP_RE.sub("", title.lower().strip())
    slug = _SLUG_SEPARATOR_RE.sub("-", slug).strip("-")
    if suffix:
        slug = f"{slug}-{suffix}" if slug else suffix
    return slug


def insert_user(user_id: str, username: str, email: str, role: str = "reader") -> str:
    """Insert a user. Returns the user_id."""
    con = connect()
    try:
        execute(
            con,
            """INSERT INTO users (user_id, username, email, role, created_at)
               VALUES (:user_id, :username, :email, :role, :created_at)""",
            {
                "user_id": user_id,
                "username": username,
                "email": email,
                "role": role,
                "created_at": _utc_now_iso(),
            },
        )
        con.commit()
        return user_id
    finally:
        con.close()


def insert_blog(
    title: str,
    content: str,
    author_id: str,
    category: str = "",
    status: str = "draft",
    view_count: int = 0,
    created_at: Optional[datetime] = None,
    blog_id: Optional[str] = None,
) -> str:
    """
    Insert a blog post.

    Content length is stored as the body's word count; the body itself is
    owned by the editor service and not kept here.

    Returns:
        blog_id of the new post
    """
    blog_id = blog_id or uuid.uuid4().hex
    status = ContentStatus(status).value
    now = _utc_now_iso()

    con = connect()
    try:
        execute(
            con,
            """INSERT INTO blogs (
                blog_id, title, slug, category, status, view_count,
                content_length, author_id, created_at, updated_at
            ) VALUES (
                :blog_id, :title, :slug, :category, :status, :view_count,
                :content_length, :author_id, :created_at, :updated_at
            )""",
            {
                "blog_id": blog_id,
                "title": title,
                "slug": slugify(title, blog_id[:6]),
                "category": category,
                "status": status,
                "view_count": view_count,
                "content_length": count_words(content),
                "author_id": author_id,
                "created_at": format_timestamp(created_at) if created_at else now,
                "updated_at": now,
            },
        )
        con.commit()
        return blog_id
    finally:
        con.close()


def add_like(blog_id: str, user_id: str) -> bool:
    """
    Record that a user liked a post.

    Returns:
        True if the like is new, False if the user had already liked it
    """
    con = connect()
    try:
        cur = execute(
            con,
            """INSERT OR IGNORE INTO blog_likes (blog_id, user_id, liked_at)
               VALUES (:blog_id, :user_id, :liked_at)""",
            {"blog_id": blog_id, "user_id": user_id, "liked_at": _utc_now_iso()},
        )
        con.commit()
        return cur.rowcount == 1
    finally:
        con.close()


def record_view(blog_id: str) -> None:
    """Increment a post's view counter."""
    con = connect()
    try:
        execute(
            con,
            "UPDATE blogs SET view_count = view_count + 1 WHERE blog_id = :blog_id",
            {"blog_id": blog_id},
        )
        con.commit()
    finally:
        con.close()


def get_content_records(window: Optional[TimeWindow] = None) -> tuple[ContentRecord, ...]:
    """
    Load an immutable snapshot of posts for analytics.

    Rows without a created_at are always returned so the engine can report
    them as integrity violations rather than have them vanish in the
    window filter.

    Args:
        window: Optional inclusive date range on created_at

    Returns:
        Tuple of ContentRecord ordered by created_at
    """
    clauses = []
    params: dict = {}

    if window is not None and window.start is not None:
        clauses.append("b.created_at >= :start")
        params["start"] = format_timestamp(window.start)
    if window is not None and window.end is not None:
        clauses.append("b.created_at <= :end")
        params["end"] = format_timestamp(window.end)

    where = ""
    if clauses:
        where = f"WHERE ({' AND '.join(clauses)}) OR b.created_at IS NULL OR b.created_at = ''"

    con = connect()
    try:
        cur = execute(
            con,
            f"""SELECT b.blog_id, b.category, b.status, b.view_count,
                   COUNT(l.user_id) AS like_count, b.content_length,
                   b.author_id, b.created_at, b.title, b.slug,
                   COALESCE(u.username, '') AS author_name
            FROM blogs b
            LEFT JOIN blog_likes l ON l.blog_id = b.blog_id
            LEFT JOIN users u ON u.user_id = b.author_id
            {where}
            GROUP BY b.blog_id
            ORDER BY b.created_at ASC, b.blog_id ASC""",
            params,
        )
        rows = cur.fetchall()
    finally:
        con.close()

    records = tuple(_row_to_record(row) for row in rows)
    logger.debug(f"Loaded snapshot of {len(records)} content records")
    return records


def _row_to_record(row) -> ContentRecord:
    (
        blog_id,
        category,
        status,
        view_count,
        like_count,
        content_length,
        author_id,
        created_at,
        title,
        slug,
        author_name,
    ) = row
    try:
        created = parse_timestamp(created_at)
    except ValueError:
        raise DataIntegrityError(blog_id, f"unparseable created_at {created_at!r}") from None

    return ContentRecord(
        id=blog_id,
        category=category or "",
        status=ContentStatus(status),
        view_count=view_count,
        like_count=like_count,
        content_length=content_length,
        author_id=author_id,
        created_at=created,
        title=title,
        slug=slug,
        author_name=author_name,
    )
