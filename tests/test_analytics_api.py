"""Tests for the analytics API endpoints.

Covers:
- GET /api/analytics/overview
- GET /api/analytics/popular-blogs, /liked-blogs, /top
- GET /api/analytics/engagement-trends
- GET /api/analytics/category-performance
- GET /api/analytics/dashboard
- Auth enforcement (401/403)
- Error translation (400/500/504)
"""

from datetime import UTC, datetime
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from blog_admin.analytics.errors import AggregationTimeout
from blog_admin.db import add_like, connect, execute, insert_blog, insert_user

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def auth_headers(role: str = "editor", user_id: str = "test-uid") -> dict:
    return {
        "X-Auth-User-Id": user_id,
        "X-Auth-Email": f"{role}@example.com",
        "X-Auth-Role": role,
    }


EDITOR = auth_headers("editor")
ADMIN = auth_headers("admin")
READER = auth_headers("reader")


@pytest.fixture
def client():
    from blog_admin.api import app

    return TestClient(app)


@pytest.fixture
def seeded():
    """Three posts across three months: two Tech, one Design."""
    insert_user("u1", "alice", "alice@example.com", role="editor")
    insert_user("u2", "bob", "bob@example.com", role="editor")
    insert_user("u3", "carol", "carol@example.com")

    insert_blog("Tech one", "word " * 450, "u1", category="Tech", status="published",
                view_count=100, created_at=datetime(2023, 1, 15, tzinfo=UTC), blog_id="a")
    insert_blog("Design one", "word " * 900, "u2", category="Design", status="published",
                view_count=200, created_at=datetime(2023, 2, 15, tzinfo=UTC), blog_id="b")
    insert_blog("Tech draft", "", "u1", category="Tech", status="draft",
                view_count=50, created_at=datetime(2023, 3, 15, tzinfo=UTC), blog_id="c")

    add_like("a", "u2")
    add_like("a", "u3")
    add_like("b", "u3")


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class TestAuth:
    def test_missing_identity_is_401(self, client):
        assert client.get("/api/analytics/overview").status_code == 401

    def test_reader_is_403(self, client):
        resp = client.get("/api/analytics/overview", headers=READER)
        assert resp.status_code == 403
        assert "editor" in resp.json()["detail"]

    def test_unknown_role_falls_back_to_reader(self, client):
        resp = client.get("/api/analytics/overview", headers=auth_headers("superuser"))
        assert resp.status_code == 403

    @pytest.mark.parametrize("headers", [EDITOR, ADMIN])
    def test_editor_and_admin_allowed(self, client, seeded, headers):
        assert client.get("/api/analytics/overview", headers=headers).status_code == 200

    def test_health_is_public(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"
        assert resp.json()["database"] is True


# ---------------------------------------------------------------------------
# Overview
# ---------------------------------------------------------------------------


class TestOverviewEndpoint:
    def test_scenario(self, client, seeded):
        data = client.get("/api/analytics/overview", headers=EDITOR).json()
        assert data["totalCount"] == 3
        assert data["sumViews"] == 350
        assert data["sumLikes"] == 3
        assert data["countsByStatus"] == {"draft": 1, "published": 2, "archived": 0}
        assert data["distinctAuthorCount"] == 2
        assert data["dateRange"] == {"startDate": None, "endDate": None}

    def test_window_excludes_january(self, client, seeded):
        params = {"startDate": "2023-02-01", "endDate": "2023-03-31"}
        data = client.get("/api/analytics/overview", params=params, headers=EDITOR).json()
        assert data["totalCount"] == 2
        assert data["sumViews"] == 250
        assert data["dateRange"] == params

    def test_empty_database(self, client):
        data = client.get("/api/analytics/overview", headers=EDITOR).json()
        assert data["totalCount"] == 0
        assert data["countsByStatus"] == {"draft": 0, "published": 0, "archived": 0}

    def test_malformed_date_is_400(self, client):
        resp = client.get("/api/analytics/overview", params={"startDate": "yesterday"}, headers=EDITOR)
        assert resp.status_code == 400
        assert resp.json()["parameter"] == "startDate"
        assert resp.json()["success"] is False


# ---------------------------------------------------------------------------
# Rankings
# ---------------------------------------------------------------------------


class TestRankingEndpoints:
    def test_popular_blogs(self, client, seeded):
        data = client.get("/api/analytics/popular-blogs", params={"limit": 2}, headers=EDITOR).json()
        assert data["metric"] == "viewCount"
        assert [item["id"] for item in data["items"]] == ["b", "a"]
        first = data["items"][0]
        assert first["metricValue"] == 200
        assert first["createdAt"] == "2023-02-15T00:00:00Z"
        assert first["title"] == "Design one"
        assert first["authorName"] == "bob"
        assert first["likeCount"] == 1

    def test_liked_blogs(self, client, seeded):
        data = client.get("/api/analytics/liked-blogs", headers=EDITOR).json()
        assert data["metric"] == "likeCount"
        assert [(item["id"], item["metricValue"]) for item in data["items"]] == [
            ("a", 2), ("b", 1), ("c", 0),
        ]

    def test_top_with_metric(self, client, seeded):
        data = client.get("/api/analytics/top", params={"metric": "likeCount", "limit": 1}, headers=EDITOR).json()
        assert [item["id"] for item in data["items"]] == ["a"]

    def test_limit_zero_returns_no_items(self, client, seeded):
        data = client.get("/api/analytics/popular-blogs", params={"limit": 0}, headers=EDITOR).json()
        assert data["items"] == []

    @pytest.mark.parametrize(
        "params,parameter",
        [
            ({"limit": -1}, "limit"),
            ({"limit": "ten"}, "limit"),
            ({"metric": "shares"}, "metric"),
        ],
    )
    def test_invalid_parameters(self, client, params, parameter):
        resp = client.get("/api/analytics/top", params=params, headers=EDITOR)
        assert resp.status_code == 400
        assert resp.json()["parameter"] == parameter


# ---------------------------------------------------------------------------
# Trends and categories
# ---------------------------------------------------------------------------


class TestTrendsEndpoint:
    def test_monthly(self, client, seeded):
        data = client.get("/api/analytics/engagement-trends", params={"granularity": "month"}, headers=EDITOR).json()
        assert data["granularity"] == "month"
        assert [b["key"] for b in data["buckets"]] == ["2023-01", "2023-02", "2023-03"]
        assert [b["count"] for b in data["buckets"]] == [1, 1, 1]
        assert data["buckets"][0]["avgLikesPerRecord"] == 2.0

    def test_default_granularity_is_week(self, client, seeded):
        data = client.get("/api/analytics/engagement-trends", headers=EDITOR).json()
        assert data["granularity"] == "week"
        assert data["buckets"][0]["key"] == "2023-W02"

    def test_unknown_granularity(self, client):
        resp = client.get("/api/analytics/engagement-trends", params={"granularity": "hour"}, headers=EDITOR)
        assert resp.status_code == 400
        assert resp.json()["parameter"] == "granularity"


class TestCategoryEndpoint:
    def test_scenario(self, client, seeded):
        data = client.get("/api/analytics/category-performance", headers=EDITOR).json()
        cats = data["categories"]
        assert [(c["category"], c["sumViews"], c["count"]) for c in cats] == [
            ("Design", 200, 1),
            ("Tech", 150, 2),
        ]
        # 450 words -> 2 minutes, empty body -> 0 minutes
        assert cats[1]["avgReadingMinutes"] == 1.0


# ---------------------------------------------------------------------------
# Dashboard and error translation
# ---------------------------------------------------------------------------


class TestDashboardEndpoint:
    def test_combined_views_are_consistent(self, client, seeded):
        params = {"startDate": "2023-02-01", "endDate": "2023-03-31", "granularity": "month", "limit": 5}
        data = client.get("/api/analytics/dashboard", params=params, headers=EDITOR).json()
        assert data["overview"]["totalCount"] == 2
        assert sum(b["count"] for b in data["trends"]["buckets"]) == 2
        assert sum(c["count"] for c in data["categories"]["categories"]) == 2
        assert [item["id"] for item in data["ranking"]["items"]] == ["b", "c"]
        assert data["generatedAt"].endswith("Z")

    def test_timeout_is_504(self, client, seeded):
        with patch(
            "blog_admin.routers.analytics.compute_dashboard",
            side_effect=AggregationTimeout(0.5),
        ):
            resp = client.get("/api/analytics/dashboard", headers=EDITOR)
        assert resp.status_code == 504

    def test_missing_created_at_is_500(self, client, seeded):
        con = connect()
        execute(con, "UPDATE blogs SET created_at = NULL WHERE blog_id = 'c'")
        con.commit()
        con.close()

        resp = client.get("/api/analytics/dashboard", headers=EDITOR)
        assert resp.status_code == 500
        assert resp.json()["recordId"] == "c"

        resp = client.get("/api/analytics/overview", headers=EDITOR)
        assert resp.status_code == 500

    def test_unparseable_created_at_is_500(self, client, seeded):
        con = connect()
        execute(con, "UPDATE blogs SET created_at = 'not-a-date' WHERE blog_id = 'b'")
        con.commit()
        con.close()

        resp = client.get("/api/analytics/overview", headers=EDITOR)
        assert resp.status_code == 500
        assert resp.json()["success"] is False
        assert resp.json()["recordId"] == "b"


class TestLifespan:
    def test_startup_creates_schema(self, tmp_path, monkeypatch):
        import blog_admin.db.core as db_core
        from blog_admin.api import app

        fresh_db = tmp_path / "fresh.db"
        monkeypatch.setattr(db_core, "DB_PATH", fresh_db)

        with TestClient(app) as client:
            resp = client.get("/health")

        assert resp.json()["status"] == "healthy"
        assert resp.json()["missing_tables"] == []
