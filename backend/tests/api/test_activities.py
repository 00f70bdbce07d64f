import math
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api.deps import get_db
from main import app
from tests.factories import make_applet

client = TestClient(app)

WINDOW = {"sinceTime": "2025-12-16T10:00:00Z", "beforeTime": "2026-01-15T10:00:00Z"}


def _db_with(rows: list[dict]) -> MagicMock:
    db = MagicMock()
    db.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value = MagicMock(
        data=rows
    )
    return db


@pytest.fixture
def applet_db():
    db = _db_with([make_applet()])
    app.dependency_overrides[get_db] = lambda: db
    yield db
    app.dependency_overrides.clear()


@pytest.fixture
def empty_db():
    db = _db_with([])
    app.dependency_overrides[get_db] = lambda: db
    yield db
    app.dependency_overrides.clear()


class TestActivitiesAPI:
    def test_activities_is_public(self, applet_db):
        response = client.get("/activities", params={"appletId": 1, **WINDOW})
        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"activities", "totalCount", "page", "perPage", "totalPages"}
        assert data["page"] == 1
        assert data["perPage"] == 20
        assert len(data["activities"]) == 20
        assert data["totalPages"] == math.ceil(data["totalCount"] / 20)

    def test_activity_shape_is_camel_case(self, applet_db):
        response = client.get("/activities", params={"appletId": 1, "perPage": 1, **WINDOW})
        activity = response.json()["activities"][0]
        assert set(activity) == {
            "id",
            "appletId",
            "status",
            "ranAt",
            "triggerData",
            "actionData",
            "errorMessage",
        }
        assert activity["appletId"] == 1
        assert activity["status"] in {"success", "failed", "skipped"}
        assert activity["triggerData"]["service"] == "Instagram"
        assert activity["actionData"]["service"] == "Dropbox"
        assert activity["ranAt"].startswith("2026-01-15")

    def test_requires_applet_id(self, applet_db):
        response = client.get("/activities")
        assert response.status_code == 422

    def test_unknown_applet_returns_404(self, empty_db):
        response = client.get("/activities", params={"appletId": 404})
        assert response.status_code == 404
        assert response.json()["detail"] == "Applet not found"

    def test_status_filter(self, applet_db):
        response = client.get(
            "/activities", params={"appletId": 1, "status": "failed", "perPage": 50, **WINDOW}
        )
        activities = response.json()["activities"]
        assert activities
        assert all(a["status"] == "failed" and a["errorMessage"] for a in activities)

    def test_malformed_params_fall_back_to_defaults(self, applet_db):
        response = client.get(
            "/activities",
            params={
                "appletId": 1,
                "page": "first",
                "perPage": "plenty",
                "sinceTime": "yesterday-ish",
                "status": "exploded",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["page"] == 1
        assert data["perPage"] == 20

    def test_out_of_range_since_time_uses_default_window(self, applet_db):
        before = datetime.now(UTC).replace(microsecond=0).isoformat()
        edge = client.get(
            "/activities",
            params={"appletId": 1, "sinceTime": "0001-01-01T00:00:00+05:00", "beforeTime": before},
        )
        default = client.get("/activities", params={"appletId": 1, "beforeTime": before})
        assert edge.status_code == 200
        assert edge.json()["totalCount"] > 0
        assert edge.json()["totalCount"] == default.json()["totalCount"]

    def test_per_page_is_clamped(self, applet_db):
        response = client.get("/activities", params={"appletId": 1, "perPage": 500, **WINDOW})
        data = response.json()
        assert data["perPage"] == 100
        assert len(data["activities"]) == 100

    def test_path_route_matches_query_route(self, applet_db):
        params = {"page": 2, "perPage": 10, "search": "photo", **WINDOW}
        by_query = client.get("/activities", params={"appletId": 1, **params}).json()
        by_path = client.get("/applets/1/activities", params=params).json()
        assert by_query == by_path

    def test_path_route_unknown_applet(self, empty_db):
        response = client.get("/applets/9/activities")
        assert response.status_code == 404

    def test_latest_activities(self, applet_db):
        response = client.get(
            "/applets/1/activities/latest",
            params={"since": "2026-01-14T10:00:00Z", "limit": 3},
        )
        assert response.status_code == 200
        activities = response.json()
        assert len(activities) <= 3
        ran_at = [a["ranAt"] for a in activities]
        assert ran_at == sorted(ran_at, reverse=True)

    def test_latest_uses_lookup_for_applet(self, applet_db):
        client.get("/applets/1/activities/latest")
        applet_db.table.assert_called_with("applets")
        applet_db.table.return_value.select.return_value.eq.assert_called_with("id", 1)
