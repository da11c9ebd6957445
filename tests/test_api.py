"""HTTP surface over the engine (FastAPI TestClient)."""

import json
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from content_engine import InMemoryEventReader, RecommendationEngine
from content_server import AppState, ServerConfig, create_app, set_state

from helpers import FailingCatalogReader, fixed_clock


class TestRecommendationRoutes:

    @pytest.fixture(autouse=True)
    def setup(self, engine, tmp_path):
        set_state(AppState(ServerConfig(catalog_dir=tmp_path), engine=engine))
        self.client = TestClient(create_app())
        yield
        set_state(None)

    def test_root(self):
        response = self.client.get("/")
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Content Recommendation Engine API"
        assert "/api/recommendations/trending" in body["endpoints"]["recommendations"]

    def test_similar(self):
        response = self.client.get("/api/recommendations/similar/A", params={"limit": 5})
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert [r["content_id"] for r in body["recommendations"]] == ["B"]
        card = body["recommendations"][0]["content"]
        assert card["type"] == "episode"
        assert card["categories"] == ["finance"]

    def test_similar_unknown_id(self):
        body = self.client.get("/api/recommendations/similar/missing").json()
        assert body["status"] == "empty"
        assert body["recommendations"] == []

    def test_negative_limit_is_422(self):
        assert self.client.get("/api/recommendations/similar/A", params={"limit": -1}).status_code == 422
        assert self.client.get("/api/recommendations/personalized/u1", params={"limit": -1}).status_code == 422
        assert self.client.get("/api/recommendations/trending", params={"limit": -1}).status_code == 422

    def test_personalized_with_exclusions(self):
        body = self.client.get("/api/recommendations/personalized/u1").json()
        assert [r["content_id"] for r in body["recommendations"]] == ["B"]
        assert body["recommendations"][0]["reasons"][0] == "Matches your episode preference"
        body = self.client.get("/api/recommendations/personalized/u1", params={"exclude": "B,C"}).json()
        assert body["recommendations"] == []

    def test_trending(self):
        body = self.client.get("/api/recommendations/trending", params={"window": "day"}).json()
        ids = [r["content_id"] for r in body["recommendations"]]
        assert ids[:2] == ["C", "D"]
        assert body["recommendations"][0]["reasons"] == ["5 views, 1 shares, 0 bookmarks"]

    def test_trending_unknown_window_is_422(self):
        response = self.client.get("/api/recommendations/trending", params={"window": "year"})
        assert response.status_code == 422

    def test_fan_out(self):
        response = self.client.post(
            "/api/recommendations",
            json={"content_id": "A", "user_id": "u1", "window": "day", "limit": 3},
        )
        assert response.status_code == 200
        body = response.json()
        assert list(body["results"]) == ["content_based", "personalized", "trending"]
        assert body["degraded"] == []
        assert len(body["merged"]) <= 3
        assert body["merged"][0]["content_id"] == "C"

    def test_fan_out_validation(self):
        assert self.client.post("/api/recommendations", json={"limit": -1}).status_code == 422
        assert self.client.post("/api/recommendations", json={"window": "year"}).status_code == 422
        assert self.client.post("/api/recommendations", json={"strategies": ["nope"]}).status_code == 422


class TestAdminRoutes:

    @pytest.fixture(autouse=True)
    def setup(self, engine, tmp_path):
        self.engine = engine
        set_state(AppState(ServerConfig(catalog_dir=tmp_path), engine=engine))
        self.client = TestClient(create_app())
        yield
        set_state(None)

    def test_rebuild_index(self):
        body = self.client.post("/api/index/rebuild").json()
        assert body["status"] == "rebuilt"
        assert body["items"] == 4
        assert body["built_at"] == fixed_clock().isoformat()

    def test_invalidate_profile(self):
        self.client.get("/api/recommendations/personalized/u1")
        assert self.client.delete("/api/profiles/u1").json() == {"user_id": "u1", "invalidated": True}
        assert self.client.delete("/api/profiles/u1").json()["invalidated"] is False

    def test_stats(self):
        assert self.client.get("/api/stats").json()["loaded"] is False
        self.client.get("/api/recommendations/similar/A")
        body = self.client.get("/api/stats").json()
        assert body["loaded"] is True
        assert body["index_items"] == 4

    def test_rebuild_failure_is_503(self, tmp_path):
        engine = RecommendationEngine(FailingCatalogReader(), InMemoryEventReader(), clock=fixed_clock)
        set_state(AppState(ServerConfig(catalog_dir=tmp_path), engine=engine))
        assert self.client.post("/api/index/rebuild").status_code == 503
        body = self.client.get("/api/recommendations/similar/A").json()
        assert body["status"] == "degraded"


class TestServerFromFiles:
    """AppState wired from JSON exports, as the server runs locally (real clock)."""

    @pytest.fixture(autouse=True)
    def setup(self, tmp_path):
        now = datetime.now(timezone.utc)

        def days_ago(days):
            return (now - timedelta(days=days)).isoformat()

        catalog_dir = tmp_path / "catalog"
        catalog_dir.mkdir()
        (catalog_dir / "episodes.json").write_text(json.dumps([
            {"id": "ep-1", "title": "ERP in finance", "category": "finance", "status": "published",
             "publish_date": days_ago(30)},
            {"id": "ep-2", "title": "ERP for the CFO", "category": "finance", "status": "published",
             "publish_date": days_ago(2)},
        ]))
        (catalog_dir / "insights.json").write_text(json.dumps([
            {"id": "in-1", "title": "Tax basics", "category": "tax", "difficulty_level": "beginner",
             "status": "published"},
        ]))
        events_path = tmp_path / "events.json"
        events_path.write_text(json.dumps([
            {"event_type": "content_interaction", "user_id": "u1", "created_at": days_ago(0.5),
             "event_data": {"action": "view", "episode_id": "ep-1"}},
        ]))
        config_path = tmp_path / "weights.json"
        config_path.write_text(json.dumps({"version": "local-test", "trending": {"windows": {"day": 1, "week": 7}}}))
        self.config = ServerConfig(
            catalog_dir=catalog_dir,
            events_json_path=events_path,
            recommender_config_path=config_path,
        )
        self.state = AppState(self.config)

    def test_config_loaded(self):
        assert self.state.engine.config.weights_version == "local-test"
        assert self.state.engine.config.trending_windows == {"day": 1, "week": 7}

    def test_recommendations_from_exports(self):
        engine = self.state.engine
        assert engine.content_based("ep-1", 5).content_ids[0] == "ep-2"
        personalized = engine.personalized("u1", 5)
        assert personalized.content_ids == ["ep-2"]
        assert "Recently published" in personalized.recommendations[0].reasons
        assert engine.trending("day", 5).content_ids == ["ep-1"]
