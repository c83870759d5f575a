"""
Tests for the HTTP API
"""
import logging

import pytest
from ipstore import create_app
from ipstore.config import settings
from ipstore.core.store import PulleyIPStore


@pytest.fixture
def store():
    return PulleyIPStore(k=3)


@pytest.fixture
def client(store):
    app = create_app(store)
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def post_ips(client, *ips):
    for ip in ips:
        response = client.post("/api/v1/events", json={"ip": ip})
        assert response.status_code == 201


class TestEventEndpoints:
    """Test event ingestion"""

    def test_submit_event(self, client, store):
        response = client.post("/api/v1/events", json={"ip": "192.168.1.1"})
        data = response.get_json()

        assert response.status_code == 201
        assert data["success"] is True
        assert data["event_id"]
        assert store.count("192.168.1.1") == 1

    def test_submit_event_with_timestamp(self, client, store):
        response = client.post(
            "/api/v1/events",
            json={"ip": "10.0.0.1", "timestamp": "2025-10-16T10:30:00Z"},
        )
        assert response.status_code == 201

    def test_invalid_ip(self, client, store):
        response = client.post("/api/v1/events", json={"ip": "not-an-ip"})

        assert response.status_code == 400
        assert response.get_json()["success"] is False
        assert store.stats()["total"] == 0

    def test_missing_body(self, client):
        response = client.post("/api/v1/events", data="garbage", content_type="text/plain")
        assert response.status_code == 400

    def test_batch(self, client, store):
        response = client.post(
            "/api/v1/events/batch",
            json={"events": [{"ip": "10.0.0.1"}, {"ip": "10.0.0.2"}, {"ip": "10.0.0.1"}]},
        )
        data = response.get_json()

        assert response.status_code == 201
        assert data["processed"] == 3
        assert data["total"] == 3
        assert store.count("10.0.0.1") == 2

    def test_batch_with_invalid_event(self, client, store):
        """Test one bad address rejects the whole batch"""
        response = client.post(
            "/api/v1/events/batch",
            json={"events": [{"ip": "10.0.0.1"}, {"ip": "bogus"}]},
        )

        assert response.status_code == 400
        assert store.stats()["total"] == 0

    def test_batch_too_large(self, client):
        events = [{"ip": "10.0.0.1"}] * (settings.MAX_BATCH_SIZE + 1)
        response = client.post("/api/v1/events/batch", json={"events": events})
        assert response.status_code == 400

    def test_health(self, client):
        response = client.get("/api/v1/events/health")

        assert response.status_code == 200
        assert response.get_json()["status"] == "healthy"

    def test_stats(self, client):
        post_ips(client, "10.0.0.1", "10.0.0.1", "10.0.0.2")
        response = client.get("/api/v1/events/stats")

        assert response.get_json() == {
            "k": 3,
            "occupancy": 2,
            "distinct": 2,
            "total": 3,
            "threshold": 0,
        }


class TestRankingEndpoints:
    """Test Top-K queries and reset"""

    def test_empty(self, client):
        response = client.get("/api/v1/top")
        data = response.get_json()

        assert response.status_code == 200
        assert data["items"] == []
        assert data["k"] == 3

    def test_order(self, client):
        post_ips(client, "10.0.0.1", "10.0.0.2", "10.0.0.2", "2001:db8::1", "10.0.0.4")
        data = client.get("/api/v1/top").get_json()

        assert data["items"] == [
            {"rank": 1, "ip": "10.0.0.2", "count": 2},
            {"rank": 2, "ip": "10.0.0.1", "count": 1},
            {"rank": 3, "ip": "2001:db8::1", "count": 1},
        ]
        assert data["distinct"] == 4
        assert data["total"] == 5

    def test_limit(self, client):
        post_ips(client, "10.0.0.1", "10.0.0.2", "10.0.0.2")
        data = client.get("/api/v1/top?limit=1").get_json()

        assert [item["ip"] for item in data["items"]] == ["10.0.0.2"]

    @pytest.mark.parametrize("limit", ["0", "-1", "abc"])
    def test_invalid_limit(self, client, limit, caplog):
        with caplog.at_level(logging.WARNING, logger="ipstore.api.rankings"):
            response = client.get(f"/api/v1/top?limit={limit}")

        assert response.status_code == 400
        assert "Invalid top query" in caplog.text

    def test_clear(self, client, store):
        post_ips(client, "10.0.0.1", "10.0.0.2")
        response = client.delete("/api/v1/top")

        assert response.status_code == 200
        assert client.get("/api/v1/top").get_json()["items"] == []
        assert store.stats()["total"] == 0


class TestAppRoutes:
    """Test application level routes"""

    def test_api_info(self, client):
        data = client.get("/api/v1").get_json()
        assert data["name"] == settings.APP_NAME

    def test_not_found(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.get_json() == {"error": "Not found"}

    def test_default_store(self):
        app = create_app()
        assert app.extensions["ipstore"].k == settings.TOP_K


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
