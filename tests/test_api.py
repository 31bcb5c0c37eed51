"""
Tests for the HTTP API.

Vendor clients are swapped out through FastAPI dependency overrides.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from api.analyze import app, get_collector_clients, settings
from src.collector import AhrefsClient, SearchAnalyticsRow, VendorAPIError, parse_backlinks
from src.collector.semrush import KeywordData


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use_clients(semrush=None, ahrefs=None, gsc=None):
    app.dependency_overrides[get_collector_clients] = lambda: SimpleNamespace(
        semrush=semrush, ahrefs=ahrefs, gsc=gsc
    )


class TestScoringEndpoints:
    """Test the pure scoring endpoints."""

    def test_intent(self, client):
        response = client.post("/api/intent", json={"keyword": "how to buy a vpn"})

        assert response.status_code == 200
        assert response.json() == {"keyword": "how to buy a vpn", "intent": "transactional"}

    def test_priority(self, client):
        response = client.post("/api/priority", json={
            "keyword": "crm tutorial",
            "search_volume": 1000,
            "difficulty": 50,
            "current_position": 20,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["priority"] == 22
        assert data["intent"] == "informational"
        assert data["breakdown"]["position_bonus"] == 25

    @pytest.mark.parametrize("payload", [
        {"search_volume": 1000, "difficulty": 150},
        {"search_volume": -1, "difficulty": 50},
        {"search_volume": 1000, "difficulty": 50, "cpc": -0.5},
        {"search_volume": 1000, "difficulty": 50, "current_position": 0},
        {"difficulty": 50},
    ])
    def test_priority_rejects_invalid_input(self, client, payload):
        assert client.post("/api/priority", json=payload).status_code == 422

    def test_priority_batch(self, client, mock_keywords):
        response = client.post("/api/priority/batch", json={"keywords": mock_keywords, "limit": 3})

        assert response.status_code == 200
        data = response.json()
        assert [k["priority"] for k in data["keywords"]] == [69, 44, 44]
        assert data["summary"]["total_keywords"] == 5

    def test_backlink_quality(self, client):
        response = client.post("/api/backlink-quality", json={
            "domain_rating": 80,
            "link_type": "dofollow",
            "anchor_relevance": 100,
            "context_relevance": 100,
        })

        assert response.status_code == 200
        assert response.json() == {"score": 92, "quality": "excellent"}

    @pytest.mark.parametrize("payload", [
        {"domain_rating": 80, "link_type": "follow", "anchor_relevance": 10, "context_relevance": 10},
        {"domain_rating": 101, "link_type": "ugc", "anchor_relevance": 10, "context_relevance": 10},
        {"domain_rating": 80, "link_type": "ugc", "anchor_relevance": -1, "context_relevance": 10},
    ])
    def test_backlink_quality_rejects_invalid_input(self, client, payload):
        assert client.post("/api/backlink-quality", json=payload).status_code == 422


class TestServiceEndpoints:
    """Test vendor-backed endpoints."""

    def test_root_and_health(self, client):
        assert client.get("/").json()["service"] == "Keyword Intelligence Engine"

        health = client.get("/api/health").json()
        assert health["status"] == "healthy"
        assert set(health["integrations"]) == {"semrush", "ahrefs", "search_console"}

    def test_backlog_requires_semrush(self, client):
        _use_clients()

        response = client.post("/api/backlog", json={"seed_keywords": ["crm"]})
        assert response.status_code == 503

    def test_backlog(self, client):
        semrush = MagicMock()
        semrush.research_keywords = AsyncMock(return_value=[
            KeywordData("crm software", 12000, 70, 8.5, "informational"),
            KeywordData("crm tutorial", 1000, 50, 0.0, "informational"),
        ])
        _use_clients(semrush=semrush)

        seeds = [f"seed {i}" for i in range(settings.MAX_SEED_KEYWORDS + 2)]
        response = client.post("/api/backlog", json={"seed_keywords": seeds, "limit": 5})

        assert response.status_code == 200
        data = response.json()
        assert [k["keyword"] for k in data["keywords"]] == ["crm software", "crm tutorial"]
        assert data["summary"]["total_candidates"] == 2
        assert semrush.research_keywords.await_count == settings.MAX_SEED_KEYWORDS
        assert data["summary"]["skipped_seeds"] == seeds[settings.MAX_SEED_KEYWORDS:]

    def test_backlog_all_seeds_fail(self, client):
        semrush = MagicMock()
        semrush.research_keywords = AsyncMock(
            side_effect=VendorAPIError("SEMrush request failed: 500", status_code=500)
        )
        _use_clients(semrush=semrush)

        response = client.post("/api/backlog", json={"seed_keywords": ["crm", "erp"]})

        assert response.status_code == 502
        assert semrush.research_keywords.await_count == 2

    def test_backlog_partial_failure(self, client):
        async def research(seed, database="us", limit=100):
            if seed == "erp":
                raise VendorAPIError("SEMrush request failed: 500", status_code=500)
            return [KeywordData("crm software", 12000, 70, 8.5, "informational")]

        semrush = MagicMock()
        semrush.research_keywords = AsyncMock(side_effect=research)
        _use_clients(semrush=semrush)

        response = client.post("/api/backlog", json={"seed_keywords": ["crm", "erp"]})

        assert response.status_code == 200
        data = response.json()
        assert [k["keyword"] for k in data["keywords"]] == ["crm software"]
        assert data["summary"]["failed_seeds"] == ["erp"]
        assert data["summary"]["skipped_seeds"] == []

    def test_backlog_with_search_console_positions(self, client):
        semrush = MagicMock()
        semrush.research_keywords = AsyncMock(return_value=[
            KeywordData("crm tutorial", 1000, 50, 0.0, "informational"),
        ])
        gsc = MagicMock()
        gsc.get_search_analytics = AsyncMock(return_value=[
            SearchAnalyticsRow("https://example.com/crm", "CRM Tutorial", 12, 800, 0.015, 19.6),
        ])
        _use_clients(semrush=semrush, gsc=gsc)

        response = client.post("/api/backlog", json={
            "seed_keywords": ["crm"],
            "site_url": "https://example.com/",
            "start_date": "2025-09-01",
            "end_date": "2025-09-28",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["keywords"][0]["current_position"] == 20
        assert data["keywords"][0]["priority"] == 22
        assert data["summary"]["positions_loaded"] == 1
        gsc.get_search_analytics.assert_awaited_once_with(
            "https://example.com/", "2025-09-01", "2025-09-28"
        )

    def test_backlog_default_position_window(self, client):
        semrush = MagicMock()
        semrush.research_keywords = AsyncMock(return_value=[])
        gsc = MagicMock()
        gsc.get_search_analytics = AsyncMock(return_value=[])
        _use_clients(semrush=semrush, gsc=gsc)

        response = client.post("/api/backlog", json={
            "seed_keywords": ["crm"],
            "site_url": "https://example.com/",
            "end_date": "2025-09-28",
        })

        assert response.status_code == 200
        gsc.get_search_analytics.assert_awaited_once_with(
            "https://example.com/", "2025-08-31", "2025-09-28"
        )

    def test_backlog_search_console_failure_keeps_backlog(self, client):
        semrush = MagicMock()
        semrush.research_keywords = AsyncMock(return_value=[
            KeywordData("crm tutorial", 1000, 50, 0.0, "informational"),
        ])
        gsc = MagicMock()
        gsc.get_search_analytics = AsyncMock(
            side_effect=VendorAPIError("Search Console request failed: 403", status_code=403)
        )
        _use_clients(semrush=semrush, gsc=gsc)

        response = client.post("/api/backlog", json={
            "seed_keywords": ["crm"],
            "site_url": "https://example.com/",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["keywords"][0]["priority"] == 19
        assert data["summary"]["positions_loaded"] == 0

    def test_backlog_without_search_console_ignores_site_url(self, client):
        semrush = MagicMock()
        semrush.research_keywords = AsyncMock(return_value=[
            KeywordData("crm tutorial", 1000, 50, 0.0, "informational"),
        ])
        _use_clients(semrush=semrush)

        response = client.post("/api/backlog", json={
            "seed_keywords": ["crm"],
            "site_url": "https://example.com/",
        })

        assert response.status_code == 200
        assert response.json()["keywords"][0]["current_position"] is None

    def test_backlog_rejects_inverted_dates(self, client):
        semrush = MagicMock()
        semrush.research_keywords = AsyncMock(return_value=[])
        _use_clients(semrush=semrush, gsc=MagicMock())

        response = client.post("/api/backlog", json={
            "seed_keywords": ["crm"],
            "site_url": "https://example.com/",
            "start_date": "2025-10-01",
            "end_date": "2025-09-01",
        })

        assert response.status_code == 422

    def test_backlog_requires_seeds(self, client):
        assert client.post("/api/backlog", json={"seed_keywords": []}).status_code == 422

    def test_audit_requires_ahrefs(self, client):
        _use_clients()

        response = client.post("/api/backlinks/audit", json={"domain": "target.com"})
        assert response.status_code == 503

    def test_audit(self, client, mock_backlinks_payload):
        ahrefs = MagicMock()
        ahrefs.get_backlinks = AsyncMock(return_value=parse_backlinks(mock_backlinks_payload))
        _use_clients(ahrefs=ahrefs)

        response = client.post("/api/backlinks/audit", json={
            "domain": "target.com",
            "topic_keywords": ["project management"],
        })

        assert response.status_code == 200
        data = response.json()
        assert data["summary"]["total_backlinks"] == 2
        assert data["backlinks"][0]["quality"] == "excellent"
        assert data["failures"] == []

    def test_audit_vendor_error(self, client):
        ahrefs = MagicMock()
        ahrefs.get_backlinks = AsyncMock(side_effect=VendorAPIError("Ahrefs request failed: 500", status_code=500))
        _use_clients(ahrefs=ahrefs)

        response = client.post("/api/backlinks/audit", json={"domain": "target.com"})
        assert response.status_code == 502

    def test_audit_non_json_vendor_body(self, client, make_transport, no_retry):
        transport = make_transport(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
        ahrefs = AhrefsClient(api_key="ah-key", retry_config=no_retry, transport=transport)
        _use_clients(ahrefs=ahrefs)

        response = client.post("/api/backlinks/audit", json={"domain": "target.com"})

        assert response.status_code == 502
        assert len(transport.requests) == 1
