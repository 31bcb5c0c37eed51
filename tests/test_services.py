"""
Tests for the backlog and backlink audit services.

Vendor clients are replaced with AsyncMocks.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.collector import SearchAnalyticsRow, VendorAPIError, parse_backlinks
from src.collector.semrush import KeywordData
from src.services import (
    BacklinkAuditService,
    KeywordBacklogService,
    dedupe_keywords,
    keyword_relevance,
    neutral_relevance,
    positions_from_search_analytics,
)


def _kw(keyword, volume, difficulty, cpc=0.0, position=None):
    return KeywordData(
        keyword=keyword,
        search_volume=volume,
        difficulty=difficulty,
        cpc=cpc,
        intent="informational",
        position=position,
    )


RELATED = {
    "crm": [
        _kw("crm software", 12000, 70, 8.5),
        _kw("crm tutorial", 1000, 50),
    ],
    "sales pipeline": [
        _kw("CRM Software", 12000, 70, 8.5),
        _kw("sales pipeline stages", 2400, 35, 3.0),
    ],
}


@pytest.fixture
def semrush():
    client = MagicMock()

    async def research(seed, database="us", limit=100):
        if seed not in RELATED:
            raise VendorAPIError("SEMrush request failed: 500", status_code=500)
        return RELATED[seed]

    client.research_keywords = AsyncMock(side_effect=research)
    return client


@pytest.fixture
def ahrefs(mock_backlinks_payload):
    client = MagicMock()
    client.get_backlinks = AsyncMock(return_value=parse_backlinks(mock_backlinks_payload))
    return client


class TestBacklogHelpers:
    """Test backlog building blocks."""

    def test_dedupe_keeps_first(self):
        unique = dedupe_keywords(RELATED["crm"] + RELATED["sales pipeline"])

        assert [k.keyword for k in unique] == ["crm software", "crm tutorial", "sales pipeline stages"]

    def test_positions_from_search_analytics(self):
        rows = [
            SearchAnalyticsRow("https://a.com/1", "CRM Tutorial", 10, 400, 0.025, 14.6),
            SearchAnalyticsRow("https://a.com/2", "crm tutorial", 2, 90, 0.022, 31.0),
            SearchAnalyticsRow("https://a.com/3", "", 1, 10, 0.1, 3.0),
            SearchAnalyticsRow("https://a.com/4", "crm login", 0, 5, 0.0, 0.0),
        ]

        assert positions_from_search_analytics(rows) == {"crm tutorial": 15}


class TestKeywordBacklogService:
    """Test backlog builds."""

    @pytest.mark.asyncio
    async def test_build_backlog(self, semrush):
        service = KeywordBacklogService(semrush, database="uk")
        result = await service.build_backlog(["crm", "sales pipeline"], limit=2)

        assert result.total_candidates == 3
        assert [a.keyword for a in result.keywords] == ["crm software", "sales pipeline stages"]
        assert result.failed_seeds == []
        semrush.research_keywords.assert_any_await("crm", database="uk", limit=100)

    @pytest.mark.asyncio
    async def test_failed_seed_is_skipped(self, semrush):
        service = KeywordBacklogService(semrush)
        result = await service.build_backlog(["broken seed", "crm"])

        assert result.failed_seeds == ["broken seed"]
        assert result.total_candidates == 2
        assert result.summary["failed_seeds"] == ["broken seed"]

    @pytest.mark.asyncio
    async def test_positions_add_bonus(self, semrush):
        service = KeywordBacklogService(semrush)
        result = await service.build_backlog(["crm"], current_positions={"crm tutorial": 20})

        tutorial = next(a for a in result.keywords if a.keyword == "crm tutorial")
        assert tutorial.current_position == 20
        assert tutorial.priority_score == 22

    @pytest.mark.asyncio
    async def test_min_score(self, semrush):
        service = KeywordBacklogService(semrush)
        result = await service.build_backlog(["crm"], min_score=50)

        assert [a.keyword for a in result.keywords] == ["crm software"]
        assert result.summary["total_keywords"] == 1

    @pytest.mark.asyncio
    async def test_all_seeds_fail(self, semrush):
        result = await KeywordBacklogService(semrush).build_backlog(["x", "y"])

        assert result.keywords == []
        assert result.failed_seeds == ["x", "y"]


    @pytest.mark.asyncio
    async def test_load_positions(self, semrush):
        gsc = MagicMock()
        gsc.get_search_analytics = AsyncMock(return_value=[
            SearchAnalyticsRow("https://a.com/p", "CRM Tutorial", 5, 100, 0.05, 19.6),
            SearchAnalyticsRow("https://a.com/q", "crm tutorial", 1, 40, 0.02, 33.0),
        ])
        service = KeywordBacklogService(semrush, gsc=gsc)

        positions = await service.load_positions("https://a.com/", "2025-01-01", "2025-01-28")

        assert positions == {"crm tutorial": 20}
        gsc.get_search_analytics.assert_awaited_once_with("https://a.com/", "2025-01-01", "2025-01-28")

        result = await service.build_backlog(["crm"], current_positions=positions)
        tutorial = next(a for a in result.keywords if a.keyword == "crm tutorial")
        assert tutorial.priority_score == 22

    @pytest.mark.asyncio
    async def test_load_positions_without_search_console(self, semrush):
        service = KeywordBacklogService(semrush)

        assert await service.load_positions("https://a.com/", "2025-01-01", "2025-01-28") == {}

    @pytest.mark.asyncio
    async def test_load_positions_vendor_error(self, semrush):
        gsc = MagicMock()
        gsc.get_search_analytics = AsyncMock(
            side_effect=VendorAPIError("Search Console request failed: 403", status_code=403)
        )
        service = KeywordBacklogService(semrush, gsc=gsc)

        assert await service.load_positions("https://a.com/", "2025-01-01", "2025-01-28") == {}

class TestBacklinkAuditService:
    """Test backlink audits."""

    @pytest.mark.asyncio
    async def test_audit_active_links(self, ahrefs):
        result = await BacklinkAuditService(ahrefs).audit("target.com")

        assert [link["source_domain"] for link in result.scored] == ["news.example.org", "forum.example.net"]
        assert [link["score"] for link in result.scored] == [73, 37]
        assert [link["quality"] for link in result.scored] == ["good", "poor"]
        assert result.failures == []

    @pytest.mark.asyncio
    async def test_include_lost(self, ahrefs):
        result = await BacklinkAuditService(ahrefs).audit("target.com", include_lost=True)

        assert len(result.scored) == 3
        assert result.summary["tier_distribution"]["good"] == 2

    @pytest.mark.asyncio
    async def test_keyword_relevance(self, ahrefs):
        result = await BacklinkAuditService(ahrefs).audit(
            "target.com", relevance=keyword_relevance(["Project Management"])
        )

        news, forum = result.scored
        assert news["anchor_relevance"] == 100.0
        assert news["context_relevance"] == 50.0
        assert (news["score"], news["quality"]) == (83, "excellent")
        assert forum["anchor_relevance"] == 0.0
        assert forum["score"] == 27

    @pytest.mark.asyncio
    async def test_failed_link_is_recorded(self, ahrefs):
        def judge(record):
            if "forum" in record.source_domain:
                raise RuntimeError("page unavailable")
            return neutral_relevance(record)

        result = await BacklinkAuditService(ahrefs).audit("target.com", relevance=judge)

        assert len(result.scored) == 1
        assert result.failures == ["https://forum.example.net/thread/1"]
        assert result.summary["failed"] == 1

    @pytest.mark.asyncio
    async def test_by_tier(self, ahrefs):
        result = await BacklinkAuditService(ahrefs).audit("target.com")
        tiers = result.by_tier

        assert [link["source_domain"] for link in tiers["good"]] == ["news.example.org"]
        assert tiers["excellent"] == []

    @pytest.mark.asyncio
    async def test_vendor_error_propagates(self, ahrefs):
        ahrefs.get_backlinks.side_effect = VendorAPIError("Ahrefs request failed: 401", status_code=401)

        with pytest.raises(VendorAPIError):
            await BacklinkAuditService(ahrefs).audit("target.com")
