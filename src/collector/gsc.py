"""
Google Search Console Client

Search analytics (clicks, impressions, CTR, position) per page/query.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

from .client import RetryConfig, VendorAPIClient

logger = logging.getLogger(__name__)


@dataclass
class SearchAnalyticsRow:
    """One page/query row from Search Console."""
    page: str
    query: str
    clicks: int
    impressions: int
    ctr: float
    position: float


def parse_search_analytics(payload: Dict[str, Any]) -> List[SearchAnalyticsRow]:
    """Convert a searchAnalytics/query response; no rows means an empty list."""
    rows = []
    for row in payload.get("rows") or []:
        keys = row.get("keys") or []
        rows.append(SearchAnalyticsRow(
            page=keys[0] if len(keys) > 0 else "",
            query=keys[1] if len(keys) > 1 else "",
            clicks=row.get("clicks", 0),
            impressions=row.get("impressions", 0),
            ctr=row.get("ctr", 0.0),
            position=row.get("position", 0.0),
        ))
    return rows


class SearchConsoleClient(VendorAPIClient):
    """Async client for the Search Console webmasters v3 API."""

    BASE_URL = "https://www.googleapis.com/webmasters/v3"
    SERVICE_NAME = "Search Console"

    def __init__(
        self,
        access_token: str,
        retry_config: Optional[RetryConfig] = None,
        timeout: float = 60.0,
        **kwargs: Any,
    ):
        if not access_token:
            raise ValueError("Google access token not provided")
        super().__init__(
            headers={"Authorization": f"Bearer {access_token}"},
            retry_config=retry_config,
            timeout=timeout,
            **kwargs,
        )

    async def get_search_analytics(
        self,
        site_url: str,
        start_date: str,
        end_date: str,
        dimensions: Sequence[str] = ("page", "query"),
        row_limit: int = 25000,
    ) -> List[SearchAnalyticsRow]:
        """
        Query search analytics for a property.

        Args:
            site_url: Property URL (e.g. "https://example.com/")
            start_date: YYYY-MM-DD
            end_date: YYYY-MM-DD
            dimensions: Grouping dimensions (page, query, country, device)
            row_limit: Maximum rows

        Returns:
            SearchAnalyticsRow list
        """
        payload = await self.post_json(
            f"/sites/{quote(site_url, safe='')}/searchAnalytics/query",
            json={
                "startDate": start_date,
                "endDate": end_date,
                "dimensions": list(dimensions),
                "rowLimit": row_limit,
            },
        )
        rows = parse_search_analytics(payload)
        logger.info(f"Search Console rows for {site_url}: {len(rows)}")
        return rows
