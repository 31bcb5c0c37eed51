"""
Ahrefs Backlink Client

Backlink profiles, domain metrics and live link verification through the
Ahrefs v3 Site Explorer API.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from src.scoring import BacklinkSignal, LinkType

from .client import RetryConfig, VendorAPIClient

logger = logging.getLogger(__name__)


@dataclass
class BacklinkRecord:
    """One backlink from the Ahrefs profile."""
    source_url: str
    source_domain: str
    target_url: str
    anchor_text: str
    domain_rating: float
    url_rating: float
    link_type: str
    first_seen: Optional[str]
    last_checked: Optional[str]
    status: str  # active / lost

    def to_signal(self, anchor_relevance: float, context_relevance: float) -> BacklinkSignal:
        """Combine with relevance judgements into a scoreable signal."""
        return BacklinkSignal(
            domain_rating=self.domain_rating,
            link_type=self.link_type,
            anchor_relevance=anchor_relevance,
            context_relevance=context_relevance,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_url": self.source_url,
            "source_domain": self.source_domain,
            "target_url": self.target_url,
            "anchor_text": self.anchor_text,
            "domain_rating": self.domain_rating,
            "url_rating": self.url_rating,
            "link_type": self.link_type,
            "first_seen": self.first_seen,
            "last_checked": self.last_checked,
            "status": self.status,
        }


def parse_backlinks(payload: Dict[str, Any]) -> List[BacklinkRecord]:
    """
    Convert an Ahrefs backlinks response into records.

    Ahrefs only reports dofollow or not, so non-dofollow links come back as
    nofollow.
    """
    records = []
    for link in payload.get("backlinks") or []:
        records.append(BacklinkRecord(
            source_url=link.get("url_from", ""),
            source_domain=link.get("domain_from", ""),
            target_url=link.get("url_to", ""),
            anchor_text=link.get("anchor", ""),
            domain_rating=link.get("domain_rating") or 0,
            url_rating=link.get("url_rating") or 0,
            link_type=LinkType.DOFOLLOW.value if link.get("is_dofollow") else LinkType.NOFOLLOW.value,
            first_seen=link.get("first_seen"),
            last_checked=link.get("last_check"),
            status="lost" if link.get("is_lost") else "active",
        ))
    return records


class AhrefsClient(VendorAPIClient):
    """
    Async client for the Ahrefs Site Explorer API.

    Usage:
        async with AhrefsClient(api_key="...") as client:
            links = await client.get_backlinks("example.com", limit=200)
    """

    BASE_URL = "https://api.ahrefs.com/v3"
    SERVICE_NAME = "Ahrefs"

    def __init__(
        self,
        api_key: str,
        retry_config: Optional[RetryConfig] = None,
        timeout: float = 60.0,
        **kwargs: Any,
    ):
        if not api_key:
            raise ValueError("Ahrefs API key not provided")
        super().__init__(
            headers={"Authorization": f"Bearer {api_key}"},
            retry_config=retry_config,
            timeout=timeout,
            **kwargs,
        )

    async def get_backlinks(
        self,
        domain: str,
        mode: str = "domain",
        limit: int = 1000,
    ) -> List[BacklinkRecord]:
        """
        Get the backlink profile for a domain.

        Args:
            domain: Target domain
            mode: exact / domain / subdomains
            limit: Maximum backlinks

        Returns:
            BacklinkRecord list
        """
        payload = await self.get_json(
            "/site-explorer/backlinks",
            params={"target": domain, "mode": mode, "limit": limit},
        )
        records = parse_backlinks(payload)
        logger.info(f"Ahrefs backlinks for {domain}: {len(records)}")
        return records

    async def get_domain_metrics(self, domain: str) -> Dict[str, Any]:
        """Get DR, UR, backlink and referring-domain counts, organic traffic."""
        payload = await self.get_json(
            "/site-explorer/metrics",
            params={"target": domain, "mode": "domain"},
        )
        metrics = payload.get("metrics") or {}

        return {
            "domain": domain,
            "domain_rating": metrics.get("domain_rating", 0),
            "url_rating": metrics.get("url_rating", 0),
            "backlinks": metrics.get("backlinks", 0),
            "referring_domains": metrics.get("refdomains", 0),
            "organic_traffic": metrics.get("traffic", 0),
            "organic_keywords": metrics.get("keywords", 0),
        }

    async def verify_backlink(self, source_url: str, target_url: str) -> bool:
        """
        Check that a source page still links to the target.

        Any fetch failure counts as not verified. The source page is fetched
        without the Ahrefs credentials.
        """
        client_kwargs: Dict[str, Any] = {"timeout": self.timeout, "follow_redirects": True}
        if self._transport is not None:
            client_kwargs["transport"] = self._transport

        try:
            async with httpx.AsyncClient(**client_kwargs) as page_client:
                response = await page_client.get(source_url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.debug(f"Backlink verification fetch failed for {source_url}: {e}")
            return False
        return target_url in response.text
