"""
SEMrush Keyword Research Client

Wraps three SEMrush analytics reports:
- phrase_related: keywords related to a seed phrase
- domain_organic: keywords a competitor domain ranks for
- domain_ranks: domain overview metrics

SEMrush answers with ';'-separated CSV (header line first). Parsing is kept
in plain functions so it can be tested without the network.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from src.scoring import KeywordMetrics, classify_intent

from .client import RetryConfig, VendorAPIClient, parse_float, parse_int

logger = logging.getLogger(__name__)


@dataclass
class KeywordData:
    """One keyword row from SEMrush."""
    keyword: str
    search_volume: int
    difficulty: float
    cpc: float
    intent: str
    trend: List[float] = field(default_factory=list)
    related_keywords: List[str] = field(default_factory=list)
    position: Optional[int] = None

    def to_metrics(self) -> KeywordMetrics:
        return KeywordMetrics(
            search_volume=self.search_volume,
            difficulty=self.difficulty,
            cpc=self.cpc,
            current_position=self.position,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "search_volume": self.search_volume,
            "difficulty": self.difficulty,
            "cpc": self.cpc,
            "intent": self.intent,
            "trend": list(self.trend),
            "current_position": self.position,
        }


def _data_lines(text: str) -> List[str]:
    """Rows after the header; SEMrush reports failures as 'ERROR <code> :: <msg>'."""
    if not text or text.startswith("ERROR"):
        if text:
            logger.warning(f"SEMrush returned an error: {text.strip()}")
        return []
    return text.split("\n")[1:]


def _parse_trend(raw: str) -> List[float]:
    if not raw or not raw.strip():
        return []
    return [parse_float(v) for v in raw.split(",")]


def parse_phrase_related(text: str) -> List[KeywordData]:
    """
    Parse a phrase_related report (columns Ph,Nq,Cp,Co,Nr,Td).

    Args:
        text: Raw CSV body

    Returns:
        KeywordData list, rows without a keyword dropped
    """
    results = []
    for line in _data_lines(text):
        cols = line.split(";")
        keyword = cols[0].strip()
        if not keyword:
            continue
        volume = cols[1] if len(cols) > 1 else ""
        cpc = cols[2] if len(cols) > 2 else ""
        competition = cols[3] if len(cols) > 3 else ""
        trend = cols[5] if len(cols) > 5 else ""

        results.append(KeywordData(
            keyword=keyword,
            search_volume=parse_int(volume),
            difficulty=parse_float(competition) * 100,
            cpc=parse_float(cpc),
            intent=classify_intent(keyword).value,
            trend=_parse_trend(trend),
        ))
    return results


def parse_domain_organic(text: str) -> List[KeywordData]:
    """
    Parse a domain_organic report (columns Ph,Po,Nq,Cp,Co,...).

    Args:
        text: Raw CSV body

    Returns:
        KeywordData list with the domain's ranking position
    """
    results = []
    for line in _data_lines(text):
        cols = line.split(";")
        keyword = cols[0].strip()
        if not keyword:
            continue
        position = parse_int(cols[1]) if len(cols) > 1 else 0
        volume = cols[2] if len(cols) > 2 else ""
        cpc = cols[3] if len(cols) > 3 else ""
        competition = cols[4] if len(cols) > 4 else ""

        results.append(KeywordData(
            keyword=keyword,
            search_volume=parse_int(volume),
            difficulty=parse_float(competition) * 100,
            cpc=parse_float(cpc),
            intent=classify_intent(keyword).value,
            position=position or None,
        ))
    return results


def parse_domain_ranks(domain: str, text: str) -> Dict[str, Any]:
    """
    Parse a domain_ranks report (columns Dn,Rk,Or,Ot,Oc,Ad,At,Ac).

    Missing data yields zeros rather than an error.
    """
    lines = _data_lines(text)
    cols = lines[0].split(";") if lines else []
    cols += [""] * (8 - len(cols))

    return {
        "domain": domain,
        "rank": parse_int(cols[1]),
        "organic_keywords": parse_int(cols[2]),
        "organic_traffic": parse_int(cols[3]),
        "organic_cost": parse_float(cols[4]),
        "paid_keywords": parse_int(cols[5]),
        "paid_traffic": parse_int(cols[6]),
        "paid_cost": parse_float(cols[7]),
    }


class SemrushClient(VendorAPIClient):
    """
    Async client for the SEMrush analytics API.

    Usage:
        async with SemrushClient(api_key="...") as client:
            keywords = await client.research_keywords("crm software", limit=50)
    """

    BASE_URL = "https://api.semrush.com"
    SERVICE_NAME = "SEMrush"

    def __init__(
        self,
        api_key: str,
        retry_config: Optional[RetryConfig] = None,
        timeout: float = 60.0,
        **kwargs: Any,
    ):
        if not api_key:
            raise ValueError("SEMrush API key not provided")
        self.api_key = api_key
        super().__init__(retry_config=retry_config, timeout=timeout, **kwargs)

    async def _report(self, params: Dict[str, Any]) -> str:
        response = await self.get("/", params={**params, "key": self.api_key})
        return response.text

    async def research_keywords(
        self,
        keyword: str,
        database: str = "us",
        limit: int = 100,
    ) -> List[KeywordData]:
        """
        Research keywords related to a seed phrase.

        Args:
            keyword: Seed keyword
            database: Regional database ('us', 'uk', 'ca', ...)
            limit: Maximum rows

        Returns:
            KeywordData list
        """
        text = await self._report({
            "type": "phrase_related",
            "phrase": keyword,
            "database": database,
            "display_limit": limit,
            "export_columns": "Ph,Nq,Cp,Co,Nr,Td",
        })
        results = parse_phrase_related(text)
        logger.info(f"SEMrush related keywords for '{keyword}': {len(results)}")
        return results

    async def get_competitor_keywords(
        self,
        domain: str,
        database: str = "us",
        limit: int = 1000,
    ) -> List[KeywordData]:
        """Get organic keywords a competitor domain ranks for."""
        text = await self._report({
            "type": "domain_organic",
            "domain": domain,
            "database": database,
            "display_limit": limit,
            "export_columns": "Ph,Po,Nq,Cp,Co,Tr,Tc,Nr,Td",
        })
        results = parse_domain_organic(text)
        logger.info(f"SEMrush competitor keywords for {domain}: {len(results)}")
        return results

    async def get_domain_overview(self, domain: str, database: str = "us") -> Dict[str, Any]:
        """Get domain overview metrics (rank, organic/paid keywords, traffic, cost)."""
        text = await self._report({
            "type": "domain_ranks",
            "domain": domain,
            "database": database,
            "export_columns": "Dn,Rk,Or,Ot,Oc,Ad,At,Ac",
        })
        return parse_domain_ranks(domain, text)
