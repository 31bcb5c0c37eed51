"""
Keyword Backlog Service

Builds a prioritized keyword backlog:
1. Fetch related keywords for each seed (SEMrush, one seed at a time)
2. De-duplicate across seeds
3. Attach current ranking positions when known (Search Console)
4. Score with the priority scorer and keep the top N

A seed whose fetch fails is logged and skipped; the rest of the backlog is
still built.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from src.collector.client import VendorAPIError
from src.collector.gsc import SearchAnalyticsRow, SearchConsoleClient
from src.collector.semrush import KeywordData, SemrushClient
from src.scoring import (
    PriorityAnalysis,
    calculate_batch_priorities,
    get_priority_summary,
    select_top_keywords,
)
from src.scoring.helpers import round_half_up

logger = logging.getLogger(__name__)


@dataclass
class BacklogResult:
    """Outcome of a backlog build."""
    keywords: List[PriorityAnalysis]
    total_candidates: int
    failed_seeds: List[str] = field(default_factory=list)

    @property
    def summary(self) -> Dict[str, Any]:
        return {
            **get_priority_summary(self.keywords),
            "total_candidates": self.total_candidates,
            "failed_seeds": list(self.failed_seeds),
        }


def positions_from_search_analytics(rows: Iterable[SearchAnalyticsRow]) -> Dict[str, int]:
    """
    Best (lowest) rounded position per query.

    Args:
        rows: Search Console rows

    Returns:
        Lowercased query -> position
    """
    positions: Dict[str, int] = {}
    for row in rows:
        if not row.query or row.position <= 0:
            continue
        query = row.query.lower()
        position = max(1, round_half_up(row.position))
        if query not in positions or position < positions[query]:
            positions[query] = position
    return positions


def dedupe_keywords(keywords: Iterable[KeywordData]) -> List[KeywordData]:
    """Keep the first occurrence of each keyword (case-insensitive)."""
    seen = set()
    unique = []
    for kw in keywords:
        key = kw.keyword.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(kw)
    return unique


class KeywordBacklogService:
    """Service for building prioritized keyword backlogs."""

    def __init__(
        self,
        semrush: SemrushClient,
        database: str = "us",
        gsc: Optional[SearchConsoleClient] = None,
    ):
        self.semrush = semrush
        self.database = database
        self.gsc = gsc

    async def load_positions(self, site_url: str, start_date: str, end_date: str) -> Dict[str, int]:
        """
        Current positions for a property from Search Console.

        Positions only add the quick-win bonus, so a failed fetch is logged
        and the backlog is built without them.

        Returns:
            Lowercased query -> position ({} without a Search Console client)
        """
        if self.gsc is None:
            return {}

        try:
            rows = await self.gsc.get_search_analytics(site_url, start_date, end_date)
        except VendorAPIError as e:
            logger.warning(f"Search Console positions unavailable for {site_url}: {e}")
            return {}

        positions = positions_from_search_analytics(rows)
        logger.info(f"Loaded {len(positions)} current positions for {site_url}")
        return positions

    async def collect_candidates(
        self,
        seed_keywords: List[str],
        per_seed_limit: int = 100,
    ) -> Tuple[List[KeywordData], List[str]]:
        """
        Fetch related keywords for every seed, sequentially.

        Returns:
            (de-duplicated candidates, seeds whose fetch failed)
        """
        candidates: List[KeywordData] = []
        failed: List[str] = []

        for seed in seed_keywords:
            try:
                related = await self.semrush.research_keywords(
                    seed, database=self.database, limit=per_seed_limit
                )
            except Exception as e:
                logger.warning(f"Keyword research failed for seed '{seed}': {e}")
                failed.append(seed)
                continue
            candidates.extend(related)

        return dedupe_keywords(candidates), failed

    async def build_backlog(
        self,
        seed_keywords: List[str],
        limit: int = 20,
        per_seed_limit: int = 100,
        current_positions: Optional[Dict[str, int]] = None,
        min_score: int = 0,
    ) -> BacklogResult:
        """
        Build a prioritized backlog from seed keywords.

        Args:
            seed_keywords: Seeds to expand
            limit: Backlog size (top N by priority)
            per_seed_limit: Related keywords fetched per seed
            current_positions: Lowercased keyword -> current position
            min_score: Drop keywords scoring below this

        Returns:
            BacklogResult with the top keywords, highest priority first
        """
        candidates, failed = await self.collect_candidates(seed_keywords, per_seed_limit)
        positions = current_positions or {}

        rows = []
        for kw in candidates:
            row = kw.to_dict()
            if kw.position is None:
                row["current_position"] = positions.get(kw.keyword.lower())
            rows.append(row)

        scored = calculate_batch_priorities(rows)
        top = select_top_keywords(scored, limit=limit, min_score=min_score)

        logger.info(
            f"Backlog built from {len(seed_keywords)} seeds: "
            f"{len(rows)} candidates, {len(top)} selected, "
            f"{len(failed)} seeds failed"
        )

        return BacklogResult(
            keywords=top,
            total_candidates=len(candidates),
            failed_seeds=failed,
        )
