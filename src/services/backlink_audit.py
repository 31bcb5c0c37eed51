"""
Backlink Audit Service

Scores a domain's backlink profile:
1. Fetch backlinks (Ahrefs)
2. Judge anchor/context relevance for each link
3. Score with the backlink quality scorer
4. Bucket links by tier

Links that fail relevance judgement or scoring are recorded as failures and
the audit continues.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from src.collector.ahrefs import AhrefsClient, BacklinkRecord
from src.scoring import QualityTier, get_backlink_quality_summary, validate_backlink_quality

logger = logging.getLogger(__name__)

# (anchor_relevance, context_relevance), both 0-100
RelevanceJudge = Callable[[BacklinkRecord], Tuple[float, float]]

NEUTRAL_RELEVANCE = 50.0


def keyword_relevance(keywords: Sequence[str]) -> RelevanceJudge:
    """
    Relevance judged by topic keywords.

    Anchor relevance is 100 when the anchor text contains a keyword, 0
    otherwise. Context relevance is neutral (50) since the source page
    content is not fetched.
    """
    lowered = [k.lower() for k in keywords if k]

    def judge(record: BacklinkRecord) -> Tuple[float, float]:
        anchor = (record.anchor_text or "").lower()
        anchor_relevance = 100.0 if any(k in anchor for k in lowered) else 0.0
        return anchor_relevance, NEUTRAL_RELEVANCE

    return judge


def neutral_relevance(record: BacklinkRecord) -> Tuple[float, float]:
    return NEUTRAL_RELEVANCE, NEUTRAL_RELEVANCE


@dataclass
class AuditResult:
    """Scored backlink profile for a domain."""
    domain: str
    scored: List[Dict[str, Any]]
    failures: List[str] = field(default_factory=list)

    @property
    def by_tier(self) -> Dict[str, List[Dict[str, Any]]]:
        buckets: Dict[str, List[Dict[str, Any]]] = {tier.value: [] for tier in QualityTier}
        for link in self.scored:
            buckets[link["quality"]].append(link)
        return buckets

    @property
    def summary(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            **get_backlink_quality_summary(self.scored),
            "failed": len(self.failures),
        }


class BacklinkAuditService:
    """Service for scoring backlink profiles."""

    def __init__(self, ahrefs: AhrefsClient):
        self.ahrefs = ahrefs

    def score_records(
        self,
        records: List[BacklinkRecord],
        relevance: RelevanceJudge = neutral_relevance,
    ) -> Tuple[List[Dict[str, Any]], List[str]]:
        """
        Score already-fetched backlinks.

        Returns:
            (scored link dicts best first, source URLs that failed)
        """
        scored = []
        failures = []

        for record in records:
            try:
                anchor_relevance, context_relevance = relevance(record)
                quality = validate_backlink_quality(
                    record.to_signal(anchor_relevance, context_relevance)
                )
            except Exception as e:
                logger.warning(f"Error scoring backlink from '{record.source_url}': {e}")
                failures.append(record.source_url)
                continue

            scored.append({
                **record.to_dict(),
                "anchor_relevance": anchor_relevance,
                "context_relevance": context_relevance,
                **quality.to_dict(),
            })

        scored.sort(key=lambda x: x["score"], reverse=True)
        return scored, failures

    async def audit(
        self,
        domain: str,
        relevance: Optional[RelevanceJudge] = None,
        limit: int = 1000,
        include_lost: bool = False,
    ) -> AuditResult:
        """
        Fetch and score a domain's backlinks.

        Args:
            domain: Target domain
            relevance: Relevance judge (neutral 50/50 if None)
            limit: Maximum backlinks fetched
            include_lost: Also score links Ahrefs reports as lost

        Returns:
            AuditResult
        """
        records = await self.ahrefs.get_backlinks(domain, limit=limit)
        if not include_lost:
            records = [r for r in records if r.status == "active"]

        scored, failures = self.score_records(records, relevance or neutral_relevance)
        result = AuditResult(domain=domain, scored=scored, failures=failures)

        summary = result.summary
        logger.info(
            f"Backlink audit for {domain}: {summary['total_backlinks']} scored, "
            f"avg={summary['avg_score']}, high quality={summary['high_quality_count']}, "
            f"failed={len(failures)}"
        )
        return result
