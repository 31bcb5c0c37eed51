"""
Backlink Quality Scorer

Score (0-100):
    Domain Rating × 0.40 +
    Link Type (20 dofollow, 5 otherwise) +
    Anchor Relevance × 0.20 +
    Context Relevance × 0.20

nofollow, ugc and sponsored links all get the same reduced weight.
Tiers: >=80 excellent, >=60 good, >=40 fair, else poor.
"""

import logging
from typing import Any, Dict, List, Mapping, Union

from .helpers import (
    BACKLINK_WEIGHTS,
    DOFOLLOW_WEIGHT,
    NON_DOFOLLOW_WEIGHT,
    average,
    clamp,
    get_quality_tier,
    round_half_up,
)
from .models import BacklinkQuality, BacklinkSignal, LinkType, QualityTier

logger = logging.getLogger(__name__)

SignalInput = Union[BacklinkSignal, Mapping[str, Any]]


def _as_signal(signal: SignalInput) -> BacklinkSignal:
    if isinstance(signal, BacklinkSignal):
        return signal
    link_type = signal.get("link_type", "")
    if isinstance(link_type, LinkType):
        link_type = link_type.value
    return BacklinkSignal(
        domain_rating=signal.get("domain_rating", 0),
        link_type=link_type,
        anchor_relevance=signal.get("anchor_relevance", 0),
        context_relevance=signal.get("context_relevance", 0),
    )


def validate_backlink_quality(signal: SignalInput) -> BacklinkQuality:
    """
    Score a backlink and assign its quality tier.

    The tier is taken from the unrounded weighted sum, the reported score is
    rounded. Both are clamped to [0, 100].

    Args:
        signal: BacklinkSignal, or a dict with domain_rating, link_type,
            anchor_relevance, context_relevance

    Returns:
        BacklinkQuality with score and tier
    """
    s = _as_signal(signal)

    link_weight = DOFOLLOW_WEIGHT if s.link_type == LinkType.DOFOLLOW.value else NON_DOFOLLOW_WEIGHT

    raw_score = clamp(
        (s.domain_rating / 100) * BACKLINK_WEIGHTS["domain_rating"] +
        link_weight +
        (s.anchor_relevance / 100) * BACKLINK_WEIGHTS["anchor_relevance"] +
        (s.context_relevance / 100) * BACKLINK_WEIGHTS["context_relevance"]
    )

    return BacklinkQuality(score=round_half_up(raw_score), tier=get_quality_tier(raw_score))


def calculate_batch_backlink_quality(
    signals: List[Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """
    Score a batch of backlinks.

    Each input dict is returned with ``score`` and ``quality`` added. Links
    that cannot be scored are logged and skipped.

    Args:
        signals: Dicts with the signal fields plus any identifying data
            (source_url, source_domain, ...)

    Returns:
        Scored dicts, best first
    """
    results = []

    for item in signals:
        source = item.get("source_url") or item.get("source_domain") or "unknown"
        try:
            quality = validate_backlink_quality(item)
        except Exception as e:
            logger.warning(f"Error scoring backlink from '{source}': {e}")
            continue
        results.append({**item, **quality.to_dict()})

    results.sort(key=lambda x: x["score"], reverse=True)
    return results


def get_backlink_quality_summary(scored: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Summarize a scored backlink batch.

    Args:
        scored: Output of calculate_batch_backlink_quality

    Returns:
        Summary with tier distribution and average score
    """
    tier_counts = {tier.value: 0 for tier in QualityTier}
    for item in scored:
        tier_counts[item["quality"]] += 1

    return {
        "total_backlinks": len(scored),
        "avg_score": round(average([item["score"] for item in scored]), 1),
        "tier_distribution": tier_counts,
        "high_quality_count": tier_counts["excellent"] + tier_counts["good"],
    }
