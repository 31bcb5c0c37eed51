"""
Priority Score Calculator

Calculates a score (0-100) representing how worthwhile it is to target a
keyword now, considering:

1. Search Volume (40%) - Traffic potential, saturates at 10,000/month
2. Difficulty Inverse (30%) - Achievability
3. CPC Value (20%) - Monetization, saturates at 5.0
4. Position Bonus (10%) - Keywords ranking on pages 2-5

Formula:
    Priority = round(min(
        Volume_Score × 0.4 +
        Difficulty_Inverse × 0.3 +
        Value_Score × 0.2 +
        Position_Bonus × 0.1,
    100))
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from .helpers import (
    CPC_MULTIPLIER,
    PRIORITY_WEIGHTS,
    VOLUME_DIVISOR,
    average,
    clamp,
    get_position_bonus,
    round_half_up,
)
from .intent import classify_intent
from .models import KeywordMetrics

logger = logging.getLogger(__name__)

MetricsInput = Union[KeywordMetrics, Mapping[str, Any]]


@dataclass
class PriorityAnalysis:
    """Priority score with its component breakdown."""
    keyword: str
    priority_score: int

    # Score components (0-100 each, bonus is 0 or 25)
    volume_score: float
    difficulty_score: float
    value_score: float
    position_bonus: int

    # Raw data
    search_volume: int
    difficulty: float
    cpc: float
    current_position: Optional[int]
    intent: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "priority": self.priority_score,
            "intent": self.intent,
            "search_volume": self.search_volume,
            "difficulty": self.difficulty,
            "cpc": self.cpc,
            "current_position": self.current_position,
            "breakdown": {
                "volume_score": self.volume_score,
                "difficulty_score": self.difficulty_score,
                "value_score": self.value_score,
                "position_bonus": self.position_bonus,
            },
        }


def _as_metrics(metrics: MetricsInput) -> KeywordMetrics:
    if isinstance(metrics, KeywordMetrics):
        return metrics
    # No validation here; callers sanitize input before scoring
    return KeywordMetrics(
        search_volume=metrics.get("search_volume", 0),
        difficulty=metrics.get("difficulty", 0),
        cpc=metrics.get("cpc", 0),
        current_position=metrics.get("current_position"),
    )


def analyze_priority(metrics: MetricsInput, keyword: str = "") -> PriorityAnalysis:
    """
    Calculate the priority score with a full breakdown.

    Args:
        metrics: KeywordMetrics, or a dict with search_volume, difficulty,
            cpc and optional current_position
        keyword: Keyword text, used for labelling and intent

    Returns:
        PriorityAnalysis
    """
    m = _as_metrics(metrics)

    volume_score = min(m.search_volume / VOLUME_DIVISOR, 100)
    difficulty_score = 100 - m.difficulty
    value_score = min(m.cpc * CPC_MULTIPLIER, 100)
    position_bonus = get_position_bonus(m.current_position)

    raw_score = (
        volume_score * PRIORITY_WEIGHTS["volume"] +
        difficulty_score * PRIORITY_WEIGHTS["difficulty"] +
        value_score * PRIORITY_WEIGHTS["value"] +
        position_bonus * PRIORITY_WEIGHTS["position"]
    )

    return PriorityAnalysis(
        keyword=keyword,
        priority_score=round_half_up(clamp(raw_score)),
        volume_score=round(volume_score, 1),
        difficulty_score=round(difficulty_score, 1),
        value_score=round(value_score, 1),
        position_bonus=position_bonus,
        search_volume=m.search_volume,
        difficulty=m.difficulty,
        cpc=m.cpc,
        current_position=m.current_position,
        intent=classify_intent(keyword).value,
    )


def calculate_priority(metrics: MetricsInput) -> int:
    """
    Calculate the priority score for a keyword.

    Pure and total: out-of-range numbers are clamped, never rejected.

    Args:
        metrics: KeywordMetrics or equivalent dict

    Returns:
        Integer priority in [0, 100]
    """
    return analyze_priority(metrics).priority_score


def calculate_batch_priorities(keywords: List[Dict[str, Any]]) -> List[PriorityAnalysis]:
    """
    Calculate priority for a batch of keywords.

    A keyword that cannot be scored is logged and skipped; the rest of the
    batch still completes.

    Args:
        keywords: List of dicts with keyword plus the metric fields

    Returns:
        List of PriorityAnalysis, sorted by score descending (ties keep
        input order)
    """
    results = []

    for item in keywords:
        keyword_str = item.get("keyword", "")
        try:
            results.append(analyze_priority(item, keyword=keyword_str))
        except Exception as e:
            logger.warning(f"Error calculating priority for '{keyword_str}': {e}")

    results.sort(key=lambda x: x.priority_score, reverse=True)
    return results


def select_top_keywords(
    analyses: List[PriorityAnalysis],
    limit: int = 20,
    min_score: int = 0,
) -> List[PriorityAnalysis]:
    """
    Pick the top-N keywords by priority.

    Args:
        analyses: Scored keywords (any order)
        limit: Maximum results to return
        min_score: Drop keywords scoring below this

    Returns:
        Highest-priority keywords first
    """
    eligible = [a for a in analyses if a.priority_score >= min_score]
    eligible.sort(key=lambda x: x.priority_score, reverse=True)
    return eligible[:max(0, limit)]


def get_priority_summary(analyses: List[PriorityAnalysis]) -> Dict[str, Any]:
    """
    Generate summary statistics from a batch priority run.

    Args:
        analyses: List of PriorityAnalysis results

    Returns:
        Summary dict with averages, intent distribution and top keywords
    """
    if not analyses:
        return {
            "total_keywords": 0,
            "avg_priority_score": 0,
            "max_priority_score": 0,
            "quick_win_count": 0,
            "intent_distribution": {},
            "top_10_keywords": [],
        }

    scores = [a.priority_score for a in analyses]

    intent_counts: Dict[str, int] = {}
    for a in analyses:
        intent_counts[a.intent] = intent_counts.get(a.intent, 0) + 1

    ranked = sorted(analyses, key=lambda x: x.priority_score, reverse=True)

    return {
        "total_keywords": len(analyses),
        "avg_priority_score": round(average(scores), 1),
        "max_priority_score": max(scores),
        "quick_win_count": sum(1 for a in analyses if a.position_bonus > 0),
        "intent_distribution": intent_counts,
        "top_10_keywords": [
            {
                "keyword": a.keyword,
                "score": a.priority_score,
                "volume": a.search_volume,
                "position": a.current_position,
            }
            for a in ranked[:10]
        ],
    }
