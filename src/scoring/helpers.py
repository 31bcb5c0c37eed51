"""
Scoring Helper Functions and Constants

Contains intent patterns, weights, tier thresholds, and utility functions
used across all scoring calculations.
"""

import math
import re
from typing import Dict, List, Optional, Pattern, Tuple

from .models import QualityTier, SearchIntent


# ============================================================================
# INTENT PATTERNS (evaluated in order, first match wins)
# Word boundaries are ASCII-only, so accented letters do not extend a word
# ============================================================================

INTENT_PATTERNS: List[Tuple[SearchIntent, Pattern[str]]] = [
    (
        SearchIntent.TRANSACTIONAL,
        re.compile(r"\b(buy|purchase|order|download|get|subscribe|pricing|price|deal|coupon)\b", re.ASCII),
    ),
    (
        SearchIntent.COMMERCIAL,
        re.compile(r"\b(best|top|review|compare|vs|versus|alternative|comparison)\b", re.ASCII),
    ),
    (
        SearchIntent.INFORMATIONAL,
        re.compile(r"\b(how|what|why|when|where|guide|tutorial|learn|examples?)\b", re.ASCII),
    ),
]

DEFAULT_INTENT = SearchIntent.INFORMATIONAL


# ============================================================================
# PRIORITY WEIGHTS
# ============================================================================

PRIORITY_WEIGHTS: Dict[str, float] = {
    "volume": 0.4,      # Traffic potential
    "difficulty": 0.3,  # Achievability
    "value": 0.2,       # Monetization (CPC)
    "position": 0.1,    # Quick-win bonus
}

# Volume saturates at 10,000 searches/month, CPC at 5.0
VOLUME_DIVISOR = 100
CPC_MULTIPLIER = 20

# Ranking just outside page 1 (positions 11-50)
POSITION_BONUS = 25
POSITION_BONUS_RANGE: Tuple[int, int] = (10, 50)


def get_position_bonus(current_position: Optional[int]) -> int:
    """
    Bonus for keywords already ranking, but not on page 1.

    Args:
        current_position: Current SERP position (None if not ranking)

    Returns:
        POSITION_BONUS for positions in (10, 50], else 0
    """
    if not current_position:
        return 0
    low, high = POSITION_BONUS_RANGE
    if low < current_position <= high:
        return POSITION_BONUS
    return 0


# ============================================================================
# BACKLINK WEIGHTS
# ============================================================================

BACKLINK_WEIGHTS: Dict[str, float] = {
    "domain_rating": 40,
    "anchor_relevance": 20,
    "context_relevance": 20,
}

DOFOLLOW_WEIGHT = 20
NON_DOFOLLOW_WEIGHT = 5

# Lower bound of each tier, highest first
QUALITY_TIER_THRESHOLDS: List[Tuple[float, QualityTier]] = [
    (80, QualityTier.EXCELLENT),
    (60, QualityTier.GOOD),
    (40, QualityTier.FAIR),
]


def get_quality_tier(score: float) -> QualityTier:
    """
    Classify a backlink score into a quality tier.

    Boundary values belong to the higher tier (80 is excellent).

    Args:
        score: Backlink quality score (0-100)

    Returns:
        QualityTier enum
    """
    for threshold, tier in QUALITY_TIER_THRESHOLDS:
        if score >= threshold:
            return tier
    return QualityTier.POOR


# ============================================================================
# NUMERIC HELPERS
# ============================================================================

def round_half_up(value: float) -> int:
    """Round to nearest integer, halves towards +infinity (21.5 -> 22, 20.5 -> 21)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def average(values: List[float]) -> float:
    """Arithmetic mean, 0.0 for an empty list."""
    if not values:
        return 0.0
    return sum(values) / len(values)
