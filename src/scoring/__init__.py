"""
Scoring Module for the Keyword Intelligence Engine

This module provides three core calculations:

1. **Search Intent**
   Lexical classification into transactional / commercial / informational.
   Patterns are checked in that order; unmatched keywords are informational.

2. **Priority Score** (0-100)
   How worthwhile a keyword is to target now.
   Components: Volume (40%), Difficulty Inverse (30%), CPC Value (20%),
   Position Bonus (10%)

3. **Backlink Quality** (0-100 + tier)
   Components: Domain Rating (40%), Link Type (20 / 5), Anchor Relevance (20%),
   Context Relevance (20%)

All three are pure functions: no I/O, no shared state, safe to call
concurrently.

Example Usage:
    from src.scoring import (
        classify_intent,
        calculate_priority,
        validate_backlink_quality,
        KeywordMetrics,
        BacklinkSignal,
    )

    intent = classify_intent("best project management software")
    print(intent.value)  # commercial

    priority = calculate_priority(
        KeywordMetrics(search_volume=2400, difficulty=42, cpc=3.1, current_position=15)
    )

    quality = validate_backlink_quality({
        "domain_rating": 72,
        "link_type": "dofollow",
        "anchor_relevance": 80,
        "context_relevance": 60,
    })
    print(quality.score, quality.quality)
"""

# Data model
from .models import (
    SearchIntent,
    LinkType,
    QualityTier,
    KeywordMetrics,
    BacklinkSignal,
    BacklinkQuality,
    InvalidMetricsError,
)

# Helper utilities and constants
from .helpers import (
    INTENT_PATTERNS,
    PRIORITY_WEIGHTS,
    BACKLINK_WEIGHTS,
    QUALITY_TIER_THRESHOLDS,
    get_position_bonus,
    get_quality_tier,
    round_half_up,
    clamp,
)

# Intent
from .intent import (
    match_intent,
    classify_intent,
    classify_batch_intents,
    get_intent_distribution,
    filter_by_intent,
)

# Priority
from .priority import (
    PriorityAnalysis,
    analyze_priority,
    calculate_priority,
    calculate_batch_priorities,
    select_top_keywords,
    get_priority_summary,
)

# Backlinks
from .backlinks import (
    validate_backlink_quality,
    calculate_batch_backlink_quality,
    get_backlink_quality_summary,
)

__all__ = [
    # Models
    "SearchIntent",
    "LinkType",
    "QualityTier",
    "KeywordMetrics",
    "BacklinkSignal",
    "BacklinkQuality",
    "InvalidMetricsError",

    # Helpers
    "INTENT_PATTERNS",
    "PRIORITY_WEIGHTS",
    "BACKLINK_WEIGHTS",
    "QUALITY_TIER_THRESHOLDS",
    "get_position_bonus",
    "get_quality_tier",
    "round_half_up",
    "clamp",

    # Intent
    "match_intent",
    "classify_intent",
    "classify_batch_intents",
    "get_intent_distribution",
    "filter_by_intent",

    # Priority
    "PriorityAnalysis",
    "analyze_priority",
    "calculate_priority",
    "calculate_batch_priorities",
    "select_top_keywords",
    "get_priority_summary",

    # Backlinks
    "validate_backlink_quality",
    "calculate_batch_backlink_quality",
    "get_backlink_quality_summary",
]

__version__ = "1.0.0"
