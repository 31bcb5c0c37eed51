"""
Intent Classifier

Maps a keyword to a search intent with lexical rules. Pattern families are
checked in a fixed order:

1. Transactional (buy, pricing, coupon, ...)
2. Commercial (best, review, vs, ...)
3. Informational (how, guide, tutorial, ...)

The first family that matches wins, so "how to buy a vpn" is transactional.
Keywords matching nothing default to informational. Navigational intent is
never produced here; only the AI classifier can return it.
"""

from typing import Dict, Iterable, List, Optional

from .helpers import DEFAULT_INTENT, INTENT_PATTERNS
from .models import SearchIntent


def match_intent(keyword: str) -> Optional[SearchIntent]:
    """Intent of the first matching pattern family, or None when nothing matches."""
    lower = (keyword or "").lower()

    for intent, pattern in INTENT_PATTERNS:
        if pattern.search(lower):
            return intent

    return None


def classify_intent(keyword: str) -> SearchIntent:
    """
    Classify search intent for a keyword.

    Args:
        keyword: Raw keyword string (any case, may be empty)

    Returns:
        SearchIntent enum (never NAVIGATIONAL)
    """
    return match_intent(keyword) or DEFAULT_INTENT


def classify_batch_intents(keywords: Iterable[str]) -> Dict[str, SearchIntent]:
    """Classify many keywords at once, keyed by keyword."""
    return {keyword: classify_intent(keyword) for keyword in keywords}


def get_intent_distribution(keywords: Iterable[str]) -> Dict[str, int]:
    """
    Count keywords per intent.

    Every intent appears in the result, including zero counts.
    """
    counts = {intent.value: 0 for intent in SearchIntent}
    for keyword in keywords:
        counts[classify_intent(keyword).value] += 1
    return counts


def filter_by_intent(keywords: Iterable[str], intent: SearchIntent) -> List[str]:
    """Keep keywords whose lexical intent matches, preserving order."""
    return [kw for kw in keywords if classify_intent(kw) == intent]
