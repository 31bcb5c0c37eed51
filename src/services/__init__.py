"""
Keyword Intelligence Services Layer

Orchestration around the pure scorers: fetch from vendor APIs, score, rank.
"""

from .keyword_backlog import (
    BacklogResult,
    KeywordBacklogService,
    dedupe_keywords,
    positions_from_search_analytics,
)
from .backlink_audit import (
    AuditResult,
    BacklinkAuditService,
    keyword_relevance,
    neutral_relevance,
)

__all__ = [
    "BacklogResult",
    "KeywordBacklogService",
    "dedupe_keywords",
    "positions_from_search_analytics",
    "AuditResult",
    "BacklinkAuditService",
    "keyword_relevance",
    "neutral_relevance",
]
