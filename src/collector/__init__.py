"""
Keyword Intelligence Engine - Data Collection Package

Async clients for the vendor APIs the engine consumes:
- SEMrush: keyword research, competitor keywords, domain overview
- Ahrefs: backlink profiles, domain metrics, link verification
- Search Console: search analytics per page/query
"""

from .client import RetryConfig, VendorAPIClient, VendorAPIError
from .semrush import (
    KeywordData,
    SemrushClient,
    parse_phrase_related,
    parse_domain_organic,
    parse_domain_ranks,
)
from .ahrefs import AhrefsClient, BacklinkRecord, parse_backlinks
from .gsc import SearchConsoleClient, SearchAnalyticsRow, parse_search_analytics
from .config import CollectorConfig, CollectorClients

__all__ = [
    # Client base
    "RetryConfig",
    "VendorAPIClient",
    "VendorAPIError",

    # SEMrush
    "KeywordData",
    "SemrushClient",
    "parse_phrase_related",
    "parse_domain_organic",
    "parse_domain_ranks",

    # Ahrefs
    "AhrefsClient",
    "BacklinkRecord",
    "parse_backlinks",

    # Search Console
    "SearchConsoleClient",
    "SearchAnalyticsRow",
    "parse_search_analytics",

    # Config
    "CollectorConfig",
    "CollectorClients",
]
