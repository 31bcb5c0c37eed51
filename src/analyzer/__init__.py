"""
Keyword Intelligence Engine - AI Helpers

Claude-backed helpers for the content workflow:
- Intent classification (AI path, can return navigational)
- Keyword clustering
- Content briefs and meta descriptions
- Report summaries
"""

from .client import ClaudeClient, GenerationResponse, TokenUsage
from .ai_utils import AIUtils, ReportSummary, extract_json, resolve_intent

__all__ = [
    # Client
    "ClaudeClient",
    "GenerationResponse",
    "TokenUsage",

    # Helpers
    "AIUtils",
    "ReportSummary",
    "extract_json",
    "resolve_intent",
]
