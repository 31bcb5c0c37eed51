"""
AI-Powered SEO Helpers

Prompted Claude calls for the parts of the workflow that need generated
text: intent classification, keyword clustering, content briefs, meta
descriptions and report summaries.

Every helper degrades to a fixed fallback when the model fails or replies
with something unparsable.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from src.scoring import SearchIntent, classify_intent, match_intent

from .client import ClaudeClient

logger = logging.getLogger(__name__)


INTENT_PROMPT = """Classify the search intent for this keyword: "{keyword}"

Choose ONE of:
- informational (learning, how-to, what is)
- transactional (buy, purchase, download)
- commercial (best, review, compare, vs)
- navigational (brand name, specific site)

Reply with only one word."""

CLUSTER_PROMPT = """Group these keywords into semantic clusters:

{keywords}

Return JSON format:
{{
  "cluster_name_1": ["keyword1", "keyword2"],
  "cluster_name_2": ["keyword3", "keyword4"]
}}"""

BRIEF_PROMPT = """Create a comprehensive content brief for:

Primary Keyword: {primary_keyword}
Related Keywords: {related_keywords}
Intent: {intent}

Include:
1. Target audience
2. Content angle/hook
3. Key points to cover (outline)
4. Recommended word count
5. Content type (blog, guide, comparison, etc.)
6. SEO optimizations needed"""

META_DESCRIPTION_PROMPT = """Generate a compelling meta description (155-160 characters):

Title: {title}
Target Keyword: {keyword}
Summary: {content_summary}

Requirements:
- Include target keyword naturally
- Create urgency or curiosity
- Include a call-to-action
- Exactly 155-160 characters"""

REPORT_SUMMARY_PROMPT = """Analyze these SEO metrics for {period}:

{metrics}

Provide:
1. A 2-3 sentence executive summary
2. 3-5 actionable recommendations

Format as JSON:
{{
  "summary": "...",
  "recommendations": ["...", "..."]
}}"""

UNCLUSTERED = "unclustered"
SUMMARY_FALLBACK = "Unable to generate summary"


@dataclass
class ReportSummary:
    """Executive summary of a reporting period."""
    summary: str
    recommendations: List[str] = field(default_factory=list)


def extract_json(text: str) -> Optional[Any]:
    """
    Pull a JSON object out of a model reply.

    Tries the whole text, then a fenced ```json block, then the outermost
    {...} span. Returns None when nothing parses.
    """
    if not text:
        return None

    candidates = [text.strip()]

    fenced = re.search(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```", text)
    if fenced:
        candidates.append(fenced.group(1))

    braces = re.search(r"\{[\s\S]*\}", text)
    if braces:
        candidates.append(braces.group())

    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    return None


class AIUtils:
    """
    AI helpers bound to a Claude client.

    Usage:
        ai = AIUtils(ClaudeClient(api_key="..."))
        clusters = await ai.cluster_keywords(["crm", "crm pricing", "best crm"])
    """

    def __init__(self, client: ClaudeClient):
        self.client = client

    async def classify_intent(self, keyword: str) -> SearchIntent:
        """
        Ask the model for the search intent of a keyword.

        Anything other than one of the four labels falls back to
        informational.
        """
        response = await self.client.generate(INTENT_PROMPT.format(keyword=keyword), max_tokens=10)
        label = response.content.strip().lower().rstrip(".")

        for intent in SearchIntent:
            if label == intent.value:
                return intent

        if response.success:
            logger.debug(f"Unrecognized intent reply for '{keyword}': {response.content!r}")
        return SearchIntent.INFORMATIONAL

    async def cluster_keywords(self, keywords: List[str]) -> Dict[str, List[str]]:
        """
        Group keywords into named semantic clusters.

        Returns:
            Cluster name -> keywords; {"unclustered": keywords} when the
            reply is not a JSON object of lists
        """
        if not keywords:
            return {}

        response = await self.client.generate(
            CLUSTER_PROMPT.format(keywords="\n".join(keywords)), max_tokens=2000
        )
        data = extract_json(response.content)

        if not isinstance(data, dict) or not all(isinstance(v, list) for v in data.values()):
            logger.warning(f"Keyword clustering reply unparsable, {len(keywords)} keywords left unclustered")
            return {UNCLUSTERED: list(keywords)}

        return {str(name): [str(kw) for kw in members] for name, members in data.items()}

    async def generate_content_brief(
        self,
        primary_keyword: str,
        related_keywords: List[str],
        intent: str,
    ) -> str:
        """Write a content brief for a keyword cluster."""
        response = await self.client.generate(
            BRIEF_PROMPT.format(
                primary_keyword=primary_keyword,
                related_keywords=", ".join(related_keywords),
                intent=intent,
            ),
            max_tokens=1500,
        )
        return response.content

    async def generate_meta_description(
        self,
        title: str,
        keyword: str,
        content_summary: str,
    ) -> str:
        """Write a CTR-oriented meta description."""
        response = await self.client.generate(
            META_DESCRIPTION_PROMPT.format(
                title=title,
                keyword=keyword,
                content_summary=content_summary,
            ),
            max_tokens=100,
        )
        return response.content.strip()

    async def generate_report_summary(
        self,
        metrics: Dict[str, float],
        period: str,
    ) -> ReportSummary:
        """
        Summarize period metrics with recommendations.

        Returns:
            ReportSummary; the fallback summary with no recommendations when
            the reply does not parse
        """
        response = await self.client.generate(
            REPORT_SUMMARY_PROMPT.format(period=period, metrics=json.dumps(metrics, indent=2)),
            max_tokens=500,
        )
        data = extract_json(response.content)

        if not isinstance(data, dict) or "summary" not in data:
            logger.warning(f"Report summary reply unparsable for {period}")
            return ReportSummary(summary=SUMMARY_FALLBACK)

        recommendations = data.get("recommendations") or []
        if not isinstance(recommendations, list):
            recommendations = []

        return ReportSummary(
            summary=str(data["summary"]),
            recommendations=[str(r) for r in recommendations],
        )


async def resolve_intent(keyword: str, ai: Optional[AIUtils] = None) -> SearchIntent:
    """
    Combine the lexical and AI classifiers.

    A lexical pattern match is final. Only keywords no pattern recognises go
    to the model, which is also the only way to get NAVIGATIONAL.

    Args:
        keyword: Keyword text
        ai: AIUtils to consult for unmatched keywords (lexical only if None)

    Returns:
        SearchIntent
    """
    lexical = match_intent(keyword)
    if lexical is not None or ai is None:
        return lexical or classify_intent(keyword)
    return await ai.classify_intent(keyword)
