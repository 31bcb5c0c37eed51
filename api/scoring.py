"""
API Endpoints for Keyword Scoring

Handles:
1. Intent classification
2. Priority scoring (single and batch)
3. Backlink quality scoring

Request models validate types and ranges; the scorers only ever see
clean input.
"""

import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from src.scoring import (
    KeywordMetrics,
    BacklinkSignal,
    analyze_priority,
    calculate_batch_priorities,
    classify_intent,
    get_priority_summary,
    select_top_keywords,
    validate_backlink_quality,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Scoring"],
)


# =============================================================================
# REQUEST MODELS
# =============================================================================

class IntentRequest(BaseModel):
    """Keyword to classify."""
    keyword: str = Field(..., max_length=500)


class PriorityRequest(BaseModel):
    """Keyword metrics to score."""
    keyword: str = Field(default="", max_length=500)
    search_volume: int = Field(..., ge=0)
    difficulty: float = Field(..., ge=0, le=100)
    cpc: float = Field(default=0.0, ge=0)
    current_position: Optional[int] = Field(default=None, ge=1)

    def to_metrics(self) -> KeywordMetrics:
        return KeywordMetrics(
            search_volume=self.search_volume,
            difficulty=self.difficulty,
            cpc=self.cpc,
            current_position=self.current_position,
        )


class BatchPriorityRequest(BaseModel):
    """Keywords to rank."""
    keywords: List[PriorityRequest] = Field(..., max_length=5000)
    limit: int = Field(default=20, ge=1, le=1000)
    min_score: int = Field(default=0, ge=0, le=100)


class BacklinkQualityRequest(BaseModel):
    """Backlink signals to score."""
    domain_rating: float = Field(..., ge=0, le=100)
    link_type: Literal["dofollow", "nofollow", "ugc", "sponsored"]
    anchor_relevance: float = Field(..., ge=0, le=100)
    context_relevance: float = Field(..., ge=0, le=100)


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class IntentResponse(BaseModel):
    keyword: str
    intent: str


class PriorityResponse(BaseModel):
    keyword: str
    priority: int
    intent: str
    breakdown: Dict[str, float]


class BacklinkQualityResponse(BaseModel):
    score: int
    quality: str


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/intent", response_model=IntentResponse)
async def classify_keyword_intent(request: IntentRequest):
    """Classify search intent with the lexical rules."""
    return IntentResponse(
        keyword=request.keyword,
        intent=classify_intent(request.keyword).value,
    )


@router.post("/priority", response_model=PriorityResponse)
async def score_priority(request: PriorityRequest):
    """Score one keyword."""
    analysis = analyze_priority(request.to_metrics(), keyword=request.keyword)
    data = analysis.to_dict()
    return PriorityResponse(
        keyword=data["keyword"],
        priority=data["priority"],
        intent=data["intent"],
        breakdown=data["breakdown"],
    )


@router.post("/priority/batch")
async def score_priority_batch(request: BatchPriorityRequest) -> Dict[str, Any]:
    """Score and rank a keyword list, returning the top N."""
    scored = calculate_batch_priorities([kw.model_dump() for kw in request.keywords])
    top = select_top_keywords(scored, limit=request.limit, min_score=request.min_score)

    logger.info(f"Batch priority: {len(scored)} scored, {len(top)} returned")

    return {
        "keywords": [a.to_dict() for a in top],
        "summary": get_priority_summary(scored),
    }


@router.post("/backlink-quality", response_model=BacklinkQualityResponse)
async def score_backlink_quality(request: BacklinkQualityRequest):
    """Score one backlink and return its tier."""
    quality = validate_backlink_quality(BacklinkSignal(**request.model_dump()))
    return BacklinkQualityResponse(**quality.to_dict())
