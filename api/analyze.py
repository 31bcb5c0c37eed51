"""
Keyword Intelligence API

FastAPI app that:
1. Exposes the pure scorers (intent, priority, backlink quality)
2. Builds prioritized keyword backlogs from seed keywords (SEMrush)
3. Audits backlink profiles (Ahrefs)
"""

import logging
import sys
from datetime import date, datetime, timedelta
from typing import Any, AsyncIterator, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from src.collector import CollectorClients, CollectorConfig, VendorAPIError
from src.services import BacklinkAuditService, KeywordBacklogService, keyword_relevance
from src.utils.config import get_settings

from api.scoring import router as scoring_router

settings = get_settings()

# Configure logging to stdout
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
    force=True,
)
logger = logging.getLogger(__name__)

# Quiet down chatty loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

VERSION = "1.0.0"

# Search Console window when no dates are given
POSITION_LOOKBACK_DAYS = 28

app = FastAPI(
    title="Keyword Intelligence Engine",
    description="Keyword intent, priority and backlink quality scoring",
    version=VERSION,
)

app.include_router(scoring_router)


# ============================================================================
# DEPENDENCIES
# ============================================================================

async def get_collector_clients() -> AsyncIterator[CollectorClients]:
    """Vendor clients for one request, closed afterwards."""
    config = CollectorConfig.from_settings(get_settings())
    async with CollectorClients(config) as clients:
        yield clients


# ============================================================================
# REQUEST MODELS
# ============================================================================

class BacklogRequest(BaseModel):
    """Seeds to expand into a prioritized backlog."""
    seed_keywords: List[str] = Field(..., min_length=1)
    limit: int = Field(default=20, ge=1, le=500)
    per_seed_limit: int = Field(default=100, ge=1, le=1000)
    min_score: int = Field(default=0, ge=0, le=100)
    database: str = Field(default="us", max_length=10)

    # Search Console property for current positions (optional)
    site_url: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class BacklinkAuditRequest(BaseModel):
    """Domain whose backlinks to audit."""
    domain: str
    topic_keywords: Optional[List[str]] = None
    limit: int = Field(default=1000, ge=1, le=10000)
    include_lost: bool = False


# ============================================================================
# ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    return {"service": "Keyword Intelligence Engine", "version": VERSION}


@app.get("/api/health")
async def health():
    """Health check with vendor configuration status."""
    config = CollectorConfig.from_settings(get_settings())
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": VERSION,
        "integrations": {
            "semrush": config.has_semrush,
            "ahrefs": config.has_ahrefs,
            "search_console": config.has_gsc,
        },
    }


@app.post("/api/backlog")
async def build_backlog(
    request: BacklogRequest,
    clients: CollectorClients = Depends(get_collector_clients),
) -> Dict[str, Any]:
    """
    Expand seed keywords and return the top-N by priority.

    With a site_url and Search Console configured, current positions feed
    the quick-win bonus. Fails with 502 only when every seed fails.
    """
    if clients.semrush is None:
        raise HTTPException(status_code=503, detail="SEMrush is not configured")

    seeds = request.seed_keywords[:settings.MAX_SEED_KEYWORDS]
    skipped_seeds = request.seed_keywords[settings.MAX_SEED_KEYWORDS:]
    if skipped_seeds:
        logger.warning(f"Backlog limited to {len(seeds)} seeds, skipped {len(skipped_seeds)}")

    service = KeywordBacklogService(clients.semrush, database=request.database, gsc=clients.gsc)

    positions: Dict[str, int] = {}
    if request.site_url:
        end_date = request.end_date or date.today()
        start_date = request.start_date or end_date - timedelta(days=POSITION_LOOKBACK_DAYS)
        if start_date > end_date:
            raise HTTPException(status_code=422, detail="start_date must not be after end_date")
        positions = await service.load_positions(
            request.site_url, start_date.isoformat(), end_date.isoformat()
        )

    result = await service.build_backlog(
        seeds,
        limit=request.limit,
        per_seed_limit=request.per_seed_limit,
        current_positions=positions,
        min_score=request.min_score,
    )

    if len(result.failed_seeds) == len(seeds):
        logger.error(f"Keyword research failed for every seed: {seeds}")
        raise HTTPException(status_code=502, detail="Keyword provider error: every seed failed")

    return {
        "keywords": [a.to_dict() for a in result.keywords],
        "summary": {
            **result.summary,
            "skipped_seeds": skipped_seeds,
            "positions_loaded": len(positions),
        },
    }


@app.post("/api/backlinks/audit")
async def audit_backlinks(
    request: BacklinkAuditRequest,
    clients: CollectorClients = Depends(get_collector_clients),
) -> Dict[str, Any]:
    """Score a domain's backlink profile."""
    if clients.ahrefs is None:
        raise HTTPException(status_code=503, detail="Ahrefs is not configured")

    relevance = keyword_relevance(request.topic_keywords) if request.topic_keywords else None
    service = BacklinkAuditService(clients.ahrefs)

    try:
        result = await service.audit(
            request.domain,
            relevance=relevance,
            limit=min(request.limit, settings.MAX_BACKLINKS),
            include_lost=request.include_lost,
        )
    except VendorAPIError as e:
        logger.error(f"Backlink audit failed for {request.domain}: {e}")
        raise HTTPException(status_code=502, detail=f"Backlink provider error: {e}")

    return {
        "summary": result.summary,
        "backlinks": result.scored,
        "failures": result.failures,
    }


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.analyze:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
    )
