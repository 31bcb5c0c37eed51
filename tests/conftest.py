"""
Pytest Configuration and Shared Fixtures

Provides common fixtures and configuration for all test modules.
"""

import json
from typing import Any, Callable, Dict, List
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from src.analyzer.client import ClaudeClient, GenerationResponse, TokenUsage
from src.collector import RetryConfig


# ============================================================================
# Mock Data Fixtures
# ============================================================================

@pytest.fixture
def mock_keywords() -> List[Dict[str, Any]]:
    """Keyword rows as they come out of keyword research."""
    return [
        {"keyword": "project management software", "search_volume": 12000, "difficulty": 70, "cpc": 8.5},
        {"keyword": "how to manage projects", "search_volume": 1000, "difficulty": 50, "cpc": 0},
        {"keyword": "best project tracker", "search_volume": 2400, "difficulty": 35, "cpc": 3.0, "current_position": 14},
        {"keyword": "project template examples", "search_volume": 300, "difficulty": 10, "cpc": 0.5},
        {"keyword": "buy gantt chart tool", "search_volume": 90, "difficulty": 20, "cpc": 6.0, "current_position": 3},
    ]


@pytest.fixture
def mock_backlinks_payload() -> Dict[str, Any]:
    """Ahrefs backlinks response."""
    return {
        "backlinks": [
            {
                "url_from": "https://news.example.org/review",
                "domain_from": "news.example.org",
                "url_to": "https://target.com/",
                "anchor": "project management software",
                "domain_rating": 82,
                "url_rating": 40,
                "is_dofollow": True,
                "first_seen": "2025-01-04",
                "last_check": "2025-09-30",
                "is_lost": False,
            },
            {
                "url_from": "https://forum.example.net/thread/1",
                "domain_from": "forum.example.net",
                "url_to": "https://target.com/pricing",
                "anchor": "click here",
                "domain_rating": 30,
                "url_rating": 5,
                "is_dofollow": False,
                "first_seen": "2025-03-10",
                "last_check": "2025-09-28",
                "is_lost": False,
            },
            {
                "url_from": "https://old.example.com/links",
                "domain_from": "old.example.com",
                "url_to": "https://target.com/",
                "anchor": "target",
                "domain_rating": 55,
                "url_rating": 12,
                "is_dofollow": True,
                "first_seen": "2023-06-01",
                "last_check": "2025-08-01",
                "is_lost": True,
            },
        ]
    }


PHRASE_RELATED_CSV = (
    "Keyword;Search Volume;CPC;Competition;Number of Results;Trends\n"
    "crm software;14800;12.50;0.85;120000000;0.81,0.81,1.00\n"
    "best crm for small business;2900;18.20;0.62;45000000;0.67,0.82,1.00\n"
    "how to use a crm;880;2.10;0.15;99000000;\n"
    "crm pricing;n/a;;0.4;;\n"
    ";;;;;\n"
)


@pytest.fixture
def phrase_related_csv() -> str:
    return PHRASE_RELATED_CSV


# ============================================================================
# HTTP / Client Fixtures
# ============================================================================

@pytest.fixture
def no_retry() -> RetryConfig:
    """Retry config that fails fast without sleeping."""
    return RetryConfig(max_retries=0, initial_delay=0)


@pytest.fixture
def make_transport() -> Callable[..., httpx.MockTransport]:
    """
    Build an httpx.MockTransport that records requests.

    The handler receives the request and returns an httpx.Response; the
    recorded requests are available as ``transport.requests``.
    """
    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.MockTransport:
        requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        transport = httpx.MockTransport(recording_handler)
        transport.requests = requests
        return transport

    return factory


def _json_response(data: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(data).encode(), headers={"Content-Type": "application/json"})


@pytest.fixture
def json_response() -> Callable[..., httpx.Response]:
    """Factory for JSON httpx responses."""
    return _json_response


@pytest.fixture
def mock_claude() -> ClaudeClient:
    """ClaudeClient with a mocked generate(); set .generate.return_value per test."""
    client = ClaudeClient(api_key="test-key", async_client=MagicMock())
    client.generate = AsyncMock(return_value=_claude_reply(""))
    return client


def _claude_reply(content: str, success: bool = True) -> GenerationResponse:
    return GenerationResponse(
        content=content,
        usage=TokenUsage(input_tokens=10, output_tokens=5),
        model="test-model",
        stop_reason="end_turn" if success else "error",
        success=success,
        error=None if success else "boom",
    )


@pytest.fixture
def claude_reply() -> Callable[..., GenerationResponse]:
    """Factory for GenerationResponse objects."""
    return _claude_reply
