"""
Claude API Client for the AI helpers

Thin async wrapper around the Anthropic SDK with token tracking and retry.
API errors are reported through an unsuccessful GenerationResponse rather
than raised, so callers can fall back to defaults.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import anthropic

logger = logging.getLogger(__name__)


@dataclass
class TokenUsage:
    """Track token usage for cost calculation."""
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    @property
    def estimated_cost(self) -> float:
        """Estimate cost at Sonnet pricing ($3/1M input, $15/1M output)."""
        return (self.input_tokens / 1_000_000) * 3.0 + (self.output_tokens / 1_000_000) * 15.0


@dataclass
class GenerationResponse:
    """Text returned by Claude."""
    content: str
    usage: TokenUsage
    model: str
    stop_reason: str
    success: bool = True
    error: Optional[str] = None


class ClaudeClient:
    """
    Async Claude client used by AIUtils.

    Usage:
        client = ClaudeClient(api_key=settings.ANTHROPIC_API_KEY)
        response = await client.generate("Classify ...", max_tokens=10)
    """

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    MAX_TOKENS = 2000
    TEMPERATURE = 0.3

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        async_client: Optional[Any] = None,
    ):
        """
        Initialize Claude client.

        Args:
            api_key: Anthropic API key
            model: Model to use (defaults to DEFAULT_MODEL)
            async_client: Preconfigured anthropic.AsyncAnthropic (tests)
        """
        if not api_key:
            raise ValueError("Anthropic API key not provided")

        self.model = model or self.DEFAULT_MODEL
        self.async_client = async_client or anthropic.AsyncAnthropic(api_key=api_key)

        self.total_usage = TokenUsage()
        self.call_count = 0

    async def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = MAX_TOKENS,
        temperature: float = TEMPERATURE,
    ) -> GenerationResponse:
        """
        Send a single-turn prompt.

        Args:
            prompt: User prompt
            system: System prompt
            max_tokens: Maximum output tokens
            temperature: Sampling temperature

        Returns:
            GenerationResponse with content and usage
        """
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system

        try:
            response = await self.async_client.messages.create(**kwargs)
        except anthropic.APIError as e:
            logger.error(f"Claude API error: {e}")
            return GenerationResponse(
                content="",
                usage=TokenUsage(),
                model=self.model,
                stop_reason="error",
                success=False,
                error=str(e),
            )

        content = "".join(
            block.text for block in response.content if hasattr(block, "text")
        )

        usage = TokenUsage(
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )
        self.total_usage.input_tokens += usage.input_tokens
        self.total_usage.output_tokens += usage.output_tokens
        self.call_count += 1

        logger.info(
            f"Claude call: {usage.input_tokens} in, {usage.output_tokens} out, "
            f"${usage.estimated_cost:.4f}"
        )

        return GenerationResponse(
            content=content,
            usage=usage,
            model=self.model,
            stop_reason=response.stop_reason,
        )

    async def generate_with_retry(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_retries: int = 3,
        **kwargs: Any,
    ) -> GenerationResponse:
        """
        Generate with exponential backoff on failed calls.

        Args:
            prompt: User prompt
            system: System prompt
            max_retries: Maximum attempts
            **kwargs: Passed to generate()

        Returns:
            GenerationResponse (unsuccessful once retries are exhausted)
        """
        last_error = None

        for attempt in range(max_retries):
            response = await self.generate(prompt, system, **kwargs)
            if response.success:
                return response

            last_error = response.error
            if attempt < max_retries - 1:
                wait_time = 2 ** attempt
                logger.warning(
                    f"Claude call failed (attempt {attempt + 1}/{max_retries}), "
                    f"retrying in {wait_time}s: {response.error}"
                )
                await asyncio.sleep(wait_time)

        return GenerationResponse(
            content="",
            usage=TokenUsage(),
            model=self.model,
            stop_reason="max_retries",
            success=False,
            error=f"Max retries exceeded. Last error: {last_error}",
        )

    def get_usage_summary(self) -> Dict[str, Any]:
        """Get summary of all API usage."""
        return {
            "total_calls": self.call_count,
            "input_tokens": self.total_usage.input_tokens,
            "output_tokens": self.total_usage.output_tokens,
            "total_tokens": self.total_usage.total_tokens,
            "estimated_cost": round(self.total_usage.estimated_cost, 4),
        }
