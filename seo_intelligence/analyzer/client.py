"""
Text Generation Client

Agents and the plan generator depend only on the TextGenerator protocol:

    await generator.generate_text(prompt, max_tokens) -> str

ClaudeClient is the production implementation, with token tracking and
retry with exponential backoff. Tests substitute deterministic fakes.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import anthropic

from ..exceptions import TextGenerationError
from ..utils.config import get_settings

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are an expert SEO analyst. Provide detailed, actionable insights "
    "based on the data provided."
)


# Request errors that fail the same way on every attempt
NON_RETRYABLE_ERRORS = (
    anthropic.BadRequestError,
    anthropic.AuthenticationError,
    anthropic.PermissionDeniedError,
    anthropic.NotFoundError,
    anthropic.UnprocessableEntityError,
)


class TextGenerator(Protocol):
    """Produce free-text insight for a prompt within a token budget."""

    async def generate_text(self, prompt: str, max_tokens: int) -> str:
        ...


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
        """Estimate cost based on Claude Sonnet 4 pricing."""
        # Sonnet 4 pricing: $3/1M input, $15/1M output
        input_cost = (self.input_tokens / 1_000_000) * 3.0
        output_cost = (self.output_tokens / 1_000_000) * 15.0
        return input_cost + output_cost


class ClaudeClient:
    """
    Async Claude client implementing TextGenerator.

    Features:
    - Token usage tracking
    - Retry with exponential backoff
    - Cost tracking per run
    """

    MAX_RETRIES = 3

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        system: str = SYSTEM_PROMPT,
    ):
        """
        Initialize Claude client.

        Args:
            api_key: Anthropic API key (defaults to settings / env var)
            model: Model to use (defaults to settings)
            temperature: Sampling temperature (defaults to settings)
            system: System prompt sent with every call
        """
        settings = get_settings()
        self.api_key = api_key or settings.ANTHROPIC_API_KEY
        if not self.api_key:
            raise ValueError("ANTHROPIC_API_KEY not provided")

        self.model = model or settings.CLAUDE_MODEL
        self.temperature = settings.TEMPERATURE if temperature is None else temperature
        self.system = system
        self.async_client = anthropic.AsyncAnthropic(api_key=self.api_key)

        self.total_usage = TokenUsage()
        self.call_count = 0

    async def generate_text(self, prompt: str, max_tokens: int = 1000) -> str:
        """
        Generate free text for a prompt, retrying transient failures.

        Raises:
            TextGenerationError: If the request is rejected, every attempt fails,
                or the model returns nothing
        """
        last_error: Optional[Exception] = None

        for attempt in range(self.MAX_RETRIES):
            try:
                content = await self._complete(prompt, max_tokens)
            except NON_RETRYABLE_ERRORS as e:
                raise TextGenerationError(f"Claude rejected the request: {e}") from e
            except anthropic.APIError as e:
                last_error = e
                if attempt == self.MAX_RETRIES - 1:
                    logger.warning(f"Claude call failed (attempt {attempt + 1}/{self.MAX_RETRIES}): {e}")
                    break
                wait_time = 2 ** attempt
                logger.warning(
                    f"Claude call failed (attempt {attempt + 1}/{self.MAX_RETRIES}), "
                    f"retrying in {wait_time}s: {e}"
                )
                await asyncio.sleep(wait_time)
                continue

            if not content.strip():
                raise TextGenerationError("Empty response from Claude")
            return content

        raise TextGenerationError(f"Max retries exceeded. Last error: {last_error}")

    async def _complete(self, prompt: str, max_tokens: int) -> str:
        response = await self.async_client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=self.temperature,
            system=self.system,
            messages=[{"role": "user", "content": prompt}],
        )

        content = ""
        for block in response.content:
            if hasattr(block, "text"):
                content += block.text

        self.total_usage.input_tokens += response.usage.input_tokens
        self.total_usage.output_tokens += response.usage.output_tokens
        self.call_count += 1

        logger.info(
            f"Claude call: {response.usage.input_tokens} in, "
            f"{response.usage.output_tokens} out"
        )
        return content

    def get_usage_summary(self) -> Dict[str, Any]:
        """Get summary of all API usage."""
        return {
            "total_calls": self.call_count,
            "input_tokens": self.total_usage.input_tokens,
            "output_tokens": self.total_usage.output_tokens,
            "total_tokens": self.total_usage.total_tokens,
            "estimated_cost": self.total_usage.estimated_cost,
        }
