"""
Rewriting-service API client.

Talks to Gemini through its OpenAI-compatible endpoint using the OpenAI
SDK. Provides:
- Retry logic with exponential backoff (rate limits, connection errors, 5xx)
- Response validation
- Token usage tracking
- Errors mapped onto rewriting.exceptions

Every failure of a rewrite call surfaces as a RemoteError, which the chunk
pipeline catches per chunk.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from openai import (
    OpenAI,
    APIError as OpenAIAPIError,
    APIConnectionError as OpenAIConnectionError,
    RateLimitError,
)

from .exceptions import (
    RemoteConnectionError,
    RemoteError,
    RemoteRateLimitError,
    RemoteResponseError,
    is_retryable,
)
from .prompts import CONNECTION_TEST_PROMPT, build_chunk_prompt
from .settings import RewriteSettings

logger = logging.getLogger(__name__)


@dataclass
class TokenUsage:
    """Cumulative token usage across rewrite calls."""

    input_tokens: int = 0
    output_tokens: int = 0
    request_count: int = 0

    def add(self, input_tokens: int, output_tokens: int) -> None:
        self.input_tokens += input_tokens
        self.output_tokens += output_tokens
        self.request_count += 1

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class RewriteClient:
    """
    Client for the text rewriting service.

    Usage:
        client = RewriteClient(settings)
        text = client.rewrite(chunk, index=0, total=12)
        print(f"Total tokens: {client.usage.total_tokens}")
    """

    def __init__(
        self,
        settings: RewriteSettings,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        client: Optional[OpenAI] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the rewriting client.

        Args:
            settings: API key, model and generation parameters
            max_retries: Retries after the first attempt
            retry_delay: Initial delay between retries (doubles each time)
            client: Preconfigured OpenAI client (mainly for tests)
            sleep: Sleep function used for backoff
        """
        if not settings.has_api_key() and client is None:
            raise ValueError("API key not configured. Set GEMINI_API_KEY or save an API key in the settings.")

        self.settings = settings
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._sleep = sleep
        # Retries are handled here, not by the SDK
        self.client = client or OpenAI(
            api_key=settings.api_key,
            base_url=settings.base_url,
            max_retries=0,
        )
        self.usage = TokenUsage()

    def rewrite(self, text: str, index: int = 0, total: int = 1) -> str:
        """
        Rewrite a single chunk.

        Args:
            text: Chunk text
            index: 0-based chunk index
            total: Number of chunks in the document

        Returns:
            Rewritten text

        Raises:
            RemoteError: Empty chunk, unreachable service, exhausted retries,
                or an unusable response
        """
        if not text or not text.strip():
            raise RemoteError("Text content is empty")

        messages = [
            {"role": "system", "content": self.settings.system_prompt},
            {"role": "user", "content": build_chunk_prompt(text, index, total)},
        ]
        response = self._call_with_retry(messages, self.settings.max_output_tokens)
        return self._parse_response(response)

    def test_connection(self) -> str:
        """Send a short test prompt; returns the model's reply."""
        messages = [{"role": "user", "content": CONNECTION_TEST_PROMPT}]
        try:
            response = self._call_with_retry(messages, 100)
            return self._parse_response(response)
        except RemoteError as exc:
            raise RemoteError("Connection test failed", exc) from exc

    def list_models(self) -> list[str]:
        """Return the ids of the models available to the configured key."""
        try:
            return [model.id for model in self.client.models.list()]
        except OpenAIAPIError as exc:
            raise RemoteError(
                "Error fetching available models", exc, getattr(exc, "status_code", None)
            ) from exc

    def _call_with_retry(self, messages: list[dict], max_tokens: int) -> Any:
        """
        Make the API call with retry logic.

        Uses exponential backoff for retries. Errors are mapped to
        RemoteError subclasses first; ``is_retryable`` decides whether
        another attempt is made.
        """
        last_error: Optional[RemoteError] = None
        delay = self.retry_delay
        attempts = self.max_retries + 1

        for attempt in range(attempts):
            try:
                logger.debug(f"API call attempt {attempt + 1}/{attempts}")
                return self.client.chat.completions.create(
                    model=self.settings.model,
                    messages=messages,
                    max_tokens=max_tokens,
                    temperature=self.settings.temperature,
                )

            except OpenAIAPIError as e:
                last_error = self._to_remote_error(e)
                if not is_retryable(last_error):
                    raise last_error from e

            if attempt < attempts - 1:
                logger.warning(f"{last_error.message}, retrying in {delay}s...")
                self._sleep(delay)
                delay *= 2

        # All retries exhausted
        raise last_error from last_error.original_error

    @staticmethod
    def _to_remote_error(error: OpenAIAPIError) -> RemoteError:
        if isinstance(error, RateLimitError):
            return RemoteRateLimitError(original_error=error)
        if isinstance(error, OpenAIConnectionError):
            return RemoteConnectionError(original_error=error)
        return RemoteError(str(error), error, getattr(error, "status_code", None))

    def _parse_response(self, response: Any) -> str:
        """Extract and validate the text content of a completion."""
        choices = getattr(response, "choices", None)
        if not choices:
            raise RemoteResponseError("Invalid API response format")

        choice = choices[0]
        message = getattr(choice, "message", None)
        content = (getattr(message, "content", None) or "") if message else ""

        if choice.finish_reason == "content_filter":
            raise RemoteResponseError("Response blocked by content filter", content)
        if not content.strip():
            raise RemoteResponseError("Empty response from API", content)

        usage = getattr(response, "usage", None)
        if usage is not None:
            self.usage.add(usage.prompt_tokens or 0, usage.completion_tokens or 0)
        else:
            self.usage.add(0, 0)

        return content

    def reset_usage(self) -> None:
        self.usage = TokenUsage()

    def get_usage_summary(self) -> dict:
        return {
            "input_tokens": self.usage.input_tokens,
            "output_tokens": self.usage.output_tokens,
            "total_tokens": self.usage.total_tokens,
            "request_count": self.usage.request_count,
        }
