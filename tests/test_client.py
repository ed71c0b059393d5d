"""
Tests for RewriteClient with a mocked OpenAI client.
"""

from types import SimpleNamespace
from unittest.mock import Mock, patch

import httpx
import pytest
from openai import APIConnectionError, APIStatusError, BadRequestError, InternalServerError, RateLimitError

from conftest import make_completion
from rewriting import (
    RemoteConnectionError,
    RemoteError,
    RemoteRateLimitError,
    RemoteResponseError,
    RewriteClient,
    RewriteSettings,
)

REQUEST = httpx.Request("POST", "https://generativelanguage.googleapis.com/v1beta/openai/chat/completions")


def rate_limit_error() -> RateLimitError:
    return RateLimitError("quota", response=httpx.Response(429, request=REQUEST), body=None)


def server_error() -> InternalServerError:
    return InternalServerError("boom", response=httpx.Response(500, request=REQUEST), body=None)


def bad_request_error() -> BadRequestError:
    return BadRequestError("bad", response=httpx.Response(400, request=REQUEST), body=None)


@pytest.fixture
def openai_client():
    client = Mock()
    client.chat.completions.create.return_value = make_completion("Rewritten text.")
    return client


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def client(settings, openai_client, sleeps):
    return RewriteClient(settings, client=openai_client, sleep=sleeps.append)


class TestInit:
    def test_missing_api_key_raises(self):
        with pytest.raises(ValueError, match="API key not configured"):
            RewriteClient(RewriteSettings())

    def test_builds_openai_client_from_settings(self, settings):
        with patch("rewriting.client.OpenAI") as mock_openai:
            RewriteClient(settings)
        mock_openai.assert_called_once_with(
            api_key="test-key",
            base_url=settings.base_url,
            max_retries=0,
        )


class TestRewrite:
    def test_returns_content(self, client):
        assert client.rewrite("Original chunk.", index=0, total=3) == "Rewritten text."

    def test_request_payload(self, client, openai_client, settings):
        client.rewrite("Original chunk.", index=1, total=3)
        kwargs = openai_client.chat.completions.create.call_args.kwargs

        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["max_tokens"] == settings.max_output_tokens
        assert kwargs["temperature"] == settings.temperature
        system, user = kwargs["messages"]
        assert system == {"role": "system", "content": settings.system_prompt}
        assert user["content"] == "Process the following text chunk (2/3):\n\nOriginal chunk."

    def test_empty_text_raises_remote_error(self, client, openai_client):
        with pytest.raises(RemoteError, match="empty"):
            client.rewrite("   ")
        openai_client.chat.completions.create.assert_not_called()

    def test_tracks_usage(self, client):
        client.rewrite("One.")
        client.rewrite("Two.")
        summary = client.get_usage_summary()
        assert summary["input_tokens"] == 20
        assert summary["output_tokens"] == 10
        assert summary["total_tokens"] == 30
        assert summary["request_count"] == 2

        client.reset_usage()
        assert client.usage.total_tokens == 0


class TestRetry:
    def test_rate_limit_then_success(self, client, openai_client, sleeps):
        openai_client.chat.completions.create.side_effect = [
            rate_limit_error(),
            make_completion("Recovered."),
        ]
        assert client.rewrite("Chunk.") == "Recovered."
        assert sleeps == [1.0]

    def test_exponential_backoff_until_exhausted(self, client, openai_client, sleeps):
        openai_client.chat.completions.create.side_effect = rate_limit_error()
        with pytest.raises(RemoteRateLimitError):
            client.rewrite("Chunk.")
        assert openai_client.chat.completions.create.call_count == 4
        assert sleeps == [1.0, 2.0, 4.0]

    def test_connection_errors_retried(self, client, openai_client):
        openai_client.chat.completions.create.side_effect = APIConnectionError(request=REQUEST)
        with pytest.raises(RemoteConnectionError):
            client.rewrite("Chunk.")
        assert openai_client.chat.completions.create.call_count == 4

    def test_server_errors_retried(self, client, openai_client):
        openai_client.chat.completions.create.side_effect = [
            server_error(),
            make_completion("Fine."),
        ]
        assert client.rewrite("Chunk.") == "Fine."

    def test_server_errors_exhausted(self, client, openai_client):
        openai_client.chat.completions.create.side_effect = server_error()
        with pytest.raises(RemoteError) as exc_info:
            client.rewrite("Chunk.")
        assert exc_info.value.status_code == 500

    def test_client_errors_not_retried(self, client, openai_client, sleeps):
        openai_client.chat.completions.create.side_effect = bad_request_error()
        with pytest.raises(RemoteError) as exc_info:
            client.rewrite("Chunk.")
        assert exc_info.value.status_code == 400
        assert openai_client.chat.completions.create.call_count == 1
        assert sleeps == []

    def test_service_unavailable_retried(self, client, openai_client, sleeps):
        unavailable = APIStatusError(
            "unavailable", response=httpx.Response(503, request=REQUEST), body=None
        )
        openai_client.chat.completions.create.side_effect = [unavailable, make_completion("Back.")]
        assert client.rewrite("Chunk.") == "Back."
        assert sleeps == [1.0]

    def test_retry_decision_uses_is_retryable(self, client, openai_client, sleeps):
        openai_client.chat.completions.create.side_effect = server_error()
        with patch("rewriting.client.is_retryable", return_value=False) as retryable:
            with pytest.raises(RemoteError) as exc_info:
                client.rewrite("Chunk.")
        retryable.assert_called_once_with(exc_info.value)
        assert openai_client.chat.completions.create.call_count == 1
        assert sleeps == []

    def test_exhausted_error_chains_sdk_error(self, client, openai_client):
        openai_client.chat.completions.create.side_effect = rate_limit_error()
        with pytest.raises(RemoteRateLimitError) as exc_info:
            client.rewrite("Chunk.")
        assert isinstance(exc_info.value.__cause__, RateLimitError)
        assert exc_info.value.original_error is exc_info.value.__cause__


class TestResponseValidation:
    def test_no_choices(self, client, openai_client):
        openai_client.chat.completions.create.return_value = SimpleNamespace(choices=[], usage=None)
        with pytest.raises(RemoteResponseError, match="Invalid API response format"):
            client.rewrite("Chunk.")

    def test_empty_content(self, client, openai_client):
        openai_client.chat.completions.create.return_value = make_completion("")
        with pytest.raises(RemoteResponseError, match="Empty response"):
            client.rewrite("Chunk.")

    def test_content_filter(self, client, openai_client):
        openai_client.chat.completions.create.return_value = make_completion(
            "partial", finish_reason="content_filter"
        )
        with pytest.raises(RemoteResponseError, match="content filter"):
            client.rewrite("Chunk.")


class TestConnectionAndModels:
    def test_connection_success(self, client, openai_client):
        openai_client.chat.completions.create.return_value = make_completion("Connection successful")
        assert client.test_connection() == "Connection successful"
        kwargs = openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["max_tokens"] == 100

    def test_connection_failure(self, client, openai_client):
        openai_client.chat.completions.create.side_effect = bad_request_error()
        with pytest.raises(RemoteError, match="Connection test failed"):
            client.test_connection()

    def test_list_models(self, client, openai_client):
        openai_client.models.list.return_value = [
            SimpleNamespace(id="models/gemini-2.5-flash"),
            SimpleNamespace(id="models/gemini-2.5-pro"),
        ]
        assert client.list_models() == ["models/gemini-2.5-flash", "models/gemini-2.5-pro"]

    def test_list_models_failure(self, client, openai_client):
        openai_client.models.list.side_effect = bad_request_error()
        with pytest.raises(RemoteError, match="Error fetching available models"):
            client.list_models()
