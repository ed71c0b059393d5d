"""
Pytest fixtures for the pdf2speech tests.
"""

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import Mock

import fitz
import pytest

from rewriting import RewriteServiceConfig, RewriteSettings


def write_pdf(path: Path, pages: list[str]) -> Path:
    """Create a small text PDF with one entry of ``pages`` per page."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text, fontsize=11)
    doc.save(str(path))
    doc.close()
    return path


def make_completion(
    content: str,
    finish_reason: str = "stop",
    prompt_tokens: int = 10,
    completion_tokens: int = 5,
) -> SimpleNamespace:
    """Build an object shaped like an OpenAI chat completion."""
    return SimpleNamespace(
        choices=[
            SimpleNamespace(
                message=SimpleNamespace(content=content),
                finish_reason=finish_reason,
            )
        ],
        usage=SimpleNamespace(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
        ),
        model="gemini-2.5-flash",
    )


@pytest.fixture
def settings():
    """Settings with a dummy API key."""
    return RewriteSettings(api_key="test-key", chunk_size=500)


@pytest.fixture
def service_config(tmp_path):
    """Service config writing into tmp_path without pacing delay."""
    return RewriteServiceConfig(
        data_dir=str(tmp_path / "output"),
        settings_path=str(tmp_path / "settings.json"),
        pacing_delay=0.0,
        retry_delay=0.0,
    )


@pytest.fixture
def sample_pdf(tmp_path):
    """A two-page PDF with a couple of paragraphs."""
    return write_pdf(
        tmp_path / "lecture.pdf",
        [
            "Introduction to sorting.\n\nQuicksort picks a pivot and partitions the array.",
            "Mergesort splits the input in half.\n\nBoth run in n log n time on average.",
        ],
    )


@pytest.fixture
def mock_rewrite_client():
    """A RewriteClient stand-in that uppercases every chunk."""
    client = Mock()
    client.rewrite.side_effect = lambda text, index, total: text.upper()
    client.get_usage_summary.return_value = {
        "input_tokens": 0,
        "output_tokens": 0,
        "total_tokens": 0,
        "request_count": 0,
    }
    return client
