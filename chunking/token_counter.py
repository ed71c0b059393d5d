"""
Token Estimation for the Chunking Pipeline

The default estimator approximates model tokens by character length
(1 token ~ 4 characters), which is what the chunk budget is expressed in.
Real tokenizers differ per model, so the estimator is pluggable: anything
with a ``count(text) -> int`` method can be passed to the chunker and the
content analyzer. A tiktoken-backed estimator is provided for callers that
want BPE counts instead of the character approximation.

Usage:
    from chunking.token_counter import CharRatioEstimator, estimate_tokens

    n = estimate_tokens("Hello world")          # 3
    estimator = CharRatioEstimator(chars_per_token=4)
    n = estimator.count("One. Two.")            # 3
"""

from __future__ import annotations

import math
from typing import Optional, Protocol

import tiktoken

DEFAULT_CHARS_PER_TOKEN = 4


class TokenEstimator(Protocol):
    def count(self, text: str) -> int: ...


class CharRatioEstimator:
    """Estimate tokens as ``ceil(len(text) / chars_per_token)``."""

    def __init__(self, chars_per_token: int = DEFAULT_CHARS_PER_TOKEN):
        if chars_per_token <= 0:
            raise ValueError(
                f"chars_per_token must be positive, got {chars_per_token}"
            )
        self.chars_per_token = chars_per_token

    def count(self, text: str) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / self.chars_per_token)

    def __call__(self, text: str) -> int:
        return self.count(text)


class TiktokenEstimator:
    """
    Count tokens with a tiktoken encoding.

    cl100k_base is a reasonable stand-in for BPE tokenizers in general.
    The encoder is loaded on first use and reused afterwards.
    """

    def __init__(self, encoding_name: str = "cl100k_base"):
        self.encoding_name = encoding_name
        self._encoder: Optional[tiktoken.Encoding] = None

    def _get_encoder(self) -> tiktoken.Encoding:
        if self._encoder is None:
            self._encoder = tiktoken.get_encoding(self.encoding_name)
        return self._encoder

    def count(self, text: str) -> int:
        if not text:
            return 0
        return len(self._get_encoder().encode(text))

    def __call__(self, text: str) -> int:
        return self.count(text)


def estimate_tokens(text: str, chars_per_token: int = DEFAULT_CHARS_PER_TOKEN) -> int:
    """
    Estimate the number of tokens in a text string.

    Args:
        text: The text to measure.
        chars_per_token: Characters per token approximation.

    Returns:
        Estimated token count (0 for empty text).
    """
    if not text:
        return 0
    return math.ceil(len(text) / chars_per_token)
