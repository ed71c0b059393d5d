"""Tests for chunking.token_counter."""

import pytest

from chunking.token_counter import (
    CharRatioEstimator,
    TiktokenEstimator,
    estimate_tokens,
)


class TestEstimateTokens:
    def test_empty_string(self):
        assert estimate_tokens("") == 0

    def test_rounds_up(self):
        assert estimate_tokens("a") == 1
        assert estimate_tokens("abcd") == 1
        assert estimate_tokens("abcde") == 2

    def test_forty_chars_is_ten_tokens(self):
        assert estimate_tokens("x" * 40) == 10
        assert estimate_tokens("x" * 41) == 11

    def test_custom_ratio(self):
        assert estimate_tokens("x" * 10, chars_per_token=2) == 5

    def test_monotonic_under_append(self):
        base = "Quicksort picks a pivot."
        for suffix in ["", " ", "a", " and partitions the array."]:
            assert estimate_tokens(base) <= estimate_tokens(base + suffix)

    def test_returns_int(self):
        assert isinstance(estimate_tokens("Test"), int)


class TestCharRatioEstimator:
    def test_default_ratio(self):
        estimator = CharRatioEstimator()
        assert estimator.chars_per_token == 4
        assert estimator.count("x" * 8) == 2

    def test_callable(self):
        assert CharRatioEstimator(chars_per_token=3)("abcdef") == 2

    def test_invalid_ratio(self):
        with pytest.raises(ValueError, match="chars_per_token"):
            CharRatioEstimator(chars_per_token=0)


class TestTiktokenEstimator:
    def test_empty_string_skips_encoder(self):
        estimator = TiktokenEstimator()
        assert estimator.count("") == 0
        assert estimator._encoder is None

    def test_uses_encoder(self, monkeypatch):
        class FakeEncoding:
            def encode(self, text):
                return text.split()

        monkeypatch.setattr(
            "chunking.token_counter.tiktoken.get_encoding",
            lambda name: FakeEncoding(),
        )
        estimator = TiktokenEstimator()
        assert estimator.count("one two three") == 3
        assert estimator.encoding_name == "cl100k_base"
