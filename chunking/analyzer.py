"""
Content statistics used for progress reporting before chunking.
"""

import re
from typing import Optional

from .models import ContentStats
from .token_counter import CharRatioEstimator, TokenEstimator

_PARAGRAPH_BREAK = re.compile(r"\n{2,}")


class ContentAnalyzer:
    def __init__(self, estimator: Optional[TokenEstimator] = None):
        self.estimator = estimator or CharRatioEstimator()

    def analyze(self, text: str) -> ContentStats:
        """Compute character, token, paragraph and word counts for text."""
        text = text or ""
        return ContentStats(
            total_characters=len(text),
            estimated_tokens=self.estimator.count(text),
            paragraph_count=len(_PARAGRAPH_BREAK.findall(text)) + 1,
            word_count=len(text.split()),
        )


def analyze_content(text: str, estimator: Optional[TokenEstimator] = None) -> ContentStats:
    return ContentAnalyzer(estimator).analyze(text)
