"""
Chunking Module - Budget-bounded paragraph/sentence chunking

Splits extracted PDF text into chunks that fit a token budget so each one
can be sent to the rewriting service as a single request. Paragraphs are
kept together where possible; oversized paragraphs fall back to sentence
packing.

Quick Start:
    from chunking import TextChunker, analyze_content

    stats = analyze_content(text)
    chunks = TextChunker().chunk(text, budget=4000)
"""

__version__ = "1.0.0"

from .analyzer import ContentAnalyzer, analyze_content
from .chunker import PackingMode, TextChunker, chunk_text, split_paragraphs
from .config import ChunkingServiceConfig
from .models import (
    ChunkingConfig,
    ChunkingResult,
    ContentStats,
)
from .sentence_splitter import split_sentences
from .service import ChunkingService
from .token_counter import (
    CharRatioEstimator,
    TiktokenEstimator,
    TokenEstimator,
    estimate_tokens,
)

__all__ = [
    "__version__",
    "TextChunker",
    "PackingMode",
    "chunk_text",
    "split_paragraphs",
    "ContentAnalyzer",
    "analyze_content",
    "ChunkingService",
    "ChunkingServiceConfig",
    "ChunkingConfig",
    "ChunkingResult",
    "ContentStats",
    "split_sentences",
    "TokenEstimator",
    "CharRatioEstimator",
    "TiktokenEstimator",
    "estimate_tokens",
]
