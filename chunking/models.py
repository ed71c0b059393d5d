"""
Data Models for the Chunking Pipeline

Defines:
1. ChunkingConfig - Token budget and estimator settings
2. ContentStats - Descriptive statistics over raw text
3. ChunkingResult - Ordered chunks of one document plus statistics
4. ChunkRequest/ChunkResponse, AnalyzeRequest - HTTP payloads

Design Principles:
- Pydantic v2 for validation and serialization
- Save/load pattern matching pdf_extractor.models.Document

Usage:
    config = ChunkingConfig(max_chunk_tokens=4000)
    result = service.chunk_document(document)
    result.save("chunks.json")
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

MIN_CHUNK_SIZE = 500
MAX_CHUNK_SIZE = 20000


class ChunkingConfig(BaseModel):
    """
    Configuration for the chunking pipeline.

    The budget range matches what the settings screen allows; the chunker
    itself accepts any positive budget.
    """
    max_chunk_tokens: int = Field(
        4000,
        description="Maximum estimated tokens per chunk",
        ge=MIN_CHUNK_SIZE,
        le=MAX_CHUNK_SIZE,
    )
    chars_per_token: int = Field(
        4,
        description="Characters per token for the character-ratio estimator",
        ge=1,
    )
    estimator: str = Field(
        "char_ratio",
        description="Token estimator: 'char_ratio' or 'tiktoken'",
        pattern="^(char_ratio|tiktoken)$",
    )


class ContentStats(BaseModel):
    """Descriptive statistics about a text, used for progress reporting."""
    total_characters: int = 0
    estimated_tokens: int = 0
    paragraph_count: int = 0
    word_count: int = 0


class ChunkingResult(BaseModel):
    """
    Complete result of chunking a document.

    Chunks are in document order and the list is never empty.
    """
    source_name: str = Field(
        ...,
        description="File name of the source PDF",
    )
    budget: int = Field(
        ...,
        description="Token budget used for chunking",
        ge=1,
    )
    chunks: list[str] = Field(
        ...,
        description="Chunk texts in document order",
        min_length=1,
    )
    stats: ContentStats = Field(
        default_factory=ContentStats,
        description="Statistics of the unchunked text",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When chunking was performed",
    )

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    @property
    def document_id(self) -> str:
        return Path(self.source_name.replace("\\", "/")).stem

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    def save(self, path: str) -> None:
        """Save chunking result to a JSON file."""
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: str) -> "ChunkingResult":
        """Load chunking result from a JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)


class AnalyzeRequest(BaseModel):
    text: str


class ChunkRequest(BaseModel):
    text: str
    budget: int = Field(4000, ge=1)


class ChunkResponse(BaseModel):
    chunks: list[str]
    total_chunks: int
    stats: ContentStats
