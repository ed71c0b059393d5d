from typing import Any, Optional

from pydantic import BaseModel, Field

from chunking.models import ContentStats

from .pipeline import ProcessingResult

PREVIEW_LENGTH = 500


class RewriteOutcome(BaseModel):
    source_name: str
    page_count: int
    stats: ContentStats
    budget: int
    total_chunks: int
    result: ProcessingResult
    usage: dict[str, Any] = Field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.result.text

    @property
    def preview(self) -> str:
        text = self.text
        if len(text) > PREVIEW_LENGTH:
            return text[:PREVIEW_LENGTH] + "..."
        return text

    def summary(self) -> str:
        return (
            f"Original Chunks: {self.total_chunks} | "
            f"Pages: {self.page_count} | "
            f"File: {self.source_name}"
        )


class RewriteRequest(BaseModel):
    pdf_path: str = Field(..., min_length=1)
    chunk_size: Optional[int] = None


class RewriteResponse(BaseModel):
    document_id: str
    total_chunks: int
    rewritten_chunks: int
    failed_chunks: list[int] = Field(default_factory=list)
    text_path: str
    pdf_path: str
    result_path: str
    preview: str = ""


class ConnectionTestResponse(BaseModel):
    ok: bool
    message: str
