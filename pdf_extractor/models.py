"""
Data Models for PDF Text Extraction

Defines:
1. Document - Full extracted text of a PDF plus page count and file name

Usage:
    document = extractor.extract("paper.pdf")
    document.save("paper.json")
    document = Document.load("paper.json")
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """
    Text extracted from one PDF upload.

    Immutable once extracted; chunking and rewriting only read it.
    """
    model_config = ConfigDict(frozen=True)

    text: str = Field(
        ...,
        description="Full extracted text with page markers",
    )
    page_count: int = Field(
        ...,
        description="Number of pages in the source PDF",
        ge=1,
    )
    source_name: str = Field(
        ...,
        description="File name of the source PDF",
    )

    @property
    def document_id(self) -> str:
        return Path(self.source_name.replace("\\", "/")).stem

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    def save(self, path: str) -> None:
        """Save the document to a JSON file."""
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: str) -> "Document":
        """Load a document from a JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)
