"""
Text-native PDF extraction.

Extracts selectable text from every page of a PDF with PyMuPDF and joins
the pages into a single Document, marking page boundaries so the rewritten
output stays navigable.
"""

from __future__ import annotations

from pathlib import Path
import logging
import re
from typing import Callable, Optional

import fitz  # PyMuPDF

from .exceptions import EmptyPDFError, InvalidFileTypeError, PDFCorruptedError, PDFNotFoundError
from .models import Document

logger = logging.getLogger(__name__)

PAGE_MARKER = "--- Page {number} ---"


class TextExtractor:
    def __init__(
        self,
        page_markers: bool = True,
        dehyphenate: bool = True,
    ) -> None:
        self.page_markers = page_markers
        self.dehyphenate = dehyphenate

    def extract(
        self,
        pdf_path: str | Path,
        progress_callback: Optional[Callable[[int, int, str], None]] = None,
    ) -> Document:
        """
        Extract the text of all pages into a Document.

        Args:
            pdf_path: Path to the PDF file
            progress_callback: Optional callback(current_page, total_pages, status)

        Raises:
            InvalidFileTypeError: The path does not name a .pdf file
            PDFNotFoundError: The file does not exist
            PDFCorruptedError: PyMuPDF cannot open the file
            EmptyPDFError: The PDF has no pages
        """
        path = Path(pdf_path)
        if path.suffix.lower() != ".pdf":
            raise InvalidFileTypeError(str(path))
        if not path.exists():
            raise PDFNotFoundError(str(path))

        try:
            doc = fitz.open(path)
        except Exception as exc:
            raise PDFCorruptedError(str(path), exc) from exc

        parts: list[str] = []
        with doc:
            page_count = len(doc)
            for index, page in enumerate(doc, start=1):
                if progress_callback:
                    progress_callback(index, page_count, "extracting")
                page_text = self.clean_text(page.get_text("text"))
                if self.page_markers:
                    marker = PAGE_MARKER.format(number=index)
                    parts.append(f"\n\n{marker}\n\n{page_text}")
                else:
                    parts.append(f"\n\n{page_text}")

        if page_count == 0:
            raise EmptyPDFError(str(path))

        text = "".join(parts).strip()
        logger.info(f"Extracted {len(text)} chars from {page_count} pages of {path.name}")
        return Document(text=text, page_count=page_count, source_name=path.name)

    def clean_text(self, text: str) -> str:
        if not text:
            return ""
        cleaned = text.replace("\r\n", "\n").replace("\r", "\n")
        if self.dehyphenate:
            # "infor-\nmation" -> "information"
            cleaned = re.sub(r"(?<=\w)-\n(?=\w)", "", cleaned)
        cleaned = re.sub(r"[ \t]+", " ", cleaned)
        cleaned = re.sub(r"\n{3,}", "\n\n", cleaned)
        return cleaned.strip()
