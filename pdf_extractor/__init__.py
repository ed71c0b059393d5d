"""
PDF Extractor - Text extraction and output rendering

Extracts the selectable text of a PDF with PyMuPDF into a Document and
renders rewritten text back into a PDF.

Quick Start:
    from pdf_extractor import TextExtractor, PDFWriter

    document = TextExtractor().extract("paper.pdf")
    print(f"{document.source_name}: {document.page_count} pages")

    PDFWriter().write(text, "paper_tts-optimized.pdf", title="TTS-Optimized: paper.pdf")
"""

__version__ = "2.0.0"

from .models import Document
from .text_extractor import TextExtractor, PAGE_MARKER
from .pdf_writer import PDFWriter, output_file_name
from .exceptions import (
    ExtractionError,
    PDFError,
    PDFNotFoundError,
    PDFCorruptedError,
    EmptyPDFError,
    InvalidFileTypeError,
    PDFWriteError,
)

__all__ = [
    "__version__",
    "Document",
    "TextExtractor",
    "PAGE_MARKER",
    "PDFWriter",
    "output_file_name",
    "ExtractionError",
    "PDFError",
    "PDFNotFoundError",
    "PDFCorruptedError",
    "EmptyPDFError",
    "InvalidFileTypeError",
    "PDFWriteError",
]
