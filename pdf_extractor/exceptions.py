"""
Errors raised while reading an uploaded PDF or writing the rewritten one.

Exception Hierarchy:
    ExtractionError
    └── PDFError
        ├── InvalidFileTypeError   (not a .pdf upload)
        ├── PDFNotFoundError
        ├── PDFCorruptedError      (PyMuPDF could not open/parse it)
        ├── EmptyPDFError          (opened, but has no pages)
        └── PDFWriteError          (output PDF could not be saved)

The CLI and the HTTP app treat every ExtractionError as a user-facing
failure and show ``str(error)``.

Usage:
    from pdf_extractor.exceptions import ExtractionError, InvalidFileTypeError

    try:
        document = TextExtractor().extract(upload_path)
    except InvalidFileTypeError:
        ...
    except ExtractionError as e:
        print(e)
"""

from __future__ import annotations

from typing import Optional


class ExtractionError(Exception):
    """
    Root of the pdf_extractor errors.

    Attributes:
        message: Short description shown to the user
        details: Underlying library message, if any
    """

    def __init__(
        self,
        message: str = "PDF processing failed",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details
        super().__init__(f"{message} | Details: {details}" if details else message)


class PDFError(ExtractionError):
    """An error tied to one PDF file; ``path`` is appended to the message."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        details: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.path = path
        self.original_error = original_error
        if details is None and original_error is not None:
            details = str(original_error)
        super().__init__(f"{message} [{path}]" if path else message, details)


class InvalidFileTypeError(PDFError):
    def __init__(self, path: str):
        super().__init__("Invalid file format. Please upload a PDF.", path=path)


class PDFNotFoundError(PDFError):
    def __init__(self, path: str):
        super().__init__(f"PDF file not found: {path}", path=path)


class PDFCorruptedError(PDFError):
    """PyMuPDF refused the file (damaged, encrypted or not really a PDF)."""

    def __init__(self, path: str, original_error: Optional[Exception] = None):
        super().__init__(
            "PDF extraction failed: the file is corrupted or unreadable",
            path=path,
            original_error=original_error,
        )


class EmptyPDFError(PDFError):
    def __init__(self, path: str):
        super().__init__("PDF extraction failed: the document has no pages", path=path)


class PDFWriteError(PDFError):
    """Saving the rewritten PDF failed (disk full, permissions, bad path)."""

    def __init__(self, path: str, original_error: Optional[Exception] = None):
        super().__init__("Failed to write PDF", path=path, original_error=original_error)
