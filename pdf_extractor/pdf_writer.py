"""
Output PDF rendering for rewritten text.

Lays out plain text on A4 pages with PyMuPDF: a title line, a grey
generation timestamp and word-wrapped body text with automatic page breaks.

Text is drawn with embedded fonts so that characters outside Latin-1
(typographic quotes, dashes, Greek, CJK) reach the output intact. Each
character uses the first font in the fallback list that has a glyph for it:
Noto Sans (shipped by ``pymupdf-fonts``) first, then PyMuPDF's built-in
CJK font.

Usage:
    from pdf_extractor.pdf_writer import PDFWriter, output_file_name

    writer = PDFWriter()
    writer.write(text, output_file_name("paper.pdf"), title="TTS-Optimized: paper.pdf")
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
import logging
from typing import Optional

import fitz  # PyMuPDF

from .exceptions import PDFWriteError

logger = logging.getLogger(__name__)

MM = 72 / 25.4
OUTPUT_SUFFIX = "_tts-optimized.pdf"
FONT_FALLBACKS = ("notos", "cjk")


def output_file_name(source_name: str) -> str:
    """Map ``paper.pdf`` to ``paper_tts-optimized.pdf``."""
    return f"{Path(source_name).stem}{OUTPUT_SUFFIX}"


class PDFWriter:
    def __init__(
        self,
        font_size: float = 11.0,
        title_size: float = 16.0,
        meta_size: float = 10.0,
        margin_mm: float = 20.0,
        line_height_mm: float = 7.0,
        fonts: tuple[str, ...] = FONT_FALLBACKS,
    ) -> None:
        self.font_size = font_size
        self.title_size = title_size
        self.meta_size = meta_size
        self.margin = margin_mm * MM
        self.line_height = line_height_mm * MM
        self.fonts = [fitz.Font(name) for name in fonts]

    def _font_for(self, char: str) -> fitz.Font:
        for font in self.fonts:
            if font.has_glyph(ord(char)):
                return font
        return self.fonts[0]

    def font_runs(self, text: str) -> list[tuple[fitz.Font, str]]:
        """Split text into consecutive runs drawn with the same font."""
        runs: list[tuple[fitz.Font, str]] = []
        for char in text:
            font = self._font_for(char)
            if runs and runs[-1][0] is font:
                runs[-1] = (font, runs[-1][1] + char)
            else:
                runs.append((font, char))
        return runs

    def text_length(self, text: str, fontsize: Optional[float] = None) -> float:
        """Width of text in points, as it will be drawn."""
        size = fontsize or self.font_size
        return sum(font.text_length(run, fontsize=size) for font, run in self.font_runs(text))

    def _break_word(self, word: str, max_width: float) -> list[str]:
        pieces: list[str] = []
        current = ""
        for char in word:
            if current and self.text_length(current + char) > max_width:
                pieces.append(current)
                current = char
            else:
                current += char
        pieces.append(current)
        return pieces

    def wrap_text(self, text: str, max_width: float) -> list[str]:
        """
        Greedy word wrap measured in points; blank lines are preserved.

        A word that is wider than max_width on its own (a URL, a long
        identifier) is broken between characters.
        """
        lines: list[str] = []
        for raw_line in text.split("\n"):
            words = raw_line.split()
            if not words:
                lines.append("")
                continue
            current = ""
            for word in words:
                candidate = f"{current} {word}" if current else word
                if self.text_length(candidate) <= max_width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                pieces = self._break_word(word, max_width)
                lines.extend(pieces[:-1])
                current = pieces[-1]
            lines.append(current)
        return lines

    def _draw(
        self,
        page: fitz.Page,
        position: tuple[float, float],
        text: str,
        fontsize: float,
        color: tuple[float, float, float] = (0, 0, 0),
    ) -> None:
        writer = fitz.TextWriter(page.rect)
        point = fitz.Point(position)
        for font, run in self.font_runs(text):
            _, point = writer.append(point, run, font=font, fontsize=fontsize)
        writer.write_text(page, color=color)

    def write(
        self,
        text: str,
        output_path: str | Path,
        title: str,
        generated_at: Optional[datetime] = None,
    ) -> Path:
        """
        Render text into a new PDF file.

        Returns:
            Path of the written PDF.

        Raises:
            PDFWriteError: The file could not be saved
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        width, height = fitz.paper_size("a4")
        timestamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")

        doc = fitz.open()
        try:
            page = doc.new_page(width=width, height=height)
            self._draw(page, (self.margin, 20 * MM), title, self.title_size)
            self._draw(
                page, (self.margin, 30 * MM), f"Generated: {timestamp}",
                self.meta_size, color=(0.5, 0.5, 0.5),
            )

            y = 40 * MM
            for line in self.wrap_text(text, width - 2 * self.margin):
                if y + self.line_height > height - self.margin:
                    page = doc.new_page(width=width, height=height)
                    y = self.margin
                if line:
                    self._draw(page, (self.margin, y), line, self.font_size)
                y += self.line_height

            page_count = len(doc)
            try:
                doc.save(str(output_path))
            except (OSError, RuntimeError, ValueError) as exc:
                raise PDFWriteError(str(output_path), exc) from exc
        finally:
            doc.close()

        logger.info(f"Wrote {page_count} pages to {output_path}")
        return output_path
