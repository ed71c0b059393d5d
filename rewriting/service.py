"""
Rewrite Service - end-to-end PDF to rewritten text.

Steps:
1. Extract text from the PDF (pdf_extractor)
2. Analyze and chunk the text under the configured budget (chunking)
3. Rewrite every chunk through the pipeline
4. Join the outputs and optionally store text, PDF and result JSON

All collaborators are injected; defaults are built from the settings and
service config passed in.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from chunking.models import ChunkingResult
from chunking.service import ChunkingService
from pdf_extractor.models import Document
from pdf_extractor.text_extractor import TextExtractor

from .client import RewriteClient
from .config import RewriteServiceConfig
from .exceptions import ConfigurationError
from .models import RewriteOutcome
from .pipeline import ChunkProcessingPipeline
from .settings import RewriteSettings
from .storage import RewritePaths, RewriteStorage

logger = logging.getLogger(__name__)

StatusFn = Callable[[str, float], None]


class RewriteService:
    def __init__(
        self,
        settings: RewriteSettings,
        config: RewriteServiceConfig | None = None,
        client: RewriteClient | None = None,
        extractor: TextExtractor | None = None,
        chunking: ChunkingService | None = None,
        storage: RewriteStorage | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self.config = config or RewriteServiceConfig()
        self._client = client
        self.extractor = extractor or TextExtractor()
        self.chunking = chunking or ChunkingService()
        self.storage = storage or RewriteStorage(self.config.data_dir)
        self._sleep = sleep

    @property
    def client(self) -> RewriteClient:
        if self._client is None:
            if not self.settings.has_api_key():
                raise ConfigurationError(
                    "API key not configured. Please configure your Gemini API key in the settings."
                )
            self._client = RewriteClient(
                self.settings,
                max_retries=self.config.max_retries,
                retry_delay=self.config.retry_delay,
            )
        return self._client

    def _budget(self, chunk_size: Optional[int]) -> int:
        return self.settings.chunk_size if chunk_size is None else chunk_size

    def prepare(
        self,
        pdf_path: str | Path,
        chunk_size: Optional[int] = None,
    ) -> tuple[Document, ChunkingResult]:
        """Extract, analyze and chunk a PDF without calling the rewriting service."""
        document = self.extractor.extract(pdf_path)
        chunks = self.chunking.chunk_document(document, self._budget(chunk_size))
        return document, chunks

    def process(
        self,
        pdf_path: str | Path,
        status_callback: Optional[StatusFn] = None,
        chunk_size: Optional[int] = None,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> RewriteOutcome:
        """
        Rewrite a PDF end to end.

        Args:
            pdf_path: Path to the PDF file
            status_callback: Optional callback(message, percent)
            chunk_size: Overrides settings.chunk_size for this run
            should_stop: Checked between chunks to abandon the run

        Raises:
            ExtractionError: The PDF could not be read
            ConfigurationError: No API key is configured
            NoProgressError: Every chunk failed
        """
        def report(message: str, percent: float) -> None:
            logger.info(f"[{percent:5.1f}%] {message}")
            if status_callback:
                status_callback(message, percent)

        client = self.client
        client.reset_usage()

        report("Extracting text from PDF...", 0)
        document = self.extractor.extract(pdf_path)

        budget = self._budget(chunk_size)
        chunking = self.chunking.chunk_document(document, budget)
        report(f"Analyzing content: {chunking.stats.word_count} words found", 15)
        report(f"Preparing {chunking.total_chunks} chunks for processing...", 25)

        def on_chunk(index: int, total: int, message: str) -> None:
            report(message, 25 + (index / total) * 60)

        pipeline = ChunkProcessingPipeline(
            client.rewrite,
            pacing_delay=self.config.pacing_delay,
            sleep=self._sleep,
            progress_callback=on_chunk,
            should_stop=should_stop,
        )
        result = pipeline.run(chunking.chunks)

        report("Generating output...", 85)
        outcome = RewriteOutcome(
            source_name=document.source_name,
            page_count=document.page_count,
            stats=chunking.stats,
            budget=budget,
            total_chunks=chunking.total_chunks,
            result=result,
            usage=client.get_usage_summary(),
        )
        report("Complete!", 100)
        return outcome

    def process_and_save(
        self,
        pdf_path: str | Path,
        status_callback: Optional[StatusFn] = None,
        chunk_size: Optional[int] = None,
    ) -> tuple[RewriteOutcome, RewritePaths]:
        outcome = self.process(pdf_path, status_callback=status_callback, chunk_size=chunk_size)
        paths = self.storage.save(outcome)
        logger.info(f"Saved output to {paths.output_dir}")
        return outcome, paths
