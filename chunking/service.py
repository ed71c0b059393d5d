import logging

from pdf_extractor.models import Document

from .analyzer import ContentAnalyzer
from .chunker import TextChunker
from .config import ChunkingServiceConfig
from .models import ChunkingConfig, ChunkingResult, ContentStats
from .storage import ChunkingStorage
from .token_counter import CharRatioEstimator, TiktokenEstimator, TokenEstimator

logger = logging.getLogger(__name__)


def build_estimator(config: ChunkingConfig) -> TokenEstimator:
    if config.estimator == "tiktoken":
        return TiktokenEstimator()
    return CharRatioEstimator(config.chars_per_token)


class ChunkingService:
    def __init__(self, config: ChunkingServiceConfig | None = None):
        self.config = config or ChunkingServiceConfig()
        estimator = build_estimator(self.config.chunking)
        self.chunker = TextChunker(estimator)
        self.analyzer = ContentAnalyzer(estimator)
        self.storage = ChunkingStorage(self.config.data_dir)

    def analyze(self, text: str) -> ContentStats:
        return self.analyzer.analyze(text)

    def chunk_text(self, text: str, budget: int | None = None) -> list[str]:
        return self.chunker.chunk(text, budget or self.config.chunking.max_chunk_tokens)

    def chunk_document(self, document: Document, budget: int | None = None) -> ChunkingResult:
        if budget is None:
            budget = self.config.chunking.max_chunk_tokens
        stats = self.analyze(document.text)
        chunks = self.chunker.chunk(document.text, budget)
        logger.info(
            f"{document.source_name}: {stats.word_count} words, "
            f"{len(chunks)} chunks at budget {budget}"
        )
        return ChunkingResult(
            source_name=document.source_name,
            budget=budget,
            chunks=chunks,
            stats=stats,
        )

    def chunk_from_file(self, document_path: str) -> ChunkingResult:
        return self.chunk_document(Document.load(document_path))

    def chunk_and_save(self, document_path: str) -> tuple[ChunkingResult, str]:
        result = self.chunk_from_file(document_path)
        paths = self.storage.save(result)
        return result, str(paths.chunk_file)

    def latest_result(self, document_id: str) -> ChunkingResult | None:
        return self.storage.load_latest(document_id)
