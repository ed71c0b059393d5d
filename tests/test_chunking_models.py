"""Tests for chunking.models, storage and service."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from chunking import ChunkingConfig, ChunkingResult, ChunkingService, ChunkingServiceConfig, ContentStats
from chunking.service import build_estimator
from chunking.storage import ChunkingStorage
from chunking.token_counter import CharRatioEstimator, TiktokenEstimator
from pdf_extractor import Document


class TestChunkingConfig:
    def test_defaults(self):
        config = ChunkingConfig()
        assert config.max_chunk_tokens == 4000
        assert config.chars_per_token == 4
        assert config.estimator == "char_ratio"

    @pytest.mark.parametrize("value", [499, 20001])
    def test_budget_range(self, value):
        with pytest.raises(ValidationError):
            ChunkingConfig(max_chunk_tokens=value)

    @pytest.mark.parametrize("value", [500, 20000])
    def test_budget_range_bounds_inclusive(self, value):
        assert ChunkingConfig(max_chunk_tokens=value).max_chunk_tokens == value

    def test_unknown_estimator(self):
        with pytest.raises(ValidationError):
            ChunkingConfig(estimator="spacy")

    def test_build_estimator(self):
        assert isinstance(build_estimator(ChunkingConfig()), CharRatioEstimator)
        assert isinstance(build_estimator(ChunkingConfig(estimator="tiktoken")), TiktokenEstimator)


class TestChunkingResult:
    def _result(self, **overrides) -> ChunkingResult:
        defaults = dict(
            source_name="papers/lecture.pdf",
            budget=500,
            chunks=["First chunk.", "Second chunk."],
            stats=ContentStats(total_characters=26, estimated_tokens=7, paragraph_count=2, word_count=4),
        )
        defaults.update(overrides)
        return ChunkingResult(**defaults)

    def test_total_chunks(self):
        assert self._result().total_chunks == 2

    def test_document_id(self):
        assert self._result().document_id == "lecture"
        assert self._result(source_name="C:\\docs\\paper.pdf").document_id == "paper"

    def test_chunks_must_not_be_empty(self):
        with pytest.raises(ValidationError):
            self._result(chunks=[])

    def test_save_and_load(self, tmp_path: Path):
        result = self._result()
        path = tmp_path / "chunks.json"
        result.save(str(path))
        loaded = ChunkingResult.load(str(path))
        assert loaded.chunks == result.chunks
        assert loaded.stats == result.stats
        assert loaded.budget == 500

    def test_created_at_is_timezone_aware(self):
        result = self._result()
        assert result.created_at.tzinfo is not None
        assert result.created_at.utcoffset().total_seconds() == 0


class TestChunkingStorage:
    def test_storage_paths(self, tmp_path: Path):
        storage = ChunkingStorage(str(tmp_path))
        result = ChunkingResult(source_name="pdfs/example.pdf", budget=500, chunks=[""])
        paths = storage.save(result)
        assert paths.document_id == "example"
        assert paths.chunk_file.exists()
        assert paths.chunk_dir == tmp_path / "example" / "chunks"
        assert paths.chunk_file.name.startswith("example_b500_")

    def test_load_latest(self, tmp_path: Path):
        storage = ChunkingStorage(str(tmp_path))
        assert storage.load_latest("paper") is None
        assert storage.list_results("paper") == []

        storage.save(ChunkingResult(source_name="paper.pdf", budget=500, chunks=["a", "b"]))
        storage.save(ChunkingResult(source_name="paper.pdf", budget=2000, chunks=["a b"]))

        assert len(storage.list_results("paper")) == 2
        latest = storage.load_latest("paper")
        assert latest.budget == 2000
        assert latest.chunks == ["a b"]


class TestChunkingService:
    def test_chunk_document(self):
        service = ChunkingService()
        document = Document(text="Alpha.\n\nBeta.", page_count=1, source_name="a.pdf")
        result = service.chunk_document(document, budget=2)
        assert result.chunks == ["Alpha.", "Beta."]
        assert result.stats.paragraph_count == 2
        assert result.budget == 2

    def test_default_budget_from_config(self):
        config = ChunkingServiceConfig(chunking=ChunkingConfig(max_chunk_tokens=500))
        service = ChunkingService(config)
        assert service.chunk_text("Alpha.\n\nBeta.") == ["Alpha.\n\nBeta."]

    def test_chunk_and_save(self, tmp_path: Path):
        document_path = tmp_path / "doc.json"
        Document(text="Some text.", page_count=1, source_name="doc.pdf").save(str(document_path))
        service = ChunkingService(ChunkingServiceConfig(data_dir=str(tmp_path / "chunks")))
        result, output_path = service.chunk_and_save(str(document_path))
        assert result.chunks == ["Some text."]
        assert Path(output_path).exists()
        assert service.latest_result("doc").chunks == ["Some text."]

    def test_config_from_env(self, monkeypatch):
        monkeypatch.setenv("PDF2SPEECH_CHUNK_SIZE", "6000")
        monkeypatch.setenv("PDF2SPEECH_CHUNKING_DIR", "/tmp/chunks")
        config = ChunkingServiceConfig.from_env()
        assert config.chunking.max_chunk_tokens == 6000
        assert config.data_dir == "/tmp/chunks"
