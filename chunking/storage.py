"""
On-disk layout for chunking results.

    <data_dir>/<document_id>/chunks/<document_id>_b<budget>_<timestamp>.json

One document can be chunked at several budgets; every run gets its own file
and the newest one is what ``load_latest`` returns.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .models import ChunkingResult


@dataclass
class ChunkingPaths:
    document_id: str
    chunk_dir: Path
    chunk_file: Path


class ChunkingStorage:
    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    def chunk_dir(self, document_id: str) -> Path:
        return self.data_dir / document_id / "chunks"

    def build_paths(self, document_id: str, budget: int) -> ChunkingPaths:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
        chunk_dir = self.chunk_dir(document_id)
        chunk_dir.mkdir(parents=True, exist_ok=True)
        return ChunkingPaths(
            document_id=document_id,
            chunk_dir=chunk_dir,
            chunk_file=chunk_dir / f"{document_id}_b{budget}_{stamp}.json",
        )

    def save(self, result: ChunkingResult) -> ChunkingPaths:
        paths = self.build_paths(result.document_id, result.budget)
        result.save(str(paths.chunk_file))
        return paths

    def list_results(self, document_id: str) -> list[Path]:
        """Saved result files for a document, oldest first."""
        chunk_dir = self.chunk_dir(document_id)
        if not chunk_dir.is_dir():
            return []
        # The last three name parts are the zero-padded UTC timestamp
        return sorted(
            chunk_dir.glob(f"{document_id}_b*.json"),
            key=lambda p: p.stem.split("_")[-3:],
        )

    def load_latest(self, document_id: str) -> Optional[ChunkingResult]:
        files = self.list_results(document_id)
        if not files:
            return None
        return ChunkingResult.load(str(files[-1]))
