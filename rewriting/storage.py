from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from pdf_extractor.pdf_writer import PDFWriter, output_file_name

from .models import RewriteOutcome


@dataclass
class RewritePaths:
    document_id: str
    output_dir: Path
    text_file: Path
    pdf_file: Path
    result_file: Path


class RewriteStorage:
    def __init__(self, data_dir: str, writer: PDFWriter | None = None):
        self.data_dir = Path(data_dir)
        self.writer = writer or PDFWriter()

    def build_paths(self, source_name: str) -> RewritePaths:
        document_id = Path(source_name.replace("\\", "/")).stem
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
        output_dir = self.data_dir / document_id / timestamp
        output_dir.mkdir(parents=True, exist_ok=True)
        return RewritePaths(
            document_id=document_id,
            output_dir=output_dir,
            text_file=output_dir / f"{document_id}_tts-optimized.txt",
            pdf_file=output_dir / output_file_name(source_name),
            result_file=output_dir / f"{document_id}_result.json",
        )

    def save(self, outcome: RewriteOutcome) -> RewritePaths:
        paths = self.build_paths(outcome.source_name)
        paths.text_file.write_text(outcome.text, encoding="utf-8")
        paths.result_file.write_text(outcome.model_dump_json(indent=2), encoding="utf-8")
        self.writer.write(
            outcome.text,
            paths.pdf_file,
            title=f"TTS-Optimized: {outcome.source_name}",
        )
        return paths
