from dataclasses import dataclass, field
import os

from .models import ChunkingConfig


@dataclass
class ChunkingServiceConfig:
    data_dir: str = "data/chunking"
    chunking: ChunkingConfig = field(default_factory=ChunkingConfig)

    @classmethod
    def from_env(cls) -> "ChunkingServiceConfig":
        chunk_size = os.environ.get("PDF2SPEECH_CHUNK_SIZE")
        chunking = ChunkingConfig(
            max_chunk_tokens=int(chunk_size) if chunk_size else 4000,
            estimator=os.environ.get("PDF2SPEECH_ESTIMATOR", "char_ratio"),
        )
        return cls(
            data_dir=os.environ.get("PDF2SPEECH_CHUNKING_DIR", cls.data_dir),
            chunking=chunking,
        )
