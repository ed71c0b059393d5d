from dataclasses import dataclass
import os


@dataclass
class RewriteServiceConfig:
    data_dir: str = "data/rewriting"
    settings_path: str = "data/settings.json"
    pacing_delay: float = 0.1
    max_retries: int = 3
    retry_delay: float = 1.0

    @classmethod
    def from_env(cls) -> "RewriteServiceConfig":
        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value else default

        def _float(name: str, default: float) -> float:
            value = os.environ.get(name)
            return float(value) if value else default

        return cls(
            data_dir=os.environ.get("PDF2SPEECH_DATA_DIR", cls.data_dir),
            settings_path=os.environ.get("PDF2SPEECH_SETTINGS", cls.settings_path),
            pacing_delay=_float("PDF2SPEECH_PACING_DELAY", cls.pacing_delay),
            max_retries=_int("PDF2SPEECH_MAX_RETRIES", cls.max_retries),
            retry_delay=_float("PDF2SPEECH_RETRY_DELAY", cls.retry_delay),
        )
