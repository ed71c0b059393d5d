"""
Rewriting component: sends chunks to an LLM text API and reassembles them.

Quick Start:
    from rewriting import RewriteService, RewriteSettings

    service = RewriteService(RewriteSettings.from_env())
    outcome = service.process("paper.pdf")
    print(outcome.text)
"""

__version__ = "1.0.0"

from .client import RewriteClient, TokenUsage
from .config import RewriteServiceConfig
from .exceptions import (
    RewriteError,
    ConfigurationError,
    RemoteError,
    RemoteConnectionError,
    RemoteRateLimitError,
    RemoteResponseError,
    PipelineError,
    NoProgressError,
    PipelineCancelledError,
    is_retryable,
    format_error_chain,
)
from .models import RewriteOutcome, RewriteRequest, RewriteResponse
from .pipeline import ChunkProcessingPipeline, ProcessingResult
from .service import RewriteService
from .settings import RewriteSettings, SettingsStore

__all__ = [
    "__version__",
    "RewriteClient",
    "TokenUsage",
    "RewriteServiceConfig",
    "RewriteError",
    "ConfigurationError",
    "RemoteError",
    "RemoteConnectionError",
    "RemoteRateLimitError",
    "RemoteResponseError",
    "PipelineError",
    "NoProgressError",
    "PipelineCancelledError",
    "is_retryable",
    "format_error_chain",
    "RewriteOutcome",
    "RewriteRequest",
    "RewriteResponse",
    "ChunkProcessingPipeline",
    "ProcessingResult",
    "RewriteService",
    "RewriteSettings",
    "SettingsStore",
]
