"""
Custom Exceptions for the Rewriting Pipeline.

Exception Hierarchy:
    RewriteError (base)
    ├── ConfigurationError
    ├── RemoteError
    │   ├── RemoteConnectionError
    │   ├── RemoteRateLimitError
    │   └── RemoteResponseError
    └── PipelineError
        ├── NoProgressError
        └── PipelineCancelledError

RemoteError is raised per chunk by the rewriting client and is recovered
by the pipeline (the chunk falls back to its original text). NoProgressError
is raised only when no chunk at all could be rewritten.

Usage:
    from rewriting.exceptions import NoProgressError, RewriteError

    try:
        outcome = service.process("paper.pdf")
    except NoProgressError as e:
        print(f"All {e.total_chunks} chunks failed: {e}")
    except RewriteError as e:
        print(f"Rewriting failed: {e}")
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class RewriteError(Exception):
    """
    Base exception for all rewriting-related errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A rewriting error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


class ConfigurationError(RewriteError):
    """Raised when settings are missing or invalid (e.g. no API key)."""

    pass


# =============================================================================
# REMOTE ERRORS
# =============================================================================


class RemoteError(RewriteError):
    """
    Base class for rewriting-service errors.

    Attributes:
        original_error: The underlying SDK exception
        status_code: HTTP status code if available
    """

    def __init__(
        self,
        message: str = "Rewriting service error",
        original_error: Optional[Exception] = None,
        status_code: Optional[int] = None,
    ):
        self.original_error = original_error
        self.status_code = status_code

        details = None
        if original_error:
            details = str(original_error)
        if status_code:
            message = f"{message} (HTTP {status_code})"

        super().__init__(message, details)


class RemoteConnectionError(RemoteError):
    """Raised when the rewriting service cannot be reached."""

    def __init__(
        self,
        message: str = "Cannot connect to rewriting service",
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, original_error)


class RemoteRateLimitError(RemoteError):
    """
    Raised when the per-key quota or rate limit is exceeded.

    Attributes:
        retry_after: Suggested wait time in seconds (if provided)
    """

    def __init__(
        self,
        retry_after: Optional[float] = None,
        original_error: Optional[Exception] = None,
    ):
        self.retry_after = retry_after
        message = "Rewriting service rate limit exceeded"
        if retry_after:
            message = f"{message} (retry after {retry_after}s)"
        super().__init__(message, original_error, status_code=429)


class RemoteResponseError(RemoteError):
    """
    Raised when the service returns an unusable response.

    This includes missing choices, empty content and content filter blocks.

    Attributes:
        response_content: Raw response content if available
    """

    def __init__(
        self,
        message: str = "Invalid API response format",
        response_content: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.response_content = response_content
        super().__init__(message, original_error)
        if response_content:
            self.details = response_content[:500]


# =============================================================================
# PIPELINE ERRORS
# =============================================================================


class PipelineError(RewriteError):
    """Base class for chunk pipeline errors."""

    pass


class NoProgressError(PipelineError):
    """
    Raised when every chunk of a document failed to be rewritten.

    Attributes:
        total_chunks: Number of chunks attempted
        last_error: The error of the last failed chunk
    """

    def __init__(
        self,
        total_chunks: int,
        last_error: Optional[Exception] = None,
    ):
        self.total_chunks = total_chunks
        self.last_error = last_error
        super().__init__(
            "Failed to process any chunks. Please check your API key and try again.",
            details=str(last_error) if last_error else None,
        )


class PipelineCancelledError(PipelineError):
    """
    Raised when the caller stops the pipeline between chunks.

    Attributes:
        completed: Number of chunks attempted before stopping
    """

    def __init__(self, completed: int, total_chunks: int):
        self.completed = completed
        self.total_chunks = total_chunks
        super().__init__(
            f"Processing cancelled after {completed}/{total_chunks} chunks"
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """
    Check if an error is potentially recoverable by retrying.

    Returns True for connection errors, rate limits and 5xx responses.
    """
    if isinstance(error, (RemoteConnectionError, RemoteRateLimitError)):
        return True
    if isinstance(error, RemoteError) and error.status_code is not None and error.status_code >= 500:
        return True
    return False


def format_error_chain(error: Exception) -> str:
    """
    Format an exception and its chain for logging.

    Returns a multi-line string showing the error hierarchy.
    """
    lines = []
    current = error
    depth = 0

    while current is not None:
        prefix = "  " * depth + ("└─ " if depth > 0 else "")
        lines.append(f"{prefix}{type(current).__name__}: {current}")

        if getattr(current, "original_error", None):
            current = current.original_error
            depth += 1
        elif getattr(current, "last_error", None):
            current = current.last_error
            depth += 1
        elif current.__cause__:
            current = current.__cause__
            depth += 1
        else:
            break

    return "\n".join(lines)
