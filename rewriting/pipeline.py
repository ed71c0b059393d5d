"""
Chunk Processing Pipeline

Feeds chunks one at a time, in order, to a rewrite function and collects
the results. A failing chunk falls back to its original text so a single
bad request never aborts the document; only a run in which every chunk
failed is an error (NoProgressError).

Usage:
    pipeline = ChunkProcessingPipeline(client.rewrite, pacing_delay=0.1)
    result = pipeline.run(chunks)
    print(result.text)
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from pydantic import BaseModel, Field

from .exceptions import NoProgressError, PipelineCancelledError, RemoteError

logger = logging.getLogger(__name__)

RewriteFn = Callable[[str, int, int], str]
ProgressFn = Callable[[int, int, str], None]

OUTPUT_SEPARATOR = "\n\n"


class ProcessingResult(BaseModel):
    """
    Per-chunk outputs of one pipeline run.

    ``outputs[i]`` is the rewritten text of chunk i, or the original chunk
    text if rewriting it failed.
    """
    outputs: list[str] = Field(default_factory=list)
    failed_indices: list[int] = Field(default_factory=list)
    errors: dict[int, str] = Field(default_factory=dict)

    @property
    def total_chunks(self) -> int:
        return len(self.outputs)

    @property
    def failure_count(self) -> int:
        return len(self.failed_indices)

    @property
    def success_count(self) -> int:
        return self.total_chunks - self.failure_count

    @property
    def text(self) -> str:
        return OUTPUT_SEPARATOR.join(self.outputs)


class ChunkProcessingPipeline:
    def __init__(
        self,
        rewrite: RewriteFn,
        pacing_delay: float = 0.1,
        sleep: Callable[[float], None] = time.sleep,
        progress_callback: Optional[ProgressFn] = None,
        should_stop: Optional[Callable[[], bool]] = None,
    ):
        """
        Args:
            rewrite: rewrite(chunk_text, index, total) -> str, raises RemoteError
            pacing_delay: Seconds to wait between consecutive chunks
            sleep: Sleep function used for pacing
            progress_callback: Optional callback(current, total, message)
            should_stop: Checked before each chunk; True cancels the run
        """
        self.rewrite = rewrite
        self.pacing_delay = pacing_delay
        self._sleep = sleep
        self.progress_callback = progress_callback
        self.should_stop = should_stop

    def run(self, chunks: list[str]) -> ProcessingResult:
        """
        Rewrite all chunks sequentially.

        Raises:
            NoProgressError: No chunk could be rewritten.
            PipelineCancelledError: should_stop returned True between chunks.
        """
        total = len(chunks)
        result = ProcessingResult()
        last_error: Optional[Exception] = None

        for index, chunk in enumerate(chunks):
            if self.should_stop and self.should_stop():
                raise PipelineCancelledError(completed=index, total_chunks=total)

            if self.progress_callback:
                self.progress_callback(index, total, f"Processing chunk {index + 1}/{total}...")

            try:
                result.outputs.append(self.rewrite(chunk, index, total))
                logger.info(f"Chunk {index + 1}/{total} rewritten")
            except RemoteError as exc:
                logger.warning(f"Error processing chunk {index + 1}/{total}, keeping original text: {exc}")
                result.outputs.append(chunk)
                result.failed_indices.append(index)
                result.errors[index] = str(exc)
                last_error = exc

            if index < total - 1 and self.pacing_delay > 0:
                self._sleep(self.pacing_delay)

        if total and result.success_count == 0:
            raise NoProgressError(total_chunks=total, last_error=last_error)

        logger.info(
            f"Pipeline finished: {result.success_count}/{total} chunks rewritten, "
            f"{result.failure_count} fell back to original text"
        )
        return result
