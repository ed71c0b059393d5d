"""
Text Chunker - Core chunking logic for the rewriting pipeline

Splits extracted PDF text into chunks whose estimated token count stays
within a budget, keeping paragraphs together wherever possible.

Algorithm (greedy, single pass, document order preserved):
1. Split the text into paragraphs on runs of blank lines.
2. PARAGRAPH_PACKING: append paragraphs to an accumulator, flushing it as a
   chunk whenever the next paragraph would overflow the budget.
3. SENTENCE_PACKING: a paragraph that overflows the budget on its own is
   split into sentences, which are packed the same way (space-joined).
   A single sentence that alone overflows is emitted as its own chunk.
   Whatever is left over becomes the paragraph accumulator again, so it
   can still absorb the next paragraph.
4. Flush the remaining accumulator. Empty input yields one empty chunk.

Usage:
    from chunking import TextChunker

    chunker = TextChunker()
    chunks = chunker.chunk(text, budget=4000)
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from functools import reduce
from typing import Optional

from .sentence_splitter import split_sentences
from .token_counter import CharRatioEstimator, TokenEstimator

logger = logging.getLogger(__name__)

PARAGRAPH_SEPARATOR = "\n\n"
SENTENCE_SEPARATOR = " "

_PARAGRAPH_BREAK = re.compile(r"\n{2,}")


class PackingMode(str, Enum):
    """Which unit the chunker is currently packing."""
    PARAGRAPH = "paragraph_packing"
    SENTENCE = "sentence_packing"


@dataclass
class PackingState:
    """Fold state carried across paragraphs during one chunking call."""
    accumulator: str = ""
    output: list[str] = field(default_factory=list)
    mode: PackingMode = PackingMode.PARAGRAPH

    def flush(self) -> None:
        text = self.accumulator.strip()
        if text:
            self.output.append(text)
        self.accumulator = ""


def split_paragraphs(text: str) -> list[str]:
    """Split text into paragraphs on runs of two or more newlines."""
    return _PARAGRAPH_BREAK.split(text)


class TextChunker:
    """
    Packs paragraphs (and, when needed, sentences) into budget-bounded
    chunks for the rewriting service.
    """

    def __init__(
        self,
        estimator: Optional[TokenEstimator] = None,
        paragraph_separator: str = PARAGRAPH_SEPARATOR,
        sentence_separator: str = SENTENCE_SEPARATOR,
    ):
        self.estimator = estimator or CharRatioEstimator()
        self.paragraph_separator = paragraph_separator
        self.sentence_separator = sentence_separator

    def chunk(self, text: str, budget: int) -> list[str]:
        """
        Split text into an ordered, non-empty list of chunks.

        Args:
            text: Full extracted document text.
            budget: Maximum estimated tokens per chunk (positive).

        Returns:
            List of chunk strings in document order. Every chunk fits the
            budget except single sentences that exceed it on their own.

        Raises:
            ValueError: If budget is not a positive integer.
        """
        if not isinstance(budget, int) or budget <= 0:
            raise ValueError(f"budget must be a positive integer, got {budget!r}")

        paragraphs = [p for p in split_paragraphs(text or "") if p.strip()]

        state = reduce(
            lambda st, paragraph: self._step(st, paragraph, budget),
            paragraphs,
            PackingState(),
        )
        state.flush()

        if not state.output:
            return [(text or "").strip()]

        logger.debug(
            f"Chunked {len(text)} chars into {len(state.output)} chunks "
            f"(budget={budget})"
        )
        return state.output

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _fits(self, text: str, budget: int) -> bool:
        return self.estimator.count(text) <= budget

    def _step(self, state: PackingState, paragraph: str, budget: int) -> PackingState:
        """Feed one paragraph to the handler of the current mode."""
        handlers = {
            PackingMode.PARAGRAPH: self._pack_paragraph,
            PackingMode.SENTENCE: self._pack_sentences,
        }
        return handlers[state.mode](state, paragraph, budget)

    def _pack_paragraph(
        self,
        state: PackingState,
        paragraph: str,
        budget: int,
    ) -> PackingState:
        """PARAGRAPH_PACKING step for a single paragraph."""
        if state.accumulator:
            candidate = state.accumulator + self.paragraph_separator + paragraph
            if self._fits(candidate, budget):
                state.accumulator = candidate
                return state
            state.flush()

        if self._fits(paragraph, budget):
            state.accumulator = paragraph
            return state

        state.mode = PackingMode.SENTENCE
        return self._step(state, paragraph, budget)

    def _pack_sentences(
        self,
        state: PackingState,
        paragraph: str,
        budget: int,
    ) -> PackingState:
        """
        SENTENCE_PACKING for a paragraph that overflows on its own.

        Hands control back to PARAGRAPH_PACKING with the leftover sentences
        as the accumulator.
        """
        state.flush()
        secondary = PackingState(output=state.output)

        for sentence in split_sentences(paragraph):
            if not self._fits(sentence, budget):
                # Irreducible overflow: emitted verbatim, never split further
                secondary.flush()
                logger.debug(
                    f"Sentence of {len(sentence)} chars exceeds budget {budget}"
                )
                state.output.append(sentence)
                continue

            if not secondary.accumulator:
                secondary.accumulator = sentence
                continue

            candidate = secondary.accumulator + self.sentence_separator + sentence
            if self._fits(candidate, budget):
                secondary.accumulator = candidate
            else:
                secondary.flush()
                secondary.accumulator = sentence

        state.accumulator = secondary.accumulator
        state.mode = PackingMode.PARAGRAPH
        return state


def chunk_text(
    text: str,
    budget: int,
    estimator: Optional[TokenEstimator] = None,
) -> list[str]:
    """Convenience wrapper around ``TextChunker(estimator).chunk``."""
    return TextChunker(estimator).chunk(text, budget)
