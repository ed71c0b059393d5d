"""
Sentence Splitter for the Chunking Pipeline

Punctuation-based sentence boundary detection used when a paragraph is too
large to fit a chunk on its own.

Design:
- A sentence is a run of non-terminator characters followed by one or
  more terminators (. ! ?), e.g. "Wait!?" stays one sentence
- A paragraph without any terminator is a single sentence
- Text after the last terminator is kept as a final sentence so that no
  content is dropped
- Every sentence is stripped; whitespace-only fragments are discarded

Usage:
    from chunking.sentence_splitter import split_sentences

    sentences = split_sentences("First sentence. Second one!")
    # ["First sentence.", "Second one!"]
"""

import re

_TERMINATORS = ".!?"

# Maximal run of non-terminators followed by a run of terminators, or a
# trailing run of non-terminators at the end of the text.
_SENTENCE_PATTERN = re.compile(r"[^.!?]+[.!?]+|[^.!?]+$|[.!?]+")


def split_sentences(text: str) -> list[str]:
    """
    Split a paragraph into sentences at terminator punctuation.

    Args:
        text: Paragraph text.

    Returns:
        List of stripped sentence strings. Empty/whitespace input returns
        an empty list; any other input returns at least one sentence.
    """
    if not text or not text.strip():
        return []

    if not any(char in _TERMINATORS for char in text):
        return [text.strip()]

    sentences = []
    for match in _SENTENCE_PATTERN.finditer(text):
        sentence = match.group().strip()
        if sentence:
            sentences.append(sentence)

    return sentences
