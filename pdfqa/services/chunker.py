"""
Text chunking for embedding.

Chunks are fixed-size character windows over the normalized text. Each window
after the first starts ``overlap`` characters before the end of the previous
one, so dropping the first ``overlap`` characters of every chunk but the first
and concatenating gives back the normalized text.
"""

from typing import List

from ..exceptions import NoContentExtracted
from ..models import Chunk
from ..utils import normalize_text


def chunk_text(text: str, max_size: int, overlap: int) -> List[Chunk]:
    """
    Normalize ``text`` and split it into overlapping windows.

    Args:
        text: Raw text
        max_size: Maximum chunk length in characters
        overlap: Characters shared by neighbouring chunks

    Returns:
        Chunks in document order

    Raises:
        ValueError: If ``max_size``/``overlap`` are out of range
        NoContentExtracted: If nothing is left after normalization
    """
    if max_size <= 0:
        raise ValueError(f"max_size must be positive, got {max_size}")
    if overlap < 0 or overlap >= max_size:
        raise ValueError(f"overlap must be in [0, {max_size}), got {overlap}")

    normalized = normalize_text(text)
    if not normalized:
        raise NoContentExtracted("No text content found in document after cleanup.")

    step = max_size - overlap
    chunks = []
    start = 0
    while True:
        end = min(start + max_size, len(normalized))
        chunks.append(Chunk(content=normalized[start:end], index=len(chunks), start=start))
        if end >= len(normalized):
            break
        start += step

    return chunks


class TextChunker:
    """Chunker bound to a fixed size and overlap."""

    def __init__(self, max_size: int, overlap: int):
        if max_size <= 0 or not 0 <= overlap < max_size:
            raise ValueError(f"Invalid chunking parameters: max_size={max_size}, overlap={overlap}")
        self.max_size = max_size
        self.overlap = overlap

    def chunk(self, text: str) -> List[Chunk]:
        return chunk_text(text, self.max_size, self.overlap)
