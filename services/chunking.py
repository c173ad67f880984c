"""Sentence-aligned text chunking"""
import math
import re
from typing import List

from core.domain import TextChunk

# Zero-width split right after a terminator and the whitespace that follows it
SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?]\s)")


def estimate_tokens(text: str, chars_per_token: int = 4) -> int:
    return math.ceil(len(text) / chars_per_token)


def split_sentences(text: str) -> List[str]:
    return [unit for unit in SENTENCE_BOUNDARY.split(text) if unit]


def chunk_text(text: str, max_chunk_size: int) -> List[TextChunk]:
    """
    Split text into chunks of at most max_chunk_size characters, breaking only
    at sentence boundaries. A sentence longer than the cap becomes its own chunk.
    """
    if max_chunk_size <= 0:
        raise ValueError("max_chunk_size must be positive")

    contents: List[str] = []
    buffer = ""
    for unit in split_sentences(text):
        if len(buffer) + len(unit) > max_chunk_size and buffer:
            contents.append(buffer.strip())
            buffer = unit
        else:
            buffer += unit
    if buffer:
        contents.append(buffer.strip())

    return [
        TextChunk(index=i, content=content)
        for i, content in enumerate(c for c in contents if c)
    ]
