from __future__ import annotations

import re
from typing import List

from .models import Token

TOKEN_PATTERN = re.compile(r"\S+", re.UNICODE)


def tokenize_words(text: str, start: int = 0, end: int | None = None) -> List[Token]:
    """Tokenize ``text[start:end]`` into whitespace-delimited words with absolute offsets."""
    tokens: List[Token] = []
    limit = len(text) if end is None else end
    for match in TOKEN_PATTERN.finditer(text, start, limit):
        tokens.append(
            Token(text=match.group(), start_char=match.start(), end_char=match.end())
        )
    return tokens


def split_words(text: str) -> List[str]:
    """Return the whitespace-delimited words of ``text``."""
    return text.split()


def average_word_length(text: str) -> float:
    """Average character length of the words in ``text`` (0.0 when there are none)."""
    words = split_words(text)
    if not words:
        return 0.0
    return sum(len(word) for word in words) / len(words)
