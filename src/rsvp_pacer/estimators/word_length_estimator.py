from __future__ import annotations

from ..textutils import clamp01
from ..tokenization import average_word_length
from .base import ComplexityEstimator


class WordLengthEstimator(ComplexityEstimator):
    """Maps average word length linearly from [min_len, max_len] characters onto [0, 1]."""

    def __init__(self, min_len: float = 4.0, max_len: float = 10.0) -> None:
        if max_len <= min_len:
            raise ValueError("max_len must be greater than min_len.")
        self.min_len = min_len
        self.max_len = max_len

    def estimate(self, text: str) -> float:
        avg = average_word_length(text or "")
        return clamp01((avg - self.min_len) / (self.max_len - self.min_len))
