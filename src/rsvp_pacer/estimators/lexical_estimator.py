from __future__ import annotations

from ..textutils import clamp01
from ..tokenization import average_word_length
from .base import ComplexityEstimator

PUNCTUATION_CHARS = frozenset(".,;:!?()'\"-")

# Reference densities: one mark per N characters saturates the feature.
PUNCTUATION_REFERENCE = 6
DIGIT_REFERENCE = 12
UPPERCASE_REFERENCE = 8
WORD_LENGTH_REFERENCE = 10.0


class LexicalComplexityEstimator(ComplexityEstimator):
    """
    Surface-feature heuristic blending average word length with punctuation,
    digit and uppercase density. Longer words and denser symbols score higher;
    empty text scores 0.
    """

    def estimate(self, text: str) -> float:
        value = text or ""
        length = len(value) or 1
        punct = digits = upper = 0
        for char in value:
            if char in PUNCTUATION_CHARS:
                punct += 1
            if "0" <= char <= "9":
                digits += 1
            if "A" <= char <= "Z":
                upper += 1

        f_word = min(1.0, average_word_length(value) / WORD_LENGTH_REFERENCE)
        f_punct = min(1.0, punct / max(1.0, length / PUNCTUATION_REFERENCE))
        f_digits = min(1.0, digits / max(1.0, length / DIGIT_REFERENCE))
        f_upper = min(1.0, upper / max(1.0, length / UPPERCASE_REFERENCE))

        raw = 0.5 * f_word + 0.2 * f_punct + 0.2 * f_digits + 0.1 * f_upper
        return clamp01(raw)


_DEFAULT = LexicalComplexityEstimator()


def estimate(text: str) -> float:
    """Score ``text`` with the shared lexical estimator."""
    return _DEFAULT.estimate(text)
