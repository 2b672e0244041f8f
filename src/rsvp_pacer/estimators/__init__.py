from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .base import ComplexityEstimator
from .lexical_estimator import LexicalComplexityEstimator, estimate
from .word_length_estimator import WordLengthEstimator

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from ..config import RsvpConfig

__all__ = [
    "ComplexityEstimator",
    "LexicalComplexityEstimator",
    "WordLengthEstimator",
    "estimate",
    "create_estimator",
    "build_estimator_from_config",
]


def create_estimator(name: str, **kwargs: Any) -> ComplexityEstimator:
    """Factory for building estimators by name."""
    normalized = name.lower().strip()
    if normalized == "lexical":
        return LexicalComplexityEstimator()
    if normalized in {"word_length", "word-length"}:
        return WordLengthEstimator(**kwargs)
    raise ValueError(f"Unknown estimator '{name}'.")


def build_estimator_from_config(config: "RsvpConfig") -> ComplexityEstimator:
    """Convenience helper to build the filler estimator from RsvpConfig."""
    return create_estimator(config.estimator_name)
