from __future__ import annotations

from abc import ABC, abstractmethod


class ComplexityEstimator(ABC):
    """Abstract estimator that maps a text fragment to a complexity in [0, 1]."""

    @abstractmethod
    def estimate(self, text: str) -> float:
        """Return a complexity score in [0, 1] for the input text."""
        raise NotImplementedError
