from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class Document:
    """Represents an input document."""

    doc_id: str
    text: str


@dataclass(slots=True)
class Token:
    """Represents a whitespace-delimited word and its inclusive-exclusive offsets."""

    text: str
    start_char: int
    end_char: int


@dataclass(slots=True)
class Fragment:
    """
    Raw segmentation item returned by the generative model.

    Neither field is trusted: ``text`` may be paraphrased or missing from the
    source and ``complexity`` may be a string, ``None`` or out of range.
    """

    text: str
    complexity: Any = None


@dataclass(slots=True)
class Chunk:
    """Display-ready unit with trimmed text and a complexity in [0, 1]."""

    text: str
    complexity: float


@dataclass(slots=True)
class Section:
    """A bounded, offset-tagged span of a document."""

    section_id: str
    index: int
    start: int
    end: int
    text: str
    approx_tokens: int
    title: str


@dataclass(slots=True)
class SectionSchedule:
    """Chunks for one section together with their display durations in ms."""

    section: Section
    chunks: list[Chunk]
    durations_ms: list[float]

    @property
    def total_ms(self) -> float:
        return sum(self.durations_ms)
