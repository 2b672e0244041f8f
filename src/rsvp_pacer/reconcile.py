from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable, List, Mapping, Tuple

from .config import ReconcileSettings
from .estimators import ComplexityEstimator, LexicalComplexityEstimator
from .models import Chunk, Fragment
from .textutils import clamp01
from .tokenization import tokenize_words

logger = logging.getLogger(__name__)

LEADING_NUMBER_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

_LEXICAL = LexicalComplexityEstimator()


def filler_chunks(
    source_text: str,
    start: int,
    end: int,
    words_per_chunk: int = 3,
    estimator: ComplexityEstimator | None = None,
) -> List[Chunk]:
    """
    Group the words of ``source_text[start:end]`` into chunks of up to
    ``words_per_chunk`` words. Each chunk is an exact, trimmed slice of the
    source, so joining them with single spaces reconstructs the range.
    """
    scorer = estimator or _LEXICAL
    total = len(source_text)
    lo = max(0, min(total, start))
    hi = max(0, min(total, end))
    if lo >= hi:
        return []

    per_chunk = max(1, words_per_chunk)
    tokens = tokenize_words(source_text, lo, hi)
    chunks: List[Chunk] = []
    for offset in range(0, len(tokens), per_chunk):
        group = tokens[offset : offset + per_chunk]
        text = source_text[group[0].start_char : group[-1].end_char].strip()
        if text:
            chunks.append(Chunk(text=text, complexity=scorer.estimate(text)))
    return chunks


def normalize_complexity(value: Any) -> float:
    """Coerce a model-provided complexity into [0, 1], never raising."""
    if isinstance(value, bool):
        return _LEXICAL.estimate("")
    if isinstance(value, int):
        return clamp01(value)
    if isinstance(value, float) and math.isfinite(value):
        return clamp01(value)
    if isinstance(value, str):
        parsed = _parse_leading_float(value)
        if parsed is not None and math.isfinite(parsed):
            return clamp01(parsed)
    return _LEXICAL.estimate("")


def merge(
    source_text: str,
    fragments: Iterable[Fragment | Mapping[str, Any]] | None,
    words_per_chunk: int = 3,
    *,
    partial: bool = False,
    settings: ReconcileSettings | None = None,
    estimator: ComplexityEstimator | None = None,
) -> List[Chunk]:
    """
    Merge model fragments with filler chunks so the result covers the source.

    Fragments are located verbatim at or after a moving cursor; unlocatable
    ones are dropped. Gaps before a located fragment and after the last one
    are filled with :func:`filler_chunks`. With ``partial=True`` gap filling is
    throttled by ``settings`` so early, sparse fragments are not buried under
    filler. An empty fragment list always yields an empty sequence.
    """
    text = source_text or ""
    items = list(fragments or [])
    if not items or not text:
        return []

    throttle = settings or ReconcileSettings()
    total = len(text)
    out: List[Chunk] = []
    ptr = 0

    for item in items:
        raw_text, raw_complexity = _fragment_parts(item)
        fragment_text = raw_text.strip()
        if not fragment_text:
            continue

        idx = text.find(fragment_text, ptr)
        if idx == -1:
            logger.debug(
                "Discarding fragment not found after offset %s: %r", ptr, fragment_text
            )
            continue

        if idx > ptr:
            gap = filler_chunks(text, ptr, idx, words_per_chunk, estimator)
            out.extend(
                _throttled(
                    gap,
                    covered=ptr / total,
                    partial=partial,
                    threshold=throttle.interior_coverage_threshold,
                    cap=throttle.max_interior_fill,
                    label="interior",
                )
            )

        out.append(
            Chunk(text=fragment_text, complexity=normalize_complexity(raw_complexity))
        )
        ptr = idx + len(fragment_text)

    if ptr < total:
        tail = filler_chunks(text, ptr, total, words_per_chunk, estimator)
        out.extend(
            _throttled(
                tail,
                covered=ptr / total,
                partial=partial,
                threshold=throttle.trailing_coverage_threshold,
                cap=throttle.max_trailing_fill,
                label="trailing",
            )
        )

    return out


def _throttled(
    gap: List[Chunk],
    *,
    covered: float,
    partial: bool,
    threshold: float,
    cap: int,
    label: str,
) -> List[Chunk]:
    if not partial or not gap:
        return gap
    if covered <= threshold:
        logger.debug(
            "Suppressing %s fill of %s chunks at %.0f%% coverage",
            label,
            len(gap),
            covered * 100,
        )
        return []
    if len(gap) > cap:
        logger.debug(
            "Dropping oversized %s fill of %s chunks (cap %s)", label, len(gap), cap
        )
        return []
    return gap


def _fragment_parts(item: Fragment | Mapping[str, Any] | Any) -> Tuple[str, Any]:
    if isinstance(item, Fragment):
        return str(item.text or ""), item.complexity
    if isinstance(item, Mapping):
        raw = item.get("text")
        return ("" if raw is None else str(raw)), item.get("complexity")
    return "", None


def _parse_leading_float(value: str) -> float | None:
    match = LEADING_NUMBER_RE.match(value)
    if match is None:
        return None
    return float(match.group(0))
