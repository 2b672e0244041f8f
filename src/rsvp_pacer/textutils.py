from __future__ import annotations

import math
import re
from typing import Iterable

from .models import Chunk

WHITESPACE_RE = re.compile(r"\s+", re.UNICODE)


def clamp01(value: float) -> float:
    """Clamp ``value`` into [0, 1], mapping non-finite input to 0."""
    # Bounds are checked before float() so huge ints cannot overflow.
    if isinstance(value, float) and not math.isfinite(value):
        return 0.0
    if value < 0:
        return 0.0
    if value > 1:
        return 1.0
    return float(value)


def normalize_whitespace(value: str) -> str:
    """Collapse whitespace runs to single spaces and trim the ends."""
    return WHITESPACE_RE.sub(" ", value).strip()


def coverage_text(chunks: Iterable[Chunk]) -> str:
    """Rejoin chunk texts the way the coverage law compares them."""
    return normalize_whitespace(" ".join(chunk.text for chunk in chunks))
