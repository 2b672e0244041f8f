from __future__ import annotations

import math
from typing import List

from .models import Section

DEFAULT_TOKENS_PER_SECTION = 260_000
BOUNDARY_LOOKBACK = 2000
SENTENCE_BREAKS = (". ", "? ", "! ", ".\n", "?\n", "!\n")


def approx_tokens(text: str, chars_per_token: int = 4) -> int:
    """Approximate a token count from character length (1 token ~= 4 characters)."""
    length = len(text.strip()) if text else 0
    return max(0, math.ceil(length / max(1, int(chars_per_token))))


def split_into_sections(
    text: str,
    tokens_per_section: int = DEFAULT_TOKENS_PER_SECTION,
    chars_per_token: int = 4,
) -> List[Section]:
    """
    Split ``text`` into contiguous sections that fit an approximate token budget.

    Each split prefers a paragraph break or sentence end within a short
    lookback window before the budget limit, falling back to a hard cut.
    Sections carry their character offsets so chunk sequences can be traced
    back to the document.
    """
    budget_tokens = max(1, int(tokens_per_section))
    per_token = max(1, int(chars_per_token))
    char_budget = budget_tokens * per_token
    value = text or ""

    if not value.strip():
        return [_make_section(0, 0, 0, "", per_token)]

    sections: List[Section] = []
    start = 0
    index = 0
    while start < len(value):
        end = _find_boundary(value, start, start + char_budget)
        sections.append(_make_section(index, start, end, value[start:end], per_token))
        start = end
        index += 1
    return sections


def _find_boundary(text: str, start: int, target_end: int) -> int:
    total = len(text)
    hard_end = min(total, target_end)
    if hard_end >= total:
        return total

    window_start = max(start, hard_end - BOUNDARY_LOOKBACK)
    window = text[window_start : min(total, hard_end + 1)]
    relative_target = hard_end - window_start

    candidates: List[int] = []
    paragraph = _rfind_starting_at_or_before(window, "\n\n", relative_target)
    if paragraph >= 0:
        candidates.append(paragraph + 2)
    sentence = max(
        _rfind_starting_at_or_before(window, marker, relative_target)
        for marker in SENTENCE_BREAKS
    )
    if sentence >= 0:
        candidates.append(sentence + 2)

    if candidates:
        boundary = window_start + max(candidates)
        if boundary > start:
            return boundary
    return hard_end


def _rfind_starting_at_or_before(haystack: str, needle: str, position: int) -> int:
    # Matches may run past ``position``; only their start is bounded.
    return haystack.rfind(needle, 0, position + len(needle))


def _make_section(
    index: int, start: int, end: int, text: str, chars_per_token: int
) -> Section:
    return Section(
        section_id=f"section-{index}",
        index=index,
        start=start,
        end=end,
        text=text,
        approx_tokens=approx_tokens(text, chars_per_token),
        title=f"Section {index + 1}",
    )
