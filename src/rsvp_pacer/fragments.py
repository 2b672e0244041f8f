from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Mapping

from .models import Fragment


class FragmentParseError(ValueError):
    """Raised when a segmentation payload cannot be turned into fragments."""


def fragments_from_payload(payload: Any) -> List[Fragment]:
    """
    Flatten a model segmentation payload into an ordered fragment list.

    Accepted shapes:
    * a list of ``{"text", "complexity"}`` records
    * ``{"chunks": [...]}``
    * ``{"sections": [{"summary": ..., "chunks": [...]}, ...]}``
    Records that are not mappings are skipped; partially streamed sections
    without ``chunks`` contribute nothing.
    """
    if isinstance(payload, list):
        return _records_to_fragments(payload)
    if isinstance(payload, Mapping):
        if "sections" in payload:
            sections = payload.get("sections") or []
            if not isinstance(sections, list):
                raise FragmentParseError("'sections' must be a list.")
            fragments: List[Fragment] = []
            for section in sections:
                if isinstance(section, Mapping):
                    fragments.extend(_records_to_fragments(section.get("chunks")))
            return fragments
        if "chunks" in payload:
            return _records_to_fragments(payload.get("chunks"))
    raise FragmentParseError(
        "Segmentation payload must be a list of chunks or an object with "
        "'chunks' or 'sections'."
    )


def load_fragments(path: str | Path) -> List[Fragment]:
    """Read a JSON segmentation payload from disk."""
    contents = Path(path).read_text(encoding="utf-8")
    try:
        payload = json.loads(contents)
    except ValueError as exc:
        raise FragmentParseError(f"Invalid JSON in {path}: {exc}") from exc
    return fragments_from_payload(payload)


def _records_to_fragments(records: Iterable[Any] | None) -> List[Fragment]:
    if records is None:
        return []
    if not isinstance(records, list):
        raise FragmentParseError("'chunks' must be a list.")
    fragments: List[Fragment] = []
    for record in records:
        if not isinstance(record, Mapping):
            continue
        text = record.get("text")
        fragments.append(
            Fragment(
                text="" if text is None else str(text),
                complexity=record.get("complexity"),
            )
        )
    return fragments
