from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rsvp_pacer.models import Chunk


def write_text(path: Path, text: str) -> Path:
    """Write a UTF-8 text document used as CLI input."""
    path.write_text(text, encoding="utf-8")
    return path


def write_fragments(path: Path, payload: Any) -> Path:
    """Write a segmentation payload the way the model returns it."""
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def texts(chunks: list[Chunk]) -> list[str]:
    return [chunk.text for chunk in chunks]
