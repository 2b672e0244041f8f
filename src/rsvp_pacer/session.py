from __future__ import annotations

import logging
from typing import List, Sequence

from .config import RsvpConfig
from .estimators import build_estimator_from_config
from .models import Chunk, Fragment
from .reconcile import merge
from .timing import chunk_duration

logger = logging.getLogger(__name__)


class ReadingSession:
    """
    Per-session playback state: the current chunk sequence, the active
    chunk index and the key of the last segmentation request.

    Chunks are rebuilt from scratch on every :meth:`update`, and durations are
    read from ``config`` on every call, so settings changed between calls take
    effect on the next computed duration.
    """

    def __init__(
        self,
        source_text: str,
        config: RsvpConfig | None = None,
        base_speed: float | None = None,
    ) -> None:
        self.source_text = source_text
        self.config = config or RsvpConfig()
        self.base_speed = (
            self.config.pacing.base_chunks_per_minute
            if base_speed is None
            else base_speed
        )
        self.chunks: List[Chunk] = []
        self.index = 0
        self._last_request_key: str | None = None

    def submit_key(self, key: str) -> bool:
        """Return True and remember ``key`` when it differs from the last submission."""
        if key == self._last_request_key:
            logger.debug("Skipping duplicate segmentation request")
            return False
        self._last_request_key = key
        return True

    def reset_submission(self) -> None:
        """Forget the last request key so the next submission always goes through."""
        self._last_request_key = None

    def update(self, fragments: Sequence[Fragment], partial: bool = False) -> List[Chunk]:
        """Recompute the chunk sequence from the latest fragment list."""
        self.chunks = merge(
            self.source_text,
            fragments,
            self.config.words_per_chunk,
            partial=partial,
            settings=self.config.reconcile,
            estimator=build_estimator_from_config(self.config),
        )
        if self.index >= len(self.chunks):
            self.index = max(0, len(self.chunks) - 1)
        return self.chunks

    @property
    def current(self) -> Chunk | None:
        if not self.chunks:
            return None
        return self.chunks[self.index]

    @property
    def finished(self) -> bool:
        return not self.chunks or self.index >= len(self.chunks) - 1

    def advance(self) -> Chunk | None:
        """Move to the next chunk; stays on the last chunk at the end."""
        if self.chunks and self.index < len(self.chunks) - 1:
            self.index += 1
        return self.current

    def rewind(self) -> Chunk | None:
        if self.index > 0:
            self.index -= 1
        return self.current

    def seek(self, index: int) -> Chunk | None:
        """Jump to ``index``, clamped to the available chunks."""
        if not self.chunks:
            self.index = 0
            return None
        self.index = max(0, min(len(self.chunks) - 1, index))
        return self.current

    def next_duration(self) -> float | None:
        """Duration in ms for the active chunk under the current settings."""
        chunk = self.current
        if chunk is None:
            return None
        return chunk_duration(chunk, self.base_speed, self.config.pacing)
