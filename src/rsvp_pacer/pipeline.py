from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Sequence

from .config import PacingConfig, RsvpConfig
from .estimators import ComplexityEstimator, build_estimator_from_config
from .models import Chunk, Document, Fragment, Section, SectionSchedule
from .reconcile import filler_chunks, merge
from .sections import split_into_sections
from .timing import log_duration_breakdown

logger = logging.getLogger(__name__)


def schedule_chunks(
    chunks: Sequence[Chunk], base_speed: float, pacing: PacingConfig
) -> List[float]:
    """Compute the display duration of each chunk in order."""
    return [log_duration_breakdown(chunk, base_speed, pacing) for chunk in chunks]


def reconcile_section(
    section: Section,
    fragments: Sequence[Fragment] | None,
    config: RsvpConfig,
    *,
    partial: bool = False,
    estimator: ComplexityEstimator | None = None,
) -> List[Chunk]:
    """
    Build the chunk sequence for one section.

    ``fragments=None`` means no model output exists for the section, so the
    whole span is covered with filler; an empty list means the model has not
    produced anything yet and yields no chunks.
    """
    scorer = estimator or build_estimator_from_config(config)
    if fragments is None:
        return filler_chunks(
            section.text, 0, len(section.text), config.words_per_chunk, scorer
        )
    return merge(
        section.text,
        fragments,
        config.words_per_chunk,
        partial=partial,
        settings=config.reconcile,
        estimator=scorer,
    )


def process_section(
    section: Section,
    fragments: Sequence[Fragment] | None,
    config: RsvpConfig,
    *,
    partial: bool = False,
    base_speed: float | None = None,
) -> SectionSchedule:
    """Reconcile a section and pace every resulting chunk."""
    chunks = reconcile_section(section, fragments, config, partial=partial)
    speed = config.pacing.base_chunks_per_minute if base_speed is None else base_speed
    durations = schedule_chunks(chunks, speed, config.pacing)
    logger.info(
        "Scheduled %s: %s chunks over %.0f ms (partial=%s)",
        section.section_id,
        len(chunks),
        sum(durations),
        partial,
    )
    return SectionSchedule(section=section, chunks=chunks, durations_ms=durations)


def process_document(
    document: Document,
    fragments_by_section: Mapping[int, Sequence[Fragment]] | None,
    config: RsvpConfig,
    *,
    partial: bool = False,
    base_speed: float | None = None,
) -> List[SectionSchedule]:
    """Split a document into sections and schedule each one."""
    sections = split_into_sections(
        document.text,
        config.sections.tokens_per_section,
        config.sections.chars_per_token,
    )
    lookup: Dict[int, Sequence[Fragment]] = dict(fragments_by_section or {})
    schedules: List[SectionSchedule] = []
    for section in sections:
        schedules.append(
            process_section(
                section,
                lookup.get(section.index),
                config,
                partial=partial,
                base_speed=base_speed,
            )
        )
    return schedules
