"""
rsvp_pacer package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .config import (
    PacingConfig,
    ReconcileSettings,
    RsvpConfig,
    SectionSettings,
    config_from_dict,
    config_from_yaml,
    load_config,
)
from .estimators import build_estimator_from_config, create_estimator, estimate
from .fragments import FragmentParseError, fragments_from_payload, load_fragments
from .models import Chunk, Document, Fragment, Section, SectionSchedule
from .pipeline import process_document, process_section
from .reconcile import filler_chunks, merge, normalize_complexity
from .sections import split_into_sections
from .session import ReadingSession
from .timing import chunk_duration, chunk_duration_breakdown

__all__ = [
    "PacingConfig",
    "ReconcileSettings",
    "RsvpConfig",
    "SectionSettings",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "create_estimator",
    "build_estimator_from_config",
    "estimate",
    "FragmentParseError",
    "fragments_from_payload",
    "load_fragments",
    "Chunk",
    "Document",
    "Fragment",
    "Section",
    "SectionSchedule",
    "process_document",
    "process_section",
    "filler_chunks",
    "merge",
    "normalize_complexity",
    "split_into_sections",
    "ReadingSession",
    "chunk_duration",
    "chunk_duration_breakdown",
]

__version__ = "0.1.0"
