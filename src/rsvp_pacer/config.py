from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml


@dataclass(slots=True)
class PacingConfig:
    """Timing knobs for the adaptive pacing engine."""

    # Also the reference speed every speed ratio is measured against.
    base_chunks_per_minute: float = 320.0
    complexity_scale_factor: float = 1.0
    complexity_sensitivity: float = 0.85
    # 0 keeps the complexity penalty fully visible at high speeds.
    complexity_speed_attenuation: float = 0.0
    complexity_floor_ms: float = 180.0
    punctuation_scale_factor: float = 0.6
    sentence_duration: float = 340.0
    clause_duration: float = 180.0
    default_duration: float = 80.0

    def with_overrides(self, overrides: Mapping[str, Any] | None) -> "PacingConfig":
        """Return a copy with the known keys of ``overrides`` applied."""
        if not overrides:
            return replace(self)
        return replace(self, **_filter_kwargs(PacingConfig, overrides))


@dataclass(slots=True)
class ReconcileSettings:
    """Throttle applied to gap filling while model output is still streaming."""

    interior_coverage_threshold: float = 0.5
    trailing_coverage_threshold: float = 0.8
    max_interior_fill: int = 20
    max_trailing_fill: int = 30


@dataclass(slots=True)
class SectionSettings:
    """Controls how documents are split before segmentation."""

    tokens_per_section: int = 260_000
    chars_per_token: int = 4


@dataclass(slots=True)
class RsvpConfig:
    """Configuration options for the RSVP pacing pipeline."""

    words_per_chunk: int = 3
    estimator_name: str = "lexical"
    log_level: str = "WARNING"
    pacing: PacingConfig = field(default_factory=PacingConfig)
    reconcile: ReconcileSettings = field(default_factory=ReconcileSettings)
    sections: SectionSettings = field(default_factory=SectionSettings)

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


_NESTED_BLOCKS: dict[str, type] = {
    "pacing": PacingConfig,
    "reconcile": ReconcileSettings,
    "sections": SectionSettings,
}


def _filter_kwargs(cls: type, data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {item.name for item in fields(cls)}
    return {key: data[key] for key in data if key in allowed}


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    kwargs = _filter_kwargs(RsvpConfig, data)
    for name, block_cls in _NESTED_BLOCKS.items():
        if name not in data:
            continue
        value = data[name]
        if isinstance(value, block_cls):
            kwargs[name] = value
        elif isinstance(value, Mapping):
            kwargs[name] = block_cls(**_filter_kwargs(block_cls, value))
        else:
            raise ValueError(f"Configuration block '{name}' must be a mapping.")
    return kwargs


def config_from_dict(data: Mapping[str, Any] | None) -> RsvpConfig:
    """Build an RsvpConfig from a dictionary-like input."""
    if data is None:
        return RsvpConfig()
    return RsvpConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> RsvpConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> RsvpConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return RsvpConfig()
    return config_from_yaml(path)
