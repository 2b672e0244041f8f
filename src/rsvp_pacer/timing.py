from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Mapping

from .config import PacingConfig
from .estimators import WordLengthEstimator
from .models import Chunk
from .textutils import clamp01

logger = logging.getLogger(__name__)

SENTENCE_ENDINGS = frozenset(".!?")
CLAUSE_ENDINGS = frozenset(",;:")

_WORD_LENGTH = WordLengthEstimator(min_len=4.0, max_len=10.0)


@dataclass(slots=True)
class DurationBreakdown:
    """Every term that contributes to a chunk's on-screen time."""

    text: str
    provided_complexity: float
    lexical_complexity: float
    effective_complexity: float
    exponent: float
    attenuation: float
    base_speed: float
    base_ms: float
    complexity_delay_ms: float
    floor_ms: float
    punctuation_delay_ms: float

    @property
    def total_ms(self) -> float:
        return (
            self.base_ms
            + self.complexity_delay_ms
            + self.floor_ms
            + self.punctuation_delay_ms
        )

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["total_ms"] = self.total_ms
        return payload


def resolve_config(
    config: PacingConfig | Mapping[str, Any] | None = None,
) -> PacingConfig:
    """Merge partial overrides over the documented defaults."""
    if isinstance(config, PacingConfig):
        return config
    return PacingConfig().with_overrides(config)


def punctuation_delay(text: str | None, config: PacingConfig | None = None) -> float:
    """Unscaled pause for the trailing punctuation of ``text``."""
    timing = config or PacingConfig()
    value = (text or "").strip()
    if not value:
        return 0.0
    last = value[-1]
    if last in SENTENCE_ENDINGS:
        return float(timing.sentence_duration)
    if last in CLAUSE_ENDINGS:
        return float(timing.clause_duration)
    if last == "-":
        return float(timing.default_duration)
    return 0.0


def scaled_punctuation_delay(
    text: str | None,
    base_speed: float,
    config: PacingConfig | None = None,
) -> float:
    """Punctuation pause scaled by ``(reference / speed) ** punctuation_scale_factor``."""
    timing = config or PacingConfig()
    base_delay = punctuation_delay(text, timing)
    if not base_delay:
        return 0.0
    ratio = _speed_ratio(timing, base_speed)
    return base_delay * ratio ** timing.punctuation_scale_factor


def chunk_duration_breakdown(
    chunk: Chunk,
    base_speed: float,
    config: PacingConfig | Mapping[str, Any] | None = None,
) -> DurationBreakdown:
    """Compute every pacing term for ``chunk`` at ``base_speed`` chunks/minute."""
    timing = resolve_config(config)
    speed = _effective_speed(base_speed)
    base_ms = 60000.0 / speed

    provided = _provided_complexity(chunk.complexity)
    lexical = _WORD_LENGTH.estimate(chunk.text)
    effective = max(provided, lexical)

    sensitivity = clamp01(timing.complexity_sensitivity)
    exponent = 1 + sensitivity * 2
    raw_delay = effective**exponent * base_ms * timing.complexity_scale_factor

    attenuation = max(0.0, timing.complexity_speed_attenuation)
    complexity_delay = raw_delay * _speed_ratio(timing, speed) ** attenuation

    floor = timing.complexity_floor_ms * effective
    punctuation = scaled_punctuation_delay(chunk.text, speed, timing)

    return DurationBreakdown(
        text=chunk.text,
        provided_complexity=provided,
        lexical_complexity=lexical,
        effective_complexity=effective,
        exponent=exponent,
        attenuation=attenuation,
        base_speed=speed,
        base_ms=base_ms,
        complexity_delay_ms=complexity_delay,
        floor_ms=floor,
        punctuation_delay_ms=punctuation,
    )


def chunk_duration(
    chunk: Chunk,
    base_speed: float,
    config: PacingConfig | Mapping[str, Any] | None = None,
) -> float:
    """Return how long ``chunk`` stays on screen, in milliseconds."""
    return chunk_duration_breakdown(chunk, base_speed, config).total_ms


def log_duration_breakdown(
    chunk: Chunk,
    base_speed: float,
    config: PacingConfig | Mapping[str, Any] | None = None,
) -> float:
    """Compute the duration and log its breakdown at DEBUG level."""
    breakdown = chunk_duration_breakdown(chunk, base_speed, config)
    logger.debug(
        "Chunk timing %r: provided=%.2f lexical=%.2f effective=%.2f exponent=%.2f "
        "base=%dms complexity=%dms floor=%dms punctuation=%dms total=%dms",
        breakdown.text,
        breakdown.provided_complexity,
        breakdown.lexical_complexity,
        breakdown.effective_complexity,
        breakdown.exponent,
        round_duration(breakdown.base_ms),
        round_duration(breakdown.complexity_delay_ms),
        round_duration(breakdown.floor_ms),
        round_duration(breakdown.punctuation_delay_ms),
        round_duration(breakdown.total_ms),
    )
    return breakdown.total_ms


def round_duration(value: float) -> int:
    """Round a duration for display; computation itself stays floating point."""
    return int(math.floor(value + 0.5))


def _effective_speed(base_speed: Any) -> float:
    try:
        speed = float(base_speed)
    except (TypeError, ValueError, OverflowError):
        return 1.0
    if not math.isfinite(speed):
        return 1.0
    return max(speed, 1.0)


def _speed_ratio(timing: PacingConfig, base_speed: float) -> float:
    reference = _effective_speed(timing.base_chunks_per_minute)
    return reference / _effective_speed(base_speed)


def _provided_complexity(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return clamp01(value)
