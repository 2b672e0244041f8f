from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Sequence, TypedDict

import typer
import yaml

from .config import RsvpConfig, load_config
from .estimators import estimate as lexical_estimate
from .fragments import FragmentParseError, load_fragments
from .models import Document, Fragment, SectionSchedule
from .pipeline import process_document
from .sections import split_into_sections
from .timing import round_duration

app = typer.Typer(help="RSVP pacing CLI.", no_args_is_help=True)


class ChunkPayload(TypedDict):
    text: str
    complexity: float
    duration_ms: int


class SchedulePayload(TypedDict):
    section_id: str
    start: int
    end: int
    chunks: List[ChunkPayload]
    total_ms: int


class SectionPayload(TypedDict):
    section_id: str
    title: str
    start: int
    end: int
    approx_tokens: int


@app.command()
def schedule(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    fragments_path: Path | None = typer.Option(
        None,
        "--fragments",
        "-f",
        exists=True,
        readable=True,
        dir_okay=False,
        help="JSON segmentation output to reconcile against the text.",
    ),
    section: int = typer.Option(
        0, "--section", "-s", help="Section index the fragments file applies to."
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    base_speed: float | None = typer.Option(
        None,
        "--base-speed",
        help="Playback speed in chunks per minute (defaults to the reference speed).",
    ),
    words_per_chunk: int | None = typer.Option(
        None, "--words-per-chunk", help="Words per filler chunk."
    ),
    partial: bool = typer.Option(
        False,
        "--partial/--final",
        help="Treat the fragments as an incomplete, still-streaming response.",
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (e.g. DEBUG, INFO)."
    ),
) -> None:
    """Reconcile segmentation output with the text and emit a paced JSON schedule."""
    cfg = _load_cli_config(config)
    if words_per_chunk is not None:
        cfg.words_per_chunk = words_per_chunk
    _configure_logging(log_level or cfg.log_level)

    document = _document_from_file(input_path)
    fragments_by_section: Dict[int, Sequence[Fragment]] = {}
    if fragments_path is not None:
        try:
            fragments_by_section[section] = load_fragments(fragments_path)
        except FragmentParseError as exc:
            raise typer.BadParameter(str(exc), param_hint="--fragments") from exc

    schedules = process_document(
        document,
        _validate_section_targets(document, cfg, fragments_by_section),
        cfg,
        partial=partial,
        base_speed=base_speed,
    )
    payload = {"sections": [_schedule_dict(item) for item in schedules]}
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def sections(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    tokens_per_section: int | None = typer.Option(
        None, "--tokens-per-section", help="Approximate token budget per section."
    ),
) -> None:
    """Print the section layout of a document as JSON."""
    cfg = _load_cli_config(config)
    if tokens_per_section is not None:
        cfg.sections.tokens_per_section = tokens_per_section
    document = _document_from_file(input_path)
    layout: List[SectionPayload] = [
        {
            "section_id": item.section_id,
            "title": item.title,
            "start": item.start,
            "end": item.end,
            "approx_tokens": item.approx_tokens,
        }
        for item in split_into_sections(
            document.text,
            cfg.sections.tokens_per_section,
            cfg.sections.chars_per_token,
        )
    ]
    typer.echo(json.dumps({"sections": layout}, indent=2))


@app.command()
def estimate(text: str = typer.Argument(..., help="Text to score.")) -> None:
    """Print the lexical complexity of TEXT."""
    typer.echo(f"{lexical_estimate(text):.4f}")


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = RsvpConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _load_cli_config(path: Path | None) -> RsvpConfig:
    try:
        return load_config(path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


def _configure_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise typer.BadParameter(f"Unknown log level {level!r}", param_hint="--log-level")
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def _document_from_file(path: Path) -> Document:
    """Read a plain-text file and wrap it in a Document."""
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(
            f"{path} is not UTF-8 text.", param_hint="--input-path"
        ) from exc
    return Document(doc_id=path.name, text=text)


def _validate_section_targets(
    document: Document,
    config: RsvpConfig,
    fragments_by_section: Dict[int, Sequence[Fragment]],
) -> Dict[int, Sequence[Fragment]]:
    """Report fragments aimed at a section the document does not have."""
    count = len(
        split_into_sections(
            document.text,
            config.sections.tokens_per_section,
            config.sections.chars_per_token,
        )
    )
    for index in fragments_by_section:
        if not 0 <= index < count:
            raise typer.BadParameter(
                f"Section {index} out of range (document has {count}).",
                param_hint="--section",
            )
    return fragments_by_section


def _schedule_dict(item: SectionSchedule) -> SchedulePayload:
    """Serialize a SectionSchedule so it can be emitted in JSON."""
    return {
        "section_id": item.section.section_id,
        "start": item.section.start,
        "end": item.section.end,
        "chunks": [
            {
                "text": chunk.text,
                "complexity": round(chunk.complexity, 4),
                "duration_ms": round_duration(duration),
            }
            for chunk, duration in zip(item.chunks, item.durations_ms)
        ],
        "total_ms": round_duration(item.total_ms),
    }


if __name__ == "__main__":
    main()
