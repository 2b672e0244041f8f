import json
from pathlib import Path

from typer.testing import CliRunner

from rsvp_pacer.cli import app
from tests.utils import write_fragments, write_text

runner = CliRunner()

SAMPLE = "The quick brown fox jumps. Over the lazy dog it goes."


def test_cli_schedule_without_fragments_uses_filler(tmp_path: Path):
    """schedule covers the whole text with filler chunks when no model output exists."""
    input_path = write_text(tmp_path / "story.txt", SAMPLE)
    result = runner.invoke(app, ["schedule", "--input-path", str(input_path)])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    chunks = payload["sections"][0]["chunks"]
    assert " ".join(chunk["text"] for chunk in chunks) == SAMPLE
    assert all(chunk["duration_ms"] > 0 for chunk in chunks)
    assert payload["sections"][0]["total_ms"] > 0


def test_cli_schedule_reconciles_fragments(tmp_path: Path):
    """schedule merges a model response and keeps its complexity scores."""
    input_path = write_text(tmp_path / "story.txt", SAMPLE)
    fragments_path = write_fragments(
        tmp_path / "model.json",
        {
            "sections": [
                {
                    "summary": "fox",
                    "chunks": [
                        {"text": "The quick", "complexity": 0.1},
                        {"text": "fox jumps.", "complexity": 0.4},
                    ],
                }
            ]
        },
    )
    result = runner.invoke(
        app,
        [
            "schedule",
            "--input-path",
            str(input_path),
            "--fragments",
            str(fragments_path),
            "--base-speed",
            "400",
        ],
    )

    assert result.exit_code == 0
    chunks = json.loads(result.stdout)["sections"][0]["chunks"]
    assert [chunk["text"] for chunk in chunks][:3] == ["The quick", "brown", "fox jumps."]
    assert chunks[0]["complexity"] == 0.1
    assert chunks[2]["complexity"] == 0.4


def test_cli_schedule_partial_suppresses_filler(tmp_path: Path):
    """--partial holds back filler for sparsely covered text."""
    input_path = write_text(tmp_path / "story.txt", SAMPLE)
    fragments_path = write_fragments(
        tmp_path / "model.json", [{"text": "The quick", "complexity": 0.1}]
    )
    result = runner.invoke(
        app,
        [
            "schedule",
            "--input-path",
            str(input_path),
            "--fragments",
            str(fragments_path),
            "--partial",
        ],
    )

    assert result.exit_code == 0
    chunks = json.loads(result.stdout)["sections"][0]["chunks"]
    assert [chunk["text"] for chunk in chunks] == ["The quick"]


def test_cli_schedule_rejects_bad_fragments(tmp_path: Path):
    """schedule rejects a fragments file that is not valid JSON."""
    input_path = write_text(tmp_path / "story.txt", SAMPLE)
    bad = tmp_path / "model.json"
    bad.write_text("not json", encoding="utf-8")

    result = runner.invoke(
        app, ["schedule", "--input-path", str(input_path), "--fragments", str(bad)]
    )

    assert result.exit_code != 0


def test_cli_schedule_rejects_unknown_section(tmp_path: Path):
    """schedule rejects fragments aimed at a section the document lacks."""
    input_path = write_text(tmp_path / "story.txt", SAMPLE)
    fragments_path = write_fragments(tmp_path / "model.json", [])

    result = runner.invoke(
        app,
        [
            "schedule",
            "--input-path",
            str(input_path),
            "--fragments",
            str(fragments_path),
            "--section",
            "3",
        ],
    )

    assert result.exit_code != 0


def test_cli_sections_lists_layout(tmp_path: Path):
    """sections command reports contiguous offsets for every section."""
    input_path = write_text(tmp_path / "story.txt", SAMPLE)
    result = runner.invoke(
        app,
        ["sections", "--input-path", str(input_path), "--tokens-per-section", "5"],
    )

    assert result.exit_code == 0
    layout = json.loads(result.stdout)["sections"]
    assert len(layout) > 1
    assert layout[0]["start"] == 0
    assert layout[-1]["end"] == len(SAMPLE)


def test_cli_estimate():
    """estimate command prints the lexical score with four decimals."""
    result = runner.invoke(app, ["estimate", "brown"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "0.2500"


def test_cli_print_config():
    """print-config command dumps the current configuration values."""
    result = runner.invoke(app, ["print-config"])

    assert result.exit_code == 0
    assert "words_per_chunk" in result.stdout
    assert "sentence_duration" in result.stdout


def test_cli_schedule_clamps_oversized_integer_complexity(tmp_path: Path):
    """schedule clamps a complexity too large for a float instead of crashing."""
    input_path = write_text(tmp_path / "story.txt", SAMPLE)
    fragments_path = write_fragments(
        tmp_path / "model.json", [{"text": "The quick", "complexity": 10**400}]
    )
    result = runner.invoke(
        app,
        ["schedule", "--input-path", str(input_path), "--fragments", str(fragments_path)],
    )

    assert result.exit_code == 0
    chunks = json.loads(result.stdout)["sections"][0]["chunks"]
    assert chunks[0]["text"] == "The quick"
    assert chunks[0]["complexity"] == 1.0
    assert all(chunk["duration_ms"] > 0 for chunk in chunks)
