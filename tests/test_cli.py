"""Tests for the command line interface."""

import json

from prompt_agnostic.__main__ import cli, main

CLAUDE_AGENT = """---
name: code-reviewer
description: Reviews pull requests
tools: Read, Grep
---

# Code Reviewer

Reviews pull requests

## Rules
- Keep functions small
"""


def test_convert_prints_content(cli_runner, write_text) -> None:
    source = write_text("reviewer.md", CLAUDE_AGENT)
    result = cli_runner.invoke(cli, ["convert", str(source), "--from", "claude", "--to", "aider"])
    assert result.exit_code == 0, result.output
    assert "# Code Reviewer" in result.output
    assert "## Rules\n- Keep functions small" in result.output


def test_convert_json_output(cli_runner, write_text) -> None:
    source = write_text("reviewer.md", CLAUDE_AGENT)
    result = cli_runner.invoke(cli, ["convert", str(source), "--to", "aider", "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["format"] == "aider"
    assert payload["warnings"] == ["Tools section skipped (not supported by Aider)"]
    assert payload["lossyConversion"] is True
    assert payload["qualityScore"] == 90


def test_convert_writes_output_file(cli_runner, write_text, tmp_path) -> None:
    source = write_text("reviewer.md", CLAUDE_AGENT)
    target = tmp_path / "out" / "reviewer.mdc"
    result = cli_runner.invoke(
        cli, ["convert", str(source), "--from", "claude", "--to", "cursor", "-o", str(target)]
    )
    assert result.exit_code == 0, result.output
    written = target.read_text(encoding="utf-8")
    assert written.startswith("---\ndescription: Reviews pull requests\n")
    assert "## Rules\n- Keep functions small" in written


def test_convert_reports_parse_errors(cli_runner, write_text) -> None:
    source = write_text("broken.json", "{not json")
    result = cli_runner.invoke(cli, ["convert", str(source), "--from", "generic", "--to", "claude"])
    assert result.exit_code == 1
    assert "Failed to parse" in result.output


def test_convert_rejects_unknown_target(cli_runner, write_text) -> None:
    source = write_text("reviewer.md", CLAUDE_AGENT)
    result = cli_runner.invoke(cli, ["convert", str(source), "--to", "mcp"])
    assert result.exit_code == 2


def test_convert_missing_source(cli_runner, tmp_path) -> None:
    result = cli_runner.invoke(cli, ["convert", str(tmp_path / "missing.md"), "--to", "aider"])
    assert result.exit_code == 2


def test_validate_valid_file(cli_runner, write_text) -> None:
    source = write_text("reviewer.md", CLAUDE_AGENT)
    result = cli_runner.invoke(cli, ["validate", str(source), "--format", "claude", "--subtype", "agent"])
    assert result.exit_code == 0, result.output
    assert "valid" in result.output


def test_validate_invalid_file(cli_runner, write_text) -> None:
    source = write_text("agent.md", "---\nname: reviewer\n---\n\nBody\n")
    result = cli_runner.invoke(cli, ["validate", str(source), "--format", "claude", "--subtype", "agent"])
    assert result.exit_code == 1
    assert "description" in result.output


def test_validate_kiro_agent_json(cli_runner, write_text) -> None:
    source = write_text("agent.json", json.dumps({"name": "reviewer", "prompt": "Review code."}))
    result = cli_runner.invoke(cli, ["validate", str(source)])
    assert result.exit_code == 0, result.output


def test_detect(cli_runner, write_text) -> None:
    source = write_text("reviewer.md", CLAUDE_AGENT)
    result = cli_runner.invoke(cli, ["detect", str(source)])
    assert result.exit_code == 0
    assert "claude" in result.output


def test_formats_lists_targets(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["formats"])
    assert result.exit_code == 0
    for name in ("claude", "cursor", "gemini", "aider"):
        assert name in result.output


def test_score_json(cli_runner, write_text) -> None:
    source = write_text("reviewer.md", CLAUDE_AGENT)
    result = cli_runner.invoke(cli, ["score", str(source), "--from", "claude", "--json"])
    assert result.exit_code == 0, result.output
    scores = json.loads(result.output)
    assert "mcp" not in scores
    assert scores["generic"] == 100
    assert scores["aider"] == 90


def test_help_alias(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["-h"])
    assert result.exit_code == 0
    assert "convert" in result.output


def test_main_returns_command_exit_code(write_text, monkeypatch) -> None:
    source = write_text("agent.md", "---\nname: reviewer\n---\n\nBody\n")
    monkeypatch.setattr(
        "sys.argv", ["prompt-agnostic", "validate", str(source), "--format", "claude", "--subtype", "agent"]
    )
    assert main() == 1


def test_main_maps_click_errors_to_two(write_text, monkeypatch) -> None:
    source = write_text("broken.json", "{not json")
    monkeypatch.setattr("sys.argv", ["prompt-agnostic", "score", str(source), "--from", "generic"])
    assert main() == 2
