"""Tests for kiro, gemini and generic compilers."""

import json

from prompt_agnostic.canonical.mapper import loads_package
from prompt_agnostic.canonical.models import (
    FormatExtensions,
    InstructionsSection,
    KiroAgentExtension,
    KiroExtension,
    PackageMetadata,
    Subtype,
)
from prompt_agnostic.compilers import to_gemini, to_generic, to_kiro, to_kiro_agent
from prompt_agnostic.inference.frontmatter import load_toml, split_frontmatter


def _kiro_metadata(**kwargs) -> PackageMetadata:
    return PackageMetadata(extensions=FormatExtensions(kiro=KiroExtension(**kwargs)))


def test_kiro_steering_defaults_to_always(make_package, rules_section, validator) -> None:
    result = to_kiro(make_package(rules_section), validator=validator)
    assert split_frontmatter(result.content).data == {"inclusion": "always"}
    assert result.warnings == ["No Kiro inclusion mode set; defaulting to always"]
    assert result.lossy_conversion is False
    assert result.quality_score == 95


def test_kiro_steering_file_match(make_package, validator) -> None:
    metadata = _kiro_metadata(inclusion="fileMatch", file_match_pattern="**/*.py", domain="python")
    result = to_kiro(make_package(metadata=metadata), validator=validator)
    assert split_frontmatter(result.content).data == {
        "inclusion": "fileMatch",
        "fileMatchPattern": "**/*.py",
        "domain": "python",
    }
    assert result.quality_score == 100


def test_kiro_file_match_without_pattern_fails_conversion(make_package, validator) -> None:
    result = to_kiro(make_package(metadata=_kiro_metadata(inclusion="fileMatch")), validator=validator)
    assert result.content == ""
    assert result.warnings == ["Conversion error: fileMatch inclusion requires fileMatchPattern"]
    assert result.lossy_conversion is True
    assert result.quality_score == 0


def test_kiro_routes_agents_to_json(make_package, every_section, validator) -> None:
    result = to_kiro(make_package(*every_section, subtype=Subtype.AGENT), validator=validator)
    payload = json.loads(result.content)
    assert payload["name"] == "Style Guide"
    assert payload["description"] == "House style for Python code"
    assert payload["tools"] == ["Read", "Grep"]
    assert payload["prompt"].startswith("You are Ada, senior Python reviewer.")
    assert result.warnings == [
        "Hook section skipped (not supported by Kiro)",
        "Custom cursor section skipped (not supported by Kiro)",
    ]
    assert result.quality_score == 90


def test_kiro_agent_keeps_file_prompt(make_package, validator) -> None:
    extension = KiroAgentExtension(
        prompt_file="file://./prompts/reviewer.md",
        mcp_servers={"fetch": {"command": "uvx"}},
        allowed_tools=("read",),
        model="claude-sonnet-4",
    )
    pkg = make_package(
        InstructionsSection(title="Instructions", content="Loads instructions from: file://./prompts/reviewer.md"),
        subtype=Subtype.AGENT,
        metadata=PackageMetadata(extensions=FormatExtensions(kiro_agent=extension)),
    )
    payload = json.loads(to_kiro_agent(pkg, validator=validator).content)
    assert payload["prompt"] == "file://./prompts/reviewer.md"
    assert payload["mcpServers"] == {"fetch": {"command": "uvx"}}
    assert payload["allowedTools"] == ["read"]
    assert payload["model"] == "claude-sonnet-4"


def test_kiro_agent_subtype_penalties(make_package, validator) -> None:
    command = to_kiro_agent(make_package(subtype=Subtype.SLASH_COMMAND), validator=validator)
    assert command.warnings == ["Slash commands are not supported by Kiro agents"]
    assert command.quality_score == 70

    skill = to_kiro_agent(make_package(subtype=Subtype.SKILL), validator=validator)
    assert skill.warnings == ["Skills are converted to agent prompts; some features may be lost"]
    assert skill.lossy_conversion is False
    assert skill.quality_score == 90


def test_gemini_output_is_toml(make_package, rules_section, validator) -> None:
    result = to_gemini(make_package(rules_section, subtype=Subtype.SLASH_COMMAND), validator=validator)
    payload = load_toml(result.content, "gemini")
    assert payload["description"] == "House style for Python code"
    assert payload["prompt"].startswith("# Style Guide\n\nHouse style for Python code\n\n## Rules\n- Use type hints")
    assert result.validation_errors == []
    assert result.quality_score == 100


def test_gemini_escapes_quotes_and_backslashes(make_package, validator) -> None:
    text = InstructionsSection(title="Paths", content='Use "C:\\temp" on Windows.')
    payload = load_toml(to_gemini(make_package(text), validator=validator).content, "gemini")
    assert 'Use "C:\\temp" on Windows.' in payload["prompt"]


def test_generic_output_loads_back(make_package, every_section, validator) -> None:
    pkg = make_package(*every_section, subtype=Subtype.AGENT)
    result = to_generic(pkg, validator=validator)
    assert result.warnings == []
    assert result.quality_score == 100
    assert loads_package(result.content) == pkg
