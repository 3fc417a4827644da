"""Tests for markdown format compilers."""

from prompt_agnostic.canonical.models import (
    AgentsMdExtension,
    ClaudeExtension,
    ContextSection,
    CopilotExtension,
    CustomSection,
    DroidExtension,
    Format,
    FormatExtensions,
    InstructionsSection,
    OpenCodeExtension,
    PackageIdentity,
    PackageMetadata,
    PersonaData,
    PersonaSection,
    Subtype,
    ToolsSection,
)
from prompt_agnostic.compilers import (
    CompileOptions,
    to_agents_md,
    to_aider,
    to_claude,
    to_continue,
    to_copilot,
    to_cursor,
    to_droid,
    to_opencode,
    to_ruler,
    to_windsurf,
    to_zencoder,
)
from prompt_agnostic.compilers.base import fence_for
from prompt_agnostic.inference.frontmatter import split_frontmatter
from prompt_agnostic.parsers import from_claude


def test_rules_with_rationale_convert_cleanly_to_aider(validator) -> None:
    pkg = from_claude(
        "# Title\n\nDesc.\n\n## Rules\n- Do X\n   - *Rationale: because Y*\n",
        PackageIdentity(id="t", name="T"),
    )
    result = to_aider(pkg, validator=validator)
    assert "## Rules\n- Do X\n   - Rationale: because Y" in result.content
    assert result.warnings == []
    assert result.lossy_conversion is False
    assert result.quality_score == 100


def test_tools_section_is_lossy_for_aider(make_package, validator) -> None:
    result = to_aider(make_package(ToolsSection(tools=("Read",))), validator=validator)
    assert "Tools section skipped (not supported by Aider)" in result.warnings
    assert result.lossy_conversion is True
    assert result.quality_score == 90


def test_aider_templates(make_package, rules_section, examples_section, validator) -> None:
    content = to_aider(make_package(rules_section, examples_section), validator=validator).content
    assert content.startswith("# Style Guide\n\nHouse style for Python code\n\n## Rules\n")
    assert "   - Rationale: Editors catch mistakes early\n   - Example: `def f(x: int) -> int`" in content
    assert "### ✅ Preferred: Typed function\n\n```python\ndef f(x: int) -> int:\n    return x\n```" in content
    assert "### ❌ Avoid: Untyped function" in content


def test_cursor_renders_persona_and_skips_tools_and_hooks(make_package, every_section, validator) -> None:
    result = to_cursor(make_package(*every_section), validator=validator)
    assert result.warnings == [
        "Tools section skipped (not supported by Cursor)",
        "Hook section skipped (not supported by Cursor)",
    ]
    assert result.quality_score == 90
    assert result.validation_errors == []
    content = result.content
    assert "## Role\n\n**Ada** - senior Python reviewer\n\n**Style:** direct" in content
    assert "## Workflow\n\n**Important:**\n\nReview the diff first." in content
    assert "## Background\n\nLegacy Django monolith." in content
    assert "## Cursor\n\nCursor-only note" in content
    frontmatter = split_frontmatter(content).data
    assert frontmatter == {"description": "House style for Python code", "alwaysApply": False}


def test_cursor_globs_from_copilot_apply_to(make_package, validator) -> None:
    metadata = PackageMetadata(extensions=FormatExtensions(copilot=CopilotExtension(apply_to="**/*.py")))
    result = to_cursor(make_package(metadata=metadata), validator=validator)
    assert split_frontmatter(result.content).data["globs"] == ["**/*.py"]


def test_cursor_config_overrides(make_package, validator) -> None:
    config = CompileOptions(globs=("src/**",), always_apply=True)
    data = split_frontmatter(to_cursor(make_package(), config, validator).content).data
    assert data["globs"] == ["src/**"]
    assert data["alwaysApply"] is True


def test_cursor_slash_command_has_no_frontmatter(make_package, validator) -> None:
    result = to_cursor(make_package(subtype=Subtype.SLASH_COMMAND), validator=validator)
    assert result.content.startswith("# Style Guide")
    assert result.quality_score == 100


def test_claude_frontmatter_and_hooks(make_package, every_section, validator) -> None:
    result = to_claude(make_package(*every_section, subtype=Subtype.AGENT), validator=validator)
    data = split_frontmatter(result.content).data
    assert data == {"name": "style-guide", "description": "House style for Python code", "tools": "Read, Grep"}
    assert "You are Ada, senior Python reviewer.\n\nYour communication style is direct." in result.content
    assert "## Hook: session-start\n\n```bash\nmake setup\n```" in result.content
    assert "**IMPORTANT:**" in result.content
    assert result.warnings == ["Custom cursor section skipped (not supported by Claude)"]


def test_claude_skill_uses_allowed_tools(make_package, validator) -> None:
    result = to_claude(make_package(ToolsSection(tools=("Read",)), subtype=Subtype.SKILL), validator=validator)
    assert split_frontmatter(result.content).data["allowed-tools"] == "Read"



def test_claude_keeps_list_shaped_tools(make_package, validator) -> None:
    metadata = PackageMetadata(extensions=FormatExtensions(claude=ClaudeExtension(tools_as_list=True)))
    pkg = make_package(ToolsSection(tools=("Read", "Grep")), subtype=Subtype.AGENT, metadata=metadata)
    result = to_claude(pkg, validator=validator)
    assert split_frontmatter(result.content).data["tools"] == ["Read", "Grep"]
    assert result.validation_errors == []


def test_fence_for_outgrows_backtick_runs() -> None:
    assert fence_for("print(1)") == "```"
    assert fence_for("```js\nx\n```") == "````"
    assert fence_for("a ````` b") == "``````"


def test_claude_schema_errors_are_scored(make_package, validator) -> None:
    result = to_claude(make_package(subtype=Subtype.SKILL, package_id="x" * 70), validator=validator)
    assert len(result.validation_errors) == 1
    assert result.validation_errors[0].startswith("/frontmatter/name: ")
    assert result.warnings == ["Output failed claude schema validation (1 errors)"]
    assert result.quality_score == 95


def test_continue_prompt_and_rule_frontmatter(make_package, validator) -> None:
    prompt = split_frontmatter(to_continue(make_package(subtype=Subtype.PROMPT), validator=validator).content)
    assert prompt.data == {"name": "Style Guide", "description": "House style for Python code", "invokable": True}

    metadata = PackageMetadata(globs=("*.py",), always_apply=False)
    rule = split_frontmatter(to_continue(make_package(metadata=metadata), validator=validator).content)
    assert rule.data["globs"] == ["*.py"]
    assert rule.data["alwaysApply"] is False


def test_copilot_skips_persona_and_tools(make_package, every_section, validator) -> None:
    metadata = PackageMetadata(
        extensions=FormatExtensions(copilot=CopilotExtension(apply_to=("**/*.ts", "**/*.tsx"), exclude_agent="coding-agent"))
    )
    result = to_copilot(make_package(*every_section, metadata=metadata), validator=validator)
    assert "Persona section skipped (not supported by Copilot)" in result.warnings
    assert "Tools section skipped (not supported by Copilot)" in result.warnings
    assert result.quality_score == 90
    assert split_frontmatter(result.content).data == {
        "applyTo": ["**/*.ts", "**/*.tsx"],
        "excludeAgent": "coding-agent",
    }
    assert "### ✅ Do: Typed function" in result.content


def test_windsurf_character_limit_is_advisory(make_package, validator) -> None:
    long_text = InstructionsSection(title="Notes", content="x" * 12_500)
    result = to_windsurf(make_package(long_text), validator=validator)
    assert len(result.warnings) == 1
    assert "12,000" in result.warnings[0]
    assert result.lossy_conversion is False
    assert result.quality_score == 95


def test_windsurf_persona_as_role(make_package, validator) -> None:
    persona = PersonaSection(data=PersonaData(role="a patient tutor"))
    result = to_windsurf(make_package(persona), validator=validator)
    assert "## Role\n\nYou are a patient tutor." in result.content
    assert result.quality_score == 100


def test_droid_penalizes_each_skipped_section(make_package, every_section, validator) -> None:
    result = to_droid(make_package(*every_section, subtype=Subtype.SKILL), validator=validator)
    assert result.warnings == [
        "Context section skipped (not supported by Droid)",
        "Hook section skipped (not supported by Droid)",
        "Custom cursor section skipped (not supported by Droid)",
    ]
    assert result.quality_score == 75
    data = split_frontmatter(result.content).data
    assert data["allowed-tools"] == ["Read", "Grep"]
    assert "## Role" in result.content


def test_droid_frontmatter_from_extension(make_package, validator) -> None:
    metadata = PackageMetadata(
        extensions=FormatExtensions(droid=DroidExtension(argument_hint="<issue>", allowed_tools=("Edit",)))
    )
    result = to_droid(make_package(subtype=Subtype.SLASH_COMMAND, metadata=metadata), validator=validator)
    assert split_frontmatter(result.content).data == {
        "name": "Style Guide",
        "description": "House style for Python code",
        "argument-hint": "<issue>",
        "allowed-tools": ["Edit"],
    }


def test_opencode_agent_frontmatter(make_package, validator) -> None:
    metadata = PackageMetadata(
        extensions=FormatExtensions(
            opencode=OpenCodeExtension(model="anthropic/claude", temperature=0.1, tool_flags={"write": False})
        )
    )
    pkg = make_package(
        PersonaSection(data=PersonaData(role="a reviewer")),
        ToolsSection(tools=("bash",)),
        subtype=Subtype.AGENT,
        metadata=metadata,
    )
    result = to_opencode(pkg, validator=validator)
    assert split_frontmatter(result.content).data == {
        "description": "House style for Python code",
        "mode": "subagent",
        "model": "anthropic/claude",
        "temperature": 0.1,
        "tools": {"write": False, "bash": True},
    }
    assert "House style for Python code\n\nYou are a reviewer." in result.content
    assert result.warnings == []


def test_ruler_header_and_subtype_penalties(make_package, validator) -> None:
    result = to_ruler(make_package(), validator=validator)
    assert result.content.startswith(
        "<!-- Package: Style Guide -->\n<!-- Author: Ada -->\n<!-- Description: House style for Python code -->\n\n# "
    )
    assert result.quality_score == 100

    agent = to_ruler(make_package(subtype=Subtype.AGENT), validator=validator)
    assert agent.warnings == ["Ruler treats agent packages as plain rules"]
    assert agent.lossy_conversion is False
    assert agent.quality_score == 90

    command = to_ruler(make_package(subtype=Subtype.SLASH_COMMAND), validator=validator)
    assert command.warnings == ["Slash commands are not supported by Ruler"]
    assert command.lossy_conversion is True
    assert command.quality_score == 70


def test_agents_md_optional_frontmatter(make_package, validator) -> None:
    metadata = PackageMetadata(extensions=FormatExtensions(agents_md=AgentsMdExtension(project="api", scope="backend")))
    pkg = make_package(metadata=metadata)
    assert split_frontmatter(to_agents_md(pkg, validator=validator).content).data == {
        "project": "api",
        "scope": "backend",
    }
    bare = to_agents_md(pkg, CompileOptions(include_frontmatter=False), validator)
    assert bare.content.startswith("# Style Guide")


def test_zencoder_frontmatter(make_package, validator) -> None:
    result = to_zencoder(make_package(), CompileOptions(globs=("*.go",), always_apply=True), validator)
    assert split_frontmatter(result.content).data == {
        "description": "House style for Python code",
        "globs": ["*.go"],
        "alwaysApply": True,
    }


def test_custom_section_for_target_is_rendered(make_package, validator) -> None:
    custom = CustomSection(content="Only for aider", editor_type=Format.AIDER, title="Aider")
    other = ContextSection(title="Background", content="Monorepo.")
    result = to_aider(make_package(custom, other), validator=validator)
    assert "## Aider\n\nOnly for aider\n\n## Background\n\nMonorepo." in result.content
    assert result.warnings == []
