"""Compile to Claude agents, skills, commands and rules."""

from __future__ import annotations

from typing import Any

from prompt_agnostic.canonical.models import (
    CanonicalPackage,
    ConversionResult,
    Format,
    HookSection,
    PersonaSection,
    Subtype,
    ToolsSection,
)
from prompt_agnostic.compilers.base import (
    CompileOptions,
    MarkdownCompiler,
    collect_tools,
    extensions_for,
    fence_for,
    is_leading,
    persona_prose,
)
from prompt_agnostic.scoring import ConversionContext
from prompt_agnostic.validation.validator import SchemaValidator


class ClaudeCompiler(MarkdownCompiler):
    """Compile to Claude markdown with YAML frontmatter."""

    FORMAT = Format.CLAUDE
    VALIDATES_OUTPUT = True
    IMPORTANT_MARKER = "**IMPORTANT:**"
    RATIONALE_TEMPLATE = "   *{}*"
    RULE_EXAMPLE_TEMPLATE = "   Example: `{}`"
    GOOD_PREFIX = "✓ "
    BAD_PREFIX = "❌ Incorrect: "

    def frontmatter(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> dict[str, Any]:
        claude = extensions_for(pkg, config).claude
        fm: dict[str, Any] = {"name": pkg.id, "description": pkg.summary}
        if pkg.icon:
            fm["icon"] = pkg.icon
        tools = collect_tools(pkg)
        if tools:
            default_field = (
                "allowed-tools"
                if pkg.subtype in (Subtype.SKILL, Subtype.SLASH_COMMAND)
                else "tools"
            )
            field_name = claude.tools_field if claude and claude.tools_field else default_field
            fm[field_name] = list(tools) if claude and claude.tools_as_list else ", ".join(tools)
        if claude and claude.model:
            fm["model"] = claude.model
        if claude and claude.argument_hint:
            fm["argument-hint"] = claude.argument_hint
        return fm

    def render_tools(self, pkg: CanonicalPackage, section: ToolsSection, ctx: ConversionContext) -> str | None:
        return None

    def render_persona(self, pkg: CanonicalPackage, section: PersonaSection, ctx: ConversionContext) -> str | None:
        prose = persona_prose(section.data)
        if is_leading(pkg, section):
            return prose
        return f"## Role\n\n{prose}"

    def render_hook(self, pkg: CanonicalPackage, section: HookSection, ctx: ConversionContext) -> str | None:
        parts = [f"## Hook: {section.event.value}"]
        if section.description:
            parts.append(section.description)
        fence = fence_for(section.code)
        parts.append(f"{fence}{section.language.value}\n{section.code}\n{fence}")
        return "\n\n".join(parts)


def to_claude(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return ClaudeCompiler(validator).compile(pkg, config)
