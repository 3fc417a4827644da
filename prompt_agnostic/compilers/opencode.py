"""Compile to OpenCode agent markdown."""

from __future__ import annotations

from typing import Any

from prompt_agnostic.canonical.models import (
    CanonicalPackage,
    ConversionResult,
    Format,
    PersonaSection,
    Subtype,
    ToolsSection,
)
from prompt_agnostic.compilers.base import (
    CompileOptions,
    MarkdownCompiler,
    collect_tools,
    extensions_for,
    is_leading,
    persona_prose,
)
from prompt_agnostic.scoring import ConversionContext
from prompt_agnostic.validation.validator import SchemaValidator


class OpenCodeCompiler(MarkdownCompiler):
    FORMAT = Format.OPENCODE
    INCLUDE_ICON = False

    def frontmatter(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> dict[str, Any]:
        opencode = extensions_for(pkg, config).opencode
        fm: dict[str, Any] = {}
        if pkg.summary:
            fm["description"] = pkg.summary
        if opencode and opencode.mode:
            fm["mode"] = opencode.mode
        elif pkg.subtype is Subtype.AGENT:
            fm["mode"] = "subagent"
        if opencode and opencode.model:
            fm["model"] = opencode.model
        if opencode and opencode.temperature is not None:
            fm["temperature"] = opencode.temperature

        flags = dict(opencode.tool_flags) if opencode and opencode.tool_flags else {}
        for tool in collect_tools(pkg):
            flags.setdefault(tool, True)
        if flags:
            fm["tools"] = flags
        if opencode and opencode.permission:
            fm["permission"] = opencode.permission
        if opencode and opencode.disable is not None:
            fm["disable"] = opencode.disable
        return fm

    def render_tools(self, pkg: CanonicalPackage, section: ToolsSection, ctx: ConversionContext) -> str | None:
        return None

    def render_persona(self, pkg: CanonicalPackage, section: PersonaSection, ctx: ConversionContext) -> str | None:
        prose = persona_prose(section.data)
        return prose if is_leading(pkg, section) else f"## Role\n\n{prose}"


def to_opencode(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return OpenCodeCompiler(validator).compile(pkg, config)
