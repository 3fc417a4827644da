"""Compile to GitHub Copilot instruction files."""

from __future__ import annotations

from typing import Any

from prompt_agnostic.canonical.models import CanonicalPackage, ConversionResult, Format
from prompt_agnostic.compilers.base import CompileOptions, MarkdownCompiler, extensions_for
from prompt_agnostic.scoring import ConversionContext
from prompt_agnostic.utils import yaml_value
from prompt_agnostic.validation.validator import SchemaValidator


class CopilotCompiler(MarkdownCompiler):
    FORMAT = Format.COPILOT
    SUPPORTS_PERSONA = False
    GOOD_PREFIX = "✅ Do: "
    BAD_PREFIX = "❌ Don't: "

    def frontmatter(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> dict[str, Any]:
        copilot = extensions_for(pkg, config).copilot
        fm: dict[str, Any] = {}
        if copilot is None:
            return fm
        if copilot.apply_to:
            fm["applyTo"] = yaml_value(copilot.apply_to)
        if copilot.exclude_agent:
            fm["excludeAgent"] = copilot.exclude_agent
        return fm


def to_copilot(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return CopilotCompiler(validator).compile(pkg, config)
