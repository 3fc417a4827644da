"""Compile to Factory Droid skills and commands."""

from __future__ import annotations

from typing import Any

from prompt_agnostic.canonical.models import (
    CanonicalPackage,
    ContextSection,
    ConversionResult,
    CustomSection,
    Format,
    HookSection,
    ToolsSection,
)
from prompt_agnostic.compilers.base import (
    CompileOptions,
    MarkdownCompiler,
    collect_tools,
    extensions_for,
)
from prompt_agnostic.scoring import ConversionContext
from prompt_agnostic.validation.validator import SchemaValidator


class DroidCompiler(MarkdownCompiler):
    """Each skipped section costs ``section_penalty`` on top of the lossy penalty."""

    FORMAT = Format.DROID

    def frontmatter(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> dict[str, Any]:
        droid = extensions_for(pkg, config).droid
        fm: dict[str, Any] = {"name": pkg.name}
        if pkg.summary:
            fm["description"] = pkg.summary
        if droid and droid.argument_hint:
            fm["argument-hint"] = droid.argument_hint
        tools = collect_tools(pkg)
        if not tools and droid and droid.allowed_tools:
            tools = list(droid.allowed_tools)
        if tools:
            fm["allowed-tools"] = list(tools)
        return fm

    def _skip(self, label: str, ctx: ConversionContext) -> None:
        ctx.penalize(
            ctx.policy.section_penalty,
            f"{label} section skipped (not supported by {self.FORMAT.label})",
        )

    def render_tools(self, pkg: CanonicalPackage, section: ToolsSection, ctx: ConversionContext) -> str | None:
        return None

    def render_context(self, pkg: CanonicalPackage, section: ContextSection, ctx: ConversionContext) -> str | None:
        self._skip("Context", ctx)
        return None

    def render_hook(self, pkg: CanonicalPackage, section: HookSection, ctx: ConversionContext) -> str | None:
        self._skip("Hook", ctx)
        return None

    def render_custom(self, pkg: CanonicalPackage, section: CustomSection, ctx: ConversionContext) -> str | None:
        if section.editor_type not in (None, self.FORMAT):
            self._skip(f"Custom {section.editor_type.value}", ctx)
            return None
        return super().render_custom(pkg, section, ctx)


def to_droid(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return DroidCompiler(validator).compile(pkg, config)
