"""Compilers for formats that are plain markdown with little or no frontmatter."""

from __future__ import annotations

from typing import Any

from prompt_agnostic.canonical.models import CanonicalPackage, ConversionResult, Format
from prompt_agnostic.compilers.base import CompileOptions, MarkdownCompiler, extensions_for
from prompt_agnostic.constants import WINDSURF_CHARACTER_LIMIT
from prompt_agnostic.scoring import ConversionContext
from prompt_agnostic.validation.validator import SchemaValidator


class WindsurfCompiler(MarkdownCompiler):
    FORMAT = Format.WINDSURF
    INCLUDE_ICON = False

    def render(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> str:
        content = self.render_document(pkg, ctx)
        if len(content) > WINDSURF_CHARACTER_LIMIT:
            ctx.warn(
                f"Content exceeds the Windsurf limit of {WINDSURF_CHARACTER_LIMIT:,} characters "
                f"({len(content):,})"
            )
        return content


class TraeCompiler(MarkdownCompiler):
    FORMAT = Format.TRAE


class ReplitCompiler(MarkdownCompiler):
    FORMAT = Format.REPLIT
    SUPPORTS_PERSONA = False


class AiderCompiler(MarkdownCompiler):
    """Aider conventions files: terse markdown, no persona."""

    FORMAT = Format.AIDER
    INCLUDE_ICON = False
    SUPPORTS_PERSONA = False
    RATIONALE_TEMPLATE = "   - Rationale: {}"
    GOOD_PREFIX = "✅ Preferred: "
    BAD_PREFIX = "❌ Avoid: "


class AgentsMdCompiler(MarkdownCompiler):
    FORMAT = Format.AGENTS_MD

    def frontmatter(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> dict[str, Any]:
        if config.include_frontmatter is False:
            return {}
        agents_md = extensions_for(pkg, config).agents_md
        fm: dict[str, Any] = {}
        if agents_md and agents_md.project:
            fm["project"] = agents_md.project
        if agents_md and agents_md.scope:
            fm["scope"] = agents_md.scope
        return fm


class ZencoderCompiler(MarkdownCompiler):
    FORMAT = Format.ZENCODER

    def frontmatter(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> dict[str, Any]:
        if config.include_frontmatter is False:
            return {}
        fm: dict[str, Any] = {}
        if pkg.summary:
            fm["description"] = pkg.summary
        globs = config.globs if config.globs is not None else pkg.metadata.globs
        if globs:
            fm["globs"] = list(globs)
        always_apply = config.always_apply if config.always_apply is not None else pkg.metadata.always_apply
        if always_apply is not None:
            fm["alwaysApply"] = always_apply
        return fm


def to_windsurf(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return WindsurfCompiler(validator).compile(pkg, config)


def to_trae(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return TraeCompiler(validator).compile(pkg, config)


def to_replit(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return ReplitCompiler(validator).compile(pkg, config)


def to_aider(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return AiderCompiler(validator).compile(pkg, config)


def to_agents_md(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return AgentsMdCompiler(validator).compile(pkg, config)


def to_zencoder(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return ZencoderCompiler(validator).compile(pkg, config)
