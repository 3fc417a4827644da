"""Format compiler registry."""

from __future__ import annotations

from dataclasses import replace

from prompt_agnostic.canonical.models import CanonicalPackage, ConversionResult, Format
from prompt_agnostic.compilers.base import CompileOptions, IFormatCompiler
from prompt_agnostic.compilers.claude import ClaudeCompiler, to_claude
from prompt_agnostic.compilers.continue_dev import ContinueCompiler, to_continue
from prompt_agnostic.compilers.copilot import CopilotCompiler, to_copilot
from prompt_agnostic.compilers.cursor import CursorCompiler, to_cursor
from prompt_agnostic.compilers.droid import DroidCompiler, to_droid
from prompt_agnostic.compilers.gemini import GeminiCompiler, to_gemini
from prompt_agnostic.compilers.generic import GenericCompiler, to_generic
from prompt_agnostic.compilers.kiro import KiroCompiler, to_kiro, to_kiro_agent
from prompt_agnostic.compilers.markdown import (
    AgentsMdCompiler,
    AiderCompiler,
    ReplitCompiler,
    TraeCompiler,
    WindsurfCompiler,
    ZencoderCompiler,
    to_agents_md,
    to_aider,
    to_replit,
    to_trae,
    to_windsurf,
    to_zencoder,
)
from prompt_agnostic.compilers.opencode import OpenCodeCompiler, to_opencode
from prompt_agnostic.compilers.ruler import RulerCompiler, to_ruler
from prompt_agnostic.errors import UnsupportedFormatError
from prompt_agnostic.validation.validator import SchemaValidator

COMPILERS: dict[Format, type[IFormatCompiler]] = {
    Format.CLAUDE: ClaudeCompiler,
    Format.CURSOR: CursorCompiler,
    Format.CONTINUE: ContinueCompiler,
    Format.WINDSURF: WindsurfCompiler,
    Format.COPILOT: CopilotCompiler,
    Format.KIRO: KiroCompiler,
    Format.AGENTS_MD: AgentsMdCompiler,
    Format.GEMINI: GeminiCompiler,
    Format.OPENCODE: OpenCodeCompiler,
    Format.RULER: RulerCompiler,
    Format.DROID: DroidCompiler,
    Format.TRAE: TraeCompiler,
    Format.AIDER: AiderCompiler,
    Format.ZENCODER: ZencoderCompiler,
    Format.REPLIT: ReplitCompiler,
    Format.GENERIC: GenericCompiler,
}


def create_compiler(fmt: Format | str, validator: SchemaValidator | None = None) -> IFormatCompiler:
    try:
        compiler_cls = COMPILERS[Format(fmt)]
    except (KeyError, ValueError):
        raise UnsupportedFormatError(str(getattr(fmt, "value", fmt)), "compiler") from None
    return compiler_cls(validator)


def convert(
    pkg: CanonicalPackage,
    fmt: Format | str,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    """Render ``pkg`` as ``fmt``. Raises only for an unknown target format."""
    return create_compiler(fmt, validator).compile(pkg, config)


def score_formats(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> dict[Format, int]:
    """Compile ``pkg`` to every target and collect the quality scores."""
    validator = validator or SchemaValidator.create_default()
    return {
        fmt: compiler_cls(validator).compile(pkg, config).quality_score
        for fmt, compiler_cls in COMPILERS.items()
    }


def with_format_scores(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> CanonicalPackage:
    return replace(pkg, format_scores=score_formats(pkg, config, validator))


__all__ = [
    "COMPILERS",
    "CompileOptions",
    "IFormatCompiler",
    "convert",
    "create_compiler",
    "score_formats",
    "to_agents_md",
    "to_aider",
    "to_claude",
    "to_continue",
    "to_copilot",
    "to_cursor",
    "to_droid",
    "to_gemini",
    "to_generic",
    "to_kiro",
    "to_kiro_agent",
    "to_opencode",
    "to_replit",
    "to_ruler",
    "to_trae",
    "to_windsurf",
    "to_zencoder",
    "with_format_scores",
]
