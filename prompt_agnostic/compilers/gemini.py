"""Compile to Gemini CLI custom command TOML."""

from __future__ import annotations

from prompt_agnostic.canonical.models import CanonicalPackage, ConversionResult, Format
from prompt_agnostic.compilers.base import CompileOptions, MarkdownCompiler
from prompt_agnostic.inference.frontmatter import dump_toml
from prompt_agnostic.scoring import ConversionContext
from prompt_agnostic.validation.validator import SchemaValidator


class GeminiCompiler(MarkdownCompiler):
    """Compile to a TOML file with ``description`` and a markdown ``prompt``."""

    FORMAT = Format.GEMINI
    VALIDATES_OUTPUT = True
    SUPPORTS_PERSONA = False

    def render(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> str:
        prompt = self.render_document(pkg, ctx).rstrip("\n")
        return dump_toml({"description": pkg.summary or None, "prompt": prompt})


def to_gemini(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return GeminiCompiler(validator).compile(pkg, config)
