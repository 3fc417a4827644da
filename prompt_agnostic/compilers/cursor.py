"""Compile to Cursor ``.mdc`` rules and commands."""

from __future__ import annotations

from typing import Any

from prompt_agnostic.canonical.models import CanonicalPackage, ConversionResult, Format, Subtype
from prompt_agnostic.compilers.base import CompileOptions, MarkdownCompiler, extensions_for
from prompt_agnostic.scoring import ConversionContext
from prompt_agnostic.utils import string_list
from prompt_agnostic.validation.validator import SchemaValidator


class CursorCompiler(MarkdownCompiler):
    """Compile to Cursor .mdc format with camelCase frontmatter."""

    FORMAT = Format.CURSOR
    VALIDATES_OUTPUT = True

    def frontmatter(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> dict[str, Any]:
        if pkg.subtype is Subtype.SLASH_COMMAND:
            return {}
        fm: dict[str, Any] = {}
        if pkg.summary:
            fm["description"] = pkg.summary
        globs = config.globs if config.globs is not None else pkg.metadata.globs
        if not globs:
            copilot = extensions_for(pkg, config).copilot
            globs = string_list(copilot.apply_to) if copilot else ()
        if globs:
            fm["globs"] = list(globs)
        always_apply = config.always_apply
        if always_apply is None:
            always_apply = pkg.metadata.always_apply
        fm["alwaysApply"] = bool(always_apply)
        return fm


def to_cursor(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return CursorCompiler(validator).compile(pkg, config)
