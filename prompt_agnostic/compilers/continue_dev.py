"""Compile to Continue rules and invokable prompts."""

from __future__ import annotations

from typing import Any

from prompt_agnostic.canonical.models import CanonicalPackage, ConversionResult, Format, Subtype
from prompt_agnostic.compilers.base import CompileOptions, MarkdownCompiler, extensions_for
from prompt_agnostic.scoring import ConversionContext
from prompt_agnostic.utils import yaml_value
from prompt_agnostic.validation.validator import SchemaValidator

_INVOKABLE_SUBTYPES = (Subtype.PROMPT, Subtype.SLASH_COMMAND)


class ContinueCompiler(MarkdownCompiler):
    FORMAT = Format.CONTINUE
    SUPPORTS_PERSONA = False

    def frontmatter(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> dict[str, Any]:
        extension = extensions_for(pkg, config).continue_dev
        fm: dict[str, Any] = {"name": pkg.name}
        if pkg.summary:
            fm["description"] = pkg.summary
        if pkg.subtype in _INVOKABLE_SUBTYPES:
            fm["invokable"] = True
            return fm

        globs = config.globs if config.globs is not None else None
        if globs is None and extension and extension.globs is not None:
            globs = extension.globs
        if globs is None and pkg.metadata.globs:
            globs = pkg.metadata.globs
        if globs:
            fm["globs"] = yaml_value(globs)
        if extension and extension.regex:
            fm["regex"] = yaml_value(extension.regex)
        always_apply = config.always_apply
        if always_apply is None:
            always_apply = pkg.metadata.always_apply
        if always_apply is not None:
            fm["alwaysApply"] = always_apply
        if extension and extension.version:
            fm["version"] = extension.version
        if extension and extension.schema:
            fm["schema"] = extension.schema
        return fm


def to_continue(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return ContinueCompiler(validator).compile(pkg, config)
