"""Compile to Ruler rule files."""

from __future__ import annotations

from prompt_agnostic.canonical.models import CanonicalPackage, ConversionResult, Format, Subtype
from prompt_agnostic.compilers.base import CompileOptions, MarkdownCompiler
from prompt_agnostic.constants import RULER_COMMENT_END_ESCAPE
from prompt_agnostic.scoring import ConversionContext
from prompt_agnostic.validation.validator import SchemaValidator

_DEGRADED = (Subtype.AGENT, Subtype.WORKFLOW)
_UNSUPPORTED = {
    Subtype.SLASH_COMMAND: "Slash commands are not supported by Ruler",
    Subtype.HOOK: "Hooks are not supported by Ruler",
}


def _comment_value(text: str) -> str:
    """Fold a header value onto one line that cannot close the comment early."""
    return " ".join(text.split()).replace("-->", RULER_COMMENT_END_ESCAPE)


class RulerCompiler(MarkdownCompiler):
    """Compile to plain markdown with HTML comment metadata."""

    FORMAT = Format.RULER
    VALIDATES_OUTPUT = True
    SUPPORTS_PERSONA = False
    RATIONALE_TEMPLATE = "   *Rationale:* {}"
    GOOD_PREFIX = "Good: "
    BAD_PREFIX = "Bad: "

    def render(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> str:
        if pkg.subtype in _DEGRADED:
            ctx.penalize(
                config.scoring.degraded_subtype_penalty,
                f"Ruler treats {pkg.subtype.value} packages as plain rules",
            )
        elif pkg.subtype in _UNSUPPORTED:
            ctx.penalize(config.scoring.unsupported_subtype_penalty, _UNSUPPORTED[pkg.subtype])

        header = [f"<!-- Package: {_comment_value(pkg.name)} -->"]
        if pkg.author:
            header.append(f"<!-- Author: {_comment_value(pkg.author)} -->")
        if pkg.summary:
            header.append(f"<!-- Description: {_comment_value(pkg.summary)} -->")
        return "\n".join(header) + "\n\n" + self.render_document(pkg, ctx)


def to_ruler(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return RulerCompiler(validator).compile(pkg, config)
