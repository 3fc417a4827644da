"""Parse Factory Droid skills and commands."""

from __future__ import annotations

from prompt_agnostic.canonical.models import (
    CanonicalPackage,
    DroidExtension,
    Format,
    FormatExtensions,
    PackageIdentity,
    Subtype,
)
from prompt_agnostic.parsers.base import assemble_package, read_markdown, string_list, text_value
from prompt_agnostic.taxonomy import detect_subtype


def from_droid(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    frontmatter, parsed, metadata = read_markdown(content, identity)
    argument_hint = text_value(frontmatter.get("argument-hint"))
    allowed_tools = string_list(frontmatter.get("allowed-tools")) or None
    if subtype is None and argument_hint and "subtype" not in frontmatter:
        subtype = Subtype.SLASH_COMMAND

    droid = None
    if argument_hint or allowed_tools:
        droid = DroidExtension(argument_hint=argument_hint, allowed_tools=allowed_tools)
    return assemble_package(
        fmt=Format.DROID,
        subtype=detect_subtype(Format.DROID, frontmatter, subtype),
        identity=identity,
        metadata=metadata,
        sections=parsed.sections,
        name=text_value(frontmatter.get("name")),
        extensions=FormatExtensions(droid=droid),
    )
