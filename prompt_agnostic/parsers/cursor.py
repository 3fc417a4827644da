"""Parse Cursor ``.mdc`` rules and command files."""

from __future__ import annotations

from prompt_agnostic.canonical.models import CanonicalPackage, Format, PackageIdentity, Subtype
from prompt_agnostic.inference.frontmatter import split_frontmatter
from prompt_agnostic.parsers.base import assemble_package, optional_bool, read_markdown, string_list
from prompt_agnostic.taxonomy import detect_subtype


def from_cursor(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    frontmatter, parsed, metadata = read_markdown(content, identity)
    return assemble_package(
        fmt=Format.CURSOR,
        subtype=detect_subtype(Format.CURSOR, frontmatter, subtype),
        identity=identity,
        metadata=metadata,
        sections=parsed.sections,
        globs=string_list(frontmatter.get("globs")),
        always_apply=optional_bool(frontmatter.get("alwaysApply")),
    )


def is_cursor_format(content: str) -> bool:
    data = split_frontmatter(content).data
    return "alwaysApply" in data or ("globs" in data and "description" in data and "name" not in data)
