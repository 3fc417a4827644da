"""Shared helpers for format parsers."""

from __future__ import annotations

from typing import Any, Callable, Iterable

from prompt_agnostic.canonical.models import (
    CanonicalContent,
    CanonicalPackage,
    Format,
    FormatExtensions,
    MetadataSection,
    PackageIdentity,
    PackageMetadata,
    Section,
    Subtype,
    ToolsSection,
)
from prompt_agnostic.inference.frontmatter import split_frontmatter
from prompt_agnostic.inference.sections import BlockHandler, ParsedBody, parse_body
from prompt_agnostic.taxonomy import check_taxonomy
from prompt_agnostic.utils import optional_bool, string_list, string_or_list, text_value


Parser = Callable[..., CanonicalPackage]


def tools_section(tools: Iterable[str]) -> list[Section]:
    tools = tuple(tools)
    return [ToolsSection(tools=tools)] if tools else []


def synthesize_metadata(
    frontmatter: dict[str, Any], parsed: ParsedBody, identity: PackageIdentity
) -> MetadataSection:
    """Build the metadata section.

    Title: frontmatter ``title``, then the H1, then frontmatter ``name``, then
    the identity name. Description: frontmatter, then the paragraph under the
    H1, then the identity description.
    """
    title = (
        text_value(frontmatter.get("title"))
        or parsed.title
        or text_value(frontmatter.get("name"))
        or identity.name
    )
    description = (
        text_value(frontmatter.get("description"))
        or parsed.description
        or identity.description
        or ""
    )
    return MetadataSection(
        title=title,
        description=description,
        icon=text_value(frontmatter.get("icon")) or parsed.icon,
        version=identity.version or None,
        author=identity.author or None,
    )


def assemble_package(
    *,
    fmt: Format,
    subtype: Subtype,
    identity: PackageIdentity,
    metadata: MetadataSection,
    sections: Iterable[Section],
    name: str | None = None,
    extensions: FormatExtensions | None = None,
    globs: tuple[str, ...] = (),
    always_apply: bool | None = None,
    tags: Iterable[str] = (),
) -> CanonicalPackage:
    fmt, subtype = check_taxonomy(fmt, subtype)
    return CanonicalPackage(
        id=identity.id,
        version=identity.version,
        name=name or identity.name,
        description=metadata.description,
        author=identity.author,
        tags=frozenset((*identity.tags, *tags)),
        format=fmt,
        subtype=subtype,
        content=CanonicalContent(sections=(metadata, *sections)),
        metadata=PackageMetadata(
            title=metadata.title,
            description=metadata.description,
            icon=metadata.icon,
            version=metadata.version,
            author=metadata.author,
            globs=globs,
            always_apply=always_apply,
            extensions=extensions or FormatExtensions(),
        ),
        source_format=fmt,
    )


def read_markdown(
    content: str, identity: PackageIdentity, handler: BlockHandler | None = None
) -> tuple[dict[str, Any], ParsedBody, MetadataSection]:
    """Split frontmatter, parse the body and synthesize metadata."""
    frontmatter = split_frontmatter(content)
    parsed = parse_body(
        frontmatter.body,
        description=text_value(frontmatter.data.get("description")),
        handler=handler,
    )
    return frontmatter.data, parsed, synthesize_metadata(frontmatter.data, parsed, identity)


__all__ = [
    "Parser",
    "assemble_package",
    "optional_bool",
    "read_markdown",
    "string_list",
    "string_or_list",
    "synthesize_metadata",
    "text_value",
    "tools_section",
]
