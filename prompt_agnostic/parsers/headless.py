"""Parse headless markdown formats: Windsurf, Trae, Replit and Aider."""

from __future__ import annotations

import re
from dataclasses import replace

from prompt_agnostic.canonical.models import (
    CanonicalPackage,
    Format,
    FormatExtensions,
    PackageIdentity,
    Subtype,
    WindsurfExtension,
)
from prompt_agnostic.constants import AIDER_DESCRIPTION_LIMIT, MAX_INFERRED_TAGS, TECH_KEYWORDS
from prompt_agnostic.parsers.base import assemble_package, read_markdown
from prompt_agnostic.taxonomy import detect_subtype


def _parse_headless(
    fmt: Format,
    content: str,
    identity: PackageIdentity,
    subtype: Subtype | str | None,
    **package_fields,
) -> CanonicalPackage:
    frontmatter, parsed, metadata = read_markdown(content, identity)
    return assemble_package(
        fmt=fmt,
        subtype=detect_subtype(fmt, frontmatter, subtype),
        identity=identity,
        metadata=metadata,
        sections=parsed.sections,
        **package_fields,
    )


def from_windsurf(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    return _parse_headless(
        Format.WINDSURF,
        content,
        identity,
        subtype,
        extensions=FormatExtensions(windsurf=WindsurfExtension(character_count=len(content))),
    )


def from_trae(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    return _parse_headless(Format.TRAE, content, identity, subtype)


def from_replit(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    return _parse_headless(Format.REPLIT, content, identity, subtype)


def infer_tech_tags(content: str) -> list[str]:
    lowered = content.lower()
    tags = [
        keyword
        for keyword in TECH_KEYWORDS
        if re.search(rf"\b{re.escape(keyword)}\b", lowered)
    ]
    return tags[:MAX_INFERRED_TAGS]


def from_aider(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    frontmatter, parsed, metadata = read_markdown(content, identity)
    if len(metadata.description) > AIDER_DESCRIPTION_LIMIT:
        metadata = replace(metadata, description=metadata.description[:AIDER_DESCRIPTION_LIMIT].rstrip())
    return assemble_package(
        fmt=Format.AIDER,
        subtype=detect_subtype(Format.AIDER, frontmatter, subtype),
        identity=identity,
        metadata=metadata,
        sections=parsed.sections,
        tags=infer_tech_tags(content),
    )
