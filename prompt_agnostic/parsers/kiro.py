"""Parse Kiro steering files."""

from __future__ import annotations

from prompt_agnostic.canonical.models import (
    CanonicalPackage,
    Format,
    FormatExtensions,
    KiroExtension,
    PackageIdentity,
    Subtype,
)
from prompt_agnostic.errors import ParseError
from prompt_agnostic.inference.frontmatter import split_frontmatter
from prompt_agnostic.parsers.base import assemble_package, read_markdown, text_value
from prompt_agnostic.taxonomy import detect_subtype

INCLUSION_MODES = ("always", "fileMatch", "manual")
FOUNDATIONAL_TYPES = ("product", "tech", "structure")


def foundational_type(identity: PackageIdentity) -> str | None:
    for candidate in (identity.name, identity.id):
        stem = candidate.lower().rsplit("/", 1)[-1].removesuffix(".md")
        if stem in FOUNDATIONAL_TYPES:
            return stem
    return None


def from_kiro(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    frontmatter, parsed, metadata = read_markdown(content, identity)
    inclusion = text_value(frontmatter.get("inclusion"))
    if inclusion not in INCLUSION_MODES:
        raise ParseError(
            Format.KIRO.value,
            f"steering files require an inclusion of {', '.join(INCLUSION_MODES)}",
        )
    pattern = text_value(frontmatter.get("fileMatchPattern"))
    if inclusion == "fileMatch" and not pattern:
        raise ParseError(Format.KIRO.value, "fileMatch inclusion requires fileMatchPattern")

    kind = foundational_type(identity)
    tags = [f"kiro-{inclusion.lower()}"]
    if kind:
        tags.insert(0, f"kiro-{kind}")
    extension = KiroExtension(
        filename=text_value(frontmatter.get("filename")),
        inclusion=inclusion,
        file_match_pattern=pattern,
        domain=text_value(frontmatter.get("domain")),
        foundational_type=kind,
    )
    return assemble_package(
        fmt=Format.KIRO,
        subtype=detect_subtype(Format.KIRO, frontmatter, subtype),
        identity=identity,
        metadata=metadata,
        sections=parsed.sections,
        extensions=FormatExtensions(kiro=extension),
        tags=tags,
    )


def is_kiro_format(content: str) -> bool:
    return "inclusion" in split_frontmatter(content).data
