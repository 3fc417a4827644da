"""Parse agents.md files and Zencoder rules."""

from __future__ import annotations

from prompt_agnostic.canonical.models import (
    AgentsMdExtension,
    CanonicalPackage,
    Format,
    FormatExtensions,
    PackageIdentity,
    Subtype,
)
from prompt_agnostic.parsers.base import (
    assemble_package,
    optional_bool,
    read_markdown,
    string_list,
    text_value,
)
from prompt_agnostic.taxonomy import detect_subtype


def from_agents_md(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    frontmatter, parsed, metadata = read_markdown(content, identity)
    project = text_value(frontmatter.get("project"))
    scope = text_value(frontmatter.get("scope"))
    extension = AgentsMdExtension(project=project, scope=scope) if project or scope else None
    return assemble_package(
        fmt=Format.AGENTS_MD,
        subtype=detect_subtype(Format.AGENTS_MD, frontmatter, subtype),
        identity=identity,
        metadata=metadata,
        sections=parsed.sections,
        extensions=FormatExtensions(agents_md=extension),
    )


def from_zencoder(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    frontmatter, parsed, metadata = read_markdown(content, identity)
    return assemble_package(
        fmt=Format.ZENCODER,
        subtype=detect_subtype(Format.ZENCODER, frontmatter, subtype),
        identity=identity,
        metadata=metadata,
        sections=parsed.sections,
        globs=string_list(frontmatter.get("globs")),
        always_apply=optional_bool(frontmatter.get("alwaysApply")),
    )
