"""Parse Continue rules and invokable prompts."""

from __future__ import annotations

from prompt_agnostic.canonical.models import (
    CanonicalPackage,
    ContinueExtension,
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
    string_or_list,
    text_value,
)
from prompt_agnostic.taxonomy import detect_subtype


def from_continue(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    frontmatter, parsed, metadata = read_markdown(content, identity)
    invokable = optional_bool(frontmatter.get("invokable"))
    if subtype is None and invokable and "subtype" not in frontmatter:
        subtype = Subtype.PROMPT

    always_apply = optional_bool(frontmatter.get("alwaysApply"))
    extension = ContinueExtension(
        globs=string_or_list(frontmatter.get("globs")),
        regex=string_or_list(frontmatter.get("regex")),
        always_apply=always_apply,
        version=text_value(frontmatter.get("version")),
        schema=text_value(frontmatter.get("schema")),
        invokable=invokable,
    )
    return assemble_package(
        fmt=Format.CONTINUE,
        subtype=detect_subtype(Format.CONTINUE, frontmatter, subtype),
        identity=identity,
        metadata=metadata,
        sections=parsed.sections,
        name=text_value(frontmatter.get("name")),
        extensions=FormatExtensions(continue_dev=extension),
        globs=string_list(frontmatter.get("globs")),
        always_apply=always_apply,
    )
