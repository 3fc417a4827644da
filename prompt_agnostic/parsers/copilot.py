"""Parse GitHub Copilot instructions, chat modes and prompt files."""

from __future__ import annotations

from prompt_agnostic.canonical.models import (
    CanonicalPackage,
    CopilotExtension,
    Format,
    FormatExtensions,
    PackageIdentity,
    Subtype,
)
from prompt_agnostic.inference.frontmatter import split_frontmatter
from prompt_agnostic.parsers.base import (
    assemble_package,
    read_markdown,
    string_list,
    string_or_list,
    text_value,
    tools_section,
)
from prompt_agnostic.taxonomy import detect_subtype


def from_copilot(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    frontmatter, parsed, metadata = read_markdown(content, identity)
    apply_to = string_or_list(frontmatter.get("applyTo"))
    exclude_agent = text_value(frontmatter.get("excludeAgent"))
    instruction_name = text_value(frontmatter.get("name"))
    copilot = None
    if apply_to is not None or exclude_agent or instruction_name:
        copilot = CopilotExtension(
            instruction_name=instruction_name,
            apply_to=apply_to,
            exclude_agent=exclude_agent,
        )
    return assemble_package(
        fmt=Format.COPILOT,
        subtype=detect_subtype(Format.COPILOT, frontmatter, subtype),
        identity=identity,
        metadata=metadata,
        sections=[*tools_section(string_list(frontmatter.get("tools"))), *parsed.sections],
        extensions=FormatExtensions(copilot=copilot),
    )


def is_copilot_format(content: str) -> bool:
    return "applyTo" in split_frontmatter(content).data
