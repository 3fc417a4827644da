"""Parse OpenCode agent and command markdown."""

from __future__ import annotations

from typing import Any

from prompt_agnostic.canonical.models import (
    CanonicalPackage,
    Format,
    FormatExtensions,
    OpenCodeExtension,
    PackageIdentity,
    Subtype,
)
from prompt_agnostic.inference.frontmatter import split_frontmatter
from prompt_agnostic.parsers.base import (
    assemble_package,
    optional_bool,
    read_markdown,
    string_list,
    text_value,
    tools_section,
)
from prompt_agnostic.taxonomy import detect_subtype

AGENT_MODES = ("subagent", "primary", "all")


def _tool_flags(value: Any) -> dict[str, bool] | None:
    if isinstance(value, dict):
        return {str(key): bool(flag) for key, flag in value.items()}
    tools = string_list(value)
    return {tool: True for tool in tools} if tools else None


def _temperature(value: Any) -> float | None:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def from_opencode(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    frontmatter, parsed, metadata = read_markdown(content, identity)
    flags = _tool_flags(frontmatter.get("tools"))
    permission = frontmatter.get("permission")
    mode = text_value(frontmatter.get("mode"))
    extension = OpenCodeExtension(
        mode=mode if mode in AGENT_MODES else None,
        model=text_value(frontmatter.get("model")),
        temperature=_temperature(frontmatter.get("temperature")),
        permission=permission if isinstance(permission, dict) else None,
        disable=optional_bool(frontmatter.get("disable")),
        tool_flags=flags,
    )
    enabled = [tool for tool, flag in (flags or {}).items() if flag]
    return assemble_package(
        fmt=Format.OPENCODE,
        subtype=detect_subtype(Format.OPENCODE, frontmatter, subtype),
        identity=identity,
        metadata=metadata,
        sections=[*tools_section(enabled), *parsed.sections],
        extensions=FormatExtensions(opencode=extension),
    )


def is_opencode_format(content: str) -> bool:
    return split_frontmatter(content).data.get("mode") in AGENT_MODES
