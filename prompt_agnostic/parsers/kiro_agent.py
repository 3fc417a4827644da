"""Parse Kiro custom agent JSON configurations."""

from __future__ import annotations

import json
from typing import Any

from prompt_agnostic.canonical.models import (
    CanonicalPackage,
    Format,
    FormatExtensions,
    InstructionsSection,
    KiroAgentExtension,
    PackageIdentity,
    Section,
    Subtype,
)
from prompt_agnostic.errors import ParseError
from prompt_agnostic.inference.sections import parse_body
from prompt_agnostic.parsers.base import (
    assemble_package,
    string_list,
    synthesize_metadata,
    text_value,
    tools_section,
)
from prompt_agnostic.taxonomy import detect_subtype

FILE_PROMPT_PREFIX = "file://"
_AGENT_KEYS = ("prompt", "tools", "mcpServers")


def _load(content: str) -> dict[str, Any] | None:
    try:
        payload = json.loads(content)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def is_kiro_agent_format(content: str) -> bool:
    payload = _load(content)
    if payload is None:
        return False
    has_identity = "name" in payload or "description" in payload
    return has_identity and any(key in payload for key in _AGENT_KEYS)


def _optional_tuple(value: Any) -> tuple[str, ...] | None:
    return string_list(value) if isinstance(value, list) else None


def _optional_dict(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def from_kiro_agent(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    try:
        payload = json.loads(content)
    except ValueError as exc:
        raise ParseError("kiro-agent", f"invalid JSON ({exc})") from exc
    if not isinstance(payload, dict):
        raise ParseError("kiro-agent", "agent configuration must be a JSON object")

    prompt = payload.get("prompt")
    prompt = prompt if isinstance(prompt, str) else ""
    prompt_file: str | None = None
    sections: list[Section] = []
    header = {
        "name": payload.get("name"),
        "description": payload.get("description"),
    }
    if prompt.startswith(FILE_PROMPT_PREFIX):
        prompt_file = prompt
        parsed = parse_body("")
        sections.append(
            InstructionsSection(
                title="Instructions",
                content=f"Loads instructions from: {prompt[len(FILE_PROMPT_PREFIX):]}",
            )
        )
    else:
        parsed = parse_body(prompt, description=text_value(header["description"]))
        sections.extend(parsed.sections)

    extension = KiroAgentExtension(
        tools=_optional_tuple(payload.get("tools")),
        mcp_servers=_optional_dict(payload.get("mcpServers")),
        tool_aliases=_optional_dict(payload.get("toolAliases")),
        allowed_tools=_optional_tuple(payload.get("allowedTools")),
        tools_settings=_optional_dict(payload.get("toolsSettings")),
        resources=_optional_tuple(payload.get("resources")),
        hooks=_optional_dict(payload.get("hooks")),
        use_legacy_mcp_json=payload.get("useLegacyMcpJson"),
        model=text_value(payload.get("model")),
        prompt_file=prompt_file,
    )
    metadata = synthesize_metadata(header, parsed, identity)
    return assemble_package(
        fmt=Format.KIRO,
        subtype=detect_subtype(Format.KIRO, {}, subtype or Subtype.AGENT),
        identity=identity,
        metadata=metadata,
        sections=[*tools_section(extension.tools or ()), *sections],
        name=text_value(header["name"]),
        extensions=FormatExtensions(kiro_agent=extension),
    )
