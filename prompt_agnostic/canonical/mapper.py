"""Canonical JSON mapping for packages and sections."""

from __future__ import annotations

import json
import re
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from prompt_agnostic.canonical.models import (
    AgentsMdExtension,
    CanonicalContent,
    CanonicalPackage,
    ClaudeExtension,
    ContextSection,
    ContinueExtension,
    CopilotExtension,
    CustomSection,
    DroidExtension,
    Example,
    ExamplesSection,
    Format,
    FormatExtensions,
    HookEvent,
    HookLanguage,
    HookSection,
    InstructionsSection,
    KiroAgentExtension,
    KiroExtension,
    MetadataSection,
    OpenCodeExtension,
    PackageIdentity,
    PackageMetadata,
    PersonaData,
    PersonaSection,
    Priority,
    Rule,
    RulesSection,
    Section,
    Subtype,
    ToolsSection,
    WindsurfExtension,
)
from prompt_agnostic.constants import CANONICAL_FORMAT, CANONICAL_VERSION, DEFAULT_PACKAGE_VERSION
from prompt_agnostic.errors import ParseError
from prompt_agnostic.taxonomy import check_taxonomy

EXTENSION_KEYS: dict[str, tuple[str, type]] = {
    "claude": ("claudeAgent", ClaudeExtension),
    "copilot": ("copilotConfig", CopilotExtension),
    "kiro": ("kiroConfig", KiroExtension),
    "kiro_agent": ("kiroAgent", KiroAgentExtension),
    "opencode": ("opencode", OpenCodeExtension),
    "continue_dev": ("continueConfig", ContinueExtension),
    "droid": ("droid", DroidExtension),
    "agents_md": ("agentsMdConfig", AgentsMdExtension),
    "windsurf": ("windsurfConfig", WindsurfExtension),
}

_CAMEL_RE = re.compile(r"([A-Z])")
_JSON_NAMES: dict[type, str] = {dict: "object", list: "array"}


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def snake_case(name: str) -> str:
    return _CAMEL_RE.sub(r"_\1", name).lower()


def _expect(value: Any, kind: type, what: str) -> Any:
    if not isinstance(value, kind):
        raise ParseError(CANONICAL_FORMAT, f"{what} must be a JSON {_JSON_NAMES[kind]}")
    return value


def _to_json(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value):
        return record_to_dict(value)
    if isinstance(value, frozenset):
        return sorted(value)
    if isinstance(value, (list, tuple)):
        return [_to_json(item) for item in value]
    if isinstance(value, dict):
        return {str(_to_json(key)): _to_json(item) for key, item in value.items()}
    return value


def record_to_dict(record: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for item in fields(record):
        value = getattr(record, item.name)
        if value is None or value == ():
            continue
        payload[camel_case(item.name)] = _to_json(value)
    return payload


def _record_from_dict(cls: type, payload: Any) -> Any:
    if not isinstance(payload, dict):
        raise ParseError(CANONICAL_FORMAT, f"expected an object for {cls.__name__}")
    names = {item.name for item in fields(cls)}
    kwargs: dict[str, Any] = {}
    for key, value in payload.items():
        name = snake_case(key)
        if name in names:
            kwargs[name] = tuple(value) if isinstance(value, list) else value
    return cls(**kwargs)


def section_to_dict(section: Section) -> dict[str, Any]:
    if isinstance(section, MetadataSection):
        return {"type": section.type, "data": record_to_dict(section)}
    return {"type": section.type, **record_to_dict(section)}


def section_from_dict(payload: dict[str, Any]) -> Section:
    kind = _expect(payload, dict, "section").get("type")
    try:
        if kind == "metadata":
            return _record_from_dict(MetadataSection, payload.get("data", {}))
        if kind == "instructions":
            priority = payload.get("priority")
            return InstructionsSection(
                title=payload.get("title", ""),
                content=payload.get("content", ""),
                priority=Priority(priority) if priority else None,
            )
        if kind == "rules":
            items = tuple(_record_from_dict(Rule, item) for item in payload.get("items", []))
            return RulesSection(title=payload.get("title", ""), items=items, ordered=bool(payload.get("ordered", False)))
        if kind == "examples":
            examples = tuple(_record_from_dict(Example, item) for item in payload.get("examples", []))
            return ExamplesSection(title=payload.get("title", ""), examples=examples)
        if kind == "tools":
            return ToolsSection(tools=tuple(payload.get("tools", [])), description=payload.get("description"))
        if kind == "persona":
            return PersonaSection(data=_record_from_dict(PersonaData, payload.get("data", {})))
        if kind == "context":
            return ContextSection(title=payload.get("title", ""), content=payload.get("content", ""))
        if kind == "hook":
            return HookSection(
                event=HookEvent(payload["event"]),
                language=HookLanguage(payload["language"]),
                code=payload.get("code", ""),
                description=payload.get("description"),
            )
        if kind == "custom":
            editor = payload.get("editorType")
            return CustomSection(
                content=payload.get("content", ""),
                editor_type=Format(editor) if editor else None,
                title=payload.get("title"),
                metadata=payload.get("metadata"),
            )
    except (KeyError, TypeError, ValueError) as exc:
        raise ParseError(CANONICAL_FORMAT, f"invalid {kind} section ({exc})") from exc
    raise ParseError(CANONICAL_FORMAT, f"unknown section type '{kind}'")


def metadata_to_dict(metadata: PackageMetadata) -> dict[str, Any]:
    payload = {key: value for key, value in record_to_dict(metadata).items() if key != "extensions"}
    for name, (key, _cls) in EXTENSION_KEYS.items():
        extension = getattr(metadata.extensions, name)
        if extension is not None:
            payload[key] = record_to_dict(extension)
    return payload


def metadata_from_dict(payload: dict[str, Any]) -> PackageMetadata:
    extensions = FormatExtensions(
        **{
            name: _record_from_dict(cls, payload[key])
            for name, (key, cls) in EXTENSION_KEYS.items()
            if key in payload
        }
    )
    always_apply = payload.get("alwaysApply")
    return PackageMetadata(
        title=payload.get("title", ""),
        description=payload.get("description", ""),
        icon=payload.get("icon"),
        version=payload.get("version"),
        author=payload.get("author"),
        globs=tuple(payload.get("globs", [])),
        always_apply=bool(always_apply) if always_apply is not None else None,
        extensions=extensions,
    )


def package_to_dict(pkg: CanonicalPackage) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": pkg.id,
        "version": pkg.version,
        "name": pkg.name,
        "description": pkg.description,
        "author": pkg.author,
        "tags": sorted(pkg.tags),
        "format": pkg.format.value,
        "subtype": pkg.subtype.value,
        "content": {
            "format": pkg.content.format,
            "version": pkg.content.version,
            "sections": [section_to_dict(section) for section in pkg.sections],
        },
        "metadata": metadata_to_dict(pkg.metadata),
    }
    if pkg.source_format is not None:
        payload["sourceFormat"] = pkg.source_format.value
    if pkg.format_scores:
        payload["formatScores"] = {fmt.value: score for fmt, score in pkg.format_scores.items()}
    return payload


def _format_scores(payload: Any) -> dict[Format, int] | None:
    if not payload:
        return None
    _expect(payload, dict, "formatScores")
    try:
        return {Format(key): int(value) for key, value in payload.items()}
    except (TypeError, ValueError) as exc:
        raise ParseError(CANONICAL_FORMAT, f"invalid formatScores ({exc})") from exc


def package_from_dict(
    payload: dict[str, Any], defaults: PackageIdentity | None = None
) -> CanonicalPackage:
    _expect(payload, dict, "package")
    defaults = defaults or PackageIdentity(id="", name="")
    fmt, subtype = check_taxonomy(
        payload.get("format", Format.GENERIC.value),
        payload.get("subtype", Subtype.RULE.value),
    )
    content = _expect(payload.get("content") or {}, dict, "content")
    sections = tuple(
        section_from_dict(item) for item in _expect(content.get("sections", []), list, "content.sections")
    )
    tags = _expect(payload.get("tags") or list(defaults.tags), list, "tags")
    source = payload.get("sourceFormat")
    try:
        source_format = Format(source) if source else None
    except ValueError as exc:
        raise ParseError(CANONICAL_FORMAT, f"unknown sourceFormat '{source}'") from exc
    return CanonicalPackage(
        id=payload.get("id") or defaults.id,
        version=payload.get("version") or defaults.version or DEFAULT_PACKAGE_VERSION,
        name=payload.get("name") or defaults.name,
        description=payload.get("description") or defaults.description or "",
        author=payload.get("author") or defaults.author,
        tags=frozenset(str(tag) for tag in tags),
        format=fmt,
        subtype=subtype,
        content=CanonicalContent(
            sections=sections,
            format=content.get("format", CANONICAL_FORMAT),
            version=content.get("version", CANONICAL_VERSION),
        ),
        metadata=metadata_from_dict(_expect(payload.get("metadata") or {}, dict, "metadata")),
        source_format=source_format,
        format_scores=_format_scores(payload.get("formatScores")),
    )


def dumps_package(pkg: CanonicalPackage, indent: int = 2) -> str:
    return json.dumps(package_to_dict(pkg), indent=indent, ensure_ascii=False)


def loads_package(text: str, defaults: PackageIdentity | None = None) -> CanonicalPackage:
    try:
        payload = json.loads(text)
    except ValueError as exc:
        raise ParseError(CANONICAL_FORMAT, f"invalid JSON ({exc})") from exc
    return package_from_dict(payload, defaults)
