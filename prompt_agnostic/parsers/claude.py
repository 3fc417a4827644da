"""Parse Claude agents, skills, commands and CLAUDE.md files."""

from __future__ import annotations

import re

from prompt_agnostic.canonical.models import (
    CanonicalPackage,
    ClaudeExtension,
    Format,
    FormatExtensions,
    HookEvent,
    HookLanguage,
    HookSection,
    PackageIdentity,
    Section,
    Subtype,
)
from prompt_agnostic.inference.blocks import Block, extract_code_blocks
from prompt_agnostic.inference.frontmatter import split_frontmatter
from prompt_agnostic.parsers.base import (
    assemble_package,
    read_markdown,
    string_list,
    text_value,
    tools_section,
)
from prompt_agnostic.taxonomy import detect_subtype

_HOOK_TITLE_RE = re.compile(r"^Hook:\s*(\S+)\s*$", re.IGNORECASE)
_TOOL_FIELDS = ("tools", "allowed-tools")
_HOOK_LANGUAGES = {language.value for language in HookLanguage}


def parse_hook_block(block: Block) -> list[Section] | None:
    match = _HOOK_TITLE_RE.match(block.title)
    if not match:
        return None
    try:
        event = HookEvent(match.group(1).lower())
    except ValueError:
        return None
    code_blocks = extract_code_blocks(block.content)
    if not code_blocks:
        return None
    code = code_blocks[0]
    language = code.language.lower() if code.language else ""
    if language in ("sh", "shell"):
        language = HookLanguage.BASH.value
    elif language in ("ts",):
        language = HookLanguage.TYPESCRIPT.value
    elif language in ("js",):
        language = HookLanguage.JAVASCRIPT.value
    elif language in ("py",):
        language = HookLanguage.PYTHON.value
    description = "\n".join(block.content.splitlines()[: code.start]).strip() or None
    return [
        HookSection(
            event=event,
            language=HookLanguage(language) if language in _HOOK_LANGUAGES else HookLanguage.BASH,
            code=code.code,
            description=description,
        )
    ]


def from_claude(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    frontmatter, parsed, metadata = read_markdown(content, identity, handler=parse_hook_block)

    tools_field = next((key for key in _TOOL_FIELDS if key in frontmatter), None)
    tools = string_list(frontmatter.get(tools_field)) if tools_field else ()
    tools_as_list = True if tools_field and isinstance(frontmatter[tools_field], list) else None

    model = text_value(frontmatter.get("model"))
    argument_hint = text_value(frontmatter.get("argument-hint"))
    claude = None
    if model or tools_field or argument_hint:
        claude = ClaudeExtension(
            model=model,
            tools_field=tools_field,
            tools_as_list=tools_as_list,
            argument_hint=argument_hint,
        )

    return assemble_package(
        fmt=Format.CLAUDE,
        subtype=detect_subtype(Format.CLAUDE, frontmatter, subtype),
        identity=identity,
        metadata=metadata,
        sections=[*tools_section(tools), *parsed.sections],
        name=text_value(frontmatter.get("name")),
        extensions=FormatExtensions(claude=claude),
    )


def is_claude_format(content: str) -> bool:
    frontmatter = split_frontmatter(content)
    data = frontmatter.data
    if not frontmatter.present or not ("name" in data or "description" in data):
        return False
    foreign = ("globs", "alwaysApply", "applyTo", "inclusion", "mode", "invokable")
    return not any(key in data for key in foreign)
