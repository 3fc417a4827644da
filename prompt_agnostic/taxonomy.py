"""Format/subtype legality rules."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

from prompt_agnostic.canonical.models import CanonicalPackage, Format, Subtype
from prompt_agnostic.errors import InvalidTaxonomyError


FORMAT_SUBTYPES: dict[Format, tuple[Subtype, ...]] = {
    Format.CLAUDE: (
        Subtype.RULE,
        Subtype.AGENT,
        Subtype.SKILL,
        Subtype.SLASH_COMMAND,
        Subtype.HOOK,
        Subtype.PROMPT,
    ),
    Format.CURSOR: (Subtype.RULE, Subtype.AGENT, Subtype.SKILL, Subtype.SLASH_COMMAND),
    Format.CONTINUE: (Subtype.RULE, Subtype.PROMPT, Subtype.SLASH_COMMAND),
    Format.WINDSURF: (Subtype.RULE, Subtype.WORKFLOW),
    Format.COPILOT: (Subtype.RULE, Subtype.CHATMODE, Subtype.TOOL, Subtype.PROMPT),
    Format.KIRO: (Subtype.RULE, Subtype.AGENT, Subtype.HOOK),
    Format.AGENTS_MD: (Subtype.RULE, Subtype.AGENT),
    Format.GEMINI: (Subtype.SLASH_COMMAND, Subtype.PROMPT),
    Format.OPENCODE: (Subtype.AGENT, Subtype.SLASH_COMMAND),
    Format.RULER: (Subtype.RULE,),
    Format.DROID: (Subtype.SKILL, Subtype.SLASH_COMMAND, Subtype.HOOK, Subtype.AGENT),
    Format.TRAE: (Subtype.RULE,),
    Format.AIDER: (Subtype.RULE,),
    Format.ZENCODER: (Subtype.RULE,),
    Format.REPLIT: (Subtype.RULE,),
    Format.MCP: (Subtype.TOOL,),
    Format.GENERIC: tuple(Subtype),
}

DEFAULT_SUBTYPES: dict[Format, Subtype] = {
    Format.GEMINI: Subtype.SLASH_COMMAND,
    Format.OPENCODE: Subtype.AGENT,
    Format.DROID: Subtype.SKILL,
    Format.MCP: Subtype.TOOL,
}

_FRONTMATTER_SUBTYPE_KEYS: dict[str, Subtype] = {
    "agentType": Subtype.AGENT,
    "skillType": Subtype.SKILL,
    "commandType": Subtype.SLASH_COMMAND,
}


def legal_subtypes(fmt: Format) -> tuple[Subtype, ...]:
    return FORMAT_SUBTYPES.get(fmt, ())


def is_valid_subtype(fmt: Format | str, subtype: Subtype | str) -> bool:
    try:
        fmt_value = Format(fmt)
        subtype_value = Subtype(subtype)
    except ValueError:
        return False
    return subtype_value in legal_subtypes(fmt_value)


def check_taxonomy(fmt: Format | str, subtype: Subtype | str) -> tuple[Format, Subtype]:
    """Validate a format/subtype pair and return it as enum members."""
    if not is_valid_subtype(fmt, subtype):
        raise InvalidTaxonomyError(
            str(getattr(fmt, "value", fmt)), str(getattr(subtype, "value", subtype))
        )
    return Format(fmt), Subtype(subtype)


def set_taxonomy(
    pkg: CanonicalPackage, fmt: Format | str, subtype: Subtype | str
) -> CanonicalPackage:
    fmt_value, subtype_value = check_taxonomy(fmt, subtype)
    return replace(pkg, format=fmt_value, subtype=subtype_value)


def retarget(
    pkg: CanonicalPackage, fmt: Format | str, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    """Move a package to another format, keeping where it came from."""
    fmt_value = Format(fmt)
    if subtype is None:
        subtype = pkg.subtype if is_valid_subtype(fmt_value, pkg.subtype) else default_subtype(fmt_value)
    retargeted = set_taxonomy(pkg, fmt_value, subtype)
    return replace(retargeted, source_format=pkg.source_format or pkg.format)


def default_subtype(fmt: Format) -> Subtype:
    return DEFAULT_SUBTYPES.get(fmt, Subtype.RULE)


def detect_subtype(
    fmt: Format,
    frontmatter: Mapping[str, Any],
    explicit: Subtype | str | None = None,
) -> Subtype:
    """Pick the subtype for a parsed document.

    An explicit subtype wins, then ``subtype``/``type`` frontmatter values,
    then the ``agentType``/``skillType``/``commandType`` markers, then the
    format default. Values that are not legal for the format are ignored.
    """
    if explicit is not None:
        return check_taxonomy(fmt, explicit)[1]

    for key in ("subtype", "type"):
        value = frontmatter.get(key)
        if isinstance(value, str) and is_valid_subtype(fmt, value):
            return Subtype(value)

    for key, subtype in _FRONTMATTER_SUBTYPE_KEYS.items():
        if frontmatter.get(key) and is_valid_subtype(fmt, subtype):
            return subtype

    return default_subtype(fmt)
