"""Format parser registry and format detection."""

from __future__ import annotations

from prompt_agnostic.canonical.models import CanonicalPackage, Format, PackageIdentity, Subtype
from prompt_agnostic.errors import UnsupportedFormatError
from prompt_agnostic.parsers.agents_md import from_agents_md, from_zencoder
from prompt_agnostic.parsers.base import Parser
from prompt_agnostic.parsers.claude import from_claude, is_claude_format
from prompt_agnostic.parsers.continue_dev import from_continue
from prompt_agnostic.parsers.copilot import from_copilot, is_copilot_format
from prompt_agnostic.parsers.cursor import from_cursor, is_cursor_format
from prompt_agnostic.parsers.droid import from_droid
from prompt_agnostic.parsers.gemini import from_gemini, is_gemini_format
from prompt_agnostic.parsers.generic import from_generic, is_canonical_format
from prompt_agnostic.parsers.headless import from_aider, from_replit, from_trae, from_windsurf
from prompt_agnostic.parsers.kiro import from_kiro, is_kiro_format
from prompt_agnostic.parsers.kiro_agent import from_kiro_agent, is_kiro_agent_format
from prompt_agnostic.parsers.opencode import from_opencode, is_opencode_format
from prompt_agnostic.parsers.ruler import from_ruler, is_ruler_format


PARSERS: dict[Format, Parser] = {
    Format.CLAUDE: from_claude,
    Format.CURSOR: from_cursor,
    Format.CONTINUE: from_continue,
    Format.WINDSURF: from_windsurf,
    Format.COPILOT: from_copilot,
    Format.KIRO: from_kiro,
    Format.AGENTS_MD: from_agents_md,
    Format.GEMINI: from_gemini,
    Format.OPENCODE: from_opencode,
    Format.RULER: from_ruler,
    Format.DROID: from_droid,
    Format.TRAE: from_trae,
    Format.AIDER: from_aider,
    Format.ZENCODER: from_zencoder,
    Format.REPLIT: from_replit,
    Format.GENERIC: from_generic,
}


def get_parser(fmt: Format | str) -> Parser:
    try:
        return PARSERS[Format(fmt)]
    except (KeyError, ValueError):
        raise UnsupportedFormatError(str(getattr(fmt, "value", fmt)), "parser") from None


def parse(
    content: str,
    fmt: Format | str,
    identity: PackageIdentity,
    subtype: Subtype | str | None = None,
) -> CanonicalPackage:
    """Parse ``content`` written for ``fmt`` into a canonical package."""
    parser = get_parser(fmt)
    if parser is from_kiro and is_kiro_agent_format(content):
        parser = from_kiro_agent
    return parser(content, identity, subtype)


def detect_format(content: str) -> Format:
    """Guess the source format of ``content``; markdown falls back to agents.md."""
    if is_kiro_agent_format(content):
        return Format.KIRO
    if is_canonical_format(content):
        return Format.GENERIC
    if is_gemini_format(content):
        return Format.GEMINI
    if is_ruler_format(content):
        return Format.RULER
    if is_copilot_format(content):
        return Format.COPILOT
    if is_kiro_format(content):
        return Format.KIRO
    if is_opencode_format(content):
        return Format.OPENCODE
    if is_cursor_format(content):
        return Format.CURSOR
    if is_claude_format(content):
        return Format.CLAUDE
    return Format.AGENTS_MD


__all__ = [
    "PARSERS",
    "detect_format",
    "from_agents_md",
    "from_aider",
    "from_claude",
    "from_continue",
    "from_copilot",
    "from_cursor",
    "from_droid",
    "from_gemini",
    "from_generic",
    "from_kiro",
    "from_kiro_agent",
    "from_opencode",
    "from_replit",
    "from_ruler",
    "from_trae",
    "from_windsurf",
    "from_zencoder",
    "get_parser",
    "is_kiro_agent_format",
    "parse",
]
