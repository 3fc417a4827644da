"""Frontmatter extraction and YAML/TOML encoding."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

import yaml

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from prompt_agnostic.errors import ParseError

logger = logging.getLogger(__name__)

_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)
_BARE_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass(frozen=True)
class Frontmatter:
    data: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    present: bool = False


def split_frontmatter(text: str) -> Frontmatter:
    """Split a ``---`` delimited YAML block from the markdown body.

    Malformed YAML never raises: it degrades to empty frontmatter and the
    body after the block is kept.
    """
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return Frontmatter(data={}, body=text, present=False)

    body = text[match.end() :]
    try:
        raw = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        logger.warning("Ignoring malformed frontmatter: %s", exc)
        raw = {}
    if not isinstance(raw, dict):
        logger.warning("Ignoring non-mapping frontmatter of type %s", type(raw).__name__)
        raw = {}
    return Frontmatter(data={str(key): value for key, value in raw.items()}, body=body, present=True)


def dump_frontmatter(fm: dict[str, Any], body: str) -> str:
    parts: list[str] = []
    if fm:
        parts.append("---")
        parts.append(yaml.dump(fm, default_flow_style=False, sort_keys=False, allow_unicode=True).rstrip())
        parts.append("---")
        parts.append("")
    parts.append(body)
    return "\n".join(parts)


def load_toml(text: str, fmt: str) -> dict[str, Any]:
    try:
        payload = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ParseError(fmt, f"invalid TOML ({exc})") from exc
    return payload


def _dump_toml_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    if "\n" in value:
        return f'"""\n{escaped}"""'
    return f'"{escaped}"'


def _dump_toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_dump_toml_value(item) for item in value) + "]"
    return _dump_toml_string(str(value))


def dump_toml(payload: dict[str, Any]) -> str:
    """Render a flat mapping of scalars and arrays as TOML."""
    lines: list[str] = []
    for key, value in payload.items():
        if value is None:
            continue
        name = key if _BARE_KEY_RE.match(key) else _dump_toml_string(key)
        lines.append(f"{name} = {_dump_toml_value(value)}")
    return "\n".join(lines) + "\n"
