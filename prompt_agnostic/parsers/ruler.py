"""Parse Ruler rule files with HTML comment headers."""

from __future__ import annotations

import re
from dataclasses import replace

from prompt_agnostic.canonical.models import CanonicalPackage, Format, PackageIdentity, Subtype
from prompt_agnostic.constants import RULER_COMMENT_END_ESCAPE
from prompt_agnostic.inference.sections import parse_body
from prompt_agnostic.parsers.base import assemble_package, synthesize_metadata, text_value
from prompt_agnostic.taxonomy import detect_subtype

_HEADER_RE = re.compile(
    r"\s*<!--\s*(Package|Author|Description):\s*(.*?)\s*-->[ \t]*(?:\n|\Z)",
    re.DOTALL | re.IGNORECASE,
)


def read_comment_header(content: str) -> tuple[dict[str, str], str]:
    """Consume the leading ``<!-- Key: value -->`` lines; the body is left untouched."""
    header: dict[str, str] = {}
    position = 0
    while True:
        match = _HEADER_RE.match(content, position)
        if match is None:
            break
        value = " ".join(match.group(2).split()).replace(RULER_COMMENT_END_ESCAPE, "-->")
        header.setdefault(match.group(1).lower(), value)
        position = match.end()
    return header, content[position:].lstrip("\n")


def from_ruler(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    header, body = read_comment_header(content)
    fields = {"name": header.get("package"), "description": header.get("description")}
    parsed = parse_body(body, description=text_value(fields["description"]))
    metadata = synthesize_metadata(fields, parsed, identity)
    author = text_value(header.get("author"))
    if author and not metadata.author:
        metadata = replace(metadata, author=author)
    return assemble_package(
        fmt=Format.RULER,
        subtype=detect_subtype(Format.RULER, {}, subtype),
        identity=identity,
        metadata=metadata,
        sections=parsed.sections,
    )


def is_ruler_format(content: str) -> bool:
    header, _ = read_comment_header(content)
    return bool(header)
