"""Parse Gemini CLI custom command TOML files."""

from __future__ import annotations

from prompt_agnostic.canonical.models import CanonicalPackage, Format, PackageIdentity, Subtype
from prompt_agnostic.errors import ParseError
from prompt_agnostic.inference.frontmatter import load_toml
from prompt_agnostic.inference.sections import parse_body
from prompt_agnostic.parsers.base import assemble_package, synthesize_metadata, text_value
from prompt_agnostic.taxonomy import detect_subtype


def from_gemini(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    payload = load_toml(content, Format.GEMINI.value)
    prompt = payload.get("prompt")
    if not isinstance(prompt, str) or not prompt.strip():
        raise ParseError(Format.GEMINI.value, "missing required 'prompt' field")

    header = {"description": payload.get("description")}
    parsed = parse_body(prompt, description=text_value(header["description"]))
    return assemble_package(
        fmt=Format.GEMINI,
        subtype=detect_subtype(Format.GEMINI, payload, subtype),
        identity=identity,
        metadata=synthesize_metadata(header, parsed, identity),
        sections=parsed.sections,
    )


def is_gemini_format(content: str) -> bool:
    try:
        payload = load_toml(content, Format.GEMINI.value)
    except ParseError:
        return False
    return isinstance(payload.get("prompt"), str)
