"""Read canonical JSON back into a package."""

from __future__ import annotations

import json

from prompt_agnostic.canonical.mapper import loads_package
from prompt_agnostic.canonical.models import CanonicalPackage, PackageIdentity, Subtype
from prompt_agnostic.constants import CANONICAL_FORMAT
from prompt_agnostic.taxonomy import set_taxonomy


def from_generic(
    content: str, identity: PackageIdentity, subtype: Subtype | str | None = None
) -> CanonicalPackage:
    pkg = loads_package(content, defaults=identity)
    if subtype is not None:
        pkg = set_taxonomy(pkg, pkg.format, subtype)
    return pkg


def is_canonical_format(content: str) -> bool:
    try:
        payload = json.loads(content)
    except ValueError:
        return False
    if not isinstance(payload, dict):
        return False
    body = payload.get("content")
    return isinstance(body, dict) and body.get("format") == CANONICAL_FORMAT
