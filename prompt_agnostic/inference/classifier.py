"""Best-effort section-type classifier for untyped markdown blocks.

Priority order, first match wins:

0. A block titled exactly ``Role`` or ``Persona`` whose body reads like a
   rendered persona is ``persona``.
1. Title keywords: ``rule|guideline|principle|convention`` -> rules,
   ``example|sample`` -> examples, ``context|background`` -> context.
2. Content shape: a fenced code block -> examples; a bulleted/numbered list
   or leading ``**Label**:`` lines -> rules.
3. Everything else -> instructions.
"""

from __future__ import annotations

import logging
import re
from enum import Enum

from prompt_agnostic.constants import (
    CONTEXT_TITLE_KEYWORDS,
    EXAMPLE_TITLE_KEYWORDS,
    PERSONA_TITLES,
    RULE_TITLE_KEYWORDS,
)
from prompt_agnostic.inference.blocks import has_code_fence

logger = logging.getLogger(__name__)

LIST_ITEM_RE = re.compile(r"^(?:[-*+]|\d+[.)])\s+(.*)$")
BOLD_LABEL_RE = re.compile(r"^\*\*[^*]+\*\*\s*:")
_RENDERED_PERSONA_RE = re.compile(r"^\s*(?:\S+\s+)?\*\*[^*]+\*\*\s+-\s+\S", re.MULTILINE)


class BlockKind(str, Enum):
    PERSONA = "persona"
    RULES = "rules"
    EXAMPLES = "examples"
    CONTEXT = "context"
    INSTRUCTIONS = "instructions"


def looks_like_persona(text: str) -> bool:
    stripped = text.lstrip()
    return stripped.startswith("You are ") or "Your role is" in stripped


def _title_has(title: str, keywords: tuple[str, ...]) -> bool:
    lowered = title.lower()
    return any(keyword in lowered for keyword in keywords)


def is_rule_list(content: str) -> bool:
    lines = [line for line in content.splitlines() if line.strip()]
    if not lines:
        return False
    top_level = [line for line in lines if not line[0].isspace()]
    if not top_level:
        return False
    return all(LIST_ITEM_RE.match(line) or BOLD_LABEL_RE.match(line) for line in top_level)


def classify_block(title: str, content: str) -> BlockKind:
    kind = _classify(title, content)
    logger.debug("Classified block %r as %s", title, kind.value)
    return kind


def _classify(title: str, content: str) -> BlockKind:
    if title.strip().lower() in PERSONA_TITLES and (
        looks_like_persona(content) or _RENDERED_PERSONA_RE.search(content)
    ):
        return BlockKind.PERSONA

    if _title_has(title, RULE_TITLE_KEYWORDS):
        return BlockKind.RULES
    if _title_has(title, EXAMPLE_TITLE_KEYWORDS):
        return BlockKind.EXAMPLES
    if _title_has(title, CONTEXT_TITLE_KEYWORDS):
        return BlockKind.CONTEXT

    if has_code_fence(content):
        return BlockKind.EXAMPLES
    if is_rule_list(content):
        return BlockKind.RULES
    return BlockKind.INSTRUCTIONS
