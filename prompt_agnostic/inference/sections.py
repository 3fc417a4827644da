"""Rule, example and persona sub-parsers plus the shared body pipeline."""

from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass, field
from typing import Callable, Optional

from prompt_agnostic.canonical.models import (
    ContextSection,
    Example,
    ExamplesSection,
    InstructionsSection,
    PersonaData,
    PersonaSection,
    Priority,
    Rule,
    RulesSection,
    Section,
)
from prompt_agnostic.constants import OVERVIEW_TITLE
from prompt_agnostic.inference.blocks import (
    Block,
    closes_fence,
    extract_code_blocks,
    opening_fence,
    split_document,
    split_subblocks,
)
from prompt_agnostic.inference.classifier import (
    BOLD_LABEL_RE,
    LIST_ITEM_RE,
    BlockKind,
    classify_block,
    looks_like_persona,
)

_RATIONALE_RE = re.compile(r"^[*_]*(?:rationale|why)\s*:[*_]*\s*(.*?)[*_]*$", re.IGNORECASE)
_EXAMPLE_LINE_RE = re.compile(r"^[*_]*examples?\s*:[*_]*\s*(.*)$", re.IGNORECASE)
_ITALIC_RE = re.compile(r"^([*_])(?!\1)(.+?)\1$")
_SUB_BULLET_RE = re.compile(r"^[-*+]\s+")
_INLINE_CODE_RE = re.compile(r"^`+(.+?)`+$")
_IMPORTANT_RE = re.compile(r"\A\*\*(?:important|critical)\s*:?\*\*\s*:?\s*", re.IGNORECASE)
_PARAGRAPH_BREAK_RE = re.compile(r"\n[ \t]*\n")

_GOOD_SYMBOL_RE = re.compile(r"^(?:✓|✅|✔️|✔)\s*")
_BAD_SYMBOL_RE = re.compile(r"^(?:❌|✗|✘|🚫)\s*")
_GOOD_LABEL_RE = re.compile(
    r"^(?:good|correct|preferred|do)(?:\s+example)?\s*(?::|-|$)\s*", re.IGNORECASE
)
_BAD_LABEL_RE = re.compile(
    r"^(?:bad|incorrect|wrong|avoid|don't|dont)(?:\s+example)?\s*(?::|-|$)\s*",
    re.IGNORECASE,
)
_EXAMPLE_MARKER_LINE_RE = re.compile(r"^[*_](good|bad) example[*_]$", re.IGNORECASE)

# A period only ends the sentence when followed by whitespace or the line end.
_INNER_DOT = r"\.(?!\s|$)"
_YOU_ARE_RE = re.compile(
    rf"You are ((?:[^,.\n]|{_INNER_DOT})+)(?:,\s*((?:[^.\n]|{_INNER_DOT})+))?\.?"
)
_ROLE_IS_RE = re.compile(rf"Your role is ((?:[^.\n]|{_INNER_DOT})+)\.?")
_RENDERED_PERSONA_RE = re.compile(r"^(?:(\S+)\s+)?\*\*([^*]+)\*\*\s+-\s+(.+)$")
_STYLE_RE = re.compile(
    r"^(?:Your communication style is|\*\*Style:?\*\*:?)\s*(.+?)\.?$", re.IGNORECASE
)
_EXPERTISE_RE = re.compile(r"expertise|areas of", re.IGNORECASE)
_ARTICLE_RE = re.compile(r"^(?:a|an|the)\s", re.IGNORECASE)
_LIST_SPLIT_RE = re.compile(r",\s*(?:and\s+)?|\s+and\s+")


@dataclass
class _RuleDraft:
    content: str
    rationale: Optional[str] = None
    examples: list[str] = field(default_factory=list)

    def freeze(self) -> Rule:
        return Rule(content=self.content, rationale=self.rationale, examples=tuple(self.examples))


def _unquote_code(value: str) -> str:
    match = _INLINE_CODE_RE.match(value.strip())
    return match.group(1) if match else value.strip()


def parse_rules(content: str) -> Optional[tuple[tuple[Rule, ...], bool]]:
    """Parse list items into rules; return None when nothing is found."""
    drafts: list[_RuleDraft] = []
    ordered: Optional[bool] = None
    current: Optional[_RuleDraft] = None
    previous_blank = True
    fence: Optional[list[str]] = None
    opener = ""

    for raw in content.splitlines():
        text = raw.strip()
        if fence is not None:
            if closes_fence(text, opener):
                if current is not None:
                    current.examples.append(textwrap.dedent("\n".join(fence)).strip("\n"))
                fence = None
            else:
                fence.append(raw)
            continue
        if not text:
            previous_blank = True
            continue

        if not raw[0].isspace():
            item = LIST_ITEM_RE.match(text)
            if item:
                if ordered is None:
                    ordered = text[0].isdigit()
                current = _RuleDraft(content=item.group(1).strip())
                drafts.append(current)
            elif BOLD_LABEL_RE.match(text) or current is None or previous_blank:
                current = _RuleDraft(content=text)
                drafts.append(current)
            else:
                current.content = f"{current.content} {text}"
            previous_blank = False
            continue

        sub = _SUB_BULLET_RE.sub("", text, count=1)
        previous_blank = False
        if current is None:
            current = _RuleDraft(content=sub)
            drafts.append(current)
            continue

        rationale = _RATIONALE_RE.match(sub)
        example = _EXAMPLE_LINE_RE.match(sub)
        italic = _ITALIC_RE.match(sub)
        fence_opener = opening_fence(sub)
        if rationale:
            current.rationale = rationale.group(1).strip()
        elif example:
            value = example.group(1).strip()
            if value:
                current.examples.append(_unquote_code(value))
        elif fence_opener:
            fence, opener = [], fence_opener
        elif italic:
            current.rationale = italic.group(2).strip()
        else:
            current.content = f"{current.content} {sub}"

    if not drafts:
        return None
    return tuple(draft.freeze() for draft in drafts), bool(ordered)


def classify_example_title(title: str) -> tuple[Optional[bool], str]:
    """Return (good, description) for an example heading."""
    text = title.strip()
    good: Optional[bool] = None
    if _GOOD_SYMBOL_RE.match(text):
        good, text = True, _GOOD_SYMBOL_RE.sub("", text, count=1)
    elif _BAD_SYMBOL_RE.match(text):
        good, text = False, _BAD_SYMBOL_RE.sub("", text, count=1)

    if _BAD_LABEL_RE.match(text):
        good = False if good is None else good
        text = _BAD_LABEL_RE.sub("", text, count=1)
    elif _GOOD_LABEL_RE.match(text):
        good = True if good is None else good
        text = _GOOD_LABEL_RE.sub("", text, count=1)
    return good, text.strip() or title.strip()


def _examples_from_text(text: str) -> list[Example]:
    examples: list[Example] = []
    lines = text.splitlines()
    cursor = 0
    for block in extract_code_blocks(text):
        prose = [line.strip() for line in lines[cursor : block.start]]
        paragraphs = [part for part in "\n".join(prose).split("\n\n") if part.strip()]
        label = paragraphs[-1].replace("\n", " ").strip().rstrip(":") if paragraphs else "Example"
        good, description = classify_example_title(label)
        examples.append(Example(description=description, code=block.code, language=block.language, good=good))
        cursor = block.end + 1
    return examples


def parse_examples(content: str) -> Optional[tuple[Example, ...]]:
    """Parse ``###`` sub-blocks or bare fences into examples."""
    intro, blocks = split_subblocks(content, level=3)
    examples = _examples_from_text(intro)
    for block in blocks:
        good, description = classify_example_title(block.title)
        for line in block.content.splitlines():
            marker = _EXAMPLE_MARKER_LINE_RE.match(line.strip())
            if marker and good is None:
                good = marker.group(1).lower() == "good"
        code_blocks = extract_code_blocks(block.content)
        if code_blocks:
            first = code_blocks[0]
            examples.append(Example(description=description, code=first.code, language=first.language, good=good))
        else:
            examples.append(Example(description=description, code="", good=good))
    if not examples:
        return None
    return tuple(examples)


def _split_list(value: str) -> tuple[str, ...]:
    return tuple(item.strip().rstrip(".") for item in _LIST_SPLIT_RE.split(value) if item.strip())


def parse_persona(text: str) -> tuple[PersonaData, str]:
    """Parse persona prose; return the persona and any unconsumed text."""
    name: Optional[str] = None
    role = ""
    icon: Optional[str] = None
    style: tuple[str, ...] = ()
    expertise: list[str] = []
    residual: list[str] = []
    in_expertise = False
    found_identity = False

    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            in_expertise = False if expertise else in_expertise
            continue

        item = LIST_ITEM_RE.match(line)
        if in_expertise and item:
            expertise.append(item.group(1).strip())
            continue
        in_expertise = False

        if not found_identity:
            rendered = _RENDERED_PERSONA_RE.match(line)
            you_are = _YOU_ARE_RE.search(line)
            role_is = _ROLE_IS_RE.search(line)
            if rendered:
                icon, name, role = rendered.group(1), rendered.group(2).strip(), rendered.group(3).strip()
                found_identity = True
                continue
            if you_are:
                first, second = you_are.group(1).strip(), you_are.group(2)
                if second and not _ARTICLE_RE.match(first):
                    name, role = first, second.strip()
                else:
                    role = you_are.group(0)[len("You are ") :].strip().rstrip(".")
                found_identity = True
                remainder = (line[: you_are.start()] + line[you_are.end() :]).strip()
                if remainder:
                    residual.append(remainder)
                continue
            if role_is:
                role = role_is.group(1).strip()
                found_identity = True
                remainder = (line[: role_is.start()] + line[role_is.end() :]).strip()
                if remainder:
                    residual.append(remainder)
                continue

        style_match = _STYLE_RE.match(line)
        if style_match and not style:
            style = _split_list(style_match.group(1))
            continue
        if _EXPERTISE_RE.search(line) and not expertise:
            in_expertise = True
            continue
        residual.append(raw)

    persona = PersonaData(role=role, name=name, icon=icon, style=style, expertise=tuple(expertise))
    return persona, "\n".join(residual).strip()


def instructions_section(title: str, content: str) -> InstructionsSection:
    priority: Optional[Priority] = None
    match = _IMPORTANT_RE.match(content)
    if match:
        priority = Priority.HIGH
        content = content[match.end() :].lstrip()
    return InstructionsSection(title=title, content=content, priority=priority)


def persona_sections(text: str, residual_title: str = OVERVIEW_TITLE) -> list[Section]:
    persona, residual = parse_persona(text)
    sections: list[Section] = [PersonaSection(data=persona)]
    if residual:
        sections.append(instructions_section(residual_title, residual))
    return sections


def block_sections(block: Block) -> list[Section]:
    """Turn one heading block into sections using the shared classifier."""
    kind = classify_block(block.title, block.content)
    if kind is BlockKind.PERSONA:
        return persona_sections(block.content, residual_title=block.title)
    if kind is BlockKind.RULES:
        parsed = parse_rules(block.content)
        if parsed is not None:
            items, ordered = parsed
            return [RulesSection(title=block.title, items=items, ordered=ordered)]
    elif kind is BlockKind.EXAMPLES:
        examples = parse_examples(block.content)
        if examples is not None:
            return [ExamplesSection(title=block.title, examples=examples)]
    elif kind is BlockKind.CONTEXT:
        return [ContextSection(title=block.title, content=block.content)]
    return [instructions_section(block.title, block.content)]


BlockHandler = Callable[[Block], Optional[list[Section]]]


@dataclass(frozen=True)
class ParsedBody:
    title: Optional[str]
    icon: Optional[str]
    description: Optional[str]
    sections: tuple[Section, ...]


def _take_description(preamble: str) -> tuple[Optional[str], str]:
    parts = _PARAGRAPH_BREAK_RE.split(preamble, maxsplit=1)
    first = parts[0].strip()
    if not first or looks_like_persona(first) or LIST_ITEM_RE.match(first):
        return None, preamble
    if first.startswith(("```", "~~~", "#", "<!--")):
        return None, preamble
    description = " ".join(line.strip() for line in first.splitlines())
    rest = parts[1].strip("\n") if len(parts) > 1 else ""
    return description, rest


def parse_body(
    body: str,
    *,
    description: Optional[str] = None,
    handler: Optional[BlockHandler] = None,
) -> ParsedBody:
    """Run the shared markdown pipeline over a document body.

    The first paragraph under the H1 becomes the description unless one is
    already known, in which case a paragraph repeating it is dropped.
    Remaining preamble text becomes a persona (for "You are ..." prose) or an
    ``Overview`` instructions section. Each H2 block is offered to
    ``handler`` first and then to the classifier.
    """
    document = split_document(body)
    preamble = document.preamble
    if document.title is not None and preamble:
        taken, rest = _take_description(preamble)
        if description is None:
            description, preamble = taken, rest
        elif taken is not None and taken.split() == description.split():
            preamble = rest

    sections: list[Section] = []
    if preamble.strip():
        if looks_like_persona(preamble):
            sections.extend(persona_sections(preamble))
        else:
            sections.append(instructions_section(OVERVIEW_TITLE, preamble.strip()))

    for block in document.blocks:
        handled = handler(block) if handler is not None else None
        sections.extend(handled if handled is not None else block_sections(block))

    return ParsedBody(
        title=document.title,
        icon=document.icon,
        description=description,
        sections=tuple(sections),
    )
