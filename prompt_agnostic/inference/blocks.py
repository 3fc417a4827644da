"""Heading tokenizer and code-fence extraction."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*?)\s*#*\s*$")
_FENCE_RE = re.compile(r"^\s*(`{3,}|~{3,})\s*([\w+#.-]*)")
_CLOSING_FENCE_RE = re.compile(r"^\s*(`{3,}|~{3,})\s*$")

_ICON_CATEGORIES = {"So", "Sk", "Mn", "Cf", "Me"}


@dataclass(frozen=True)
class Block:
    title: str
    content: str


@dataclass(frozen=True)
class MarkdownDocument:
    title: str | None
    icon: str | None
    preamble: str
    blocks: tuple[Block, ...]


@dataclass(frozen=True)
class CodeBlock:
    code: str
    language: str | None
    start: int
    end: int


def opening_fence(line: str) -> str | None:
    match = _FENCE_RE.match(line)
    return match.group(1) if match else None


def closes_fence(line: str, opener: str) -> bool:
    """A bare run of the opener's character at least as long as the opener."""
    match = _CLOSING_FENCE_RE.match(line)
    if not match:
        return False
    run = match.group(1)
    return run[0] == opener[0] and len(run) >= len(opener)


class _FenceTracker:
    def __init__(self) -> None:
        self.opener: str | None = None

    def feed(self, line: str) -> bool:
        """Return True when ``line`` is a fence or sits inside one."""
        if self.opener is None:
            self.opener = opening_fence(line)
            return self.opener is not None
        if closes_fence(line, self.opener):
            self.opener = None
        return True


def _trim(lines: list[str]) -> str:
    return "\n".join(lines).strip("\n").rstrip()


def split_icon(title: str) -> tuple[str | None, str]:
    """Split a leading emoji token off a heading."""
    head, _, rest = title.strip().partition(" ")
    if not rest or not head:
        return None, title.strip()
    categories = {unicodedata.category(char) for char in head}
    if "So" in categories and categories <= _ICON_CATEGORIES:
        return head, rest.strip()
    return None, title.strip()


def heading(line: str) -> tuple[int, str] | None:
    match = _HEADING_RE.match(line)
    if not match:
        return None
    return len(match.group(1)), match.group(2).strip()


def split_document(body: str, section_level: int = 2) -> MarkdownDocument:
    """Split markdown into an optional title, a preamble and heading blocks.

    The first H1 above the first section heading becomes the title when
    sections are H2. Headings inside fenced code never split blocks.
    """
    title: str | None = None
    icon: str | None = None
    preamble: list[str] = []
    blocks: list[Block] = []
    current_title: str | None = None
    current: list[str] = []
    fences = _FenceTracker()

    for line in body.splitlines():
        if not fences.feed(line):
            parsed = heading(line)
            if parsed is not None:
                level, text = parsed
                if level == section_level:
                    if current_title is not None:
                        blocks.append(Block(title=current_title, content=_trim(current)))
                    current_title, current = text, []
                    continue
                if level < section_level and title is None and current_title is None:
                    icon, title = split_icon(text)
                    continue
        if current_title is None:
            preamble.append(line)
        else:
            current.append(line)

    if current_title is not None:
        blocks.append(Block(title=current_title, content=_trim(current)))
    return MarkdownDocument(title=title, icon=icon, preamble=_trim(preamble), blocks=tuple(blocks))


def split_subblocks(content: str, level: int = 3) -> tuple[str, list[Block]]:
    """Split block content on headings of ``level``; return (intro, blocks)."""
    intro: list[str] = []
    blocks: list[Block] = []
    current_title: str | None = None
    current: list[str] = []
    fences = _FenceTracker()

    for line in content.splitlines():
        if not fences.feed(line):
            parsed = heading(line)
            if parsed is not None and parsed[0] == level:
                if current_title is not None:
                    blocks.append(Block(title=current_title, content=_trim(current)))
                current_title, current = parsed[1], []
                continue
        if current_title is None:
            intro.append(line)
        else:
            current.append(line)

    if current_title is not None:
        blocks.append(Block(title=current_title, content=_trim(current)))
    return _trim(intro), blocks


def split_paragraphs(text: str) -> list[str]:
    paragraphs: list[str] = []
    current: list[str] = []
    for line in text.splitlines():
        if line.strip():
            current.append(line)
        elif current:
            paragraphs.append(_trim(current))
            current = []
    if current:
        paragraphs.append(_trim(current))
    return paragraphs


def extract_code_blocks(text: str) -> list[CodeBlock]:
    blocks: list[CodeBlock] = []
    lines = text.splitlines()
    start: int | None = None
    opener = ""
    language: str | None = None
    body: list[str] = []

    for index, line in enumerate(lines):
        if start is None:
            match = _FENCE_RE.match(line)
            if match:
                start, opener = index, match.group(1)
                language = match.group(2) or None
                body = []
            continue
        if closes_fence(line, opener):
            blocks.append(CodeBlock(code=_dedent_fence(body), language=language, start=start, end=index))
            start = None
            continue
        body.append(line)
    return blocks


def _dedent_fence(lines: list[str]) -> str:
    indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
    width = min(indents) if indents else 0
    return "\n".join(line[width:] for line in lines)


def has_code_fence(text: str) -> bool:
    return bool(extract_code_blocks(text))
