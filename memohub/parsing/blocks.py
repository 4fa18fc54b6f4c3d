"""
Line-oriented block parser for the note editor's Markdown dialect.

Each source line is classified exactly once, in a fixed rule order. The only
state carried between lines is an open code fence and a pending list run.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from memohub.parsing.inline import InlineRun, parse_inline


class ListKind(Enum):
    BULLET = "bullet"
    ORDERED = "ordered"
    CHECKLIST = "checklist"


@dataclass(frozen=True)
class Heading:
    level: int
    runs: list[InlineRun]


@dataclass(frozen=True)
class Paragraph:
    runs: list[InlineRun]


@dataclass(frozen=True)
class Blockquote:
    runs: list[InlineRun]


@dataclass(frozen=True)
class ListItem:
    kind: ListKind
    runs: list[InlineRun]
    checked: bool | None = None
    number: int = 1  # 1-based position inside its contiguous run


@dataclass(frozen=True)
class CodeBlock:
    lines: list[str]
    language: str = ""


@dataclass(frozen=True)
class HorizontalRule:
    pass


@dataclass(frozen=True)
class BlankLine:
    pass


Block = Union[Heading, Paragraph, Blockquote, ListItem, CodeBlock, HorizontalRule, BlankLine]

# Any line opening with three backticks toggles a fence; a leading word is the language tag.
FENCE_RE = re.compile(r"^```([\w+#.-]*)")
_HEADING_PREFIXES = (("#### ", 4), ("### ", 3), ("## ", 2), ("# ", 1))
_CHECKLIST_RE = re.compile(r"^[-*]\s+\[([ xX])\]\s+(.*)$")
_ORDERED_RE = re.compile(r"^\d+\.\s+")
_BULLET_RE = re.compile(r"^[-*+]\s+")
_RULE_RE = re.compile(r"^[-*_]{3,}$")


@dataclass
class _ParserState:
    blocks: list[Block] = field(default_factory=list)
    in_fence: bool = False
    fence_language: str = ""
    code_lines: list[str] = field(default_factory=list)
    list_kind: ListKind | None = None
    list_items: list[tuple[str, bool | None]] = field(default_factory=list)

    def flush_list(self) -> None:
        if self.list_kind is not None:
            for number, (text, checked) in enumerate(self.list_items, start=1):
                self.blocks.append(
                    ListItem(self.list_kind, parse_inline(text), checked=checked, number=number)
                )
        self.list_kind = None
        self.list_items = []

    def push_item(self, kind: ListKind, text: str, checked: bool | None = None) -> None:
        if self.list_kind is not kind:
            self.flush_list()
            self.list_kind = kind
        self.list_items.append((text, checked))

    def flush_code(self) -> None:
        self.blocks.append(CodeBlock(list(self.code_lines), self.fence_language))
        self.code_lines = []
        self.fence_language = ""
        self.in_fence = False


def _heading(line: str) -> tuple[int, str] | None:
    for prefix, level in _HEADING_PREFIXES:
        if line.startswith(prefix):
            return level, line[len(prefix) :]
    return None


def parse_blocks(content: str) -> list[Block]:
    """Classify every line of a note body into block nodes. Never raises."""
    st = _ParserState()

    for raw in content.split("\n"):
        line = raw.rstrip("\r")
        fence = FENCE_RE.match(line)
        if fence:
            if st.in_fence:
                st.flush_code()
            else:
                st.flush_list()
                st.in_fence = True
                st.fence_language = fence.group(1)
            continue

        if st.in_fence:
            st.code_lines.append(line)
            continue

        heading = _heading(line)
        if heading:
            st.flush_list()
            level, text = heading
            st.blocks.append(Heading(level, parse_inline(text)))
            continue

        if line.startswith("> "):
            st.flush_list()
            st.blocks.append(Blockquote(parse_inline(line[2:])))
            continue

        check = _CHECKLIST_RE.match(line)
        if check:
            st.push_item(ListKind.CHECKLIST, check.group(2), checked=check.group(1).lower() == "x")
            continue

        ordered = _ORDERED_RE.match(line)
        if ordered:
            st.push_item(ListKind.ORDERED, line[ordered.end() :])
            continue

        bullet = _BULLET_RE.match(line)
        if bullet:
            st.push_item(ListKind.BULLET, line[bullet.end() :])
            continue

        if _RULE_RE.match(line.strip()):
            st.flush_list()
            st.blocks.append(HorizontalRule())
            continue

        if not line.strip():
            st.flush_list()
            st.blocks.append(BlankLine())
            continue

        st.flush_list()
        st.blocks.append(Paragraph(parse_inline(line)))

    st.flush_list()
    if st.in_fence:
        st.flush_code()
    return st.blocks
