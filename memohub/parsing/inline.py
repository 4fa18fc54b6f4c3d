"""
Inline formatting for a single line of note text.

Four span families are scanned independently (link, bold, italic, code). Their
matches are merged by start offset and a match that overlaps one already
accepted is dropped, so on ties the family registered first wins. Link text is
not parsed again: `[**x**](u)` yields one Link whose text is `**x**`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class Bold:
    text: str


@dataclass(frozen=True)
class Italic:
    text: str


@dataclass(frozen=True)
class Code:
    text: str


@dataclass(frozen=True)
class Link:
    text: str
    url: str


InlineRun = Union[PlainText, Bold, Italic, Code, Link]


@dataclass(frozen=True)
class _Span:
    start: int
    end: int
    run: InlineRun

    def overlaps(self, other: _Span) -> bool:
        return self.start < other.end and other.start < self.end


_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*|__([^_]+)__")
_ITALIC_RE = re.compile(r"(?<!\*)\*([^*]+)\*(?!\*)|(?<!_)_([^_]+)_(?!_)")
_CODE_RE = re.compile(r"`([^`]+)`")


def _first_group(m: re.Match[str]) -> str:
    return next(g for g in m.groups() if g is not None)


def _scan_links(text: str) -> list[_Span]:
    return [_Span(m.start(), m.end(), Link(m.group(1), m.group(2))) for m in _LINK_RE.finditer(text)]


def _scan_bold(text: str) -> list[_Span]:
    return [_Span(m.start(), m.end(), Bold(_first_group(m))) for m in _BOLD_RE.finditer(text)]


def _scan_italic(text: str) -> list[_Span]:
    return [_Span(m.start(), m.end(), Italic(_first_group(m))) for m in _ITALIC_RE.finditer(text)]


def _scan_code(text: str) -> list[_Span]:
    return [_Span(m.start(), m.end(), Code(m.group(1))) for m in _CODE_RE.finditer(text)]


# Registration order is the tie-break priority.
_SCANNERS = (_scan_links, _scan_bold, _scan_italic, _scan_code)


def parse_inline(text: str) -> list[InlineRun]:
    """Split one line into styled runs. Never raises; unmatched markers stay literal."""
    candidates: list[_Span] = []
    for scan in _SCANNERS:
        candidates.extend(scan(text))
    # sorted() is stable, so equal offsets keep registration order
    candidates = sorted(candidates, key=lambda s: s.start)

    accepted: list[_Span] = []
    for span in candidates:
        if not any(span.overlaps(kept) for kept in accepted):
            accepted.append(span)

    runs: list[InlineRun] = []
    pos = 0
    for span in accepted:
        if span.start > pos:
            runs.append(PlainText(text[pos : span.start]))
        runs.append(span.run)
        pos = span.end
    if pos < len(text):
        runs.append(PlainText(text[pos:]))

    if not runs:
        runs.append(PlainText(text))
    return runs


def visible_text(runs: list[InlineRun]) -> str:
    return "".join(r.text for r in runs)
