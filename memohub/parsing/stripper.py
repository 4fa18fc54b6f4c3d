"""Markdown-to-plain-text stripping used by the printable export."""

from __future__ import annotations

import re

from memohub.parsing.blocks import FENCE_RE
from memohub.utils.constants import IMAGE_PLACEHOLDER

_HEADING_RE = re.compile(r"^#{1,6}\s+")
_BULLET_RE = re.compile(r"^[-*+]\s+")
_QUOTE_RE = re.compile(r"^>\s+")

IMAGE_RE = re.compile(r"!\[([^\]]*)\]\([^)]+\)")
# Code spans and links are lifted out whole so emphasis stripping never touches
# code text or URLs.
_LITERAL_RE = re.compile(r"`([^`]+)`|\[([^\]]+)\]\(([^)]+)\)")
_EMPHASIS = (
    re.compile(r"\*\*(.+?)\*\*"),
    re.compile(r"\*(.+?)\*"),
    re.compile(r"__(.+?)__"),
    re.compile(r"_(.+?)_"),
)


def replace_images(text: str) -> str:
    """Swap every `![alt](url)` for the image placeholder; the URL is dropped."""
    return IMAGE_RE.sub(IMAGE_PLACEHOLDER, text)


def _strip_emphasis(text: str) -> str:
    for pattern in _EMPHASIS:
        text = pattern.sub(r"\1", text)
    return text


def _strip_line(line: str) -> str:
    line = _HEADING_RE.sub("", line)
    line = _BULLET_RE.sub("• ", line)
    line = _QUOTE_RE.sub("｜ ", line)
    # Images before links, otherwise the link pattern eats the `[alt](url)` part
    line = replace_images(line)

    out: list[str] = []
    pos = 0
    for m in _LITERAL_RE.finditer(line):
        out.append(_strip_emphasis(line[pos : m.start()]))
        code, text, url = m.groups()
        out.append(code if code is not None else f"{_strip_emphasis(text)} ({url})")
        pos = m.end()
    out.append(_strip_emphasis(line[pos:]))
    return "".join(out)


def strip_markdown(content: str) -> str:
    """
    Flatten the editor's Markdown into readable plain text.

    Not the block parser: headings lose their markers, bullets become `•`,
    quotes become `｜`, links read `text (url)`, emphasis and code markers are
    removed and fenced code is kept verbatim without its fences.
    """
    out: list[str] = []
    in_fence = False
    for raw in content.split("\n"):
        line = raw.rstrip("\r")
        if FENCE_RE.match(line):
            in_fence = not in_fence
            continue
        out.append(line if in_fence else _strip_line(line))
    return "\n".join(out).strip("\n")
