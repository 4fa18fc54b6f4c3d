"""Parsing for the note editor's Markdown subset: inline runs, blocks, plain-text stripping."""

from .blocks import (
    BlankLine,
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    HorizontalRule,
    ListItem,
    ListKind,
    Paragraph,
    parse_blocks,
)
from .inline import Bold, Code, InlineRun, Italic, Link, PlainText, parse_inline, visible_text
from .stripper import replace_images, strip_markdown

__all__ = [
    "BlankLine",
    "Block",
    "Blockquote",
    "Bold",
    "Code",
    "CodeBlock",
    "Heading",
    "HorizontalRule",
    "InlineRun",
    "Italic",
    "Link",
    "ListItem",
    "ListKind",
    "Paragraph",
    "PlainText",
    "parse_blocks",
    "parse_inline",
    "replace_images",
    "strip_markdown",
    "visible_text",
]
