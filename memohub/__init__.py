"""MemoHub note export: text, Markdown, print-to-PDF and Word output for notes."""

__version__ = "1.0.0"
