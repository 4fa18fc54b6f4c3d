"""Exporter strategies and registry."""

from .base import ExporterRegistryInst
from .markdown_exporter import MarkdownExporter
from .print_exporter import PrintExporter
from .text_exporter import PlainTextExporter
from .word_exporter import WordDocumentGenerator

__all__ = [
    "ExporterRegistryInst",
    "MarkdownExporter",
    "PlainTextExporter",
    "PrintExporter",
    "WordDocumentGenerator",
]
