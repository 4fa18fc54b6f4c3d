"""Domain layer: interfaces and simple models (dataclasses)."""

from .interfaces import (
    IArtifactSink,
    IExporter,
    IExporterRegistry,
    IFileService,
    IMessageService,
)
from .models import (
    ExportContext,
    ExportFormat,
    ExportOptions,
    Note,
    ResolvedNote,
    Tag,
    UrlInfo,
    WordExportNote,
)

__all__ = [
    "IArtifactSink",
    "IExporter",
    "IExporterRegistry",
    "IFileService",
    "IMessageService",
    "ExportContext",
    "ExportFormat",
    "ExportOptions",
    "Note",
    "ResolvedNote",
    "Tag",
    "UrlInfo",
    "WordExportNote",
]
