"""Concrete service implementations and export strategies."""

from .artifact_sink import FileArtifactSink
from .export_service import ExportService
from .file_service import FileService
from .messages import LoggingMessageService

__all__ = ["ExportService", "FileArtifactSink", "FileService", "LoggingMessageService"]
