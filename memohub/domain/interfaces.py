from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Protocol, runtime_checkable

from memohub.domain.models import ExportContext, ExportOptions, Note


class IFileService(Protocol):
    """Writes export artifacts; a failed write leaves no partial file behind."""

    def write_text_atomic(self, path: Path, text: str) -> None: ...
    def write_bytes_atomic(self, path: Path, data: bytes) -> None: ...


@runtime_checkable
class IArtifactSink(Protocol):
    """
    Where finished exports go. The pipeline only ever calls these two operations;
    the platform decides what "saving" and "printing" mean.
    """

    def save_blob(self, file_name: str, data: bytes, mime_type: str) -> Path:
        """Persist a generated file and return where it landed."""
        ...

    def open_and_print_html(self, html: str, file_name: str) -> bool:
        """Open the page in a new browser window. False when the window was blocked."""
        ...


@runtime_checkable
class IMessageService(Protocol):
    """User-visible messages, decoupled from any particular UI."""

    def info(self, title: str, text: str) -> None: ...
    def warning(self, title: str, text: str) -> None: ...
    def error(self, title: str, text: str) -> None: ...


class IConfigService(Protocol):
    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def app_version(self) -> str: ...


class IAppConfig(IConfigService, Protocol):
    def get_version(self) -> str: ...


class IExporter(ABC):
    """Export strategy interface. Implementations turn a note into one output format."""

    name: str  # ExportFormat value, e.g. "plaintext"
    label: str  # e.g. "テキスト (.txt)"
    file_ext: str = ""
    mime_type: str = "text/plain;charset=utf-8"
    opens_print_dialog: bool = False

    @abstractmethod
    def render(self, note: Note, options: ExportOptions, context: ExportContext) -> str:
        """Return the complete document text for this format."""
        raise NotImplementedError


class IExporterRegistry(Protocol):
    def register(self, e: IExporter) -> None: ...
    def get(self, name: str) -> IExporter: ...
    def all(self) -> list[IExporter]: ...
