from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from memohub.domain.models import ExportContext, ExportFormat, ExportOptions, Note, UrlInfo
from memohub.services.exporters.base import ExporterRegistryInst
from memohub.services.exporters.markdown_exporter import MarkdownExporter
from memohub.services.exporters.print_exporter import PrintExporter
from memohub.services.exporters.text_exporter import PlainTextExporter
from memohub.services.file_service import FileService


# --- Fakes for the artifact and message ports ---


class RecordingSink:
    """IArtifactSink fake that keeps everything in memory."""

    def __init__(self, *, print_ok: bool = True) -> None:
        self.saved: list[tuple[str, bytes, str]] = []
        self.printed: list[tuple[str, str]] = []
        self.print_ok = print_ok

    def save_blob(self, file_name: str, data: bytes, mime_type: str) -> Path:
        self.saved.append((file_name, data, mime_type))
        return Path(file_name)

    def open_and_print_html(self, html: str, file_name: str) -> bool:
        self.printed.append((html, file_name))
        return self.print_ok


class RecordingMessages:
    def __init__(self) -> None:
        self.infos: list[tuple[str, str]] = []
        self.warnings: list[tuple[str, str]] = []
        self.errors: list[tuple[str, str]] = []

    def info(self, title: str, text: str) -> None:
        self.infos.append((title, text))

    def warning(self, title: str, text: str) -> None:
        self.warnings.append((title, text))

    def error(self, title: str, text: str) -> None:
        self.errors.append((title, text))


# --- Sample data ---


@pytest.fixture()
def note() -> Note:
    return Note(
        title="Weekly",
        content="Body",
        urls=[UrlInfo("Docs", "https://d.example"), UrlInfo("", "https://x.example")],
        created_at=datetime(2024, 1, 2, 3, 4),
        updated_at=datetime(2024, 2, 3, 4, 5),
        priority=1,
        is_favorite=True,
    )


@pytest.fixture()
def context() -> ExportContext:
    return ExportContext(category_path="Work > Meetings", tag_names=["a", "b"])


@pytest.fixture()
def options() -> ExportOptions:
    # every flag on, so each metadata line is present
    return ExportOptions(format=ExportFormat.PLAINTEXT, file_name="Weekly")


@pytest.fixture()
def no_meta_options() -> ExportOptions:
    return ExportOptions(
        include_category=False,
        include_tags=False,
        include_created_at=False,
        include_updated_at=False,
        include_urls=False,
        file_name="out",
    )


# --- Services ---


@pytest.fixture()
def registry() -> ExporterRegistryInst:
    reg = ExporterRegistryInst()
    for exporter in (PlainTextExporter(), MarkdownExporter(), PrintExporter(print_delay_ms=250)):
        reg.register(exporter)
    return reg


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def messages() -> RecordingMessages:
    return RecordingMessages()


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


@pytest.fixture(autouse=True)
def _isolated_user_config(monkeypatch, tmp_path):
    """Keep the developer's real ~/.config/MemoHub/config.ini out of every test."""
    monkeypatch.setattr(
        "memohub.services.config.ini_config_service.user_config_dir",
        lambda appname: str(tmp_path / "usercfg" / appname),
    )
