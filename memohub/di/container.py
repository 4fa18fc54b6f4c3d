from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from memohub.domain.interfaces import IArtifactSink, IExporterRegistry, IFileService, IMessageService
from memohub.services.artifact_sink import FileArtifactSink
from memohub.services.config.app_config import AppConfig, build_app_config
from memohub.services.config.export_settings import ExportSettings
from memohub.services.export_service import ExportService
from memohub.services.exporters.base import ExporterRegistryInst
from memohub.services.exporters.markdown_exporter import MarkdownExporter
from memohub.services.exporters.print_exporter import PrintExporter
from memohub.services.exporters.text_exporter import PlainTextExporter
from memohub.services.exporters.word_exporter import WordDocumentGenerator
from memohub.services.file_service import FileService
from memohub.services.messages import LoggingMessageService


class Container:
    """
    Lightweight DI container:
      - Reads config and derives export settings
      - Wires default services if not provided
      - Ensures the built-in exporters (plaintext, markdown, printable) are registered
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        settings: ExportSettings | None = None,
        files: IFileService | None = None,
        sink: IArtifactSink | None = None,
        messages: IMessageService | None = None,
        registry: IExporterRegistry | None = None,
    ) -> None:
        self.config: AppConfig = config or build_app_config()
        self.settings: ExportSettings = settings or ExportSettings.from_config(self.config)
        self.file_service: IFileService = files or FileService()
        self.sink: IArtifactSink = sink or FileArtifactSink(self.settings.output_dir, self.file_service)
        self.messages: IMessageService = messages or LoggingMessageService()
        self.exporter_registry: IExporterRegistry = registry or ExporterRegistryInst()
        self.word = WordDocumentGenerator(
            document_label=self.settings.document_label,
            font_name=self.settings.font_name,
            font_size=self.settings.font_size,
            code_font=self.settings.code_font,
        )

        self._ensure_builtin_exporters()

        self.export_service = ExportService(
            registry=self.exporter_registry,
            sink=self.sink,
            messages=self.messages,
            word=self.word,
        )

    @staticmethod
    def default(*, explicit_ini: Path | None = None, output_dir: Path | None = None) -> Container:
        """Build a container from on-disk config, optionally overriding the output directory."""
        config = build_app_config(explicit_ini=explicit_ini)
        settings = ExportSettings.from_config(config)
        if output_dir is not None:
            settings = replace(settings, output_dir=output_dir)
        return Container(config=config, settings=settings)

    # ---------- Internals ----------

    def _ensure_builtin_exporters(self) -> None:
        builtins = (
            PlainTextExporter(),
            MarkdownExporter(),
            PrintExporter(print_delay_ms=self.settings.print_delay_ms),
        )
        for exporter in builtins:
            try:
                self.exporter_registry.get(exporter.name)
            except KeyError:
                self.exporter_registry.register(exporter)
