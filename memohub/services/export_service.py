from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from memohub.domain.interfaces import IArtifactSink, IExporter, IExporterRegistry, IMessageService
from memohub.domain.models import ExportContext, ExportOptions, Note, ResolvedNote, WordExportNote
from memohub.services.exporters.word_exporter import WordDocumentGenerator
from memohub.utils.naming import export_base_name

logger = logging.getLogger(__name__)

POPUP_BLOCKED_TITLE = "ポップアップがブロックされました"
POPUP_BLOCKED_TEXT = (
    "印刷用のウィンドウを開けませんでした。"
    "ブラウザのポップアップ設定を確認してから、もう一度お試しください。"
)


class ExportService:
    """
    Entry points for exporting notes.

    `export_note` and `generate_preview` dispatch on `options.format` through
    the exporter registry. Word export has its own entry points because it
    consumes already-resolved notes and can bundle several of them.
    """

    def __init__(
        self,
        *,
        registry: IExporterRegistry,
        sink: IArtifactSink,
        messages: IMessageService,
        word: WordDocumentGenerator | None = None,
    ) -> None:
        self._registry = registry
        self._sink = sink
        self._messages = messages
        self._word = word or WordDocumentGenerator()

    def _exporter_for(self, options: ExportOptions) -> IExporter:
        return self._registry.get(options.format.value)

    @staticmethod
    def _base_name(note: Note, options: ExportOptions) -> str:
        return export_base_name(note.title, options.file_name)

    def export_note(self, note: Note, options: ExportOptions, context: ExportContext) -> bool:
        """
        Render the note and hand it to the sink.

        Returns True once the file save or print window has been initiated. A
        blocked print window is reported to the user and returns False.
        """
        exporter = self._exporter_for(options)
        base = self._base_name(note, options)
        logger.debug("Exporting %r as %s", note.title, exporter.name)
        # the page banner and the saved file must agree on the name
        content = exporter.render(note, replace(options, file_name=base), context)

        if exporter.opens_print_dialog:
            if not self._sink.open_and_print_html(content, base):
                self._messages.error(POPUP_BLOCKED_TITLE, POPUP_BLOCKED_TEXT)
                return False
            return True

        self._sink.save_blob(f"{base}.{exporter.file_ext}", content.encode("utf-8"), exporter.mime_type)
        return True

    def generate_preview(self, note: Note, options: ExportOptions, context: ExportContext) -> str:
        exporter = self._exporter_for(options)
        if exporter.opens_print_dialog:
            return ""
        return exporter.render(note, options, context)

    def export_to_word(self, notes: Sequence[WordExportNote]) -> str:
        """Build one .docx from the notes, save it and return its file name."""
        data = self._word.render_bytes(notes)
        file_name = self._word.file_name_for(notes)
        self._sink.save_blob(file_name, data, self._word.mime_type)
        return file_name

    def export_single_note_to_word(self, note: ResolvedNote) -> str:
        return self.export_to_word([note.to_word_note()])
