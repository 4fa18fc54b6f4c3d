from __future__ import annotations

from memohub.domain.interfaces import IExporter
from memohub.domain.models import ExportContext, ExportOptions, Note
from memohub.parsing.stripper import replace_images
from memohub.services.exporters.metadata import metadata_entries, wants_urls
from memohub.utils.constants import DIVIDER_WIDTH, LABEL_URLS


class PlainTextExporter(IExporter):
    """Line-oriented text export. Markup characters in the body are kept as typed."""

    name = "plaintext"
    label = "テキスト (.txt)"
    file_ext = "txt"
    mime_type = "text/plain;charset=utf-8"

    def render(self, note: Note, options: ExportOptions, context: ExportContext) -> str:
        divider = "-" * DIVIDER_WIDTH
        lines: list[str] = [note.title, "=" * (len(note.title) * 2), ""]

        meta = metadata_entries(note, options, context)
        if meta:
            lines.extend(f"{m.label}: {m.value}" for m in meta)
            lines.extend(["", divider, ""])

        lines.append(replace_images(note.content))

        if wants_urls(note, options):
            lines.extend(["", divider, "", f"{LABEL_URLS}:"])
            for index, info in enumerate(note.urls, start=1):
                lines.append(f"{index}. {info.title or info.url}")
                if info.title:
                    lines.append(f"   {info.url}")

        return "\n".join(lines)
