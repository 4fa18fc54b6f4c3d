from __future__ import annotations

from memohub.domain.interfaces import IExporter
from memohub.domain.models import ExportContext, ExportOptions, Note
from memohub.parsing.stripper import replace_images
from memohub.services.exporters.metadata import metadata_entries, wants_urls
from memohub.utils.constants import LABEL_URLS


class MarkdownExporter(IExporter):
    """Normalized Markdown: the body passes through, metadata and links get wrapped around it."""

    name = "markdown"
    label = "Markdown (.md)"
    file_ext = "md"
    mime_type = "text/markdown;charset=utf-8"

    def render(self, note: Note, options: ExportOptions, context: ExportContext) -> str:
        lines: list[str] = [f"# {note.title}", ""]

        meta = metadata_entries(note, options, context, tag_format=lambda t: f"`#{t}`")
        if meta:
            lines.extend(f"**{m.label}**: {m.value}" for m in meta)
            lines.extend(["", "---", ""])

        lines.append(replace_images(note.content))

        if wants_urls(note, options):
            lines.extend(["", "---", "", f"## {LABEL_URLS}", ""])
            lines.extend(f"- [{info.title or info.url}]({info.url})" for info in note.urls)

        return "\n".join(lines)
