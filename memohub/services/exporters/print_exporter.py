from __future__ import annotations

from html import escape

from memohub.domain.interfaces import IExporter
from memohub.domain.models import ExportContext, ExportOptions, Note
from memohub.parsing.stripper import strip_markdown
from memohub.services.exporters.metadata import metadata_entries, wants_urls
from memohub.utils.constants import CSS_PRINT, DEFAULT_PRINT_DELAY_MS, HTML_TEMPLATE, LABEL_URLS
from memohub.utils.naming import export_base_name


def _esc(text: str) -> str:
    return escape(text, quote=True)


class PrintExporter(IExporter):
    """
    Builds a standalone HTML page meant for the browser's print-to-PDF dialog.

    Every user-supplied string goes through html.escape before it is placed in
    the page. The embedded script waits `print_delay_ms` before calling
    window.print() so the new window has laid the page out.
    """

    name = "printable"
    label = "PDF (印刷)"
    file_ext = "html"
    mime_type = "text/html;charset=utf-8"
    opens_print_dialog = True

    def __init__(self, print_delay_ms: int = DEFAULT_PRINT_DELAY_MS) -> None:
        self._print_delay_ms = print_delay_ms

    def render(self, note: Note, options: ExportOptions, context: ExportContext) -> str:
        parts: list[str] = [
            self._instructions(export_base_name(note.title, options.file_name)),
            f"<h1>{_esc(note.title)}</h1>",
        ]

        meta = metadata_entries(note, options, context)
        if meta:
            rows = "".join(f"<p>{_esc(m.label)}: {_esc(m.value)}</p>" for m in meta)
            parts.append(f'<div class="meta">{rows}</div>')

        parts.append("<hr />")
        body = _esc(strip_markdown(note.content)).replace("\n", "<br>\n")
        parts.append(f'<div class="content">{body}</div>')

        if wants_urls(note, options):
            items = "".join(
                f'<li><a href="{_esc(u.url)}" target="_blank" rel="noopener noreferrer">'
                f"{_esc(u.title or u.url)}</a></li>"
                for u in note.urls
            )
            parts.append(f'<hr /><div class="urls"><h2>{LABEL_URLS}</h2><ul>{items}</ul></div>')

        parts.append(
            "<script>window.addEventListener('load', function () {"
            f" setTimeout(function () {{ window.print(); }}, {int(self._print_delay_ms)});"
            " });</script>"
        )
        return HTML_TEMPLATE.format(title=_esc(note.title), css=CSS_PRINT, body="\n".join(parts))

    @staticmethod
    def _instructions(file_name: str) -> str:
        target = _esc(f"{file_name}.pdf")
        return (
            '<div class="instructions" id="instructions">'
            '<button type="button" aria-label="閉じる" '
            "onclick=\"document.getElementById('instructions').remove()\">×</button>"
            "<strong>PDFとして保存する方法</strong>"
            "<p>印刷ダイアログが開いたら、送信先で「PDFとして保存」を選び、"
            f"ファイル名を <code>{target}</code> にして保存してください。</p>"
            "<p>この案内は印刷には含まれません。</p>"
            "</div>"
        )
