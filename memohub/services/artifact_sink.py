from __future__ import annotations

import logging
import tempfile
import webbrowser
from collections.abc import Callable
from pathlib import Path

from memohub.domain.interfaces import IArtifactSink, IFileService

logger = logging.getLogger(__name__)

Opener = Callable[..., bool]


class FileArtifactSink(IArtifactSink):
    """
    Desktop implementation of the artifact port.

    Saved files land in `output_dir`. Print pages are written to a scratch
    directory and handed to the platform browser in a new tab; the page's own
    script raises the print dialog once it has loaded.
    """

    def __init__(
        self,
        output_dir: Path,
        files: IFileService,
        *,
        opener: Opener = webbrowser.open,
        print_dir: Path | None = None,
    ) -> None:
        self.output_dir = Path(output_dir)
        self._files = files
        self._opener = opener
        self._print_dir = print_dir or Path(tempfile.gettempdir()) / "memohub-print"

    def save_blob(self, file_name: str, data: bytes, mime_type: str) -> Path:
        path = self.output_dir / file_name
        self._files.write_bytes_atomic(path, data)
        logger.info("Saved %s (%s, %d bytes)", path, mime_type, len(data))
        return path

    def open_and_print_html(self, html: str, file_name: str) -> bool:
        page = self._print_dir / f"{file_name}.html"
        self._files.write_text_atomic(page, html)
        try:
            opened = self._opener(page.resolve().as_uri(), new=2)
        except webbrowser.Error as exc:
            logger.warning("Browser refused to open %s: %s", page, exc)
            return False
        if not opened:
            logger.warning("No browser window could be opened for %s", page)
        return bool(opened)
