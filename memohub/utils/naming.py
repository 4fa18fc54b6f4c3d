from __future__ import annotations

import re
from datetime import date

from memohub.utils.constants import FILE_DATE_FORMAT, WORD_BATCH_PREFIX

_UNSAFE_RE = re.compile(r'[\\/:*?"<>|]')


def sanitize_file_name(name: str) -> str:
    """Replace path-unsafe characters with underscores. `My/Notes:Test` -> `My_Notes_Test`."""
    return _UNSAFE_RE.sub("_", name)


def batch_file_stem(today: date | None = None) -> str:
    return WORD_BATCH_PREFIX + (today or date.today()).strftime(FILE_DATE_FORMAT)


def export_base_name(title: str, file_name: str = "") -> str:
    """The chosen file name (or the title when it is blank), sanitized; no extension."""
    return sanitize_file_name(file_name.strip() or title)
