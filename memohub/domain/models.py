from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

from memohub.utils.constants import (
    DATETIME_FORMAT,
    DEFAULT_FILE_TITLE_LENGTH,
    FILE_DATE_FORMAT,
    MAX_URLS,
)
from memohub.utils.naming import sanitize_file_name


@dataclass(frozen=True)
class UrlInfo:
    title: str
    url: str


@dataclass(frozen=True)
class Tag:
    id: str
    name: str
    color: str = ""


def _parse_instant(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return raw
    if not raw:
        return datetime.now()
    # Accept the trailing "Z" the backend writes for UTC instants
    return datetime.fromisoformat(str(raw).replace("Z", "+00:00"))


def _parse_urls(raw: Any) -> list[UrlInfo]:
    urls = [UrlInfo(title=str(u.get("title", "") or ""), url=str(u["url"])) for u in raw or []]
    if len(urls) > MAX_URLS:
        raise ValueError(f"A note holds at most {MAX_URLS} URLs (got {len(urls)})")
    return urls


@dataclass
class Note:
    """A stored note as the export pipeline reads it. Never mutated by exporters."""

    title: str
    content: str
    urls: list[UrlInfo] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    id: str = ""
    category_id: str = ""
    tags: list[str] = field(default_factory=list)
    is_favorite: bool = False
    priority: int = 2
    is_archived: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Note:
        """
        Build a note from a backend-shaped mapping (camelCase keys, ISO timestamps).

        Raises ValueError for a missing title or more than MAX_URLS links.
        """
        title = data.get("title")
        if title is None:
            raise ValueError("Note is missing a title")
        return cls(
            title=str(title),
            content=str(data.get("content", "") or ""),
            urls=_parse_urls(data.get("urls")),
            created_at=_parse_instant(data.get("createdAt")),
            updated_at=_parse_instant(data.get("updatedAt")),
            id=str(data.get("id", "") or ""),
            category_id=str(data.get("categoryId", "") or ""),
            tags=[str(t) for t in data.get("tags", []) or []],
            is_favorite=bool(data.get("isFavorite", False)),
            priority=int(data.get("priority", 2) or 2),
            is_archived=bool(data.get("isArchived", False)),
        )


class ExportFormat(Enum):
    PLAINTEXT = "plaintext"
    MARKDOWN = "markdown"
    PRINTABLE = "printable"

    @classmethod
    def parse(cls, raw: str | ExportFormat) -> ExportFormat:
        """Accept enum members, their values, or the short txt/md/pdf aliases."""
        if isinstance(raw, ExportFormat):
            return raw
        key = raw.strip().lower()
        aliases = {"txt": cls.PLAINTEXT, "md": cls.MARKDOWN, "pdf": cls.PRINTABLE}
        if key in aliases:
            return aliases[key]
        return cls(key)


@dataclass
class ExportOptions:
    format: ExportFormat = ExportFormat.PLAINTEXT
    include_category: bool = True
    include_tags: bool = True
    include_created_at: bool = True
    include_updated_at: bool = True
    include_urls: bool = True
    file_name: str = ""

    @classmethod
    def for_note(
        cls, note: Note, fmt: ExportFormat = ExportFormat.PLAINTEXT, today: date | None = None
    ) -> ExportOptions:
        """
        Options as the export dialog first shows them for `note`.

        The file name is the sanitized title cut to DEFAULT_FILE_TITLE_LENGTH
        characters plus a `-YYYYMMDD` stamp; timestamps start switched off.
        """
        stamp = (today or date.today()).strftime(FILE_DATE_FORMAT)
        safe_title = sanitize_file_name(note.title)[:DEFAULT_FILE_TITLE_LENGTH]
        return cls(
            format=fmt,
            include_created_at=False,
            include_updated_at=False,
            file_name=f"{safe_title}-{stamp}",
        )


@dataclass
class ExportContext:
    """Display strings resolved by the caller; the pipeline never looks up ids."""

    category_path: str = ""
    tag_names: list[str] = field(default_factory=list)


@dataclass
class WordExportNote:
    title: str
    content: str
    category: str
    tags: list[str]
    priority: int
    is_favorite: bool
    created_at: str
    updated_at: str
    urls: list[UrlInfo] = field(default_factory=list)


@dataclass
class ResolvedNote:
    """A note carrying its category breadcrumb and tag objects instead of raw ids."""

    title: str
    content: str
    category_path: str
    tags: list[Tag]
    priority: int
    is_favorite: bool
    created_at: datetime
    updated_at: datetime
    urls: list[UrlInfo] = field(default_factory=list)

    def to_word_note(self) -> WordExportNote:
        return WordExportNote(
            title=self.title,
            content=self.content,
            urls=list(self.urls),
            category=self.category_path,
            tags=[t.name for t in self.tags],
            priority=self.priority,
            is_favorite=self.is_favorite,
            created_at=self.created_at.strftime(DATETIME_FORMAT),
            updated_at=self.updated_at.strftime(DATETIME_FORMAT),
        )
