from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from memohub.domain.models import ExportContext, ExportOptions, Note
from memohub.utils.constants import (
    DATETIME_FORMAT,
    LABEL_CATEGORY,
    LABEL_CREATED,
    LABEL_TAGS,
    LABEL_UPDATED,
)


@dataclass(frozen=True)
class MetaEntry:
    label: str
    value: str


def metadata_entries(
    note: Note,
    options: ExportOptions,
    context: ExportContext,
    *,
    tag_format: Callable[[str], str] = lambda name: f"#{name}",
) -> list[MetaEntry]:
    """
    Metadata lines enabled by the export flags, in display order.

    Category and tags are skipped when empty even if their flag is on; each flag
    only ever affects its own entry.
    """
    entries: list[MetaEntry] = []
    if options.include_category and context.category_path:
        entries.append(MetaEntry(LABEL_CATEGORY, context.category_path))
    if options.include_tags and context.tag_names:
        entries.append(MetaEntry(LABEL_TAGS, " ".join(tag_format(t) for t in context.tag_names)))
    if options.include_created_at:
        entries.append(MetaEntry(LABEL_CREATED, note.created_at.strftime(DATETIME_FORMAT)))
    if options.include_updated_at:
        entries.append(MetaEntry(LABEL_UPDATED, note.updated_at.strftime(DATETIME_FORMAT)))
    return entries


def wants_urls(note: Note, options: ExportOptions) -> bool:
    return options.include_urls and bool(note.urls)
