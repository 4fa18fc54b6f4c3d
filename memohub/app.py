from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Sequence
from pathlib import Path

from memohub.di.container import Container
from memohub.domain.models import (
    ExportContext,
    ExportFormat,
    ExportOptions,
    Note,
    ResolvedNote,
    Tag,
)
from memohub.utils.constants import APP_NAME

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_BAD_INPUT = 2


def load_note_file(path: Path) -> tuple[Note, ExportContext, list[Tag]]:
    """
    Read a note JSON file as written by the backend, plus the display context.

    Besides the note fields the file may carry `categoryPath`, `tagNames` and
    `tagObjects` ([{id, name, color}]), which the app resolves before export.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    note = Note.from_dict(data)
    tag_objects = [
        Tag(id=str(t.get("id", "")), name=str(t["name"]), color=str(t.get("color", "")))
        for t in data.get("tagObjects", []) or []
    ]
    tag_names = [str(n) for n in data.get("tagNames", []) or []] or [t.name for t in tag_objects]
    context = ExportContext(category_path=str(data.get("categoryPath", "") or ""), tag_names=tag_names)
    return note, context, tag_objects or [Tag(id="", name=n) for n in tag_names]


def resolve_note(note: Note, context: ExportContext, tags: list[Tag]) -> ResolvedNote:
    return ResolvedNote(
        title=note.title,
        content=note.content,
        urls=list(note.urls),
        category_path=context.category_path,
        tags=tags,
        priority=note.priority,
        is_favorite=note.is_favorite,
        created_at=note.created_at,
        updated_at=note.updated_at,
    )


def _add_option_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("note", type=Path, help="note JSON file")
    p.add_argument("-f", "--format", help="plaintext | markdown | printable (or txt | md | pdf)")
    p.add_argument("--no-category", action="store_true", help="omit the category line")
    p.add_argument("--no-tags", action="store_true", help="omit the tag line")
    p.add_argument("--created", action="store_true", help="include the creation time")
    p.add_argument("--updated", action="store_true", help="include the update time")
    p.add_argument("--no-urls", action="store_true", help="omit the related URL section")
    p.add_argument("-n", "--name", default="", help="output file name without extension")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="memohub", description=f"{APP_NAME} note export")
    parser.add_argument("--config", type=Path, help="explicit config.ini path")
    parser.add_argument("-o", "--output-dir", type=Path, help="where exported files are saved")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--version", action="store_true", help="show the version (and config file with -v)")

    sub = parser.add_subparsers(dest="command")
    _add_option_flags(sub.add_parser("export", help="export one note as text, Markdown or a print page"))
    _add_option_flags(sub.add_parser("preview", help="print the text/Markdown export to stdout"))
    word = sub.add_parser("word", help="export notes into one .docx document")
    word.add_argument("notes", type=Path, nargs="+", help="note JSON files")
    return parser


def _options_from_args(args: argparse.Namespace, note: Note, default_format: ExportFormat) -> ExportOptions:
    fmt = ExportFormat.parse(args.format) if args.format else default_format
    options = ExportOptions.for_note(note, fmt)
    options.include_category = not args.no_category
    options.include_tags = not args.no_tags
    options.include_created_at = args.created
    options.include_updated_at = args.updated
    options.include_urls = not args.no_urls
    if args.name:
        options.file_name = args.name
    return options


def run_app(argv: Sequence[str], container: Container | None = None) -> int:
    """Parse the command line, compose the services and run one export command."""
    parser = build_parser()
    args = parser.parse_args(list(argv[1:]))
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    c = container or Container.default(explicit_ini=args.config, output_dir=args.output_dir)
    if args.version:
        print(f"{parser.prog} {c.config.get_version()}")
        if args.verbose:
            print(f"config: {c.config.loaded_from or '(defaults)'}")
        return EXIT_OK
    if args.command is None:
        parser.error("a command is required (export, preview or word)")

    service = c.export_service
    logger.debug("Config loaded from %s", c.config.loaded_from or "(defaults)")

    try:
        paths = [args.note] if args.command in ("export", "preview") else list(args.notes)
        loaded = [load_note_file(p) for p in paths]
        if args.command != "word":
            options = _options_from_args(args, loaded[0][0], c.settings.default_format)
    except (OSError, ValueError, KeyError) as exc:
        # json.JSONDecodeError is a ValueError
        c.messages.error("読み込みに失敗しました", str(exc))
        return EXIT_BAD_INPUT

    if args.command == "preview":
        note, context, _ = loaded[0]
        print(service.generate_preview(note, options, context))
        return EXIT_OK

    if args.command == "export":
        note, context, _ = loaded[0]
        return EXIT_OK if service.export_note(note, options, context) else EXIT_FAILED

    try:
        if len(loaded) == 1:
            name = service.export_single_note_to_word(resolve_note(*loaded[0]))
        else:
            name = service.export_to_word([resolve_note(*item).to_word_note() for item in loaded])
    except Exception:
        logger.exception("Word export failed")
        c.messages.error("エクスポートに失敗しました", "Word文書を作成できませんでした。")
        return EXIT_FAILED
    c.messages.info("エクスポート完了", name)
    return EXIT_OK
