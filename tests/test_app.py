import json
import re

import pytest

from memohub.app import EXIT_BAD_INPUT, EXIT_FAILED, EXIT_OK, load_note_file, resolve_note, run_app
from memohub.di.container import Container
from memohub.domain.models import Tag
from memohub.services.config.app_config import build_app_config
from memohub.services.config.export_settings import ExportSettings


NOTE_JSON = {
    "title": "Weekly: sync",
    "content": "# Agenda\n- [x] done",
    "urls": [{"title": "Docs", "url": "https://d.example"}],
    "createdAt": "2024-01-02T03:04:00",
    "updatedAt": "2024-02-03T04:05:00",
    "priority": 1,
    "isFavorite": True,
    "categoryPath": "Work > Meetings",
    "tagObjects": [{"id": "t1", "name": "team", "color": "#00f"}],
}


@pytest.fixture()
def note_file(tmp_path):
    p = tmp_path / "note.json"
    p.write_text(json.dumps(NOTE_JSON, ensure_ascii=False), encoding="utf-8")
    return p


@pytest.fixture()
def container(tmp_path, sink, messages):
    return Container(
        config=build_app_config(project_root=tmp_path),
        settings=ExportSettings(output_dir=tmp_path),
        sink=sink,
        messages=messages,
    )


def test_load_note_file_reads_context(note_file):
    note, context, tags = load_note_file(note_file)
    assert note.title == "Weekly: sync"
    assert context.category_path == "Work > Meetings"
    assert context.tag_names == ["team"]
    assert tags == [Tag("t1", "team", "#00f")]

    resolved = resolve_note(note, context, tags)
    assert resolved.to_word_note().tags == ["team"]


def test_load_note_file_prefers_explicit_tag_names(tmp_path):
    p = tmp_path / "n.json"
    p.write_text(json.dumps({"title": "t", "tagNames": ["x", "y"]}), encoding="utf-8")
    _, context, tags = load_note_file(p)
    assert context.tag_names == ["x", "y"]
    assert [t.name for t in tags] == ["x", "y"]


def test_export_markdown_saves_sanitized_file(container, sink, note_file):
    code = run_app(["memohub", "export", str(note_file), "-f", "md", "--no-tags"], container)
    assert code == EXIT_OK
    [(name, data, _)] = sink.saved
    assert re.fullmatch(r"Weekly_ sync-\d{8}\.md", name)
    text = data.decode("utf-8")
    assert text.startswith("# Weekly: sync")
    assert "**カテゴリ**: Work > Meetings" in text
    assert "タグ" not in text


def test_export_uses_custom_name(container, sink, note_file):
    assert run_app(["memohub", "export", str(note_file), "-n", "report"], container) == EXIT_OK
    assert sink.saved[0][0] == "report.txt"


def test_export_printable_blocked_exits_failed(container, sink, messages, note_file):
    sink.print_ok = False
    assert run_app(["memohub", "export", str(note_file), "-f", "pdf"], container) == EXIT_FAILED
    assert len(messages.errors) == 1


def test_preview_prints_to_stdout(container, sink, note_file, capsys):
    assert run_app(["memohub", "preview", str(note_file), "--no-urls"], container) == EXIT_OK
    out = capsys.readouterr().out
    assert out.startswith("Weekly: sync\n")
    assert "関連URL" not in out
    assert sink.saved == []


def test_word_single_note(container, sink, messages, note_file):
    assert run_app(["memohub", "word", str(note_file)], container) == EXIT_OK
    [(name, data, _)] = sink.saved
    assert name == "Weekly_ sync.docx"
    assert data[:2] == b"PK"
    assert messages.infos[-1][1] == name


def test_word_batch(container, sink, note_file, tmp_path):
    other = tmp_path / "other.json"
    other.write_text(json.dumps({"title": "Other"}), encoding="utf-8")
    assert run_app(["memohub", "word", str(note_file), str(other)], container) == EXIT_OK
    [(name, _, _)] = sink.saved
    assert name.startswith("notes-")


def test_word_failure_is_reported(container, messages, note_file, monkeypatch):
    def boom(notes):
        raise RuntimeError("broken")

    monkeypatch.setattr(container.word, "render_bytes", boom)
    assert run_app(["memohub", "word", str(note_file)], container) == EXIT_FAILED
    assert len(messages.errors) == 1


@pytest.mark.parametrize("payload", ["{not json", "[1, 2]", json.dumps({"content": "no title"})])
def test_bad_input_exits_with_code_2(container, messages, tmp_path, payload):
    p = tmp_path / "bad.json"
    p.write_text(payload, encoding="utf-8")
    assert run_app(["memohub", "export", str(p)], container) == EXIT_BAD_INPUT
    assert len(messages.errors) == 1


def test_missing_file_exits_with_code_2(container, tmp_path):
    assert run_app(["memohub", "export", str(tmp_path / "nope.json")], container) == EXIT_BAD_INPUT


def test_unknown_format_exits_with_code_2(container, note_file):
    assert run_app(["memohub", "export", str(note_file), "-f", "docx"], container) == EXIT_BAD_INPUT


def test_version_flag_reads_the_version_file(container, tmp_path, capsys):
    (tmp_path / "version").write_text("v2.5.0\n", encoding="utf-8")
    assert run_app(["memohub", "--version"], container) == EXIT_OK
    assert capsys.readouterr().out == "memohub 2.5.0\n"


def test_version_flag_verbose_names_the_config_file(container, tmp_path, capsys):
    (tmp_path / "version").write_text("v2.5.0", encoding="utf-8")
    assert run_app(["memohub", "-v", "--version"], container) == EXIT_OK
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "memohub 2.5.0"
    assert lines[1].startswith("config: ")


def test_missing_command_is_a_usage_error(container):
    with pytest.raises(SystemExit) as exc:
        run_app(["memohub"], container)
    assert exc.value.code == 2


def test_timestamps_are_opt_in(container, note_file, capsys):
    assert run_app(["memohub", "preview", str(note_file)], container) == EXIT_OK
    plain = capsys.readouterr().out
    assert "作成日: 2024-01-02 03:04" not in plain and "更新日" not in plain

    assert run_app(["memohub", "preview", str(note_file), "--created"], container) == EXIT_OK
    out = capsys.readouterr().out
    assert "作成日: 2024-01-02 03:04" in out
    assert "更新日" not in out
