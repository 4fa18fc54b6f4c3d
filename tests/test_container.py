from pathlib import Path

from memohub.di.container import Container
from memohub.services.artifact_sink import FileArtifactSink
from memohub.services.config.app_config import build_app_config
from memohub.services.config.export_settings import ExportSettings
from memohub.services.exporters.base import ExporterRegistryInst
from memohub.services.exporters.print_exporter import PrintExporter


def _write(p: Path, text: str) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")


def test_container_wires_services_and_registers_exporters(tmp_path):
    c = Container(config=build_app_config(project_root=tmp_path))
    assert c.file_service is not None
    assert c.messages is not None
    assert isinstance(c.sink, FileArtifactSink)
    assert c.export_service is not None

    names = sorted(e.name for e in c.exporter_registry.all())
    assert names == ["markdown", "plaintext", "printable"]


def test_container_keeps_pre_registered_exporters(tmp_path):
    registry = ExporterRegistryInst()
    custom = PrintExporter(print_delay_ms=1)
    registry.register(custom)

    c = Container(config=build_app_config(project_root=tmp_path), registry=registry)
    assert c.exporter_registry.get("printable") is custom
    assert len(c.exporter_registry.all()) == 3


def test_container_applies_settings_to_word_generator(tmp_path):
    settings = ExportSettings(output_dir=tmp_path, document_label="Team", font_name="Meiryo", font_size=10)
    c = Container(config=build_app_config(project_root=tmp_path), settings=settings)
    assert c.word.document_label == "Team"
    assert c.word.font_name == "Meiryo"
    assert c.word.font_size == 10
    assert c.sink.output_dir == tmp_path


def test_default_reads_ini_and_overrides_output_dir(tmp_path):
    ini = tmp_path / "c.ini"
    _write(ini, f"[export]\noutput_dir = {tmp_path / 'from-ini'}\nprint_delay_ms = 900\n")

    c = Container.default(explicit_ini=ini)
    assert c.settings.output_dir == tmp_path / "from-ini"
    assert c.settings.print_delay_ms == 900

    c2 = Container.default(explicit_ini=ini, output_dir=tmp_path / "cli")
    assert c2.settings.output_dir == tmp_path / "cli"
    assert c2.settings.print_delay_ms == 900
