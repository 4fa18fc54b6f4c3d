from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from memohub.domain.interfaces import IConfigService
from memohub.domain.models import ExportFormat
from memohub.utils.constants import (
    DEFAULT_CODE_FONT,
    DEFAULT_DOCUMENT_LABEL,
    DEFAULT_FONT_NAME,
    DEFAULT_FONT_SIZE,
    DEFAULT_PRINT_DELAY_MS,
)

SECTION = "export"


@dataclass(frozen=True)
class ExportSettings:
    """The `[export]` section of config.ini, with defaults for anything missing or malformed."""

    output_dir: Path = field(default_factory=Path.cwd)
    default_format: ExportFormat = ExportFormat.PLAINTEXT
    document_label: str = DEFAULT_DOCUMENT_LABEL
    font_name: str = DEFAULT_FONT_NAME
    font_size: int = DEFAULT_FONT_SIZE
    code_font: str = DEFAULT_CODE_FONT
    print_delay_ms: int = DEFAULT_PRINT_DELAY_MS

    @classmethod
    def from_config(cls, cfg: IConfigService) -> ExportSettings:
        defaults = cls()

        out = cfg.get(SECTION, "output_dir")
        fmt_raw = cfg.get(SECTION, "default_format")
        try:
            fmt = ExportFormat.parse(fmt_raw) if fmt_raw else defaults.default_format
        except ValueError:
            fmt = defaults.default_format

        size = cfg.get_int(SECTION, "font_size", defaults.font_size)
        delay = cfg.get_int(SECTION, "print_delay_ms", defaults.print_delay_ms)
        return cls(
            output_dir=Path(out).expanduser() if out else defaults.output_dir,
            default_format=fmt,
            document_label=cfg.get(SECTION, "document_label") or defaults.document_label,
            font_name=cfg.get(SECTION, "font_name") or defaults.font_name,
            font_size=size if size and size > 0 else defaults.font_size,
            code_font=cfg.get(SECTION, "code_font") or defaults.code_font,
            print_delay_ms=delay if delay is not None and delay >= 0 else defaults.print_delay_ms,
        )
