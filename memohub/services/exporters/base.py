from __future__ import annotations

from dataclasses import dataclass, field

from memohub.domain.interfaces import IExporter, IExporterRegistry


@dataclass
class ExporterRegistryInst(IExporterRegistry):
    """
    Instance-based exporter registry keyed by export format value.
    Lives on the DI container so tests can build their own.
    """

    _reg: dict[str, IExporter] = field(default_factory=dict)

    def register(self, e: IExporter) -> None:
        self._reg[e.name] = e

    def get(self, name: str) -> IExporter:
        return self._reg[name]

    def all(self) -> list[IExporter]:
        return list(self._reg.values())
