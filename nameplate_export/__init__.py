"""Exporter registry for nameplate orders."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from .base import OrderExporter

# format name -> module that defines an ``Exporter`` class
_FORMAT_MODULES = {
    "spreadsheet": "spreadsheet",
    "pdf": "pdf",
    "preview": "preview",
}

# Formats that may accompany the spreadsheet as the second artifact.
SECONDARY_FORMATS = ("pdf", "preview")


def get_exporter(name: str) -> OrderExporter:
    """Instantiate the exporter registered under ``name``."""

    key = (name or "").strip().lower()
    if key not in _FORMAT_MODULES:
        available = ", ".join(list_formats())
        raise ValueError(
            f"Unknown output format '{name}'. Available formats: {available}"
        )

    module = import_module(f"{__name__}.{_FORMAT_MODULES[key]}")
    exporter_cls: type[OrderExporter] | None = getattr(module, "Exporter", None)
    if not exporter_cls or not issubclass(exporter_cls, OrderExporter):
        raise ValueError(
            f"Output format '{name}' does not export a valid Exporter class"
        )
    return exporter_cls()


def list_formats() -> Iterable[str]:
    """Return the registered format names."""

    return sorted(_FORMAT_MODULES)


__all__ = ["OrderExporter", "SECONDARY_FORMATS", "get_exporter", "list_formats"]
