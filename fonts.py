# pyright: reportMissingTypeStubs=false

"""Font resolution for the nameplate proof sheet.

Designs name fonts the way a browser would ("Arial", "Times New Roman",
"monospace"). ReportLab needs registered font names, so each family maps to
one of the built-in PDF faces or to a TrueType file: the Bitstream Vera faces
bundled with ReportLab, or files dropped into ``fonts/``.
Unknown families fall back to Helvetica rather than failing the render.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

import reportlab
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont as ReportLabTTFont

FONTS_DIR = Path(__file__).resolve().parent / "fonts"
REPORTLAB_FONTS_DIR = Path(reportlab.__file__).resolve().parent / "fonts"


def _font_key(name: str) -> str:
    return " ".join(name.strip().strip("'\"").lower().split())


@dataclass(frozen=True)
class BuiltinFont:
    regular: str
    bold: str


@dataclass(frozen=True)
class LocalStaticFont:
    family_name: str
    regular: str
    bold: str | None = None
    directory: Path = FONTS_DIR


FontSource = Union[BuiltinFont, LocalStaticFont]

_HELVETICA = BuiltinFont(regular="Helvetica", bold="Helvetica-Bold")
_TIMES = BuiltinFont(regular="Times-Roman", bold="Times-Bold")
_COURIER = BuiltinFont(regular="Courier", bold="Courier-Bold")
_VERA = LocalStaticFont(
    family_name="Vera",
    regular="Vera.ttf",
    bold="VeraBd.ttf",
    directory=REPORTLAB_FONTS_DIR,
)

DEFAULT_FONT = _HELVETICA

FONT_SOURCES: dict[str, FontSource] = {
    _font_key("Helvetica"): _HELVETICA,
    _font_key("Arial"): _HELVETICA,
    _font_key("Inter"): _HELVETICA,
    _font_key("Roboto"): _HELVETICA,
    _font_key("Open Sans"): _HELVETICA,
    _font_key("Verdana"): _HELVETICA,
    _font_key("sans-serif"): _HELVETICA,
    _font_key("Times"): _TIMES,
    _font_key("Times New Roman"): _TIMES,
    _font_key("Georgia"): _TIMES,
    _font_key("serif"): _TIMES,
    _font_key("Courier"): _COURIER,
    _font_key("Courier New"): _COURIER,
    _font_key("monospace"): _COURIER,
    _font_key("Vera"): _VERA,
    _font_key("Bitstream Vera Sans"): _VERA,
}


class FontRegistry:
    def __init__(self) -> None:
        # (family key, bold) -> registered font name
        self._registered: dict[tuple[str, bool], str] = {}

    def get_font_name(self, family: str, bold: bool = False) -> str:
        # CSS-style stacks ("Arial, sans-serif"): first known family wins
        for candidate in (family or "").split(","):
            key = _font_key(candidate)
            info = FONT_SOURCES.get(key)
            if info is None:
                continue
            if isinstance(info, BuiltinFont):
                return info.bold if bold else info.regular
            name = self._get_static_font_name(key, info, bold)
            if name:
                return name
        return DEFAULT_FONT.bold if bold else DEFAULT_FONT.regular

    def _get_static_font_name(
        self, key: str, info: LocalStaticFont, bold: bool
    ) -> str | None:
        cached = self._registered.get((key, bold))
        if cached:
            return cached

        filename = info.bold if bold and info.bold else info.regular
        destination = info.directory / filename
        if not destination.exists():
            return None

        suffix = "-Bold" if bold and info.bold else ""
        font_name = f"{info.family_name.replace(' ', '')}{suffix}"
        pdfmetrics.registerFont(ReportLabTTFont(font_name, str(destination)))
        self._registered[(key, bold)] = font_name
        return font_name


_REGISTRY = FontRegistry()


def add_font_source(family: str, source: FontSource) -> None:
    """Make ``family`` resolvable, e.g. a brand TTF dropped into ``fonts/``."""

    FONT_SOURCES[_font_key(family)] = source


def resolve_font_name(family: str, bold: bool = False) -> str:
    """Return the ReportLab font name to use for a design's font family."""

    return _REGISTRY.get_font_name(family, bold)


__all__ = [
    "BuiltinFont",
    "FONTS_DIR",
    "LocalStaticFont",
    "add_font_source",
    "resolve_font_name",
]
