"""Shared geometry helpers for the visual exporters."""

from __future__ import annotations

from typing import Callable

from reportlab.lib.units import inch

from nameplate_types import RenderedBox, TextLine

DEFAULT_DESIGN_WIDTH = 7.0
DEFAULT_DESIGN_HEIGHT = 2.0

MIN_FONT_SIZE = 4.0
MAX_FONT_SIZE = 48.0

ELLIPSIS = "…"


def fit_box(
    design_width: float,
    design_height: float,
    max_width: float,
    max_height: float,
    unit: float = inch,
) -> RenderedBox:
    """Scale a ``design_width`` x ``design_height`` label into the bounds.

    The aspect ratio is preserved. ``scale`` converts physical sizes (in
    ``unit`` points) to the rendered size, so font sizes given for the real
    label can be multiplied by it directly.
    """

    if design_width <= 0:
        design_width = DEFAULT_DESIGN_WIDTH
    if design_height <= 0:
        design_height = DEFAULT_DESIGN_HEIGHT

    ratio = design_width / design_height
    if ratio > max_width / max_height:
        render_width = max_width
        render_height = max_width / ratio
    else:
        render_height = max_height
        render_width = max_height * ratio

    scale = render_width / (design_width * unit)
    return RenderedBox(
        render_width=render_width,
        render_height=render_height,
        scale=scale,
    )


def scale_font(
    font_size: float,
    scale: float,
    *,
    min_font: float = MIN_FONT_SIZE,
    max_font: float = MAX_FONT_SIZE,
) -> float:
    """Return ``font_size`` multiplied by ``scale`` and clamped to the limits."""

    return min(max(font_size * scale, min_font), max_font)


def text_position(
    box_x: float,
    box_y: float,
    box: RenderedBox,
    line: TextLine,
) -> tuple[float, float]:
    """Return the absolute anchor of ``line`` inside a box at ``box_x, box_y``.

    Coordinates grow rightwards and downwards from the page's top-left corner.
    """

    return (
        box_x + (line.x / 100.0) * box.render_width,
        box_y + (line.y / 100.0) * box.render_height,
    )


def wrap_text(
    text: str,
    max_width: float,
    measure: Callable[[str], float],
) -> list[str]:
    """Wrap ``text`` into lines no wider than ``max_width``.

    ``measure`` returns the rendered width of a string. Words wider than the
    limit are split by character.
    """

    if not text or max_width <= 0:
        return []

    lines: list[str] = []
    for paragraph in text.splitlines():
        words = paragraph.split()
        if not words:
            continue
        current: list[str] = []
        for word in words:
            tentative = " ".join(current + [word])
            if measure(tentative) <= max_width:
                current.append(word)
                continue

            if current:
                lines.append(" ".join(current))
                current = []
            if measure(word) <= max_width:
                current = [word]
                continue

            partial = ""
            for ch in word:
                if partial and measure(partial + ch) > max_width:
                    lines.append(partial)
                    partial = ch
                else:
                    partial += ch
            if partial:
                current = [partial]

        if current:
            lines.append(" ".join(current))
    return lines


def truncate(text: str, max_chars: int) -> str:
    """Cut ``text`` to ``max_chars`` characters followed by an ellipsis."""

    if len(text) <= max_chars:
        return text
    return text[:max_chars] + ELLIPSIS
