"""Projections of a design's text lines for tabular and visual output."""

from __future__ import annotations

from typing import Iterable, Sequence

from nameplate_types import LabelDesign, TextLine

# Marker written in the size column of an unused line slot.
EMPTY_SIZE = ""


def non_empty(lines: Iterable[TextLine]) -> list[TextLine]:
    """Return the lines that carry text, in their original order."""

    return [line for line in lines if line.text]


def column_budget(designs: Iterable[LabelDesign]) -> int:
    """Return how many text/size column pairs every row of an export needs."""

    widest = max((len(non_empty(design.text_lines)) for design in designs), default=0)
    return max(1, widest)


def to_columns(
    lines: Sequence[TextLine],
    budget: int,
) -> list[tuple[str, float | str]]:
    """Pad or cut ``lines`` to exactly ``budget`` ``(text, size)`` pairs.

    Slot ``i`` mirrors ``lines[i]``; a missing or empty line leaves both the
    text and the size blank.
    """

    columns: list[tuple[str, float | str]] = []
    for index in range(budget):
        line = lines[index] if index < len(lines) else None
        if line is None or not line.text:
            columns.append(("", EMPTY_SIZE))
        else:
            columns.append((line.text, line.font_size))
    return columns


def primary_text(lines: Iterable[TextLine], placeholder: str = "—") -> str:
    """Return the first line with content, or ``placeholder``."""

    for line in non_empty(lines):
        return line.text
    return placeholder
