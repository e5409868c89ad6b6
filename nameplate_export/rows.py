"""Expand label designs into manufacturing rows."""

from __future__ import annotations

from nameplate_types import LabelDesign

from .colors import resolve_color_name
from .lines import to_columns

Row = list[str | float]


def corner_label(corners: str) -> str:
    return (corners or "squared").strip().capitalize()


def sticky_label(sticky_back: bool) -> str:
    return "Yes" if sticky_back else "No"


def format_dimension(value: float) -> float | int:
    """Drop a redundant ``.0`` so whole dimensions read as integers."""

    return int(value) if float(value).is_integer() else value


def expand(
    design: LabelDesign,
    budget: int,
    ref_id: str,
    notes: str,
) -> list[Row]:
    """Return one identical row per physical label of ``design``."""

    row: Row = [ref_id]
    for text, size in to_columns(design.text_lines, budget):
        row.append(text)
        row.append(size)
    row.extend(
        [
            resolve_color_name(design.label_color),
            resolve_color_name(design.text_color),
            format_dimension(design.width),
            format_dimension(design.height),
            corner_label(design.corners),
            sticky_label(design.sticky_back),
            notes,
        ]
    )
    return [list(row) for _ in range(max(1, design.quantity))]
