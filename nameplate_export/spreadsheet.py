"""Spreadsheet export: one row per physical nameplate."""

from __future__ import annotations

from io import BytesIO
from typing import Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

from nameplate_types import OrderRequest

from .base import OrderExporter
from .lines import column_budget
from .rows import Row, expand

TRAILING_HEADERS = (
    "LABEL COLOR",
    "TEXT COLOR",
    "WIDTH",
    "HEIGHT",
    "CORNERS",
    "STICKY BACK",
    "NOTES",
)

SHEET_TITLE = "Nameplates"
MIN_COLUMN_WIDTH = 10
MAX_COLUMN_WIDTH = 60


def build_header(budget: int) -> list[str]:
    header = ["REF ID"]
    for index in range(1, budget + 1):
        header.append(f"LINE {index} TEXT")
        header.append(f"LINE {index} TEXT SIZE")
    header.extend(TRAILING_HEADERS)
    return header


def build_table(order: OrderRequest) -> list[Row]:
    """Return the header followed by the expanded rows of every design."""

    budget = column_budget(order.labels)
    table: list[Row] = [list(build_header(budget))]
    for design in order.labels:
        table.extend(expand(design, budget, order.ref_id, order.notes))
    return table


def write_workbook(table: Sequence[Row]) -> bytes:
    """Encode ``table`` as an xlsx workbook with a bold, frozen header row."""

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    for row in table:
        ws.append([_cell_value(value) for value in row])
        # engraving text such as "=== FRAGILE ===" stays literal text
        for cell in ws[ws.max_row]:
            if isinstance(cell.value, str) and cell.value.startswith("="):
                cell.data_type = "s"

    if table:
        header_font = Font(bold=True)
        for col in range(1, len(table[0]) + 1):
            cell = ws.cell(row=1, column=col)
            cell.font = header_font
            cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
        ws.freeze_panes = "A2"

        for col, width in enumerate(_column_widths(table), start=1):
            ws.column_dimensions[get_column_letter(col)].width = width

    out = BytesIO()
    wb.save(out)
    return out.getvalue()


def _cell_value(value: str | float) -> str | float:
    """Drop control characters that xlsx cells cannot hold."""

    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def _column_widths(table: Sequence[Row]) -> list[int]:
    widths: list[int] = []
    for col in range(len(table[0])):
        longest = max(len(str(row[col])) for row in table if col < len(row))
        widths.append(min(max(longest + 2, MIN_COLUMN_WIDTH), MAX_COLUMN_WIDTH))
    return widths


class Exporter(OrderExporter):
    kind = "spreadsheet"
    extension = "xlsx"
    content_type = (
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )

    def render_bytes(self, order: OrderRequest) -> bytes:
        return write_workbook(build_table(order))
