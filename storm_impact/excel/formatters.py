"""
Cell-level writers: header cells, typed data cells, KPI cards, column widths.
"""
from __future__ import annotations

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from storm_impact.excel.styles import FONTS, FILLS, BORDERS, CENTER, LEFT, RIGHT

NUMBER_FORMATS = {
    "currency": '"$"#,##0',
    "percent": '0.0"%"',
    "number": "#,##0",
    "year": "0",
}


def style_header(ws: Worksheet, row: int, labels: list[str]) -> None:
    """Write labels across row from column A with header styling."""
    for col, label in enumerate(labels, 1):
        cell = ws.cell(row=row, column=col, value=label)
        cell.font = FONTS["header"]
        cell.fill = FILLS["header"]
        cell.alignment = CENTER
        cell.border = BORDERS["header"]


def write_cell(
    ws: Worksheet,
    row: int,
    col: int,
    value,
    fmt: str = "text",
    total: bool = False,
    highlight: str | None = None,
) -> None:
    """Write one value, formatted by fmt ("text" or a NUMBER_FORMATS key)."""
    cell = ws.cell(row=row, column=col, value=value)
    kind = "total" if total else "cell"
    cell.font = FONTS[kind]
    cell.border = BORDERS[kind]
    if fmt in NUMBER_FORMATS:
        cell.number_format = NUMBER_FORMATS[fmt]
        cell.alignment = RIGHT
    else:
        cell.alignment = LEFT

    if highlight:
        cell.fill = FILLS[highlight]
    elif total:
        cell.fill = FILLS["total"]
    elif row % 2 == 0:
        cell.fill = FILLS["shade"]


def add_kpi_card(ws: Worksheet, row: int, col: int, value, label: str, fmt: str = "number") -> None:
    """Large value on row, small caption under it."""
    top = ws.cell(row=row, column=col, value=value)
    top.font = FONTS["kpi_value"]
    top.alignment = CENTER
    top.number_format = NUMBER_FORMATS.get(fmt, "General")

    caption = ws.cell(row=row + 1, column=col, value=label)
    caption.font = FONTS["kpi_label"]
    caption.alignment = CENTER


def widen_columns(ws: Worksheet, widths: dict[int, int], floor: int = 10, cap: int = 55) -> None:
    """Grow (never shrink) columns to fit the given text lengths."""
    for col, length in widths.items():
        dim = ws.column_dimensions[get_column_letter(col)]
        wanted = min(max(length + 2, floor), cap)
        if not dim.width or dim.width < wanted:
            dim.width = wanted
