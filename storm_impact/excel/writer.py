"""
ExcelWriter — builds the report workbook block by block.

Every block method takes the row to start on and returns the next free row,
except table(), which returns a Table so charts can point at its cells.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pandas as pd
from openpyxl import Workbook
from openpyxl.chart import BarChart, Reference
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from storm_impact.excel.styles import FONTS, FILLS, BORDERS, WRAP
from storm_impact.excel.formatters import style_header, write_cell, add_kpi_card, widen_columns


@dataclass(frozen=True)
class Column:
    key: str
    label: str
    fmt: str = "text"


@dataclass(frozen=True)
class Table:
    """Where a written table landed."""
    sheet: Worksheet
    columns: tuple[Column, ...]
    header_row: int
    last_row: int  # last data row; equals header_row when empty
    end_row: int  # first free row below (totals included)

    def column(self, key: str) -> int:
        return 1 + [c.key for c in self.columns].index(key)


class ExcelWriter:
    """Styled workbook builder for the storm impact report."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._unused: Worksheet | None = self.wb.active

    def sheet(self, title: str) -> Worksheet:
        """New worksheet; the workbook's default sheet is taken first."""
        if self._unused is not None:
            ws, self._unused = self._unused, None
            ws.title = title
            return ws
        return self.wb.create_sheet(title=title)

    # ------------------------------------------------------------------
    # Text blocks
    # ------------------------------------------------------------------

    def title_block(self, ws: Worksheet, title: str, subtitle: str, width: int = 8) -> int:
        for row, text, font in ((1, title, FONTS["title"]), (2, subtitle, FONTS["subtitle"])):
            ws.cell(row=row, column=1, value=text).font = font
            ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=width)
        for col in range(1, width + 1):
            ws.column_dimensions[get_column_letter(col)].width = 18
        return 4

    def section(self, ws: Worksheet, row: int, title: str) -> int:
        ws.cell(row=row, column=1, value=title).font = FONTS["section"]
        return row + 2

    def kpi_row(self, ws: Worksheet, row: int, cards: list[tuple]) -> int:
        """cards: (value, label, fmt) triples, one every other column."""
        for i, (value, label, fmt) in enumerate(cards):
            add_kpi_card(ws, row, 1 + 2 * i, value, label, fmt)
        return row + 3

    def findings(self, ws: Worksheet, row: int, items: list[dict], width: int = 10) -> int:
        """Bold title over a merged, wrapped body for each {"title", "body"}."""
        for item in items:
            ws.cell(row=row, column=1, value=item["title"]).font = FONTS["finding_title"]
            body = ws.cell(row=row + 1, column=1, value=item["body"])
            body.font = FONTS["finding_body"]
            body.alignment = WRAP
            ws.merge_cells(start_row=row + 1, start_column=1, end_row=row + 1, end_column=width)
            ws.row_dimensions[row + 1].height = 15 * (len(item["body"]) // 120 + 1)
            row += 3
        return row

    def legend(
        self,
        ws: Worksheet,
        row: int,
        items: list[tuple[str, str]],
        headers: tuple[str, str] = ("Category", "What It Includes"),
    ) -> int:
        style_header(ws, row, list(headers))
        for key, text in items:
            row += 1
            for col, value, font in ((1, key, FONTS["legend_key"]), (2, text, FONTS["cell"])):
                cell = ws.cell(row=row, column=col, value=value)
                cell.font = font
                cell.fill = FILLS["blue"]
                cell.border = BORDERS["cell"]
            ws.cell(row=row, column=2).alignment = WRAP
        ws.column_dimensions["A"].width = 22
        ws.column_dimensions["B"].width = 75
        return row + 2

    # ------------------------------------------------------------------
    # Tables and charts
    # ------------------------------------------------------------------

    def table(
        self,
        ws: Worksheet,
        row: int,
        columns: list[Column],
        records: list[dict],
        highlight=None,
        total_label: str | None = None,
        freeze: bool = False,
    ) -> Table:
        """Header on row, one line per record, optional totals line.

        highlight(index, record) may return a fill name ("gold", "blue").
        Totals sum the number and currency columns only.
        """
        style_header(ws, row, [c.label for c in columns])
        widths = {i: len(c.label) for i, c in enumerate(columns, 1)}

        r = row
        for idx, record in enumerate(records):
            r += 1
            fill = highlight(idx, record) if highlight else None
            for col, c in enumerate(columns, 1):
                value = record.get(c.key)
                if value is None or pd.isna(value):
                    value = "" if c.fmt == "text" else 0
                write_cell(ws, r, col, value, c.fmt, highlight=fill)
                widths[col] = max(widths[col], len(str(value)))
        last = r

        if total_label and records:
            r += 1
            write_cell(ws, r, 1, total_label, total=True)
            for col, c in enumerate(columns[1:], 2):
                if c.fmt in ("number", "currency"):
                    write_cell(ws, r, col, sum(rec.get(c.key) or 0 for rec in records), c.fmt, total=True)
                else:
                    write_cell(ws, r, col, "", total=True)

        widen_columns(ws, widths)
        if freeze:
            ws.freeze_panes = f"A{row + 1}"
        return Table(ws, tuple(columns), row, last, r + 1)

    def bar_chart(
        self,
        ws: Worksheet,
        anchor: str,
        table: Table,
        value_key: str,
        *,
        title: str,
        y_title: str,
        color: str,
        number_format: str = "#,##0",
    ) -> BarChart:
        """Column chart on ws of table's value_key column against its first column.

        The table may sit on another sheet.
        """
        chart = BarChart()
        chart.type = "col"
        chart.title = title
        chart.y_axis.title = y_title
        chart.y_axis.number_format = number_format
        chart.y_axis.majorGridlines = None
        chart.x_axis.delete = False
        chart.y_axis.delete = False
        chart.legend = None
        chart.height = 9
        chart.width = 18

        values = Reference(table.sheet, min_col=table.column(value_key),
                           min_row=table.header_row, max_row=table.last_row)
        labels = Reference(table.sheet, min_col=1,
                           min_row=table.header_row + 1, max_row=table.last_row)
        chart.add_data(values, titles_from_data=True)
        chart.set_categories(labels)
        series = chart.series[0].graphicalProperties
        series.solidFill = color
        series.line.solidFill = color

        ws.add_chart(chart, anchor)
        return chart

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path
