"""Excel styling, formatting, and writing utilities."""
from .styles import FONTS, FILLS, BORDERS, CASUALTY_COLOR, LOSS_COLOR, YEAR_COLOR
from .formatters import NUMBER_FORMATS, style_header, write_cell, add_kpi_card, widen_columns
from .writer import ExcelWriter, Column, Table
