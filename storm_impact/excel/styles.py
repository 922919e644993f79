"""
Workbook palette and the openpyxl style objects built from it.
"""
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

STORM_BLUE = "1F4E79"
DARK_NAVY = "0B2545"
LIGHT_BLUE = "E3EEF9"
LIGHT_GOLD = "FFF8DC"
ROW_SHADE = "F5F5F5"
TOTAL_SHADE = "DCE6F0"
GRAY = "666666"
RED = "C0392B"

# Chart series colors
CASUALTY_COLOR = RED
LOSS_COLOR = STORM_BLUE
YEAR_COLOR = "7F8C8D"


def _font(size: int = 10, color: str = "000000", **kwargs) -> Font:
    return Font(name="Calibri", size=size, color=color, **kwargs)


def _fill(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _border(color: str, top: str = "thin", bottom: str = "thin") -> Border:
    side = Side(style="thin", color=color)
    return Border(left=side, right=side,
                  top=Side(style=top, color=color), bottom=Side(style=bottom, color=color))


FONTS = {
    "title": _font(24, DARK_NAVY, bold=True),
    "subtitle": _font(12, GRAY, italic=True),
    "section": _font(14, DARK_NAVY, bold=True),
    "header": _font(11, "FFFFFF", bold=True),
    "cell": _font(),
    "total": _font(bold=True),
    "kpi_value": _font(28, DARK_NAVY, bold=True),
    "kpi_label": _font(color=GRAY),
    "finding_title": _font(11, bold=True),
    "finding_body": _font(italic=True),
    "legend_key": _font(bold=True),
}

FILLS = {
    "header": _fill(DARK_NAVY),
    "shade": _fill(ROW_SHADE),
    "total": _fill(TOTAL_SHADE),
    # row highlights
    "gold": _fill(LIGHT_GOLD),
    "blue": _fill(LIGHT_BLUE),
}

BORDERS = {
    "header": _border(DARK_NAVY, bottom="medium"),
    "cell": _border("CCCCCC"),
    "total": _border("999999", top="medium", bottom="medium"),
}

CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")
WRAP = Alignment(horizontal="left", vertical="top", wrap_text=True)
