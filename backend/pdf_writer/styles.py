"""
styles.py — PDF styling configuration.

Text styles are reportlab ParagraphStyles; table rows are styled by a
caller-supplied function returning a RowStyle per row index.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle

from errors import BuildError
from settings.configs import PDF_DEFAULT_CELL_PADDING, PDF_LINE_SPACING
from settings.constants import PDF_FONT_BOLD, PDF_FONT_REGULAR

ALIGNMENTS = {
    "left": TA_LEFT,
    "center": TA_CENTER,
    "right": TA_RIGHT,
    "justify": TA_JUSTIFY,
}

Edges = Tuple[float, float, float, float]  # top, right, bottom, left


class Colors:
    """Report palette."""
    TEXT = colors.black
    HEADING = colors.HexColor("#1e3a5f")
    BORDER_STRONG = colors.black
    BORDER_LIGHT = colors.HexColor("#aaaaaa")


def to_color(value: Any) -> colors.Color:
    """Accept reportlab colors, names ('black') and hex strings ('#aaa', '#1e40af')."""
    if isinstance(value, colors.Color):
        return value
    if isinstance(value, str) and value.startswith("#") and len(value) == 4:
        value = "#" + "".join(ch * 2 for ch in value[1:])
    try:
        return colors.toColor(value)
    except ValueError as e:
        raise BuildError(f"Unknown color: {value!r}", cause=e)


def _edges(value: Any, name: str) -> Edges:
    """A single number applies to all four edges."""
    if isinstance(value, (int, float)):
        return (float(value),) * 4
    try:
        top, right, bottom, left = (float(v) for v in value)
    except (TypeError, ValueError) as e:
        raise BuildError(f"{name} must be a number or four numbers (top, right, bottom, left)", cause=e)
    return top, right, bottom, left


@dataclass(frozen=True)
class RowStyle:
    """How one table row is drawn. Edge tuples are (top, right, bottom, left) in points."""
    border: Edges = (0.5, 0.5, 0.5, 0.5)
    border_color: Any = Colors.BORDER_LIGHT
    padding: Edges = PDF_DEFAULT_CELL_PADDING
    bold: bool = False
    background: Any = None
    text_color: Any = Colors.TEXT

    @classmethod
    def from_dict(cls, raw: dict) -> "RowStyle":
        """Build from {"border": [0, 0, 2, 0], "borderColor": "black", "padding": [10, 0, 5, 0]}."""
        return cls(
            border=_edges(raw.get("border", 0), "border"),
            border_color=to_color(raw.get("borderColor", raw.get("border_color", "black"))),
            padding=_edges(raw.get("padding", PDF_DEFAULT_CELL_PADDING), "padding"),
            bold=bool(raw.get("bold", False)),
            background=to_color(raw["background"]) if raw.get("background") else None,
            text_color=to_color(raw.get("textColor", raw.get("text_color", "black"))),
        )

    def normalized(self) -> "RowStyle":
        """Same style with edges as float tuples and colors resolved."""
        return RowStyle(
            border=_edges(self.border, "border"),
            border_color=to_color(self.border_color),
            padding=_edges(self.padding, "padding"),
            bold=self.bold,
            background=to_color(self.background) if self.background is not None else None,
            text_color=to_color(self.text_color),
        )


RowStyleFn = Callable[[int], RowStyle]


def default_row_style(index: int) -> RowStyle:
    """Bold first row over a heavier rule, thin grid below."""
    if index == 0:
        return RowStyle(border=(0, 0, 2, 0), border_color=Colors.BORDER_STRONG, bold=True)
    return RowStyle(border=(0, 0, 1, 0), border_color=Colors.BORDER_LIGHT)


def row_styles_from_dicts(header: Optional[dict], body: Optional[dict]) -> RowStyleFn:
    """Row style function from two JSON dicts: one for row 0, one for the rest."""
    header_style = RowStyle.from_dict(header) if header else default_row_style(0)
    body_style = RowStyle.from_dict(body) if body else default_row_style(1)

    def row_style(index: int) -> RowStyle:
        return header_style if index == 0 else body_style

    return row_style


class StyleSheet:
    """Text styles for headings and body paragraphs."""

    def __init__(self, line_spacing: float = PDF_LINE_SPACING):
        self.line_spacing = line_spacing

    def _style(self, name: str, font: str, size: float, align: str, color, space_after: float) -> ParagraphStyle:
        if align not in ALIGNMENTS:
            raise BuildError(f"Unknown alignment {align!r}; expected one of {sorted(ALIGNMENTS)}")
        if size <= 0:
            raise BuildError(f"Font size must be positive, got {size}")
        return ParagraphStyle(
            name,
            fontName=font,
            fontSize=size,
            leading=size * self.line_spacing,
            alignment=ALIGNMENTS[align],
            textColor=color,
            spaceAfter=space_after,
        )

    def heading(self, size: float, align: str = "left") -> ParagraphStyle:
        return self._style("Heading", PDF_FONT_BOLD, size, align, Colors.HEADING, size * 0.5)

    def body(self, size: float, align: str = "left") -> ParagraphStyle:
        return self._style("Body", PDF_FONT_REGULAR, size, align, Colors.TEXT, size * 0.5)
