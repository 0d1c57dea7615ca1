"""
columns.py — Column schema and data source normalization.

ColumnSpec describes one output column; CellStyle is the formatting a
column hands down to its data cells. Both are plain data and know how to
convert themselves into openpyxl style objects.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np
import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from errors import BuildError

SCALAR_TYPES = (str, int, float, bool, Decimal, date, datetime, time)

Record = Mapping[str, Any]
DataSource = Union[Iterable[Record], pd.DataFrame]


def _argb(color: Optional[str]) -> Optional[str]:
    """'#4472c4' -> '4472C4'; ARGB values pass through."""
    if color is None:
        return None
    return color.lstrip("#").upper()


@dataclass(frozen=True)
class FontSpec:
    name: Optional[str] = None
    bold: bool = False
    italic: bool = False
    size: Optional[float] = None
    color: Optional[str] = None

    def to_openpyxl(self) -> Font:
        return Font(
            name=self.name,
            bold=self.bold,
            italic=self.italic,
            size=self.size,
            color=_argb(self.color),
        )


@dataclass(frozen=True)
class AlignmentSpec:
    horizontal: Optional[str] = None
    vertical: Optional[str] = None
    wrap_text: bool = False

    def to_openpyxl(self) -> Alignment:
        return Alignment(
            horizontal=self.horizontal,
            vertical=self.vertical,
            wrap_text=self.wrap_text,
        )


@dataclass(frozen=True)
class BorderSpec:
    """Per-edge openpyxl border style names ('thin', 'medium', ...)."""
    top: Optional[str] = None
    right: Optional[str] = None
    bottom: Optional[str] = None
    left: Optional[str] = None

    @classmethod
    def all_edges(cls, style: str) -> "BorderSpec":
        return cls(top=style, right=style, bottom=style, left=style)

    def to_openpyxl(self) -> Border:
        return Border(
            top=Side(style=self.top),
            right=Side(style=self.right),
            bottom=Side(style=self.bottom),
            left=Side(style=self.left),
        )


@dataclass(frozen=True)
class CellStyle:
    """Formatting shared by every data cell of a column."""
    font: Optional[FontSpec] = None
    fill: Optional[str] = None
    alignment: Optional[AlignmentSpec] = None
    border: Optional[BorderSpec] = None
    number_format: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "CellStyle":
        """
        Build from the JSON shape accepted over HTTP:
            {"numFmt": "$#,##0.00", "font": {"bold": true}, "fill": "FFEEEEEE",
             "alignment": {"horizontal": "right"}, "border": {"bottom": "thin"}}
        """
        font = raw.get("font")
        alignment = raw.get("alignment")
        border = raw.get("border")
        try:
            style = cls(
                font=FontSpec(**font) if font else None,
                fill=raw.get("fill"),
                alignment=AlignmentSpec(**alignment) if alignment else None,
                border=BorderSpec(**border) if border else None,
                number_format=raw.get("numFmt") or raw.get("number_format"),
            )
        except TypeError as e:
            raise BuildError(f"Invalid cell style: {e}", cause=e)
        style.validate()
        return style

    def to_openpyxl(self) -> Dict[str, Any]:
        """Cell attribute name -> openpyxl style object, for the parts that are set."""
        styles: Dict[str, Any] = {}
        if self.font is not None:
            styles["font"] = self.font.to_openpyxl()
        if self.fill is not None:
            color = _argb(self.fill)
            styles["fill"] = PatternFill(fill_type="solid", start_color=color, end_color=color)
        if self.alignment is not None:
            styles["alignment"] = self.alignment.to_openpyxl()
        if self.border is not None:
            styles["border"] = self.border.to_openpyxl()
        if self.number_format:
            styles["number_format"] = self.number_format
        return styles

    def validate(self) -> None:
        """Raise BuildError if openpyxl rejects any part of the style."""
        try:
            self.to_openpyxl()
        except (TypeError, ValueError, AttributeError) as e:
            raise BuildError(f"Invalid cell style: {e}", cause=e)

    def apply(self, cell) -> None:
        """Copy this style onto an openpyxl cell."""
        for name, value in self.to_openpyxl().items():
            setattr(cell, name, value)


@dataclass(frozen=True)
class ColumnSpec:
    """One output column: header label, record key, width hint and style."""
    header: str
    key: str
    width: Optional[int] = None
    style: Optional[CellStyle] = field(default=None, compare=False)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ColumnSpec":
        style = raw.get("style")
        if isinstance(style, Mapping):
            style = CellStyle.from_dict(style)
        return cls(
            header=raw.get("header", ""),
            key=raw.get("key", ""),
            width=raw.get("width"),
            style=style,
        )


def validate_columns(columns: List[ColumnSpec]) -> None:
    if not columns:
        raise BuildError("At least one column is required")
    for index, column in enumerate(columns):
        if not column.key:
            raise BuildError(f"Column {index} has no key")
        if column.width is not None and (isinstance(column.width, bool)
                                         or not isinstance(column.width, int)
                                         or column.width <= 0):
            raise BuildError(f"Column '{column.key}' width must be a positive integer")
        if column.style is not None:
            if not isinstance(column.style, CellStyle):
                raise BuildError(f"Column '{column.key}' style must be an object, got {type(column.style).__name__}")
            column.style.validate()


def normalize_records(data: DataSource) -> List[Record]:
    """Turn a list of dicts or a DataFrame into a list of plain records."""
    if isinstance(data, pd.DataFrame):
        # NaN / NaT render as empty cells
        frame = data.astype(object).where(pd.notna(data), None)
        return frame.to_dict(orient="records")
    records = list(data)
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise BuildError(f"Record {index} is not a mapping: {type(record).__name__}")
    return records


def cell_value(record: Record, key: str) -> Any:
    """Value for one cell; missing keys are empty, nested values are rejected."""
    value = record.get(key)
    if value is None or isinstance(value, SCALAR_TYPES):
        return value
    if isinstance(value, np.generic):
        return value.item()
    raise BuildError(f"Unsupported value for column '{key}': {type(value).__name__}")
