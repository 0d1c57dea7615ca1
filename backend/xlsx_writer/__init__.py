"""
xlsx_writer — Spreadsheet export for tabular data.

Usage:
    from xlsx_writer import ColumnSpec, CellStyle, build_workbook, workbook_to_bytes

    columns = [ColumnSpec("ID", "id"), ColumnSpec("Price", "price", style=CellStyle(number_format="$#,##0.00"))]
    workbook = build_workbook("Products", columns, [{"id": 1, "price": 9.5}])
    data = workbook_to_bytes(workbook)
"""

from .columns import AlignmentSpec, BorderSpec, CellStyle, ColumnSpec, FontSpec
from .serializer import save_workbook, workbook_to_bytes
from .workbook import HEADER_STYLE, autofit_columns, build_workbook, style_header

__all__ = [
    "AlignmentSpec",
    "BorderSpec",
    "CellStyle",
    "ColumnSpec",
    "FontSpec",
    "HEADER_STYLE",
    "autofit_columns",
    "build_workbook",
    "save_workbook",
    "style_header",
    "workbook_to_bytes",
]
