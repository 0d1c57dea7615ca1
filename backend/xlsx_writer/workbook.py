"""
workbook.py — Builds the in-memory spreadsheet model.

build_workbook() turns a column schema plus row data into a one-sheet
openpyxl Workbook: styled header row, data rows in input order, and
auto-fit column widths. No file I/O happens here.
"""

from datetime import datetime
from typing import List, Optional

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError
from openpyxl.worksheet.worksheet import Worksheet

from errors import BuildError
from settings.configs import WORKBOOK_CREATOR
from settings.constants import (
    COLUMN_WIDTH_PADDING,
    HEADER_BORDER_STYLE,
    HEADER_FILL_COLOR,
    HEADER_FONT_COLOR,
    HEADER_FONT_NAME,
    HEADER_FONT_SIZE,
    INVALID_SHEET_NAME_CHARS,
    MAX_SHEET_NAME_LENGTH,
    MIN_COLUMN_WIDTH,
)

from .columns import (
    AlignmentSpec,
    BorderSpec,
    CellStyle,
    ColumnSpec,
    DataSource,
    FontSpec,
    cell_value,
    normalize_records,
    validate_columns,
)

HEADER_STYLE = CellStyle(
    font=FontSpec(name=HEADER_FONT_NAME, bold=True, size=HEADER_FONT_SIZE, color=HEADER_FONT_COLOR),
    fill=HEADER_FILL_COLOR,
    alignment=AlignmentSpec(horizontal="center", vertical="center"),
    border=BorderSpec.all_edges(HEADER_BORDER_STYLE),
)


def _validate_sheet_name(sheet_name: str) -> None:
    if not sheet_name or not sheet_name.strip():
        raise BuildError("Sheet name must not be empty")
    if len(sheet_name) > MAX_SHEET_NAME_LENGTH:
        raise BuildError(f"Sheet name longer than {MAX_SHEET_NAME_LENGTH} characters: {sheet_name!r}")
    bad = [ch for ch in sheet_name if ch in INVALID_SHEET_NAME_CHARS]
    if bad:
        raise BuildError(f"Sheet name contains invalid characters {bad}: {sheet_name!r}")


def style_header(worksheet: Worksheet, column_count: int) -> None:
    """Apply the fixed header style to row 1, empty header cells included."""
    for col_idx in range(1, column_count + 1):
        HEADER_STYLE.apply(worksheet.cell(row=1, column=col_idx))


def autofit_columns(worksheet: Worksheet, column_count: int) -> None:
    """Width = max(MIN_COLUMN_WIDTH, longest rendered value + padding)."""
    for col_idx in range(1, column_count + 1):
        max_length = 0
        for (value,) in worksheet.iter_rows(min_col=col_idx, max_col=col_idx, values_only=True):
            length = len(str(value)) if value is not None else 0
            if length > max_length:
                max_length = length
        width = max(MIN_COLUMN_WIDTH, max_length + COLUMN_WIDTH_PADDING)
        worksheet.column_dimensions[get_column_letter(col_idx)].width = width


def build_workbook(
    sheet_name: str,
    columns: List[ColumnSpec],
    data: DataSource,
    *,
    created: Optional[datetime] = None,
) -> Workbook:
    """
    Create a workbook with one sheet holding a header row and one row per record.

    Args:
        sheet_name: Worksheet tab name.
        columns: Ordered column definitions.
        data: Records (dicts) or a DataFrame; missing keys become empty cells.
        created: Pin the document timestamps (defaults to now).

    Returns:
        openpyxl Workbook ready for serialization.
    """
    _validate_sheet_name(sheet_name)
    validate_columns(columns)
    records = normalize_records(data)

    workbook = Workbook()
    stamp = created or datetime.now()
    workbook.properties.creator = WORKBOOK_CREATOR
    workbook.properties.lastModifiedBy = WORKBOOK_CREATOR
    workbook.properties.created = stamp
    workbook.properties.modified = stamp

    worksheet = workbook.active
    worksheet.title = sheet_name

    # Column metadata: header text and starting width
    for col_idx, column in enumerate(columns, start=1):
        worksheet.cell(row=1, column=col_idx, value=column.header).data_type = "s"
        if column.width is not None:
            worksheet.column_dimensions[get_column_letter(col_idx)].width = column.width

    style_header(worksheet, len(columns))

    for row_idx, record in enumerate(records, start=2):
        for col_idx, column in enumerate(columns, start=1):
            value = cell_value(record, column.key)
            try:
                cell = worksheet.cell(row=row_idx, column=col_idx, value=value)
            except (ValueError, TypeError, IllegalCharacterError) as e:
                raise BuildError(f"Row {row_idx - 1}, column '{column.key}': {e}", cause=e)
            if isinstance(value, str):
                # text starting with "=" stays text, never a formula
                cell.data_type = "s"
            if column.style is not None:
                column.style.apply(cell)

    autofit_columns(worksheet, len(columns))
    worksheet.freeze_panes = "A2"
    return workbook
