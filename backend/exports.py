"""
exports.py — Entry points the HTTP layer and CLI use to produce documents.

Spreadsheets come back as bytes (or a written file); PDFs come back as a
finished StreamingReportWriter whose stream() the transport relays.
"""

from pathlib import Path
from typing import Any, AsyncIterator, Dict, Iterable, List, Mapping, Sequence, Union

from errors import BuildError
from pdf_writer import StreamingReportWriter, row_styles_from_dicts
from settings.log_config import get_logger
from xlsx_writer import CellStyle, ColumnSpec, build_workbook, save_workbook, workbook_to_bytes
from xlsx_writer.columns import DataSource

logger = get_logger("exports")

ColumnsInput = Sequence[Union[ColumnSpec, Mapping[str, Any]]]


# ============ Sample data served by the GET endpoints ============

SAMPLE_SHEET_NAME = "Products"

SAMPLE_COLUMNS: List[ColumnSpec] = [
    ColumnSpec(header="ID", key="id"),
    ColumnSpec(header="Product Name", key="name"),
    ColumnSpec(header="Category", key="category"),
    ColumnSpec(header="Price", key="price", style=CellStyle(number_format="$#,##0.00")),
    ColumnSpec(header="In Stock", key="inStock"),
]

SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    {"id": 1, "name": 'Laptop Pro 15"', "category": "Electronics", "price": 1499.99, "inStock": True},
    {"id": 2, "name": "Wireless Ergonomic Mouse", "category": "Accessories", "price": 75.50, "inStock": True},
    {"id": 3, "name": "Mechanical RGB Keyboard", "category": "Accessories", "price": 120.00, "inStock": False},
    {"id": 4, "name": "27-inch 4K UHD Monitor", "category": "Monitors", "price": 399.00, "inStock": True},
    {"id": 5, "name": "HD Webcam with Ring Light", "category": "Peripherals", "price": 55.25, "inStock": False},
]


def sample_report_spec() -> List[Dict[str, Any]]:
    """Two-page demo report: heading, paragraph, styled table, then a second page."""
    return [
        {"type": "heading", "text": "Here is your PDF Report", "size": 25, "align": "center"},
        {"type": "spacer"},
        {
            "type": "paragraph",
            "size": 12,
            "align": "justify",
            "text": (
                "This is a sample PDF file generated on the fly by the export service. "
                "You can add text, tables, and page breaks to create complex documents."
            ),
        },
        {"type": "spacer"},
        {
            "type": "table",
            "rows": [
                ["Column 1", "Column 2", "Column 3"],
                ["One value goes here", "Another one here", "OK?"],
            ],
            "headerStyle": {"border": [0, 0, 2, 0], "borderColor": "black"},
            "rowStyle": {"border": [0, 0, 1, 0], "borderColor": "#aaa", "padding": [10, 0, 5, 0]},
        },
        {"type": "page_break"},
        {"type": "paragraph", "text": "This is the second page.", "size": 16, "align": "left"},
    ]


# ============ Spreadsheets ============

def to_column_specs(columns: ColumnsInput) -> List[ColumnSpec]:
    return [c if isinstance(c, ColumnSpec) else ColumnSpec.from_dict(c) for c in columns]


def export_spreadsheet(columns: ColumnsInput, data: DataSource, sheet_name: str) -> bytes:
    """Build a workbook and return its .xlsx bytes."""
    workbook = build_workbook(sheet_name, to_column_specs(columns), data)
    buffer = workbook_to_bytes(workbook)
    logger.ok(f"Excel buffer generated: sheet '{sheet_name}', {len(buffer)} bytes")
    return buffer


def export_spreadsheet_file(
    file_path: Union[str, Path],
    columns: ColumnsInput,
    data: DataSource,
    sheet_name: str,
) -> Path:
    """Build a workbook and write it to file_path."""
    workbook = build_workbook(sheet_name, to_column_specs(columns), data)
    path = save_workbook(workbook, file_path)
    logger.ok(f"Excel file saved to: {path}")
    return path


# ============ PDF reports ============

def _apply_block(report: StreamingReportWriter, block: Mapping[str, Any]) -> None:
    kind = block.get("type")
    if kind == "heading":
        report.add_heading(block.get("text", ""), **_text_options(block))
    elif kind == "paragraph":
        report.add_paragraph(block.get("text", ""), **_text_options(block))
    elif kind == "table":
        report.add_table(
            block.get("rows") or [],
            row_style=row_styles_from_dicts(block.get("headerStyle"), block.get("rowStyle")),
            col_widths=block.get("colWidths"),
            **({"font_size": block["fontSize"]} if block.get("fontSize") else {}),
        )
    elif kind == "spacer":
        report.add_spacer(block.get("height"))
    elif kind == "page_break":
        report.add_page_break()
    else:
        raise BuildError(f"Unknown block type: {kind!r}")


def _text_options(block: Mapping[str, Any]) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    if block.get("size") is not None:
        options["size"] = block["size"]
    if block.get("align"):
        options["align"] = block["align"]
    return options


def build_report(blocks: Iterable[Mapping[str, Any]], title: str = "Report", **writer_options) -> StreamingReportWriter:
    """Apply block instructions in order and finish the report."""
    report = StreamingReportWriter(title=title, **writer_options)
    for block in blocks:
        _apply_block(report, block)
    return report.finish()


def export_pdf_stream(blocks: Iterable[Mapping[str, Any]], title: str = "Report") -> AsyncIterator[bytes]:
    """Byte stream of the report described by blocks."""
    return build_report(blocks, title=title).stream()
