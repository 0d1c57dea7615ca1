"""
pdf_writer — Streaming PDF report generation.

Usage:
    from pdf_writer import StreamingReportWriter, RowStyle

    report = StreamingReportWriter(title="Sales")
    report.add_heading("Quarterly Sales", size=25, align="center")
    report.add_paragraph("Totals by region.", align="justify")
    report.add_table([["Region", "Total"], ["North", "1,200"]])
    report.add_page_break()
    report.finish()

    async for chunk in report.stream():
        ...
"""

from .layout import Margins
from .styles import Colors, RowStyle, StyleSheet, default_row_style, row_styles_from_dicts
from .writer import StreamingReportWriter

__all__ = [
    "Colors",
    "Margins",
    "RowStyle",
    "StreamingReportWriter",
    "StyleSheet",
    "default_row_style",
    "row_styles_from_dicts",
]
