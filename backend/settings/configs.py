"""
Main configuration for the export service.
These values can be adjusted between deployments.
"""

import os

from dotenv import load_dotenv

# Load environment variables (only the listener is env-driven)
load_dotenv()

# =============================================================================
# Server
# =============================================================================

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3334"))

# =============================================================================
# Workbook
# =============================================================================

WORKBOOK_CREATOR = "Tabular Export Service"
DEFAULT_SHEET_NAME = "Sheet1"

# =============================================================================
# PDF Reports
# =============================================================================

PDF_PAGE_SIZE = "A4"  # "A4" or "letter"
PDF_MARGIN_TOP = 50  # points
PDF_MARGIN_BOTTOM = 50
PDF_MARGIN_LEFT = 72
PDF_MARGIN_RIGHT = 72

PDF_HEADING_SIZE = 18
PDF_BODY_SIZE = 12
PDF_TABLE_FONT_SIZE = 10
PDF_LINE_SPACING = 1.2  # leading = font size * spacing
PDF_DEFAULT_CELL_PADDING = (4, 4, 4, 4)  # top, right, bottom, left
