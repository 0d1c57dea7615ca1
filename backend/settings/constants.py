"""
Main constants for the export service.
These values rarely change and define the document formats we produce.
"""

from pathlib import Path

# Directory structure (relative to backend/)
BACKEND_DIR = Path(__file__).parent.parent  # backend/
OUTPUT_DIR = BACKEND_DIR / "output"
SAMPLE_XLSX_FILENAME = "products.xlsx"
SAMPLE_PDF_FILENAME = "report.pdf"

# Media types
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"

# Error bodies returned to clients
XLSX_ERROR_MESSAGE = "Failed to generate XLSX file"
PDF_ERROR_MESSAGE = "Failed to generate PDF"
INVALID_REQUEST_MESSAGE = "Invalid export request"

# Worksheet limits
MAX_SHEET_NAME_LENGTH = 31
INVALID_SHEET_NAME_CHARS = "[]:*?/\\"

# Column auto-fit
MIN_COLUMN_WIDTH = 10
COLUMN_WIDTH_PADDING = 2

# Header row style (fixed, not configurable per export)
HEADER_FONT_NAME = "Calibri"
HEADER_FONT_SIZE = 12
HEADER_FONT_COLOR = "FFFFFFFF"
HEADER_FILL_COLOR = "FF4472C4"
HEADER_BORDER_STYLE = "thin"

# PDF fonts (standard Type1, never embedded)
PDF_FONT_REGULAR = "Helvetica"
PDF_FONT_BOLD = "Helvetica-Bold"
PDF_PRODUCER = "tabular-export pdf_writer"

# Logging
LOG_FORMAT_OK = "[OK]"
LOG_FORMAT_INFO = "[INFO]"
LOG_FORMAT_WARNING = "[WARNING]"
LOG_FORMAT_ERROR = "[ERROR]"
