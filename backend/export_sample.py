"""
export_sample.py — Write the sample product workbook to disk and exit.

Usage:
    python export_sample.py                 # -> output/products.xlsx
    python export_sample.py --output x.xlsx
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from errors import ExportError
from exports import SAMPLE_COLUMNS, SAMPLE_PRODUCTS, SAMPLE_SHEET_NAME, export_spreadsheet_file
from settings.constants import OUTPUT_DIR, SAMPLE_XLSX_FILENAME
from settings.log_config import get_logger, setup_logging

EXIT_OK = 0
EXIT_FAILED = 1


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Write the sample product spreadsheet")
    parser.add_argument(
        "--output",
        type=Path,
        default=OUTPUT_DIR / SAMPLE_XLSX_FILENAME,
        help="Destination .xlsx path (its directory is created if missing)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    setup_logging()
    logger = get_logger("cli")
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    output_path: Path = args.output
    output_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        export_spreadsheet_file(output_path, SAMPLE_COLUMNS, SAMPLE_PRODUCTS, SAMPLE_SHEET_NAME)
    except ExportError as e:
        logger.error(f"Error exporting to Excel file: {e.message}")
        return EXIT_FAILED
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
