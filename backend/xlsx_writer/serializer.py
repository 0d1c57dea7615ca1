"""
serializer.py — Encodes a workbook into .xlsx bytes.

Two sinks: a file path (one-shot writes, overwrite without warning) and
an in-memory buffer (HTTP responses).
"""

import io
from pathlib import Path
from typing import Union

from openpyxl import Workbook

from errors import EncodingError, ExportIOError


def save_workbook(workbook: Workbook, file_path: Union[str, Path]) -> Path:
    """Write the workbook to file_path; the parent directory must already exist."""
    path = Path(file_path)
    if not path.parent.is_dir():
        raise ExportIOError(f"Output directory does not exist: {path.parent}")

    try:
        workbook.save(path)
    except OSError as e:
        raise ExportIOError(f"Could not write {path}: {e}", cause=e)
    except Exception as e:
        raise EncodingError(f"Could not encode workbook: {e}", cause=e)
    return path


def workbook_to_bytes(workbook: Workbook) -> bytes:
    """Encode the workbook fully in memory."""
    buffer = io.BytesIO()
    try:
        workbook.save(buffer)
    except Exception as e:
        raise EncodingError(f"Could not encode workbook: {e}", cause=e)
    return buffer.getvalue()
