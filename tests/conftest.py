# Shared pytest fixtures
from __future__ import annotations

import io
import re

import pytest
from openpyxl import load_workbook

from xlsx_writer import ColumnSpec

PAGE_PATTERN = re.compile(rb"/Type /Page\b")


def count_pages(pdf: bytes) -> int:
    return len(PAGE_PATTERN.findall(pdf))


def load_sheet(data: bytes):
    return load_workbook(io.BytesIO(data)).active


@pytest.fixture()
def pages_in():
    return count_pages


@pytest.fixture()
def sheet_from():
    return load_sheet


@pytest.fixture()
def id_name_columns() -> list[ColumnSpec]:
    return [ColumnSpec(header="ID", key="id"), ColumnSpec(header="Name", key="name")]


@pytest.fixture()
def id_name_rows() -> list[dict]:
    return [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]


@pytest.fixture()
def long_table() -> list[list[str]]:
    return [["#", "Item", "Note"]] + [[str(i), f"item {i}", "x" * 20] for i in range(200)]
