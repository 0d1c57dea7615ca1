from __future__ import annotations

from datetime import date, datetime

import numpy as np
import pandas as pd
import pytest

from errors import BuildError
from xlsx_writer import CellStyle, ColumnSpec, FontSpec, build_workbook


def test_id_name_scenario(id_name_columns, id_name_rows):
    ws = build_workbook("Sheet", id_name_columns, id_name_rows).active

    assert ws.max_row == 3
    assert ws.max_column == 2
    assert [c.value for c in ws[1]] == ["ID", "Name"]
    assert str(ws.cell(row=2, column=1).value) == "1"
    assert ws.cell(row=2, column=2).value == "A"
    assert str(ws.cell(row=3, column=1).value) == "2"
    assert ws.cell(row=3, column=2).value == "B"
    for letter in ("A", "B"):
        assert ws.column_dimensions[letter].width >= 10


def test_sheet_is_named_and_single():
    wb = build_workbook("Products", [ColumnSpec("ID", "id")], [])
    assert wb.sheetnames == ["Products"]
    assert wb.active.max_row == 1


def test_row_order_is_preserved():
    rows = [{"id": i} for i in (5, 3, 9, 1, 7)]
    ws = build_workbook("S", [ColumnSpec("ID", "id")], rows).active
    assert [ws.cell(row=r, column=1).value for r in range(2, 7)] == [5, 3, 9, 1, 7]


def test_every_row_has_one_cell_per_column():
    columns = [ColumnSpec("A", "a"), ColumnSpec("B", "b"), ColumnSpec("C", "c")]
    rows = [{"a": 1}, {"b": 2}, {}, {"a": 1, "b": 2, "c": 3}]
    ws = build_workbook("S", columns, rows).active
    for row in ws.iter_rows(min_row=1, max_row=ws.max_row):
        assert len(row) == 3


def test_missing_key_leaves_empty_cell_without_shifting():
    columns = [ColumnSpec("ID", "id"), ColumnSpec("Name", "name"), ColumnSpec("Qty", "qty")]
    ws = build_workbook("S", columns, [{"id": 1, "qty": 4}]).active
    assert [c.value for c in ws[2]] == [1, None, 4]


def test_header_cells_share_fixed_style():
    columns = [ColumnSpec("ID", "id"), ColumnSpec("", "blank"), ColumnSpec("Very long header text", "x")]
    ws = build_workbook("S", columns, [{"id": 1}]).active

    for cell in ws[1]:
        assert cell.font.bold is True
        assert cell.font.name == "Calibri"
        assert cell.font.size == 12
        assert cell.font.color.rgb == "FFFFFFFF"
        assert cell.fill.fill_type == "solid"
        assert cell.fill.fgColor.rgb == "FF4472C4"
        assert cell.alignment.horizontal == "center"
        assert cell.alignment.vertical == "center"
        for side in (cell.border.top, cell.border.right, cell.border.bottom, cell.border.left):
            assert side.style == "thin"


def test_data_cells_do_not_get_header_style():
    ws = build_workbook("S", [ColumnSpec("ID", "id")], [{"id": 1}]).active
    assert not ws.cell(row=2, column=1).font.bold


def test_column_style_applies_to_data_cells_only():
    price = ColumnSpec("Price", "price", style=CellStyle(number_format="$#,##0.00",
                                                          font=FontSpec(italic=True)))
    ws = build_workbook("S", [price], [{"price": 1499.99}, {"price": 75.5}]).active

    assert ws.cell(row=2, column=1).number_format == "$#,##0.00"
    assert ws.cell(row=3, column=1).font.italic is True
    assert ws.cell(row=1, column=1).number_format == "General"


def test_autofit_minimum_width():
    ws = build_workbook("S", [ColumnSpec("ID", "id")], [{"id": 1}]).active
    assert ws.column_dimensions["A"].width == 10


def test_autofit_uses_longest_value_plus_padding():
    columns = [ColumnSpec("Name", "name"), ColumnSpec("Product Name", "p")]
    rows = [{"name": "x" * 30, "p": "short"}]
    ws = build_workbook("S", columns, rows).active
    assert ws.column_dimensions["A"].width == 32
    # header counts as content
    assert ws.column_dimensions["B"].width == 14


def test_width_hint_is_overridden_by_autofit():
    ws = build_workbook("S", [ColumnSpec("ID", "id", width=50)], [{"id": 1}]).active
    assert ws.column_dimensions["A"].width == 10


@pytest.mark.parametrize("length", [0, 7, 8, 9, 25])
def test_width_is_at_least_content_plus_two(length):
    ws = build_workbook("S", [ColumnSpec("H", "v")], [{"v": "y" * length}]).active
    width = ws.column_dimensions["A"].width
    assert width >= 10
    assert width >= length + 2


def test_scalar_types_are_written_natively():
    columns = [ColumnSpec(k, k) for k in ("s", "i", "f", "b", "d", "dt")]
    row = {"s": "text", "i": 3, "f": 2.5, "b": False, "d": date(2024, 1, 2), "dt": datetime(2024, 1, 2, 3, 4)}
    ws = build_workbook("S", columns, [row]).active
    values = [c.value for c in ws[2]]
    assert values[:4] == ["text", 3, 2.5, False]


def test_dataframe_source_with_missing_values():
    frame = pd.DataFrame({"id": [1, 2], "name": ["A", np.nan]})
    ws = build_workbook("S", [ColumnSpec("ID", "id"), ColumnSpec("Name", "name")], frame).active
    assert ws.cell(row=2, column=2).value == "A"
    assert ws.cell(row=3, column=2).value is None
    assert ws.cell(row=3, column=1).value == 2


def test_pinned_timestamp_sets_properties():
    stamp = datetime(2024, 5, 1, 12, 0, 0)
    wb = build_workbook("S", [ColumnSpec("ID", "id")], [], created=stamp)
    assert wb.properties.created == stamp
    assert wb.properties.creator


def test_header_row_is_frozen():
    ws = build_workbook("S", [ColumnSpec("ID", "id")], []).active
    assert ws.freeze_panes == "A2"


@pytest.mark.parametrize("sheet_name", ["", "   ", "a/b", "x" * 32, "what?"])
def test_invalid_sheet_names(sheet_name):
    with pytest.raises(BuildError):
        build_workbook(sheet_name, [ColumnSpec("ID", "id")], [])


def test_empty_columns_rejected():
    with pytest.raises(BuildError):
        build_workbook("S", [], [{"id": 1}])


def test_column_without_key_rejected():
    with pytest.raises(BuildError):
        build_workbook("S", [ColumnSpec("ID", "")], [])


@pytest.mark.parametrize("width", [0, -3, 2.5, True])
def test_bad_width_hint_rejected(width):
    with pytest.raises(BuildError):
        build_workbook("S", [ColumnSpec("ID", "id", width=width)], [])


def test_nested_value_rejected():
    with pytest.raises(BuildError):
        build_workbook("S", [ColumnSpec("Tags", "tags")], [{"tags": {"a": 1}}])


def test_non_mapping_record_rejected():
    with pytest.raises(BuildError):
        build_workbook("S", [ColumnSpec("ID", "id")], [[1, 2]])
