from __future__ import annotations

import export_sample
from errors import ExportIOError


def test_writes_sample_and_creates_directory(tmp_path, sheet_from):
    target = tmp_path / "nested" / "dir" / "products.xlsx"
    assert export_sample.main(["--output", str(target)]) == export_sample.EXIT_OK
    assert sheet_from(target.read_bytes()).max_row == 6


def test_export_failure_exits_nonzero(tmp_path, monkeypatch):
    def fail(*args, **kwargs):
        raise ExportIOError("disk full")

    monkeypatch.setattr(export_sample, "export_spreadsheet_file", fail)
    assert export_sample.main(["--output", str(tmp_path / "x.xlsx")]) == export_sample.EXIT_FAILED
