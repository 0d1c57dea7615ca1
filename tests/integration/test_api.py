from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import api
from errors import BuildError

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture()
def client():
    return TestClient(api.app)


def test_ping(client):
    response = client.get("/ping")
    assert response.status_code == 200
    assert response.text == "pong\n"


# ============ spreadsheets ============

def test_sample_xlsx_download(client, sheet_from):
    response = client.get("/export/xlsx")

    assert response.status_code == 200
    assert response.headers["content-type"] == XLSX_TYPE
    assert response.headers["content-disposition"] == 'attachment; filename="products.xlsx"'

    ws = sheet_from(response.content)
    assert ws.title == "Products"
    assert ws.max_row == 6
    assert ws.cell(row=1, column=2).value == "Product Name"


def test_sample_xlsx_failure_returns_json_error(client, monkeypatch):
    def fail(*args, **kwargs):
        raise BuildError("broken sample")

    monkeypatch.setattr(api, "export_spreadsheet", fail)
    response = client.get("/export/xlsx")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate XLSX file"}


def test_unexpected_xlsx_failure(client, monkeypatch):
    def fail(*args, **kwargs):
        raise RuntimeError("out of memory")

    monkeypatch.setattr(api, "export_spreadsheet", fail)
    response = client.post("/export/xlsx", json={"columns": [{"header": "ID", "key": "id"}]})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate XLSX file"}


def test_custom_xlsx(client, sheet_from):
    payload = {
        "sheet_name": "People",
        "filename": "people.xlsx",
        "columns": [
            {"header": "Name", "key": "name"},
            {"header": "Age", "key": "age", "style": {"numFmt": "0"}},
        ],
        "data": [{"name": "Ada", "age": 36}, {"name": "Alan"}],
    }
    response = client.post("/export/xlsx", json=payload)

    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'attachment; filename="people.xlsx"'
    ws = sheet_from(response.content)
    assert ws.title == "People"
    assert [c.value for c in ws[3]] == ["Alan", None]


def test_filename_cannot_escape_directory(client):
    payload = {"filename": "../../etc/passwd", "columns": [{"header": "ID", "key": "id"}]}
    response = client.post("/export/xlsx", json=payload)
    assert response.headers["content-disposition"] == 'attachment; filename="passwd"'


@pytest.mark.parametrize("payload", [
    {"columns": []},
    {"columns": [{"header": "ID", "key": "id"}], "sheet_name": "bad/name"},
    {"columns": [{"header": "Tags", "key": "tags"}], "data": [{"tags": [1, 2]}]},
    {"columns": [{"header": "ID", "key": "id", "style": {"fill": "notacolor"}}], "data": [{"id": 1}]},
])
def test_invalid_xlsx_request(client, payload):
    response = client.post("/export/xlsx", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid export request"}


# ============ PDF ============

def test_sample_pdf_download(client, pages_in):
    response = client.get("/export/pdf")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="report.pdf"'
    assert response.content.startswith(b"%PDF")
    assert response.content.endswith(b"%%EOF\n")
    assert pages_in(response.content) == 2


def test_sample_pdf_failure_returns_json_error(client, monkeypatch):
    def fail(*args, **kwargs):
        raise RuntimeError("font missing")

    monkeypatch.setattr(api, "build_report", fail)
    response = client.get("/export/pdf")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate PDF"}


def test_custom_pdf_streams_long_table(client, pages_in, long_table):
    payload = {
        "title": "Inventory",
        "filename": "inventory.pdf",
        "blocks": [
            {"type": "heading", "text": "Inventory"},
            {"type": "table", "rows": long_table},
        ],
    }
    response = client.post("/export/pdf", json=payload)

    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'attachment; filename="inventory.pdf"'
    assert pages_in(response.content) >= 2
    assert b"(item 199) Tj" in response.content


def test_invalid_pdf_request(client):
    response = client.post("/export/pdf", json={"blocks": [{"type": "chart"}]})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid export request"}


def test_missing_blocks_is_rejected_by_validation(client):
    response = client.post("/export/pdf", json={"title": "x"})
    assert response.status_code == 422
