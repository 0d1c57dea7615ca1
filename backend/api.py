"""
FastAPI server for the tabular export service.
Serves spreadsheet and PDF downloads built from column schemas and row data.
"""

from pathlib import Path
from typing import Any, AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response, StreamingResponse
from pydantic import BaseModel, Field

from errors import BuildError
from exports import (
    SAMPLE_COLUMNS,
    SAMPLE_PRODUCTS,
    SAMPLE_SHEET_NAME,
    build_report,
    export_spreadsheet,
    sample_report_spec,
)
from settings.configs import DEFAULT_SHEET_NAME, HOST, PORT
from settings.constants import (
    INVALID_REQUEST_MESSAGE,
    PDF_ERROR_MESSAGE,
    PDF_MEDIA_TYPE,
    SAMPLE_PDF_FILENAME,
    SAMPLE_XLSX_FILENAME,
    XLSX_ERROR_MESSAGE,
    XLSX_MEDIA_TYPE,
)
from settings.log_config import get_logger, setup_logging

setup_logging()
logger = get_logger("api")

app = FastAPI(
    title="Tabular Export API",
    description="Spreadsheet and PDF exports for tabular data",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


# ============ Pydantic Models ============

class ColumnModel(BaseModel):
    header: str
    key: str
    width: Optional[int] = None
    style: Optional[dict[str, Any]] = None


class XlsxExportRequest(BaseModel):
    sheet_name: str = DEFAULT_SHEET_NAME
    filename: str = "export.xlsx"
    columns: list[ColumnModel]
    data: list[dict[str, Any]] = Field(default_factory=list)


class PdfExportRequest(BaseModel):
    title: str = "Report"
    filename: str = "report.pdf"
    blocks: list[dict[str, Any]]


# ============ Helpers ============

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _attachment(filename: str) -> dict[str, str]:
    safe_name = Path(filename).name.replace('"', "") or "download"
    return {"Content-Disposition": f'attachment; filename="{safe_name}"'}


async def _relay(chunks: AsyncIterator[bytes], filename: str) -> AsyncIterator[bytes]:
    """Forward report chunks, logging failures and always closing the source."""
    try:
        async for chunk in chunks:
            yield chunk
    except Exception:
        logger.exception(f"PDF stream for {filename} failed")
        raise
    finally:
        await chunks.aclose()


async def _xlsx_response(columns, data, sheet_name: str, filename: str, invalid_status: int) -> Response:
    try:
        buffer = await run_in_threadpool(export_spreadsheet, columns, data, sheet_name)
    except BuildError as e:
        logger.error(f"{XLSX_ERROR_MESSAGE}: {e.message}")
        if invalid_status == 400:
            return _error(400, INVALID_REQUEST_MESSAGE)
        return _error(500, XLSX_ERROR_MESSAGE)
    except Exception:
        logger.exception(XLSX_ERROR_MESSAGE)
        return _error(500, XLSX_ERROR_MESSAGE)

    return Response(content=buffer, media_type=XLSX_MEDIA_TYPE, headers=_attachment(filename))


def _pdf_response(blocks, title: str, filename: str, invalid_status: int) -> Response:
    try:
        report = build_report(blocks, title=title)
    except BuildError as e:
        logger.error(f"{PDF_ERROR_MESSAGE}: {e.message}")
        if invalid_status == 400:
            return _error(400, INVALID_REQUEST_MESSAGE)
        return _error(500, PDF_ERROR_MESSAGE)
    except Exception:
        logger.exception(PDF_ERROR_MESSAGE)
        return _error(500, PDF_ERROR_MESSAGE)

    return StreamingResponse(
        _relay(report.stream(), filename),
        media_type=PDF_MEDIA_TYPE,
        headers=_attachment(filename),
    )


# ============ Routes ============

@app.get("/ping", response_class=PlainTextResponse)
async def ping():
    return "pong\n"


@app.get("/export/xlsx")
async def export_xlsx():
    """Download the sample product list as a spreadsheet."""
    return await _xlsx_response(
        SAMPLE_COLUMNS, SAMPLE_PRODUCTS, SAMPLE_SHEET_NAME, SAMPLE_XLSX_FILENAME, invalid_status=500
    )


@app.post("/export/xlsx")
async def export_xlsx_custom(request: XlsxExportRequest):
    """Download a spreadsheet built from the posted columns and rows."""
    columns = [column.model_dump() for column in request.columns]
    return await _xlsx_response(
        columns, request.data, request.sheet_name, request.filename, invalid_status=400
    )


@app.get("/export/pdf")
async def export_pdf():
    """Stream the sample report."""
    return _pdf_response(sample_report_spec(), "Sample Report", SAMPLE_PDF_FILENAME, invalid_status=500)


@app.post("/export/pdf")
async def export_pdf_custom(request: PdfExportRequest):
    """Stream a report built from the posted content blocks."""
    return _pdf_response(request.blocks, request.title, request.filename, invalid_status=400)


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Server listening at http://{HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
