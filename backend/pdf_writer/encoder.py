"""
encoder.py — Incremental PDF object serialization.

Pages are written as soon as they are complete. Objects that depend on
the whole document (page tree, catalog, info) and the cross-reference
table go out in close(), which is legal because PDF objects may appear
in any order as long as the xref offsets are right.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from settings.constants import PDF_FONT_BOLD, PDF_FONT_REGULAR, PDF_PRODUCER

CATALOG_OBJ = 1
PAGES_OBJ = 2
INFO_OBJ = 3
FONT_OBJS = {"F1": 4, "F2": 5}
FIRST_PAGE_OBJ = 6

FONT_RESOURCE_NAMES = {PDF_FONT_REGULAR: "F1", PDF_FONT_BOLD: "F2"}


def pdf_string(text: str) -> bytes:
    """Literal string operand in WinAnsi encoding; unmappable characters become '?'."""
    raw = text.encode("cp1252", errors="replace")
    raw = raw.replace(b"\\", b"\\\\").replace(b"(", b"\\(").replace(b")", b"\\)")
    raw = raw.replace(b"\r", b"\\r").replace(b"\n", b"\\n")
    return b"(" + raw + b")"


def pdf_number(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


class PdfEncoder:
    """Turns page content streams into PDF bytes, tracking byte offsets for the xref."""

    def __init__(self):
        self._offset = 0
        self._offsets: Dict[int, int] = {}
        self._page_objs: List[int] = []
        self._next_obj = FIRST_PAGE_OBJ
        self._started = False
        self._closed = False

    @property
    def page_count(self) -> int:
        return len(self._page_objs)

    def _object(self, number: int, body: bytes) -> bytes:
        self._offsets[number] = self._offset
        chunk = f"{number} 0 obj\n".encode("ascii") + body + b"\nendobj\n"
        self._offset += len(chunk)
        return chunk

    def _stream_object(self, number: int, content: bytes) -> bytes:
        body = (
            f"<< /Length {len(content)} >>\nstream\n".encode("ascii")
            + content
            + b"\nendstream"
        )
        return self._object(number, body)

    def start(self) -> bytes:
        """File header plus the font objects every page refers to."""
        if self._started:
            raise RuntimeError("PDF header already written")
        self._started = True
        header = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n"
        self._offset = len(header)
        chunks = [header]
        for base_font, resource in FONT_RESOURCE_NAMES.items():
            number = FONT_OBJS[resource]
            body = (
                f"<< /Type /Font /Subtype /Type1 /BaseFont /{base_font} "
                f"/Encoding /WinAnsiEncoding >>"
            ).encode("ascii")
            chunks.append(self._object(number, body))
        return b"".join(chunks)

    def page(self, content: bytes, page_size: Tuple[float, float]) -> bytes:
        """Content stream and page dictionary for one finished page."""
        if not self._started or self._closed:
            raise RuntimeError("Pages can only be written between start() and close()")
        content_obj, page_obj = self._next_obj, self._next_obj + 1
        self._next_obj += 2
        self._page_objs.append(page_obj)

        width, height = page_size
        fonts = " ".join(f"/{name} {number} 0 R" for name, number in FONT_OBJS.items())
        page_dict = (
            f"<< /Type /Page /Parent {PAGES_OBJ} 0 R "
            f"/MediaBox [0 0 {pdf_number(width)} {pdf_number(height)}] "
            f"/Resources << /Font << {fonts} >> >> "
            f"/Contents {content_obj} 0 R >>"
        ).encode("ascii")
        return self._stream_object(content_obj, content) + self._object(page_obj, page_dict)

    def close(self, title: str, created: Optional[datetime] = None) -> bytes:
        """Page tree, catalog, info dictionary, xref table and trailer."""
        if self._closed:
            raise RuntimeError("PDF already closed")
        self._closed = True

        kids = " ".join(f"{number} 0 R" for number in self._page_objs)
        chunks = [
            self._object(PAGES_OBJ, f"<< /Type /Pages /Kids [{kids}] /Count {len(self._page_objs)} >>".encode("ascii")),
            self._object(CATALOG_OBJ, f"<< /Type /Catalog /Pages {PAGES_OBJ} 0 R >>".encode("ascii")),
        ]
        info = b"<< /Title " + pdf_string(title) + b" /Producer " + pdf_string(PDF_PRODUCER)
        if created is not None:
            info += b" /CreationDate " + pdf_string(created.strftime("D:%Y%m%d%H%M%S"))
        chunks.append(self._object(INFO_OBJ, info + b" >>"))

        xref_offset = self._offset
        size = self._next_obj
        lines = [f"xref\n0 {size}\n", "0000000000 65535 f \n"]
        for number in range(1, size):
            lines.append(f"{self._offsets[number]:010d} 00000 n \n")
        lines.append(
            f"trailer\n<< /Size {size} /Root {CATALOG_OBJ} 0 R /Info {INFO_OBJ} 0 R >>\n"
            f"startxref\n{xref_offset}\n%%EOF\n"
        )
        chunks.append("".join(lines).encode("ascii"))
        return b"".join(chunks)
