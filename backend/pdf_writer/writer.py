"""
writer.py — Streaming PDF report generation.

StreamingReportWriter collects content blocks through chained add_*
calls and turns them into PDF bytes page by page. Consumers pull bytes
from stream() (async) or iter_chunks() (sync). Layout runs one line or
table row at a time and stops as soon as a page fills, so a slow reader
holds back layout instead of piling pages up in memory.
"""

import asyncio
from collections import deque
from datetime import datetime
from pathlib import Path
from typing import AsyncIterator, Deque, Iterator, List, Optional, Sequence, Tuple, Union

from reportlab.lib.pagesizes import A4, letter

from errors import BuildError, ExportIOError, ReportClosedError, StreamError
from settings import configs
from settings.log_config import get_logger

from .blocks import Block, PageBreakBlock, SpacerBlock, TableBlock, TextBlock
from .encoder import PdfEncoder
from .layout import Margins, PageLayout
from .styles import RowStyleFn, StyleSheet, default_row_style

logger = get_logger("pdf")

PageSize = Union[str, Tuple[float, float]]


def resolve_page_size(page_size: PageSize) -> Tuple[float, float]:
    if isinstance(page_size, str):
        sizes = {"a4": A4, "letter": letter}
        try:
            return sizes[page_size.lower()]
        except KeyError:
            raise BuildError(f"Unknown page size {page_size!r}; expected 'A4' or 'letter'")
    return page_size


class StreamingReportWriter:
    """Append-only PDF builder with incremental output."""

    def __init__(
        self,
        title: str = "Report",
        page_size: PageSize = configs.PDF_PAGE_SIZE,
        margins: Optional[Margins] = None,
        created: Optional[datetime] = None,
    ):
        self.title = title
        self.page_size = resolve_page_size(page_size)
        self.margins = margins or Margins()
        self.created = created

        self.styles = StyleSheet()
        self._pending: Deque[Block] = deque()
        self._current: Optional[Iterator[None]] = None
        self._finished = False
        self._consumed = False
        self._ready = asyncio.Event()

        try:
            self._layout = PageLayout(self.page_size, self.margins)
        except ValueError as e:
            raise BuildError(str(e), cause=e)
        self._encoder = PdfEncoder()

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def page_count(self) -> int:
        """Pages encoded so far."""
        return self._encoder.page_count

    # ==================== CONTENT METHODS ====================

    def _append(self, block: Block) -> "StreamingReportWriter":
        if self._finished:
            raise ReportClosedError(f"Cannot add {block.kind} to '{self.title}': report is finished")
        self._pending.append(block)
        self._ready.set()
        return self

    def add_heading(self, text: str, size: float = configs.PDF_HEADING_SIZE,
                    align: str = "left") -> "StreamingReportWriter":
        style = self.styles.heading(size, align)
        return self._append(TextBlock(str(text), style, kind="heading"))

    def add_paragraph(self, text: str, size: float = configs.PDF_BODY_SIZE,
                      align: str = "left") -> "StreamingReportWriter":
        style = self.styles.body(size, align)
        return self._append(TextBlock(str(text), style, kind="paragraph"))

    def add_table(
        self,
        rows: Sequence[Sequence[object]],
        row_style: Optional[RowStyleFn] = None,
        col_widths: Optional[Sequence[float]] = None,
        font_size: float = configs.PDF_TABLE_FONT_SIZE,
    ) -> "StreamingReportWriter":
        """
        Add a table. Cells are converted to text now, so later changes to
        rows do not leak into the report.

        Args:
            rows: Table rows, first row usually the header.
            row_style: Function of the row index returning a RowStyle.
            col_widths: Column widths in points; defaults to equal shares.
            font_size: Cell font size.
        """
        if not rows:
            raise BuildError("Table needs at least one row")
        try:
            str_rows = [["" if cell is None else str(cell) for cell in row] for row in rows]
        except TypeError as e:
            raise BuildError("Table rows must be sequences of cells", cause=e)
        n_cols = max(len(row) for row in str_rows)
        if n_cols == 0:
            raise BuildError("Table needs at least one column")
        if col_widths is not None:
            col_widths = self._check_col_widths(col_widths, n_cols)
        if row_style is not None and not callable(row_style):
            raise BuildError("row_style must be a function of the row index")
        if font_size <= 0:
            raise BuildError(f"Font size must be positive, got {font_size}")

        block = TableBlock(
            rows=str_rows,
            row_style=row_style or default_row_style,
            col_widths=col_widths,
            font_size=font_size,
            line_spacing=self.styles.line_spacing,
        )
        return self._append(block)

    def _check_col_widths(self, col_widths: Sequence[float], n_cols: int) -> List[float]:
        if len(col_widths) != n_cols:
            raise BuildError(f"col_widths has {len(col_widths)} entries for {n_cols} columns")
        try:
            widths = [float(w) for w in col_widths]
        except (TypeError, ValueError) as e:
            raise BuildError("col_widths must be numbers", cause=e)
        if any(w <= 0 for w in widths):
            raise BuildError("col_widths must be positive")
        # small tolerance for widths computed as fractions of the page
        if sum(widths) > self._layout.width + 0.01:
            raise BuildError(
                f"col_widths add up to {sum(widths):g} points; the printable width is {self._layout.width:g}"
            )
        return widths

    def add_spacer(self, height: Optional[float] = None) -> "StreamingReportWriter":
        """Vertical gap in points; defaults to one body line."""
        if height is None:
            height = configs.PDF_BODY_SIZE * self.styles.line_spacing
        if height < 0:
            raise BuildError(f"Spacer height must not be negative, got {height}")
        return self._append(SpacerBlock(height))

    def add_page_break(self) -> "StreamingReportWriter":
        return self._append(PageBreakBlock())

    def finish(self) -> "StreamingReportWriter":
        """Close the report for appends; the stream then writes the last page and trailer."""
        if self._finished:
            raise ReportClosedError(f"Report '{self.title}' is already finished")
        self._finished = True
        self._ready.set()
        return self

    # ==================== OUTPUT ====================

    def _claim(self) -> None:
        if self._consumed:
            raise StreamError(f"Report '{self.title}' output was already consumed")
        self._consumed = True

    def _advance(self) -> List[bytes]:
        """
        Lay out pending blocks one line or row at a time until a page
        completes. Returns the encoded pages, or [] once nothing is pending.
        """
        while True:
            if self._current is None:
                if not self._pending:
                    return []
                self._current = self._pending.popleft().render(self._layout)
            try:
                next(self._current)
            except StopIteration:
                self._current = None
            completed = self._layout.take_completed()
            if completed:
                return [self._encoder.page(content, self.page_size) for content in completed]

    def _close(self) -> List[bytes]:
        chunks = [self._encoder.page(content, self.page_size) for content in self._layout.close()]
        chunks.append(self._encoder.close(self.title, self.created))
        return chunks

    def _abort(self) -> None:
        self._finished = True
        self._pending.clear()
        if self._current is not None:
            self._current.close()
            self._current = None
        self._layout.discard()

    def iter_chunks(self) -> Iterator[bytes]:
        """Synchronous output for a finished report."""
        if not self._finished:
            raise StreamError("finish() must be called before iter_chunks()")
        self._claim()
        completed = False
        try:
            yield self._encoder.start()
            while True:
                pages = self._advance()
                if not pages:
                    break
                yield from pages
            yield from self._close()
            completed = True
        finally:
            if not completed:
                self._abort()

    async def stream(self) -> AsyncIterator[bytes]:
        """
        Async byte stream. Appends may continue while the stream is being
        read; it ends after finish() once every block has been written.
        Each page is yielded as soon as it fills, and the loop gets control
        back between pages.
        """
        self._claim()
        completed = False
        try:
            yield self._encoder.start()
            while True:
                pages = self._advance()
                if pages:
                    for chunk in pages:
                        yield chunk
                    await asyncio.sleep(0)
                elif self._finished:
                    break
                else:
                    self._ready.clear()
                    await self._ready.wait()
            for chunk in self._close():
                yield chunk
            completed = True
            logger.debug(f"PDF '{self.title}' streamed: {self.page_count} pages")
        finally:
            if not completed:
                logger.warning(f"PDF stream '{self.title}' stopped after {self.page_count} pages")
                self._abort()

    def to_bytes(self) -> bytes:
        return b"".join(self.iter_chunks())

    def save(self, output_path: Union[str, Path]) -> Path:
        """Write the finished report to output_path (parent directory must exist)."""
        if not self._finished:
            raise StreamError("finish() must be called before save()")
        path = Path(output_path)
        if not path.parent.is_dir():
            raise ExportIOError(f"Output directory does not exist: {path.parent}")
        try:
            with open(path, "wb") as f:
                for chunk in self.iter_chunks():
                    f.write(chunk)
        except OSError as e:
            raise ExportIOError(f"Could not write {path}: {e}", cause=e)
        return path
