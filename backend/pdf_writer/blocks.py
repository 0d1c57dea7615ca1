"""
blocks.py — Renderable content blocks.

Each block lays itself out on a PageLayout. render() is a generator that
yields after every line or table row, so the writer can hand out a page
as soon as it fills up instead of laying out the whole block first.
Text splits between lines and tables between rows; a row taller than a
page splits between its wrapped lines.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle

from errors import BuildError
from settings.constants import PDF_FONT_BOLD, PDF_FONT_REGULAR

from .layout import PageLayout, baseline_for, text_width, wrap_text
from .styles import RowStyle, RowStyleFn, to_color


class Block:
    """Base class for anything the writer can lay out."""

    kind = "block"

    def render(self, layout: PageLayout) -> Iterator[None]:
        raise NotImplementedError


@dataclass
class TextBlock(Block):
    """Heading or paragraph: wrapped lines in one style."""
    text: str
    style: ParagraphStyle
    kind: str = "paragraph"

    def _x_and_spacing(self, line: str, width: float, layout: PageLayout, last: bool):
        alignment = self.style.alignment
        if alignment == TA_CENTER:
            return layout.left + (layout.width - width) / 2, 0.0
        if alignment == TA_RIGHT:
            return layout.right - width, 0.0
        if alignment == TA_JUSTIFY and not last:
            gaps = line.count(" ")
            if gaps:
                return layout.left, (layout.width - width) / gaps
        return layout.left, 0.0

    def render(self, layout: PageLayout) -> Iterator[None]:
        style = self.style
        lines = wrap_text(self.text, style.fontName, style.fontSize, layout.width)
        color = to_color(style.textColor)

        for index, line in enumerate(lines):
            layout.ensure(style.leading)
            width = text_width(line, style.fontName, style.fontSize)
            x, spacing = self._x_and_spacing(line, width, layout, last=index == len(lines) - 1)
            baseline = baseline_for(layout.y, style.fontSize, style.leading)
            layout.text(line, x, baseline, style.fontName, style.fontSize, color, word_spacing=spacing)
            layout.y -= style.leading
            yield

        layout.skip(style.spaceAfter)


@dataclass
class TableBlock(Block):
    """Grid of text cells; row_style is called once per row while laying out."""
    rows: List[List[str]]
    row_style: RowStyleFn
    col_widths: Optional[Sequence[float]] = None
    font_size: float = 10
    line_spacing: float = 1.2
    kind: str = "table"

    @property
    def column_count(self) -> int:
        return max(len(row) for row in self.rows)

    def _widths(self, layout: PageLayout) -> List[float]:
        if self.col_widths:
            return [float(w) for w in self.col_widths]
        n_cols = self.column_count
        return [layout.width / n_cols] * n_cols

    def _style_for(self, index: int) -> RowStyle:
        try:
            style = self.row_style(index)
        except Exception as e:
            raise BuildError(f"Row style function failed for row {index}: {e}", cause=e)
        if not isinstance(style, RowStyle):
            raise BuildError(f"Row style function must return RowStyle, got {type(style).__name__}")
        return style.normalized()

    def render(self, layout: PageLayout) -> Iterator[None]:
        widths = self._widths(layout)
        leading = self.font_size * self.line_spacing

        for index, row in enumerate(self.rows):
            style = self._style_for(index)
            font = PDF_FONT_BOLD if style.bold else PDF_FONT_REGULAR
            pad_top, pad_right, pad_bottom, pad_left = style.padding
            cells = list(row) + [""] * (len(widths) - len(row))
            wrapped = [
                wrap_text(cell, font, self.font_size, max(width - pad_left - pad_right, 1.0))
                for cell, width in zip(cells, widths)
            ]
            n_lines = max(len(lines) for lines in wrapped)

            layout.ensure(pad_top + n_lines * leading + pad_bottom)
            start = 0
            while start < n_lines:
                fit = int((layout.available - pad_top - pad_bottom) // leading)
                count = min(n_lines - start, max(fit, 1))
                self._draw_segment(layout, style, font, widths, wrapped, start, count, leading)
                start += count
                if start < n_lines:
                    # row continues on the next page
                    layout.new_page()
                yield

    def _draw_segment(self, layout: PageLayout, style: RowStyle, font: str, widths: List[float],
                      wrapped: List[List[str]], start: int, count: int, leading: float) -> None:
        """Draw wrapped lines start..start+count of one row as a bordered band."""
        pad_top, _, pad_bottom, pad_left = style.padding
        height = pad_top + count * leading + pad_bottom
        top = layout.y
        bottom = top - height

        if style.background is not None:
            layout.rect(layout.left, bottom, sum(widths), height, style.background)

        x = layout.left
        for width, lines in zip(widths, wrapped):
            for line_no, line in enumerate(lines[start:start + count]):
                line_top = top - pad_top - line_no * leading
                baseline = baseline_for(line_top, self.font_size, leading)
                layout.text(line, x + pad_left, baseline, font, self.font_size, style.text_color)
            x += width

        x = layout.left
        for width in widths:
            self._draw_borders(layout, style, x, top, width, bottom)
            x += width

        layout.y = bottom

    @staticmethod
    def _draw_borders(layout: PageLayout, style: RowStyle, x: float, top: float,
                      width: float, bottom: float) -> None:
        border_top, border_right, border_bottom, border_left = style.border
        color = style.border_color
        if border_top:
            layout.line(x, top, x + width, top, border_top, color)
        if border_right:
            layout.line(x + width, top, x + width, bottom, border_right, color)
        if border_bottom:
            layout.line(x, bottom, x + width, bottom, border_bottom, color)
        if border_left:
            layout.line(x, top, x, bottom, border_left, color)


@dataclass
class SpacerBlock(Block):
    height: float
    kind: str = "spacer"

    def render(self, layout: PageLayout) -> Iterator[None]:
        layout.skip(self.height)
        yield


class PageBreakBlock(Block):
    kind = "page_break"

    def render(self, layout: PageLayout) -> Iterator[None]:
        layout.page_break()
        yield
