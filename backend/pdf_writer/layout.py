"""
layout.py — Top-down page layout with automatic pagination.

PageLayout keeps a cursor on the current page and collects drawing
operators for it. When content would cross the bottom margin the page is
closed and handed out through take_completed(); the writer encodes those
pages right away.
"""

from dataclasses import dataclass
from typing import List, Tuple

from reportlab.lib import colors
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth

from settings import configs

from .encoder import FONT_RESOURCE_NAMES, pdf_number, pdf_string


@dataclass(frozen=True)
class Margins:
    top: float = configs.PDF_MARGIN_TOP
    bottom: float = configs.PDF_MARGIN_BOTTOM
    left: float = configs.PDF_MARGIN_LEFT
    right: float = configs.PDF_MARGIN_RIGHT


def text_width(text: str, font: str, size: float) -> float:
    return stringWidth(text, font, size)


def _break_word(word: str, font: str, size: float, width: float) -> List[str]:
    pieces, current, current_width = [], "", 0.0
    for ch in word:
        ch_width = stringWidth(ch, font, size)
        if current and current_width + ch_width > width:
            pieces.append(current)
            current, current_width = "", 0.0
        current += ch
        current_width += ch_width
    pieces.append(current)
    return pieces


def wrap_text(text: str, font: str, size: float, width: float) -> List[str]:
    """
    Word-wrap text to width. Words wider than a whole line are broken
    between characters so nothing runs past the right margin.
    """
    lines: List[str] = []
    for line in simpleSplit(text, font, size, width) or [""]:
        if stringWidth(line, font, size) > width:
            lines.extend(_break_word(line, font, size, width))
        else:
            lines.append(line)
    return lines


class PageLayout:
    """Cursor and operator buffer for the page being filled."""

    def __init__(self, page_size: Tuple[float, float], margins: Margins):
        self.page_size = page_size
        self.margins = margins
        width, height = page_size
        self.left = margins.left
        self.right = width - margins.right
        self.top = height - margins.top
        self.bottom = margins.bottom
        self.width = self.right - self.left
        if self.width <= 0 or self.top <= self.bottom:
            raise ValueError(f"Margins {margins} leave no printable area on a {page_size} page")

        self.y = self.top
        self._ops: List[str] = []
        self._completed: List[bytes] = []
        self._pages_started = 1
        self._forced = False

    @property
    def is_blank(self) -> bool:
        """True when nothing has been drawn on the current page."""
        return not self._ops

    @property
    def available(self) -> float:
        return self.y - self.bottom

    # ==================== PAGINATION ====================

    def new_page(self) -> None:
        self._completed.append("\n".join(self._ops).encode("latin-1"))
        self._ops = []
        self.y = self.top
        self._pages_started += 1
        self._forced = False

    def page_break(self) -> None:
        """Explicit break; always starts a page, even after a blank one."""
        self.new_page()
        self._forced = True

    def ensure(self, height: float) -> None:
        """Start a new page unless height fits below the cursor."""
        if height <= self.available:
            return
        if self.is_blank:
            # only spacing above the cursor, so reuse this page from the top
            self.y = self.top
        else:
            self.new_page()

    def skip(self, height: float) -> None:
        """Move the cursor down; gaps never carry over to the next page."""
        self.y = max(self.bottom, self.y - height)

    def take_completed(self) -> List[bytes]:
        pages, self._completed = self._completed, []
        return pages

    def close(self) -> List[bytes]:
        """Flush the last page. A blank trailing page is kept only when a page break asked for it."""
        if not self.is_blank or self._forced or self._pages_started == 1:
            self._completed.append("\n".join(self._ops).encode("latin-1"))
            self._ops = []
        return self.take_completed()

    def discard(self) -> None:
        self._ops = []
        self._completed = []

    # ==================== DRAWING ====================

    def _color(self, color: colors.Color, stroke: bool = False) -> str:
        red, green, blue = color.rgb()
        op = "RG" if stroke else "rg"
        return f"{pdf_number(red)} {pdf_number(green)} {pdf_number(blue)} {op}"

    def text(self, text: str, x: float, baseline: float, font: str, size: float,
             color: colors.Color, word_spacing: float = 0.0) -> None:
        operand = pdf_string(text).decode("latin-1")
        # Tw is part of the text state and outlives ET, so it is always reset
        self._ops.extend([
            "BT",
            self._color(color),
            f"/{FONT_RESOURCE_NAMES[font]} {pdf_number(size)} Tf",
            f"{pdf_number(word_spacing)} Tw",
            f"{pdf_number(x)} {pdf_number(baseline)} Td",
            f"{operand} Tj",
            "ET",
        ])

    def line(self, x1: float, y1: float, x2: float, y2: float, width: float, color: colors.Color) -> None:
        self._ops.extend([
            self._color(color, stroke=True),
            f"{pdf_number(width)} w",
            f"{pdf_number(x1)} {pdf_number(y1)} m {pdf_number(x2)} {pdf_number(y2)} l S",
        ])

    def rect(self, x: float, y: float, width: float, height: float, fill: colors.Color) -> None:
        self._ops.extend([
            self._color(fill),
            f"{pdf_number(x)} {pdf_number(y)} {pdf_number(width)} {pdf_number(height)} re f",
        ])


def baseline_for(line_top: float, size: float, leading: float) -> float:
    """Baseline that centres a line of glyphs (ascent ~0.8 em) in its leading box."""
    return line_top - (leading - size) / 2 - size * 0.8
