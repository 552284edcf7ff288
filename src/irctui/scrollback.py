"""Scrollback area: the lines of the current buffer, newest at the bottom.

The area spans every row but the last three of the screen.  Lines are placed
bottom-up: starting from the bottom edge (moved down by the scroll amount),
each line's rendered height is subtracted to find its top row, and the walk
stops as soon as nothing above can be visible.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from irctui.formatting import FormatState
from irctui.style import STYLE_DEFAULT, Style
from irctui.wrap import LineSource, layout_line

if TYPE_CHECKING:
    from irctui.screen import Screen

logger = logging.getLogger(__name__)

# Rows at the bottom of the screen not used by the scrollback: the typing
# indicator, the input line and the status bar.
RESERVED_ROWS = 3


class ScrollbackLayout:
    """Vertical scroll state of the scrollback and the pass that draws it."""

    def __init__(self) -> None:
        # Rows scrolled up from the bottom; never negative.
        self.scroll_amt: int = 0
        # Whether the oldest stored line is fully on screen.
        self.at_top: bool = False

    # -- scrolling ----------------------------------------------------------

    def scroll_up(self, height: int) -> bool:
        """Scroll up half a screen.  Returns ``False`` when already at the top."""
        if self.at_top:
            return False
        self.scroll_amt += height // 2
        return True

    def scroll_down(self, height: int) -> bool:
        """Scroll down half a screen.  Returns ``False`` when already at the bottom."""
        if self.scroll_amt == 0:
            return False
        self.scroll_amt = max(self.scroll_amt - height // 2, 0)
        self.at_top = False
        return True

    def reset(self) -> None:
        self.scroll_amt = 0
        self.at_top = False

    def line_added(self) -> bool:
        """Account for a new line at the bottom.

        While scrolled up, the view follows the lines it shows instead of
        the bottom edge; returns whether the area needs a redraw.
        """
        if 0 < self.scroll_amt:
            self.scroll_amt += 1
            return False
        return True

    # -- drawing ------------------------------------------------------------

    def draw(self, screen: Screen, lines: Sequence[LineSource]) -> None:
        w, h = screen.size()
        if h < RESERVED_ROWS:
            return
        y_end = h - RESERVED_ROWS

        for y in range(y_end):
            for x in range(w):
                screen.set_content(x, y, " ", STYLE_DEFAULT)

        if not lines:
            self.at_top = True
            return

        def draw_cell(x: int, y: int, r: str, style: Style) -> None:
            if y < y_end:
                screen.set_content(x, y, r, style)

        state = FormatState()
        y0 = self.scroll_amt + y_end

        for line in reversed(lines):
            if y0 < 0:
                break

            y0 -= line.rendered_height(w)
            if y_end <= y0:
                continue

            layout_line(line, w, top=y0, draw=draw_cell, state=state)
            state.reset()

        self.at_top = 0 <= y0
        logger.debug("scrollback drawn (scroll=%d, at_top=%s)", self.scroll_amt, self.at_top)
