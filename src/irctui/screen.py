"""Cell-grid screen on top of a :class:`~irctui.terminal.Terminal`.

Drawing code writes cells into a back buffer through :class:`Screen`;
nothing reaches the terminal until :meth:`Screen.show` commits the pass,
at which point only the cells that changed since the previous commit are
written.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Protocol

from irctui.style import STYLE_DEFAULT, Style
from irctui.utils import rune_width

if TYPE_CHECKING:
    from irctui.terminal import Terminal

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALT_SCREEN_ENABLE = "\x1b[?1049h"
_ALT_SCREEN_DISABLE = "\x1b[?1049l"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J"
_RESET_STYLE = "\x1b[0m"
_MOVE_FMT = "\x1b[{};{}H"

Cell = tuple[str, Style]

_BLANK: Cell = (" ", STYLE_DEFAULT)
# Placeholder for the column covered by the right half of a wide glyph.
_CONTINUATION: Cell = ("", STYLE_DEFAULT)


# ---------------------------------------------------------------------------
# Screen protocol
# ---------------------------------------------------------------------------


class Screen(Protocol):
    """Interface the renderers draw through.  Coordinates are 0-based."""

    def set_content(self, x: int, y: int, r: str, style: Style) -> None: ...

    def show_cursor(self, x: int, y: int) -> None: ...

    def show(self) -> None: ...

    def size(self) -> tuple[int, int]: ...

    def clear(self) -> None: ...

    def sync(self) -> None:
        """Pick up a new terminal size and force a full redraw."""
        ...

    def fini(self) -> None:
        """Release the terminal."""
        ...


# ---------------------------------------------------------------------------
# CellScreen implementation
# ---------------------------------------------------------------------------


class CellScreen:
    """Double-buffered :class:`Screen` writing ANSI sequences to a terminal."""

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal
        self._width = 0
        self._height = 0
        self._back: list[list[Cell]] = []
        self._front: list[list[Cell | None]] = []
        self._cursor: tuple[int, int] | None = None
        self._started = False

    # -- lifecycle ----------------------------------------------------------

    def init(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None:
        """Take over the terminal: raw mode, alternate screen, empty grid."""
        self.terminal.start(on_input, on_resize)
        self.terminal.write(_ALT_SCREEN_ENABLE + _CLEAR_SCREEN)
        self._started = True
        self.sync()

    def fini(self) -> None:
        """Give the terminal back in the state it was found."""
        if not self._started:
            return
        self._started = False
        self.terminal.write(_RESET_STYLE + _SHOW_CURSOR + _ALT_SCREEN_DISABLE)
        self.terminal.stop()

    def sync(self) -> None:
        """Re-read the terminal size and force the next commit to repaint."""
        self._width = self.terminal.columns
        self._height = self.terminal.rows
        self._back = [[_BLANK] * self._width for _ in range(self._height)]
        self._front = [[None] * self._width for _ in range(self._height)]
        logger.debug("screen resized to %dx%d", self._width, self._height)

    # -- Screen protocol ----------------------------------------------------

    def size(self) -> tuple[int, int]:
        return self._width, self._height

    def clear(self) -> None:
        for row in self._back:
            row[:] = [_BLANK] * self._width

    def set_content(self, x: int, y: int, r: str, style: Style) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            return
        row = self._back[y]
        row[x] = (r, style)
        if rune_width(r) == 2 and x + 1 < self._width:
            row[x + 1] = _CONTINUATION

    def show_cursor(self, x: int, y: int) -> None:
        self._cursor = (x, y)

    def hide_cursor(self) -> None:
        self._cursor = None

    def show(self) -> None:
        """Commit the back buffer: write every cell that changed."""
        out: list[str] = [_HIDE_CURSOR]
        current: Style | None = None

        for y in range(self._height):
            back = self._back[y]
            front = self._front[y]
            x = 0
            while x < self._width:
                cell = back[x]
                if cell == front[x] or cell is _CONTINUATION:
                    front[x] = cell
                    x += 1
                    continue
                r, style = cell
                out.append(_MOVE_FMT.format(y + 1, x + 1))
                if style != current:
                    out.append(style.sgr())
                    current = style
                out.append(r)
                front[x] = cell
                x += 1

        out.append(_RESET_STYLE)
        if self._cursor is not None:
            cx, cy = self._cursor
            # An off-screen cursor stays hidden.
            if 0 <= cx < self._width and 0 <= cy < self._height:
                out.append(_MOVE_FMT.format(cy + 1, cx + 1))
                out.append(_SHOW_CURSOR)

        self.terminal.write("".join(out))

    # -- inspection ---------------------------------------------------------

    def cell(self, x: int, y: int) -> Cell:
        """Return the back-buffer content of cell ``(x, y)``."""
        return self._back[y][x]
