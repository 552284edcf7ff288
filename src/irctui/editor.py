"""Editor - single-line text field with horizontal scrolling.

The editor keeps, next to the text, the running display width of every
prefix of it so that converting between code point indices and screen
columns is a lookup.  Edits are single code points and pay an O(n) update
of that array instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from irctui.style import STYLE_DEFAULT
from irctui.utils import rune_width

if TYPE_CHECKING:
    from irctui.screen import Screen

# Number of code points the view jumps by when the cursor leaves it.
RESCROLL_BATCH = 16


class Editor:
    """The text field where the user writes messages and commands."""

    def __init__(self, width: int) -> None:
        # Written code points; empty means nothing is written.
        self._text: list[str] = []

        # _text_width[i] is the width of _text[:i], so the list always has
        # len(_text) + 1 entries and starts with 0.
        self._text_width: list[int] = [0]

        # Index in _text before which the cursor sits.
        self._cursor_idx: int = 0

        # Number of code points of _text skipped when drawing.
        self._offset_idx: int = 0

        self._width: int = width

    # -- accessors ---------------------------------------------------------

    @property
    def text(self) -> str:
        return "".join(self._text)

    @property
    def text_width(self) -> list[int]:
        return list(self._text_width)

    @property
    def cursor(self) -> int:
        return self._cursor_idx

    @property
    def offset(self) -> int:
        return self._offset_idx

    @property
    def width(self) -> int:
        return self._width

    def text_len(self) -> int:
        return len(self._text)

    def is_command(self) -> bool:
        return len(self._text) != 0 and self._text[0] == "/"

    # -- editing -----------------------------------------------------------

    def resize(self, width: int) -> None:
        if width < self._width:
            self._cursor_idx = 0
            self._offset_idx = 0
        self._width = width

    def put_rune(self, r: str) -> None:
        """Insert *r* at the cursor and move the cursor past it."""
        idx = self._cursor_idx
        self._text.insert(idx, r)

        self._text_width.append(0)
        for i in range(idx + 1, len(self._text_width)):
            self._text_width[i] = self._text_width[i - 1] + rune_width(self._text[i - 1])

        self.right()

    def rem_rune(self) -> bool:
        """Delete the code point before the cursor.

        Returns ``False`` when the cursor is at the start of the text and
        nothing was deleted.
        """
        idx = self._cursor_idx
        if idx == 0:
            return False

        rw = self._text_width[idx] - self._text_width[idx - 1]
        for i in range(idx, len(self._text_width)):
            self._text_width[i] -= rw
        del self._text_width[idx]

        del self._text[idx - 1]
        self.left()
        return True

    def flush(self) -> str:
        """Return the written text and clear the field."""
        content = "".join(self._text)
        self._text.clear()
        del self._text_width[1:]
        self._cursor_idx = 0
        self._offset_idx = 0
        return content

    # -- cursor movement ---------------------------------------------------

    def right(self) -> None:
        if self._cursor_idx == len(self._text):
            return
        self._cursor_idx += 1
        shown = self._text_width[self._cursor_idx] - self._text_width[self._offset_idx]
        if self._width < shown:
            self._offset_idx = min(self._offset_idx + RESCROLL_BATCH, len(self._text) - 1)

    def left(self) -> None:
        if self._cursor_idx == 0:
            return
        self._cursor_idx -= 1
        if self._cursor_idx <= self._offset_idx:
            self._offset_idx = max(self._offset_idx - RESCROLL_BATCH, 0)

    # -- rendering ---------------------------------------------------------

    def cursor_span(self) -> tuple[int, int]:
        """Return the screen columns ``[start, end)`` covered by the cursor."""
        base = self._text_width[self._offset_idx]
        start = self._text_width[self._cursor_idx] - base
        end = start + 1
        if self._cursor_idx + 1 < len(self._text_width):
            end = self._text_width[self._cursor_idx + 1] - base
        return start, end

    def draw(self, screen: Screen, y: int) -> tuple[int, int]:
        """Draw the visible part of the text on row *y*.

        The hardware cursor is placed on the first column of the cursor
        span, which is also returned.
        """
        st = STYLE_DEFAULT

        x = 0
        i = self._offset_idx
        while i < len(self._text) and x < self._width:
            r = self._text[i]
            screen.set_content(x, y, r, st)
            x += rune_width(r)
            i += 1

        while x < self._width:
            screen.set_content(x, y, " ", st)
            x += 1

        start, end = self.cursor_span()
        screen.show_cursor(start, y)
        return start, end
