"""Soft wrapping of one chat line onto screen rows.

A line comes with split points computed ahead of time: the rune indices
where a run of words turns into a run of blanks or back, together with the
display width of everything before them.  While a line is laid out,
:class:`SoftWrapCursor` looks ahead one run at a time to decide whether the
run still fits on the current row or starts a new one, and drops the blanks
that would otherwise open a row.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from irctui.formatting import FormatState
from irctui.style import Style
from irctui.utils import rune_width

DrawFn = Callable[[int, int, str, Style], None]


@dataclass(frozen=True)
class Point:
    """A split point.

    ``i`` is the rune index the point applies to, ``x`` the display width of
    the line up to that rune, and ``split`` whether the run starting there
    is made of blanks (a place where the row may break).
    """

    i: int
    x: int
    split: bool


class LineSource(Protocol):
    """What the renderers need from a stored chat line."""

    content: str

    @property
    def split_points(self) -> Sequence[Point]: ...

    def rendered_height(self, width: int) -> int: ...


class SoftWrapCursor:
    """Row and column bookkeeping for one line's layout pass."""

    def __init__(self, split_points: Sequence[Point], width: int, y: int = 0) -> None:
        self.width = width
        self.x = 0
        self.y = y
        self._points = split_points
        self._idx = 0

    @property
    def active(self) -> Point | None:
        """The split point that ends the run being laid out."""
        if not self._points:
            return None
        return self._points[self._idx]

    def reach(self, i: int) -> None:
        """Account for rune *i*, breaking the row if a run starts there."""
        points = self._points
        if self._idx + 1 >= len(points) or points[self._idx].i != i:
            return

        last = points[self._idx]
        self._idx += 1
        run = points[self._idx].x - last.x

        if self.width < run:
            # Longer than a row: it breaks wherever the row fills up.
            pass
        elif self.width == run:
            if self.x == 0:
                self.y += 1
        elif self.width < self.x + run:
            self.y += 1
            self.x = 0

    def suppressed(self) -> bool:
        """Whether the next glyph is a blank at the start of a row."""
        active = self.active
        return active is not None and not active.split and self.x == 0

    def place(self, glyph_width: int) -> tuple[int, int]:
        """Return the cell for a glyph of *glyph_width* columns and advance."""
        if self.width <= self.x:
            self.y += 1
            self.x = 0
        pos = (self.x, self.y)
        self.x += glyph_width
        return pos


def layout_line(
    line: LineSource,
    width: int,
    top: int = 0,
    draw: DrawFn | None = None,
    state: FormatState | None = None,
) -> int:
    """Lay *line* out on rows starting at *top* and return the last row.

    Glyphs landing on a row ``>= 0`` are passed to *draw*; rows above the
    screen still advance the cursor.  Control runes only change *state*.
    """
    if state is None:
        state = FormatState()
    cursor = SoftWrapCursor(line.split_points, width, top)

    for i, r in enumerate(line.content):
        cursor.reach(i)
        for glyph, style in state.feed(r):
            _put(cursor, glyph, style, draw)

    for glyph, style in state.finish():
        _put(cursor, glyph, style, draw)

    return cursor.y


def _put(cursor: SoftWrapCursor, glyph: str, style: Style, draw: DrawFn | None) -> None:
    if cursor.suppressed():
        return
    x, y = cursor.place(rune_width(glyph))
    if draw is not None and 0 <= y:
        draw(x, y, glyph, style)
