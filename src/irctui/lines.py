"""Stored chat lines and the split points used to wrap them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from irctui.formatting import FormatState
from irctui.utils import is_split_rune, rune_width
from irctui.wrap import Point, layout_line


def compute_split_points(content: str) -> list[Point]:
    """Return the split points of *content*.

    There is a point wherever a run of blanks starts or ends, measured in
    rendered glyphs: formatting codes have no width and never end a run.
    A line that does not end in blanks gets a closing point past its last
    rune.
    """
    points: list[Point] = []
    state = FormatState()
    width = 0
    last_was_split = False

    for i, r in enumerate(content):
        glyphs = state.feed(r)
        if not glyphs:
            continue

        # A comma given back by an unfinished colour code comes first.
        for glyph, _style in glyphs[:-1]:
            width += rune_width(glyph)

        glyph = glyphs[-1][0]
        cur_is_split = is_split_rune(glyph)
        if not points or last_was_split != cur_is_split:
            points.append(Point(i=i, x=width, split=cur_is_split))
        last_was_split = cur_is_split
        width += rune_width(glyph)

    for glyph, _style in state.finish():
        width += rune_width(glyph)
        last_was_split = False

    if not last_was_split:
        points.append(Point(i=len(content), x=width, split=True))

    return points


@dataclass
class Line:
    """One line of a buffer: a message or a status notice."""

    content: str
    time: datetime = field(default_factory=datetime.now)
    is_status: bool = False
    highlight: bool = False

    _split_points: list[Point] | None = field(default=None, init=False, repr=False, compare=False)
    _width: int = field(default=-1, init=False, repr=False, compare=False)
    _height: int = field(default=0, init=False, repr=False, compare=False)

    @property
    def split_points(self) -> list[Point]:
        if self._split_points is None:
            self._split_points = compute_split_points(self.content)
        return self._split_points

    def rendered_height(self, width: int) -> int:
        """Return the number of rows the line takes on a *width*-wide screen."""
        if self._width != width:
            self._height = layout_line(self, width) + 1
            self._width = width
        return self._height

    def invalidate(self) -> None:
        """Forget the cached height, e.g. after the screen was resized."""
        self._width = -1


def new_line_now(content: str, is_status: bool = False) -> Line:
    return Line(content=content, time=datetime.now(), is_status=is_status)
