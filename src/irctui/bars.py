"""The one-row bars below the scrollback: typing indicator and status bar."""

from __future__ import annotations

from typing import TYPE_CHECKING

from irctui.style import STYLE_DEFAULT
from irctui.utils import rune_width, string_width

if TYPE_CHECKING:
    from irctui.buffers import BufferList
    from irctui.screen import Screen


def typing_text(nicks: list[str]) -> str:
    """Return the sentence announcing who is typing, or ``""``."""
    if not nicks:
        return ""
    if len(nicks) == 1:
        return f"{nicks[0]} is typing..."
    return f"{', '.join(nicks[:-1])} and {nicks[-1]} are typing..."


def draw_typing(screen: Screen, nicks: list[str]) -> None:
    """Draw the typing indicator on the third row from the bottom."""
    w, h = screen.size()
    if w == 0 or h < 3:
        return
    st = STYLE_DEFAULT.with_dim(True)
    y = h - 3

    x = 0
    for r in typing_text(nicks):
        if w <= x:
            return
        screen.set_content(x, y, r, st)
        x += rune_width(r)

    while x < w:
        screen.set_content(x, y, " ", st)
        x += 1


def draw_status(screen: Screen, buffers: BufferList) -> None:
    """Draw the buffer titles on the last row.

    The current buffer is underlined and buffers with unread highlights are
    bold.  When the titles do not all fit, the bar starts one buffer before
    the current one.
    """
    w, h = screen.size()
    if h < 1:
        return
    y = h - 1

    total = sum(string_width(b.title) + 1 for b in buffers.list)
    start = 0
    if w < total and 0 < buffers.current:
        start = buffers.current - 1

    x = 0
    for i in range(start, len(buffers.list)):
        b = buffers.list[i]
        st = STYLE_DEFAULT
        if i == buffers.current:
            st = st.with_underline(True)
        if 0 < b.highlights:
            st = st.with_bold(True)

        for r in b.title:
            if w <= x:
                break
            screen.set_content(x, y, r, st)
            x += rune_width(r)

        if w <= x:
            break

        screen.set_content(x, y, " ", STYLE_DEFAULT)
        x += 1

    while x < w:
        screen.set_content(x, y, " ", STYLE_DEFAULT)
        x += 1
