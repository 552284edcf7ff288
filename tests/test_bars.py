"""Tests for the typing indicator and status bar."""

from __future__ import annotations

from irctui.bars import draw_status, draw_typing, typing_text
from irctui.buffers import BufferList
from irctui.style import STYLE_DEFAULT

from .virtual_screen import VirtualScreen


class TestTypingText:
    def test_nobody(self) -> None:
        assert typing_text([]) == ""

    def test_one(self) -> None:
        assert typing_text(["alice"]) == "alice is typing..."

    def test_many(self) -> None:
        assert typing_text(["a", "b", "c"]) == "a, b and c are typing..."


class TestDrawTyping:
    def test_draws_on_third_row_from_bottom(self) -> None:
        screen = VirtualScreen(30, 5)
        screen.fill()
        draw_typing(screen, ["alice"])
        assert screen.row_text(2) == "alice is typing...".ljust(30)
        assert screen.style_at(0, 2).dim is True
        assert screen.row_text(3) == "#" * 30

    def test_truncates(self) -> None:
        screen = VirtualScreen(5, 3)
        draw_typing(screen, ["alice"])
        assert screen.row_text(0) == "alice"

    def test_clears_when_nobody_types(self) -> None:
        screen = VirtualScreen(10, 3)
        screen.fill()
        draw_typing(screen, [])
        assert screen.row_text(0) == " " * 10


class TestDrawStatus:
    def test_titles_on_last_row(self) -> None:
        screen = VirtualScreen(20, 3)
        bl = BufferList()
        bl.add("#a")
        draw_status(screen, bl)
        assert screen.row_text(2) == "home #a".ljust(20)

    def test_current_is_underlined(self) -> None:
        screen = VirtualScreen(20, 3)
        bl = BufferList()
        bl.add("#a")
        bl.next()
        draw_status(screen, bl)
        assert screen.style_at(0, 2) == STYLE_DEFAULT
        assert screen.style_at(5, 2).underline is True
        assert screen.style_at(4, 2) == STYLE_DEFAULT

    def test_highlighted_buffer_is_bold(self) -> None:
        screen = VirtualScreen(20, 3)
        bl = BufferList()
        bl.add("#a")
        bl.list[1].highlights = 2
        draw_status(screen, bl)
        assert screen.style_at(5, 2).bold is True
        assert screen.style_at(0, 2).bold is False

    def test_overflow_starts_before_current(self) -> None:
        screen = VirtualScreen(10, 3)
        bl = BufferList()
        for title in ("#one", "#two", "#three"):
            bl.add(title)
        bl.next()
        bl.next()
        draw_status(screen, bl)
        assert screen.row_text(2) == "#one #two "

    def test_overflow_is_cut_at_width(self) -> None:
        screen = VirtualScreen(8, 3)
        bl = BufferList()
        bl.add("#channel")
        draw_status(screen, bl)
        assert screen.row_text(2) == "home #ch"
