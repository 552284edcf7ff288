"""Tests for CellScreen and Style encoding."""

from __future__ import annotations

from irctui.editor import Editor
from irctui.screen import CellScreen
from irctui.style import COLOR_DEFAULT, COLOR_RED, STYLE_DEFAULT, Style

from .virtual_screen import VirtualTerminal


def make_screen(rows: int = 4, columns: int = 10) -> tuple[CellScreen, VirtualTerminal]:
    term = VirtualTerminal(rows=rows, columns=columns)
    screen = CellScreen(term)
    screen.init(lambda data: None, lambda: None)
    return screen, term


class TestStyleSgr:
    def test_default(self) -> None:
        assert STYLE_DEFAULT.sgr() == "\x1b[0;39;49m"

    def test_attributes(self) -> None:
        st = Style(bold=True, underline=True, dim=True)
        assert st.sgr() == "\x1b[0;1;2;4;39;49m"

    def test_basic_colors(self) -> None:
        assert Style(fg=1, bg=4).sgr() == "\x1b[0;31;44m"

    def test_bright_colors(self) -> None:
        assert Style(fg=COLOR_RED).sgr() == "\x1b[0;91;49m"

    def test_extended_colors(self) -> None:
        assert Style(fg=214, bg=130).sgr() == "\x1b[0;38;5;214;48;5;130m"

    def test_builders_return_new_styles(self) -> None:
        st = STYLE_DEFAULT.foreground(COLOR_RED).with_bold(True)
        assert st == Style(fg=COLOR_RED, bold=True)
        assert STYLE_DEFAULT.bold is False
        assert st.background(COLOR_DEFAULT).bg == COLOR_DEFAULT


class TestCellScreenLifecycle:
    def test_init_takes_over_terminal(self) -> None:
        screen, term = make_screen()
        assert term.started is True
        assert "\x1b[?1049h" in term.output
        assert screen.size() == (10, 4)

    def test_fini_restores_terminal(self) -> None:
        screen, term = make_screen()
        term.clear_buffer()
        screen.fini()
        assert term.started is False
        assert "\x1b[?1049l" in term.output
        assert "\x1b[?25h" in term.output

    def test_fini_twice_is_harmless(self) -> None:
        screen, term = make_screen()
        screen.fini()
        term.clear_buffer()
        screen.fini()
        assert term.output == ""

    def test_sync_picks_up_new_size(self) -> None:
        screen, term = make_screen()
        term.simulate_resize(rows=6, columns=20)
        screen.sync()
        assert screen.size() == (20, 6)


class TestCellScreenDrawing:
    def test_first_show_paints_every_cell(self) -> None:
        screen, term = make_screen(rows=2, columns=3)
        term.clear_buffer()
        screen.show()
        assert term.output.count("\x1b[") >= 6
        assert "\x1b[2;3H" in term.output

    def test_show_writes_only_changes(self) -> None:
        screen, term = make_screen(rows=2, columns=3)
        screen.show()
        term.clear_buffer()

        screen.set_content(1, 0, "x", STYLE_DEFAULT)
        screen.show()

        out = term.output
        assert "\x1b[1;2Hx" in out
        assert "\x1b[1;1H" not in out
        assert "\x1b[2;1H" not in out

    def test_unchanged_frame_writes_no_cells(self) -> None:
        screen, term = make_screen(rows=2, columns=3)
        screen.show()
        term.clear_buffer()
        screen.show()
        assert term.output == "\x1b[?25l\x1b[0m"

    def test_style_change_emits_sgr(self) -> None:
        screen, term = make_screen(rows=1, columns=3)
        screen.show()
        term.clear_buffer()
        red = Style(fg=COLOR_RED)
        screen.set_content(0, 0, "a", red)
        screen.set_content(1, 0, "b", red)
        screen.show()
        assert term.output.count(red.sgr()) == 1

    def test_out_of_bounds_is_ignored(self) -> None:
        screen, _ = make_screen(rows=2, columns=3)
        screen.set_content(3, 0, "x", STYLE_DEFAULT)
        screen.set_content(0, -1, "x", STYLE_DEFAULT)
        assert screen.cell(2, 0) == (" ", STYLE_DEFAULT)

    def test_wide_glyph_covers_next_cell(self) -> None:
        screen, term = make_screen(rows=1, columns=4)
        screen.show()
        term.clear_buffer()
        screen.set_content(0, 0, "世", STYLE_DEFAULT)
        screen.show()
        assert "世" in term.output
        assert "\x1b[1;2H" not in term.output

    def test_cursor_is_positioned_after_cells(self) -> None:
        screen, term = make_screen(rows=3, columns=5)
        screen.show_cursor(2, 1)
        term.clear_buffer()
        screen.show()
        assert term.output.endswith("\x1b[2;3H\x1b[?25h")

    def test_cursor_left_of_screen_stays_hidden(self) -> None:
        editor = Editor(10)
        for _ in range(40):
            editor.put_rune("x")
        for _ in range(40):
            editor.left()
        for _ in range(11):
            editor.right()
        assert (editor.cursor, editor.offset) == (11, 16)
        assert editor.cursor_span()[0] < 0

        screen, term = make_screen(rows=3, columns=10)
        editor.draw(screen, 1)
        term.clear_buffer()
        screen.show()
        assert ";-" not in term.output
        assert "\x1b[?25h" not in term.output

    def test_cursor_past_last_column_stays_hidden(self) -> None:
        screen, term = make_screen(rows=2, columns=5)
        screen.show_cursor(5, 0)
        term.clear_buffer()
        screen.show()
        assert term.output.endswith("\x1b[0m")
        assert "\x1b[?25h" not in term.output

    def test_hidden_cursor_stays_hidden(self) -> None:
        screen, term = make_screen()
        screen.show_cursor(1, 1)
        screen.hide_cursor()
        term.clear_buffer()
        screen.show()
        assert "\x1b[?25h" not in term.output

    def test_clear_blanks_back_buffer(self) -> None:
        screen, _ = make_screen()
        screen.set_content(0, 0, "x", STYLE_DEFAULT)
        screen.clear()
        assert screen.cell(0, 0) == (" ", STYLE_DEFAULT)
