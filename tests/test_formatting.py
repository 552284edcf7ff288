"""Tests for irctui.formatting."""

from __future__ import annotations

from irctui.formatting import (
    BOLD,
    COLOR,
    ITALIC,
    RESET,
    UNDERLINE,
    ColorState,
    FormatState,
    color_from_code,
    strip_formatting,
)
from irctui.style import (
    COLOR_BROWN,
    COLOR_DEFAULT,
    COLOR_LIGHT_BLUE,
    COLOR_RED,
    COLOR_WHITE,
    STYLE_DEFAULT,
    Style,
)


def render(text: str) -> list[tuple[str, Style]]:
    state = FormatState()
    out: list[tuple[str, Style]] = []
    for r in text:
        out.extend(state.feed(r))
    out.extend(state.finish())
    return out


def glyphs(text: str) -> str:
    return "".join(g for g, _ in render(text))


class TestColorTable:
    def test_known_codes(self) -> None:
        assert color_from_code(0) == COLOR_WHITE
        assert color_from_code(4) == COLOR_RED
        assert color_from_code(5) == COLOR_BROWN
        assert color_from_code(12) == COLOR_LIGHT_BLUE

    def test_99_is_terminal_default(self) -> None:
        assert color_from_code(99) == COLOR_DEFAULT

    def test_unknown_codes_pass_through(self) -> None:
        assert color_from_code(42) == 42


class TestAttributes:
    def test_bold_toggles(self) -> None:
        out = render(BOLD + "bold" + BOLD + "x")
        assert "".join(g for g, _ in out) == "boldx"
        assert all(st.bold for _, st in out[:4])
        assert out[4][1].bold is False

    def test_underline_toggles(self) -> None:
        out = render(UNDERLINE + "u" + UNDERLINE + "v")
        assert out[0][1].underline is True
        assert out[1][1].underline is False

    def test_italic_is_tracked_not_drawn(self) -> None:
        state = FormatState()
        assert state.feed(ITALIC) == []
        assert state.italic is True
        assert state.feed("a") == [("a", STYLE_DEFAULT)]

    def test_reset_clears_everything(self) -> None:
        out = render(BOLD + UNDERLINE + COLOR + "4a" + RESET + "b")
        assert out[0][1] == Style(fg=COLOR_RED, bold=True, underline=True)
        assert out[1] == ("b", STYLE_DEFAULT)

    def test_nul_also_resets(self) -> None:
        out = render(BOLD + "a\x00b")
        assert out[1] == ("b", STYLE_DEFAULT)

    def test_plain_text_is_default_style(self) -> None:
        assert render("hi") == [("h", STYLE_DEFAULT), ("i", STYLE_DEFAULT)]


class TestColors:
    def test_single_digit_foreground(self) -> None:
        out = render(COLOR + "4red")
        assert "".join(g for g, _ in out) == "red"
        for _, st in out:
            assert st.fg == COLOR_RED
            assert st.bg == COLOR_DEFAULT

    def test_foreground_and_default_background(self) -> None:
        out = render(COLOR + "00,99x")
        assert out == [("x", Style(fg=COLOR_WHITE, bg=COLOR_DEFAULT))]

    def test_two_digit_background(self) -> None:
        out = render(COLOR + "12,05t")
        assert out == [("t", Style(fg=COLOR_LIGHT_BLUE, bg=COLOR_BROWN))]

    def test_single_digit_background(self) -> None:
        out = render(COLOR + "12,5t")
        assert out == [("t", Style(fg=COLOR_LIGHT_BLUE, bg=COLOR_BROWN))]

    def test_third_digit_is_literal(self) -> None:
        assert glyphs(COLOR + "999x") == "9x"

    def test_bare_color_code_clears_colors(self) -> None:
        out = render(COLOR + "4r" + COLOR + "x")
        assert out[0][1].fg == COLOR_RED
        assert out[1] == ("x", STYLE_DEFAULT)

    def test_bare_color_code_keeps_attributes(self) -> None:
        out = render(BOLD + COLOR + "4r" + COLOR + "x")
        assert out[1] == ("x", Style(bold=True))

    def test_comma_without_background_is_literal(self) -> None:
        out = render(COLOR + "4,x")
        assert out == [(",", Style(fg=COLOR_RED)), ("x", Style(fg=COLOR_RED))]

    def test_comma_after_bare_color_code_is_literal(self) -> None:
        assert glyphs(COLOR + ",x") == ",x"

    def test_dangling_comma_at_end_of_text(self) -> None:
        out = render("a" + COLOR + "4,")
        assert out == [("a", STYLE_DEFAULT), (",", Style(fg=COLOR_RED))]

    def test_code_at_end_of_text_emits_nothing(self) -> None:
        assert glyphs("a" + COLOR + "12") == "a"

    def test_raw_palette_index(self) -> None:
        out = render(COLOR + "42x")
        assert out == [("x", Style(fg=42))]

    def test_control_rune_ends_color_code(self) -> None:
        out = render(COLOR + "4" + BOLD + "x")
        assert out == [("x", Style(fg=COLOR_RED, bold=True))]


class TestFormatStateLifecycle:
    def test_fresh_state(self) -> None:
        state = FormatState()
        assert state.style == STYLE_DEFAULT
        assert state.color_state is ColorState.NORMAL
        assert not (state.bold or state.italic or state.underline)

    def test_reset_leaves_color_code(self) -> None:
        state = FormatState()
        state.feed(BOLD)
        state.feed(COLOR)
        state.reset()
        assert state.color_state is ColorState.NORMAL
        assert state.bold is False
        assert state.feed("a") == [("a", STYLE_DEFAULT)]

    def test_finish_outside_color_code(self) -> None:
        state = FormatState()
        state.feed("a")
        assert state.finish() == []


class TestStripFormatting:
    def test_removes_codes(self) -> None:
        text = BOLD + "nick" + BOLD + " " + COLOR + "03,01hello" + RESET + UNDERLINE + "!"
        assert strip_formatting(text) == "nick hello!"

    def test_plain_text_unchanged(self) -> None:
        assert strip_formatting("just text") == "just text"

    def test_keeps_literal_commas(self) -> None:
        assert strip_formatting(COLOR + "4,x, y") == ",x, y"
