"""Inline IRC formatting codes.

Chat lines carry mIRC-style control characters that toggle attributes or
select colours for the text that follows them:

* ``\\x02`` bold, ``\\x1d`` italic, ``\\x1f`` underline (toggles)
* ``\\x0f`` (or NUL) resets everything
* ``\\x03`` starts a colour code: up to two foreground digits, optionally
  followed by a comma and up to two background digits

:class:`FormatState` consumes a line one rune at a time and reports which
glyphs to draw and in which :class:`~irctui.style.Style`.  Control runes are
consumed and never drawn.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from irctui.style import (
    COLOR_BLACK,
    COLOR_BLUE,
    COLOR_BROWN,
    COLOR_DEFAULT,
    COLOR_FUCHSIA,
    COLOR_GREEN,
    COLOR_GREY,
    COLOR_LIGHT_BLUE,
    COLOR_LIGHT_GREEN,
    COLOR_LIGHT_GREY,
    COLOR_ORANGE,
    COLOR_PINK,
    COLOR_PURPLE,
    COLOR_RED,
    COLOR_TEAL,
    COLOR_WHITE,
    COLOR_YELLOW,
    STYLE_DEFAULT,
    Color,
    Style,
)

# ---------------------------------------------------------------------------
# Control runes
# ---------------------------------------------------------------------------

RESET = "\x0f"
RESET_NUL = "\x00"
BOLD = "\x02"
COLOR = "\x03"
ITALIC = "\x1d"
UNDERLINE = "\x1f"

# ---------------------------------------------------------------------------
# Colour table
# ---------------------------------------------------------------------------

_PALETTE: dict[int, Color] = {
    0: COLOR_WHITE,
    1: COLOR_BLACK,
    2: COLOR_BLUE,
    3: COLOR_GREEN,
    4: COLOR_RED,
    5: COLOR_BROWN,
    6: COLOR_PURPLE,
    7: COLOR_ORANGE,
    8: COLOR_YELLOW,
    9: COLOR_LIGHT_GREEN,
    10: COLOR_TEAL,
    11: COLOR_FUCHSIA,
    12: COLOR_LIGHT_BLUE,
    13: COLOR_PINK,
    14: COLOR_GREY,
    15: COLOR_LIGHT_GREY,
    99: COLOR_DEFAULT,
}


def color_from_code(code: int) -> Color:
    """Map an IRC colour number to a palette colour.

    Numbers outside the 16-entry table (other than 99, the terminal default)
    are passed through as raw palette indices.
    """
    return _PALETTE.get(code, code)


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


class ColorState(enum.Enum):
    NORMAL = 0
    FG_DIGIT1 = 1
    FG_DIGIT2 = 2
    FG_DIGIT3 = 3
    BG_START = 4
    BG_DIGIT2 = 5


def _is_digit(r: str) -> bool:
    return "0" <= r <= "9"


@dataclass
class FormatState:
    """Formatting state of one line being rendered.

    A fresh (or :meth:`reset`) state has no attributes, default colours and
    is outside any colour code.
    """

    bold: bool = False
    italic: bool = False
    underline: bool = False
    style: Style = field(default=STYLE_DEFAULT)
    color_state: ColorState = ColorState.NORMAL
    fg_code: int = 0
    bg_code: int = 0

    def reset(self) -> None:
        self.bold = False
        self.italic = False
        self.underline = False
        self.style = STYLE_DEFAULT
        self.color_state = ColorState.NORMAL

    def feed(self, r: str) -> list[tuple[str, Style]]:  # noqa: C901
        """Consume the rune *r* and return the glyphs it produces.

        Most runes produce themselves; control runes and the digits of a
        colour code produce nothing.  A comma that turns out not to start a
        background colour is given back as a literal glyph ahead of *r*.
        """
        glyphs: list[tuple[str, Style]] = []
        state = self.color_state

        if state is ColorState.FG_DIGIT1:
            self.fg_code = 0
            self.bg_code = 0
            if _is_digit(r):
                self.fg_code = int(r)
                self.color_state = ColorState.FG_DIGIT2
                return glyphs
            self.style = self.style.foreground(COLOR_DEFAULT).background(COLOR_DEFAULT)
            self.color_state = ColorState.NORMAL
        elif state is ColorState.FG_DIGIT2:
            if _is_digit(r):
                self.fg_code = self.fg_code * 10 + int(r)
                self.color_state = ColorState.FG_DIGIT3
                return glyphs
            if r == ",":
                self.color_state = ColorState.BG_START
                return glyphs
            self.style = self.style.foreground(color_from_code(self.fg_code))
            self.color_state = ColorState.NORMAL
        elif state is ColorState.FG_DIGIT3:
            if r == ",":
                self.color_state = ColorState.BG_START
                return glyphs
            self.style = self.style.foreground(color_from_code(self.fg_code))
            self.color_state = ColorState.NORMAL
        elif state is ColorState.BG_START:
            if _is_digit(r):
                self.bg_code = self.bg_code * 10 + int(r)
                self.color_state = ColorState.BG_DIGIT2
                return glyphs
            self.style = self.style.foreground(color_from_code(self.fg_code))
            self.color_state = ColorState.NORMAL
            glyphs.append((",", self.style))
        elif state is ColorState.BG_DIGIT2:
            self.color_state = ColorState.NORMAL
            self.style = self.style.foreground(color_from_code(self.fg_code))
            if _is_digit(r):
                self.bg_code = self.bg_code * 10 + int(r)
                self.style = self.style.background(color_from_code(self.bg_code))
                return glyphs
            self.style = self.style.background(color_from_code(self.bg_code))

        if r == RESET or r == RESET_NUL:
            self.reset()
            return glyphs
        if r == BOLD:
            self.bold = not self.bold
            self.style = self.style.with_bold(self.bold)
            return glyphs
        if r == COLOR:
            self.color_state = ColorState.FG_DIGIT1
            return glyphs
        if r == ITALIC:
            # Tracked only: italics are not rendered.
            self.italic = not self.italic
            return glyphs
        if r == UNDERLINE:
            self.underline = not self.underline
            self.style = self.style.with_underline(self.underline)
            return glyphs

        glyphs.append((r, self.style))
        return glyphs

    def finish(self) -> list[tuple[str, Style]]:
        """Close a colour code left open at the end of the text.

        Only a dangling comma produces output: it is given back as a glyph
        in the foreground colour that preceded it.
        """
        if self.color_state is not ColorState.BG_START:
            return []
        self.style = self.style.foreground(color_from_code(self.fg_code))
        self.color_state = ColorState.NORMAL
        return [(",", self.style)]


def strip_formatting(text: str) -> str:
    """Return the glyphs of *text* with every formatting code removed."""
    state = FormatState()
    out: list[str] = []
    for r in text:
        for glyph, _style in state.feed(r):
            out.append(glyph)
    for glyph, _style in state.finish():
        out.append(glyph)
    return "".join(out)
