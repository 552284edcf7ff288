"""Cell styles and their SGR encoding.

Colours are 256-colour palette indices.  ``COLOR_DEFAULT`` means "whatever
the terminal uses by default" and is encoded as SGR 39/49.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

Color = int

COLOR_DEFAULT: Color = -1

# Named palette entries used by the IRC colour table.  The first sixteen are
# the terminal's own palette, the rest are the closest xterm-256 matches.
COLOR_BLACK: Color = 0
COLOR_MAROON: Color = 1
COLOR_GREEN: Color = 2
COLOR_OLIVE: Color = 3
COLOR_NAVY: Color = 4
COLOR_PURPLE: Color = 5
COLOR_TEAL: Color = 6
COLOR_SILVER: Color = 7
COLOR_GREY: Color = 8
COLOR_RED: Color = 9
COLOR_LIME: Color = 10
COLOR_YELLOW: Color = 11
COLOR_BLUE: Color = 12
COLOR_FUCHSIA: Color = 13
COLOR_AQUA: Color = 14
COLOR_WHITE: Color = 15
COLOR_BROWN: Color = 130
COLOR_ORANGE: Color = 214
COLOR_LIGHT_GREEN: Color = 120
COLOR_LIGHT_BLUE: Color = 152
COLOR_PINK: Color = 218
COLOR_LIGHT_GREY: Color = 252


@dataclass(frozen=True)
class Style:
    """Immutable set of attributes applied to a screen cell."""

    fg: Color = COLOR_DEFAULT
    bg: Color = COLOR_DEFAULT
    bold: bool = False
    italic: bool = False
    underline: bool = False
    dim: bool = False

    def foreground(self, color: Color) -> Style:
        return replace(self, fg=color)

    def background(self, color: Color) -> Style:
        return replace(self, bg=color)

    def with_bold(self, on: bool) -> Style:
        return replace(self, bold=on)

    def with_underline(self, on: bool) -> Style:
        return replace(self, underline=on)

    def with_dim(self, on: bool) -> Style:
        return replace(self, dim=on)

    def sgr(self) -> str:
        """Return the escape sequence that selects exactly this style."""
        params = ["0"]
        if self.bold:
            params.append("1")
        if self.dim:
            params.append("2")
        if self.italic:
            params.append("3")
        if self.underline:
            params.append("4")
        params.append(_color_param(self.fg, 30, 90, "38"))
        params.append(_color_param(self.bg, 40, 100, "48"))
        return f"\x1b[{';'.join(params)}m"


STYLE_DEFAULT = Style()


def _color_param(color: Color, base: int, bright_base: int, extended: str) -> str:
    if color < 0:
        return str(base + 9)
    if color < 8:
        return str(base + color)
    if color < 16:
        return str(bright_base + color - 8)
    return f"{extended};5;{color & 0xFF}"
