"""Terminal text utilities: display width measurement and rune classification.

Widths are measured per code point for the editor and the scrollback
renderer (both index text by code point), and per grapheme cluster for
free-standing strings such as buffer titles and nicknames.
"""

from __future__ import annotations

import unicodedata

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Code point width
# ---------------------------------------------------------------------------


def rune_width(r: str) -> int:
    """Return the number of terminal columns occupied by the code point *r*.

    Control characters and combining marks are 0 wide, East Asian wide and
    fullwidth characters are 2 wide, everything else is 1.
    """
    cp = ord(r)
    if cp < 0x20 or (0x7F <= cp <= 0x9F):
        return 0
    if cp < 0x7F:
        return 1
    return max(_wcwidth.wcwidth(r), 0)


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Emoji sequences (VS16, ZWJ, skin tone modifiers, regional indicators)
    are 2 wide; other clusters take the width of their base code point.
    """
    if not g:
        return 0

    if len(g) == 1:
        return rune_width(g)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    base = g[0]
    if ord(base) >= 0x1F000:
        return 2
    if unicodedata.category(base) in ("Mn", "Me", "Mc", "Cf"):
        return 0
    return rune_width(base)


def string_width(text: str) -> int:
    """Calculate the terminal width of *text*.

    Uses a fast path for printable ASCII and caches the result for other
    strings.
    """
    if not text:
        return 0

    if text.isascii() and text.isprintable():
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    total = 0
    for g in grapheme.graphemes(text):
        total += _grapheme_width(g)

    return _cache_width(text, total)


# ---------------------------------------------------------------------------
# Character classification
# ---------------------------------------------------------------------------


def is_split_rune(r: str) -> bool:
    """Return ``True`` if a soft line break may happen around *r*."""
    return r in (" ", "\t")
