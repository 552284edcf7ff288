"""Keyboard input parsing.

Maps one complete input sequence (as split by
:class:`~irctui.stdin_buffer.StdinBuffer`) to a key identifier such as
``"left"``, ``"ctrl+n"`` or ``"alt+right"``.  Printable characters map to
themselves.
"""

from __future__ import annotations

import re

KeyId = str

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Legacy escape sequences -> key names
LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[4~": "end",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1b[Z": "shift+tab",
}

# xterm modifier parameter (CSI 1;<mod> X) -> key prefix
_MODIFIER_PREFIXES: dict[int, str] = {
    2: "shift+",
    3: "alt+",
    4: "shift+alt+",
    5: "ctrl+",
    6: "ctrl+shift+",
    7: "ctrl+alt+",
    8: "ctrl+shift+alt+",
}

_MODIFIED_CSI_RE = re.compile(r"^\x1b\[1;(\d+)([ABCDHF])$")
_MODIFIED_TILDE_RE = re.compile(r"^\x1b\[(\d+);(\d+)~$")

_CSI_FINAL_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

_TILDE_KEYS: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
}


_SINGLE_KEYS: dict[str, str] = {
    "\x1b": "escape",
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x00": "ctrl+space",
}

# Keys sent after ESC when Alt is held that are not printable.
_ALT_SPECIAL: dict[str, str] = {
    "\r": "alt+enter",
    "\n": "alt+enter",
    "\x7f": "alt+backspace",
    "\x08": "alt+backspace",
}


def _parse_modified(data: str) -> KeyId | None:
    match = _MODIFIED_CSI_RE.match(data)
    if match:
        mod, final = match.groups()
        return _MODIFIER_PREFIXES.get(int(mod), "") + _CSI_FINAL_KEYS[final]

    match = _MODIFIED_TILDE_RE.match(data)
    if match:
        code, mod = match.groups()
        name = _TILDE_KEYS.get(int(code))
        if name is not None:
            return _MODIFIER_PREFIXES.get(int(mod), "") + name
    return None


def parse_key(data: str) -> KeyId | None:
    """Return the key id for one input sequence, or ``None`` if unknown."""
    if not data:
        return None

    key = LEGACY_KEY_SEQUENCES.get(data) or _SINGLE_KEYS.get(data)
    if key is not None:
        return key

    if data.startswith("\x1b["):
        return _parse_modified(data)

    if len(data) == 1:
        code = ord(data)
        if 1 <= code <= 26:
            return f"ctrl+{chr(code + 0x60)}"
        return data if data.isprintable() else None

    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch in _ALT_SPECIAL:
            return _ALT_SPECIAL[ch]
        return f"alt+{ch.lower()}" if ch.isprintable() else None

    return None


def is_text_input(data: str) -> bool:
    """Return ``True`` if *data* is text to insert rather than a key."""
    return bool(data) and all(ch.isprintable() or ord(ch) > 0x9F for ch in data)
