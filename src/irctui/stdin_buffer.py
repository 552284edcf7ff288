"""StdinBuffer splits raw terminal input into complete key sequences.

Reads from stdin may end in the middle of an escape sequence (an arrow key
is three bytes, and a slow link can deliver them separately).  The buffer
holds on to such a tail until the rest arrives, or until a short timeout
shows it was a lone Escape key after all.  Bracketed pastes are collected
whole and reported separately so pasted control characters are never taken
for keystrokes.
"""

from __future__ import annotations

import asyncio
from typing import Callable

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"


def _sequence_length(data: str) -> int | None:
    """Return the length of the escape sequence at the start of *data*.

    *data* must start with ESC.  Returns ``None`` when more input is needed
    to tell where the sequence ends.
    """
    if len(data) == 1:
        return None

    kind = data[1]

    # CSI: ESC [ <params> <final byte 0x40-0x7e>
    if kind == "[":
        for i in range(2, len(data)):
            if 0x40 <= ord(data[i]) <= 0x7E:
                return i + 1
        return None

    # SS3: ESC O <char>
    if kind == "O":
        return 3 if len(data) >= 3 else None

    # OSC / DCS / APC: terminated by BEL or ST
    if kind in "]P_":
        for i in range(2, len(data)):
            if data[i] == "\x07":
                return i + 1
            if data[i] == ESC and i + 1 < len(data) and data[i + 1] == "\\":
                return i + 2
        return None

    # Meta: ESC followed by any single character
    return 2


def _extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences.

    Returns ``(sequences, remainder)`` where *remainder* is an unfinished
    escape sequence at the end of the buffer.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue

        length = _sequence_length(buffer[pos:])
        if length is None:
            return sequences, buffer[pos:]
        sequences.append(buffer[pos : pos + length])
        pos += length

    return sequences, ""


class StdinBuffer:
    """Turns raw stdin chunks into complete sequences and pastes.

    *on_data* receives each key sequence or character, *on_paste* the text
    between a pair of bracketed paste markers.  An escape sequence left
    incomplete at the end of a chunk is held for *timeout* seconds before it
    is given up on and delivered as is.
    """

    def __init__(
        self,
        on_data: Callable[[str], None],
        on_paste: Callable[[str], None],
        *,
        timeout: float = 0.01,
    ) -> None:
        self._on_data = on_data
        self._on_paste = on_paste
        self._timeout = timeout
        self._timer: asyncio.TimerHandle | None = None

        self._pending: str = ""
        # Text of a paste whose end marker has not arrived yet.
        self._paste: str | None = None

    @property
    def pending(self) -> str:
        """Input held back waiting for the rest of a sequence."""
        return self._pending

    @property
    def in_paste(self) -> bool:
        return self._paste is not None

    def feed(self, data: str) -> None:
        self._stop_timer()

        if self._paste is not None:
            self._paste += data
            self._end_paste()
            return

        data = self._pending + data
        self._pending = ""

        marker = data.find(BRACKETED_PASTE_START)
        if marker != -1:
            sequences, rest = _extract_complete_sequences(data[:marker])
            self._deliver(sequences)
            if rest:
                self._on_data(rest)
            self._paste = data[marker + len(BRACKETED_PASTE_START) :]
            self._end_paste()
            return

        sequences, self._pending = _extract_complete_sequences(data)
        self._deliver(sequences)

        if self._pending:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                # Nothing could complete the tail later.
                self._deliver(self.flush())
                return
            self._timer = loop.call_later(self._timeout, self._on_timeout)

    def flush(self) -> list[str]:
        """Take whatever is held back, as one sequence."""
        self._stop_timer()
        held, self._pending = self._pending, ""
        return [held] if held else []

    def reset(self) -> None:
        """Drop held input and any unfinished paste."""
        self._stop_timer()
        self._pending = ""
        self._paste = None

    # -- private ------------------------------------------------------------

    def _deliver(self, sequences: list[str]) -> None:
        for sequence in sequences:
            self._on_data(sequence)

    def _end_paste(self) -> None:
        if self._paste is None:
            return
        end = self._paste.find(BRACKETED_PASTE_END)
        if end == -1:
            return
        text = self._paste[:end]
        after = self._paste[end + len(BRACKETED_PASTE_END) :]
        self._paste = None
        self._on_paste(text)
        if after:
            self.feed(after)

    def _on_timeout(self) -> None:
        self._timer = None
        self._deliver(self.flush())

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
