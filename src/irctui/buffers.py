"""Buffers (one per channel or query) and the ordered list holding them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from irctui.lines import Line

HOME_TITLE = "home"


@dataclass
class Buffer:
    title: str
    highlights: int = 0
    content: list[Line] = field(default_factory=list)
    typings: list[str] = field(default_factory=list)


class BufferList:
    """Ordered buffers; the first one is the home buffer and always stays."""

    def __init__(self, buffers: list[Buffer] | None = None) -> None:
        self.list: list[Buffer] = buffers if buffers else [Buffer(title=HOME_TITLE)]
        self.current: int = 0

    def __len__(self) -> int:
        return len(self.list)

    def current_buffer(self) -> Buffer:
        return self.list[self.current]

    def idx(self, title: str) -> int:
        """Return the index of the buffer named *title*, or -1."""
        lt = title.lower()
        for i, b in enumerate(self.list):
            if b.title.lower() == lt:
                return i
        return -1

    def add(self, title: str) -> tuple[int, bool]:
        """Append a buffer unless one with that title exists.

        Returns its index and whether it was added.
        """
        i = self.idx(title)
        if 0 <= i:
            return i, False
        self.list.append(Buffer(title=title))
        return len(self.list) - 1, True

    def remove(self, title: str) -> bool:
        i = self.idx(title)
        if i <= 0:
            return False
        del self.list[i]
        if len(self.list) <= self.current:
            self.current = len(self.list) - 1
        elif i < self.current:
            self.current -= 1
        return True

    def next(self) -> bool:
        if len(self.list) <= self.current + 1:
            return False
        self.current += 1
        self.list[self.current].highlights = 0
        return True

    def previous(self) -> bool:
        if self.current <= 0:
            return False
        self.current -= 1
        self.list[self.current].highlights = 0
        return True

    def add_line(
        self,
        idx: int,
        content: str,
        t: datetime,
        is_status: bool = False,
        highlight: bool = False,
    ) -> Line:
        b = self.list[idx]
        line = Line(content=content, time=t, is_status=is_status, highlight=highlight)
        b.content.append(line)
        if idx != self.current and highlight:
            b.highlights += 1
        return line

    def add_history_lines(self, idx: int, lines: list[Line]) -> None:
        """Prepend older *lines* to a buffer."""
        b = self.list[idx]
        b.content[:0] = lines

    def typing_start(self, idx: int, nick: str) -> None:
        b = self.list[idx]
        lnick = nick.lower()
        if any(n.lower() == lnick for n in b.typings):
            return
        b.typings.append(nick)

    def typing_stop(self, idx: int, nick: str) -> None:
        b = self.list[idx]
        lnick = nick.lower()
        b.typings = [n for n in b.typings if n.lower() != lnick]

    def invalidate(self) -> None:
        """Drop every cached line height."""
        for b in self.list:
            for line in b.content:
                line.invalidate()
