"""The process's controlling terminal.

:class:`ProcessTerminal` puts the terminal in raw mode with bracketed paste
enabled, reads stdin from the running asyncio loop and reports complete key
sequences and resizes through the two callbacks given to
:meth:`~ProcessTerminal.start`.  Everything it does is undone by
:meth:`~ProcessTerminal.stop`.
"""

from __future__ import annotations

import asyncio
import codecs
import logging
import os
import signal
import sys
import termios
import tty
from typing import IO, Callable, Protocol

from irctui.stdin_buffer import BRACKETED_PASTE_END, BRACKETED_PASTE_START, StdinBuffer

logger = logging.getLogger(__name__)

_PASTE_MODE_ON = "\x1b[?2004h"
_PASTE_MODE_OFF = "\x1b[?2004l"

_READ_SIZE = 4096
_DEFAULT_SIZE = os.terminal_size((80, 24))

InputHandler = Callable[[str], None]
ResizeHandler = Callable[[], None]


class Terminal(Protocol):
    """What :class:`~irctui.screen.CellScreen` needs from a terminal."""

    def start(self, on_input: InputHandler, on_resize: ResizeHandler) -> None: ...

    def stop(self) -> None: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...


class ProcessTerminal:
    """Raw-mode terminal on the process's stdin and stdout.

    If *write_log_path* is set, every string written to the terminal is
    also appended to that file, which helps when debugging redraws.
    """

    def __init__(
        self,
        write_log_path: str = "",
        stdin: IO[str] | None = None,
        stdout: IO[str] | None = None,
    ) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._write_log_path = write_log_path
        self._write_log: IO[str] | None = None

        self._on_input: InputHandler | None = None
        self._on_resize: ResizeHandler | None = None
        self._splitter: StdinBuffer | None = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

        self._saved_mode: list | None = None
        self._saved_sigwinch: Callable | int | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    # -- size ---------------------------------------------------------------

    def _size(self) -> os.terminal_size:
        try:
            return os.get_terminal_size(self._stdout.fileno())
        except (ValueError, OSError):
            return _DEFAULT_SIZE

    @property
    def columns(self) -> int:
        return self._size().columns

    @property
    def rows(self) -> int:
        return self._size().lines

    # -- lifecycle ----------------------------------------------------------

    def start(self, on_input: InputHandler, on_resize: ResizeHandler) -> None:
        """Enter raw mode and start reading stdin on the running loop.

        Raises :class:`termios.error` when stdin is not a terminal.
        """
        fd = self._stdin.fileno()
        self._saved_mode = termios.tcgetattr(fd)
        tty.setraw(fd)

        self._on_input = on_input
        self._on_resize = on_resize

        if self._write_log_path:
            self._open_write_log()

        self._splitter = StdinBuffer(
            on_data=self._emit,
            on_paste=lambda text: self._emit(BRACKETED_PASTE_START + text + BRACKETED_PASTE_END),
        )

        self._saved_sigwinch = signal.signal(signal.SIGWINCH, self._handle_sigwinch)

        try:
            self._loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("terminal started outside an event loop; input is ignored")
        else:
            self._loop.add_reader(fd, self._read_stdin)

        self._write_raw(_PASTE_MODE_ON)
        logger.debug("terminal started on fd %d", fd)

    def stop(self) -> None:
        """Leave raw mode and unregister every handler."""
        self._write_raw(_PASTE_MODE_OFF)
        fd = self._stdin.fileno()

        if self._loop is not None:
            self._loop.remove_reader(fd)
            self._loop = None

        if self._saved_sigwinch is not None:
            signal.signal(signal.SIGWINCH, self._saved_sigwinch)
            self._saved_sigwinch = None

        if self._splitter is not None:
            self._splitter.reset()
            self._splitter = None

        if self._saved_mode is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._saved_mode)
            self._saved_mode = None

        if self._write_log is not None:
            self._write_log.close()
            self._write_log = None

        self._on_input = None
        self._on_resize = None
        logger.debug("terminal stopped")

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        self._write_raw(data)
        if self._write_log is not None:
            self._write_log.write(data)
            self._write_log.flush()

    def _write_raw(self, data: str) -> None:
        try:
            self._stdout.write(data)
            self._stdout.flush()
        except OSError as e:
            logger.debug("terminal write failed: %s", e)

    def _open_write_log(self) -> None:
        try:
            self._write_log = open(self._write_log_path, "a", encoding="utf-8")
        except OSError as e:
            logger.warning("cannot open write log %s: %s", self._write_log_path, e)

    # -- input --------------------------------------------------------------

    def _read_stdin(self) -> None:
        try:
            raw = os.read(self._stdin.fileno(), _READ_SIZE)
        except OSError as e:
            logger.debug("stdin read failed: %s", e)
            return
        if not raw:
            return

        # Multi-byte characters may be split across reads.
        text = self._decoder.decode(raw)
        if text and self._splitter is not None:
            self._splitter.feed(text)

    def _emit(self, data: str) -> None:
        if self._on_input is not None:
            self._on_input(data)

    def _handle_sigwinch(self, signum: int, frame: object) -> None:
        if self._on_resize is not None:
            self._on_resize()
