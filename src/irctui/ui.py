"""The chat screen: scrollback, typing indicator, input line and status bar.

:class:`UI` owns all display state and is driven from a single task: the
owner reads events from :attr:`UI.poller` and calls the methods below, each
of which redraws what it changed and commits the screen.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime

from irctui.bars import draw_status, draw_typing
from irctui.buffers import BufferList
from irctui.config import Config
from irctui.editor import Editor
from irctui.events import EventPoller
from irctui.lines import Line, new_line_now
from irctui.screen import CellScreen, Screen
from irctui.scrollback import ScrollbackLayout
from irctui.terminal import ProcessTerminal

logger = logging.getLogger(__name__)

HOME_MESSAGES = [
    "\x0312welcome home!",
    "\x02nothing to see here yet\x02, try \x1f/join #channel\x1f",
    "\x033,1 green on black \x0f is still readable",
    "type \x02/quit\x02 to leave",
]


class UI:
    """Main controller tying the screen to buffers, scrolling and the editor."""

    def __init__(self, screen: Screen, poller: EventPoller | None = None) -> None:
        self.screen = screen
        self.poller = poller if poller is not None else EventPoller()

        self.buffer_list = BufferList()
        self.buffer_list.current_buffer().content.append(
            new_line_now(random.choice(HOME_MESSAGES))
        )

        self.scrollback = ScrollbackLayout()

        w, _ = screen.size()
        self.editor = Editor(w)

        self.resize()

    @classmethod
    def new(cls, config: Config | None = None) -> UI:
        """Take over the process terminal.  Must run inside the event loop."""
        config = config if config is not None else Config()
        poller = EventPoller(queue_size=config.queue_size)
        screen = CellScreen(ProcessTerminal(write_log_path=config.write_log))
        screen.init(poller.on_input, poller.on_resize)
        poller.start()
        logger.info("ui started (%dx%d)", *screen.size())
        return cls(screen, poller)

    # -- lifecycle ----------------------------------------------------------

    def should_exit(self) -> bool:
        return self.poller.should_exit()

    def exit(self) -> None:
        self.poller.exit()

    async def close(self) -> None:
        await self.poller.stop()
        self.screen.fini()
        logger.info("ui closed")

    # -- buffers ------------------------------------------------------------

    def current_buffer(self) -> str:
        return self.buffer_list.current_buffer().title

    def current_buffer_oldest_time(self) -> datetime:
        content = self.buffer_list.current_buffer().content
        if not content:
            return datetime.now()
        return content[0].time

    def next_buffer(self) -> bool:
        ok = self.buffer_list.next()
        if ok:
            self._buffer_switched()
        return ok

    def previous_buffer(self) -> bool:
        ok = self.buffer_list.previous()
        if ok:
            self._buffer_switched()
        return ok

    def _buffer_switched(self) -> None:
        self.scrollback.reset()
        self._draw_typing()
        self._draw_buffer()
        self._draw_status()
        self.screen.show()

    def add_buffer(self, title: str) -> None:
        _, ok = self.buffer_list.add(title)
        if ok:
            self._draw_status()
            self._draw_typing()
            self._draw_buffer()
            self.screen.show()

    def remove_buffer(self, title: str) -> None:
        if self.buffer_list.remove(title):
            self.scrollback.reset()
            self._draw_status()
            self._draw_typing()
            self._draw_buffer()
            self.screen.show()

    def add_line(
        self,
        buffer: str,
        line: str,
        t: datetime | None = None,
        is_status: bool = False,
        highlight: bool = False,
    ) -> None:
        idx = self.buffer_list.idx(buffer)
        if idx < 0:
            logger.debug("line for unknown buffer %r dropped", buffer)
            return

        self.buffer_list.add_line(idx, line, t or datetime.now(), is_status, highlight)

        if idx == self.buffer_list.current:
            if self.scrollback.line_added():
                self._draw_buffer()
                self.screen.show()
        elif highlight:
            self._draw_status()
            self.screen.show()

    def add_history_lines(self, buffer: str, lines: list[Line]) -> None:
        idx = self.buffer_list.idx(buffer)
        if idx < 0:
            return

        self.buffer_list.add_history_lines(idx, lines)

        if idx == self.buffer_list.current:
            self.scrollback.at_top = False
            self._draw_buffer()
            self.screen.show()

    def typing_start(self, buffer: str, nick: str) -> None:
        idx = self.buffer_list.idx(buffer)
        if idx < 0:
            return
        self.buffer_list.typing_start(idx, nick)
        if idx == self.buffer_list.current:
            self._draw_typing()
            self.screen.show()

    def typing_stop(self, buffer: str, nick: str) -> None:
        idx = self.buffer_list.idx(buffer)
        if idx < 0:
            return
        self.buffer_list.typing_stop(idx, nick)
        if idx == self.buffer_list.current:
            self._draw_typing()
            self.screen.show()

    # -- scrolling ----------------------------------------------------------

    def scroll_up(self) -> None:
        _, h = self.screen.size()
        if self.scrollback.scroll_up(h):
            self._draw_buffer()
            self.screen.show()

    def scroll_down(self) -> None:
        _, h = self.screen.size()
        if self.scrollback.scroll_down(h):
            self._draw_buffer()
            self.screen.show()

    def is_at_top(self) -> bool:
        return self.scrollback.at_top

    # -- input --------------------------------------------------------------

    def input_is_command(self) -> bool:
        return self.editor.is_command()

    def input_len(self) -> int:
        return self.editor.text_len()

    def input_rune(self, r: str) -> None:
        self.editor.put_rune(r)
        self._draw_editor()

    def input_right(self) -> None:
        self.editor.right()
        self._draw_editor()

    def input_left(self) -> None:
        self.editor.left()
        self._draw_editor()

    def input_backspace(self) -> bool:
        ok = self.editor.rem_rune()
        if ok:
            self._draw_editor()
        return ok

    def input_enter(self) -> str:
        content = self.editor.flush()
        self._draw_editor()
        return content

    # -- drawing ------------------------------------------------------------

    def resize(self) -> None:
        self.screen.sync()
        w, _ = self.screen.size()
        self.editor.resize(w)
        self.buffer_list.invalidate()
        self.scrollback.reset()
        self.draw()

    def draw(self) -> None:
        self._draw_status()
        self._draw_editor(show=False)
        self._draw_typing()
        self._draw_buffer()
        self.screen.show()

    def _draw_editor(self, show: bool = True) -> None:
        _, h = self.screen.size()
        if h < 2:
            return
        self.editor.draw(self.screen, h - 2)
        if show:
            self.screen.show()

    def _draw_typing(self) -> None:
        draw_typing(self.screen, self.buffer_list.current_buffer().typings)

    def _draw_buffer(self) -> None:
        self.scrollback.draw(self.screen, self.buffer_list.current_buffer().content)

    def _draw_status(self) -> None:
        draw_status(self.screen, self.buffer_list)
