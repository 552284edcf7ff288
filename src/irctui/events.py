"""Terminal events and the task that forwards them to the UI owner.

The terminal reports input and resizes through callbacks.  Those cannot
block, so they land in a larger source queue and are dropped with a
warning once it is full.  A single polling task moves them, one at a time,
into the bounded queue the owner reads from.  The polling task never
touches UI state, so everything the owner mutates stays on the owner's
side of the queue.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Union

from irctui.keys import KeyId, parse_key
from irctui.stdin_buffer import BRACKETED_PASTE_END, BRACKETED_PASTE_START

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 128
DEFAULT_SOURCE_SIZE = 1024


@dataclass(frozen=True)
class KeyEvent:
    """One key press.  ``key`` is ``None`` for sequences with no name."""

    key: KeyId | None
    data: str


@dataclass(frozen=True)
class PasteEvent:
    text: str


@dataclass(frozen=True)
class ResizeEvent:
    pass


Event = Union[KeyEvent, PasteEvent, ResizeEvent]


def decode_input(data: str) -> Event:
    """Turn one complete input sequence into an event."""
    if data.startswith(BRACKETED_PASTE_START) and data.endswith(BRACKETED_PASTE_END):
        return PasteEvent(data[len(BRACKETED_PASTE_START) : -len(BRACKETED_PASTE_END)])
    return KeyEvent(key=parse_key(data), data=data)


class EventPoller:
    """Forwards terminal events into a bounded queue until told to exit."""

    def __init__(
        self,
        queue_size: int = DEFAULT_QUEUE_SIZE,
        source_size: int = DEFAULT_SOURCE_SIZE,
    ) -> None:
        self.events: asyncio.Queue[Event] = asyncio.Queue(maxsize=queue_size)
        self._source: asyncio.Queue[Event] = asyncio.Queue(maxsize=source_size)
        self._exit: bool = False
        self._task: asyncio.Task[None] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    # -- terminal callbacks -------------------------------------------------

    def on_input(self, data: str) -> None:
        self._push(decode_input(data))

    def on_resize(self) -> None:
        self._push(ResizeEvent())

    def _push(self, event: Event) -> None:
        if self._loop is not None:
            # Resizes arrive from a signal handler; make sure the loop wakes.
            self._loop.call_soon_threadsafe(self._enqueue, event)
        else:
            self._enqueue(event)

    def _enqueue(self, event: Event) -> None:
        try:
            self._source.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning("input backlog full, dropping %s", type(event).__name__)

    # -- polling ------------------------------------------------------------

    async def poll_event(self) -> Event:
        """Wait for the next event from the terminal."""
        return await self._source.get()

    def start(self) -> None:
        """Start the polling task on the running event loop."""
        self._loop = asyncio.get_running_loop()
        self._task = self._loop.create_task(self._run())

    async def _run(self) -> None:
        while not self._exit:
            event = await self.poll_event()
            if self._exit:
                break
            await self.events.put(event)
        logger.debug("event poller stopped")

    async def next_event(self) -> Event:
        """Wait for the next forwarded event (owner side)."""
        return await self.events.get()

    # -- shutdown -----------------------------------------------------------

    def exit(self) -> None:
        """Ask the polling task to stop forwarding.

        A task blocked waiting for the terminal notices on its next wake.
        """
        self._exit = True

    def should_exit(self) -> bool:
        return self._exit

    async def stop(self) -> None:
        """Set the exit flag and wait for the polling task to end."""
        self.exit()
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
