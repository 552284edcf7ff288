"""Entry point for the irctui demo client.

Runs the chat screen offline: messages typed in a buffer are echoed back to
it, and a handful of slash commands manage buffers.  There is no network.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import termios

from irctui.config import LOG_LEVELS, Config, ConfigError
from irctui.events import Event, KeyEvent, PasteEvent, ResizeEvent
from irctui.formatting import strip_formatting
from irctui.keys import is_text_input
from irctui.ui import UI

logger = logging.getLogger(__name__)

HELP_TEXT = "commands: /join <buffer>, /part [buffer], /me <action>, /nick <nick>, /quit"


class Dispatcher:
    """Maps events to :class:`UI` operations and runs submitted input."""

    def __init__(self, ui: UI, nick: str) -> None:
        self.ui = ui
        self.nick = nick

    def handle_event(self, event: Event) -> None:
        if isinstance(event, ResizeEvent):
            self.ui.resize()
        elif isinstance(event, PasteEvent):
            for r in event.text:
                if is_text_input(r):
                    self.ui.input_rune(r)
        elif isinstance(event, KeyEvent):
            self.handle_key(event)

    def handle_key(self, event: KeyEvent) -> None:  # noqa: C901
        key = event.key
        ui = self.ui

        if key == "ctrl+c":
            ui.exit()
        elif key == "left" or key == "ctrl+b":
            ui.input_left()
        elif key == "right" or key == "ctrl+f":
            ui.input_right()
        elif key == "backspace":
            ui.input_backspace()
        elif key == "enter":
            is_command = ui.input_is_command()
            content = ui.input_enter()
            if content:
                if is_command:
                    self.run_command(content)
                else:
                    self.send_message(content)
        elif key == "pageUp":
            ui.scroll_up()
        elif key == "pageDown":
            ui.scroll_down()
        elif key in ("ctrl+n", "alt+right"):
            ui.next_buffer()
        elif key in ("ctrl+p", "alt+left"):
            ui.previous_buffer()
        elif is_text_input(event.data):
            for r in event.data:
                ui.input_rune(r)

    def send_message(self, text: str) -> None:
        self.ui.add_line(self.ui.current_buffer(), f"\x02<{self.nick}>\x02 {text}")

    def status(self, text: str) -> None:
        buffer = self.ui.current_buffer()
        logger.info("%s: %s", buffer, strip_formatting(text))
        self.ui.add_line(buffer, f"\x0314-- {text}", is_status=True)

    def run_command(self, content: str) -> None:
        name, _, arg = content[1:].partition(" ")
        name = name.lower()
        arg = arg.strip()
        logger.debug("command %r arg=%r", name, arg)

        if name == "quit":
            self.ui.exit()
        elif name == "join":
            if not arg:
                self.status("usage: /join <buffer>")
                return
            self.ui.add_buffer(arg)
            self.ui.add_line(arg, f"\x0303-- you joined {arg}", is_status=True)
        elif name == "part":
            title = arg or self.ui.current_buffer()
            self.ui.remove_buffer(title)
        elif name == "me":
            self.ui.add_line(self.ui.current_buffer(), f"\x0306* {self.nick} {arg}")
        elif name == "nick":
            if not arg or " " in arg:
                self.status("usage: /nick <nick>")
                return
            self.status(f"you are now known as \x02{arg}\x02")
            self.nick = arg
        elif name == "help":
            self.status(HELP_TEXT)
        else:
            self.status(f"unknown command /{name}")


async def run(config: Config) -> None:
    ui = UI.new(config)
    dispatcher = Dispatcher(ui, config.nick)
    try:
        while not ui.should_exit():
            event = await ui.poller.next_event()
            dispatcher.handle_event(event)
    finally:
        await ui.close()


def configure_logging(config: Config) -> None:
    if not config.log_file:
        # stdout is the screen; without a log file nothing is logged.
        return
    logging.basicConfig(
        filename=config.log_file,
        level=getattr(logging, config.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="irctui: terminal chat screen demo")
    parser.add_argument("--nick", default=None, help="Nickname shown on your messages")
    parser.add_argument("--log-file", default=None, help="Write logs to this file")
    parser.add_argument("--log-level", default=None, choices=list(LOG_LEVELS))
    parser.add_argument("--queue-size", type=int, default=None, help="Event queue capacity")
    args = parser.parse_args()

    try:
        config = Config.from_env()
        if args.nick is not None:
            config.nick = args.nick
        if args.log_file is not None:
            config.log_file = args.log_file
        if args.log_level is not None:
            config.log_level = args.log_level
        if args.queue_size is not None:
            config.queue_size = args.queue_size
        config.validate()
    except ConfigError as e:
        parser.error(str(e))

    configure_logging(config)

    try:
        asyncio.run(run(config))
    except termios.error:
        print("irctui: stdin is not a terminal", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
