"""Configuration for the terminal client.

Values come from ``IRCTUI_*`` environment variables and can be overridden
on the command line.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from irctui.events import DEFAULT_QUEUE_SIZE

LOG_LEVELS = ("debug", "info", "warning", "error")


class ConfigError(ValueError):
    """Raised for a configuration value that cannot be used."""


@dataclass
class Config:
    """Client configuration."""

    nick: str = "me"
    queue_size: int = DEFAULT_QUEUE_SIZE
    log_file: str = ""
    log_level: str = "warning"
    write_log: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.queue_size < 1:
            raise ConfigError(f"queue size must be positive, got {self.queue_size}")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"unknown log level {self.log_level!r}")
        if not self.nick or any(ch.isspace() for ch in self.nick):
            raise ConfigError(f"invalid nick {self.nick!r}")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Config:
        env = os.environ if environ is None else environ
        raw_size = env.get("IRCTUI_QUEUE_SIZE", str(DEFAULT_QUEUE_SIZE))
        try:
            queue_size = int(raw_size)
        except ValueError:
            raise ConfigError(f"IRCTUI_QUEUE_SIZE is not a number: {raw_size!r}") from None
        return cls(
            nick=env.get("IRCTUI_NICK", "me"),
            queue_size=queue_size,
            log_file=env.get("IRCTUI_LOG_FILE", ""),
            log_level=env.get("IRCTUI_LOG_LEVEL", "warning").lower(),
            write_log=env.get("IRCTUI_WRITE_LOG", ""),
        )
