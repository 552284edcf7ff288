"""irctui: rendering and line-editing engine for terminal chat clients."""

import logging

# Buffers
from irctui.buffers import Buffer, BufferList

# Configuration
from irctui.config import Config, ConfigError

# Input line
from irctui.editor import RESCROLL_BATCH, Editor

# Events
from irctui.events import Event, EventPoller, KeyEvent, PasteEvent, ResizeEvent

# Inline formatting
from irctui.formatting import ColorState, FormatState, color_from_code, strip_formatting

# Keyboard input handling
from irctui.keys import KeyId, parse_key

# Lines and wrapping
from irctui.lines import Line, compute_split_points, new_line_now

# Screen
from irctui.screen import CellScreen, Screen
from irctui.scrollback import ScrollbackLayout
from irctui.style import COLOR_DEFAULT, STYLE_DEFAULT, Color, Style

# Terminal interface and implementations
from irctui.terminal import ProcessTerminal, Terminal

# Core UI
from irctui.ui import UI
from irctui.wrap import Point, SoftWrapCursor, layout_line

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Buffers
    "Buffer",
    "BufferList",
    # Configuration
    "Config",
    "ConfigError",
    # Editor
    "RESCROLL_BATCH",
    "Editor",
    # Events
    "Event",
    "EventPoller",
    "KeyEvent",
    "PasteEvent",
    "ResizeEvent",
    # Formatting
    "ColorState",
    "FormatState",
    "color_from_code",
    "strip_formatting",
    # Keys
    "KeyId",
    "parse_key",
    # Lines
    "Line",
    "Point",
    "SoftWrapCursor",
    "compute_split_points",
    "layout_line",
    "new_line_now",
    # Screen
    "CellScreen",
    "Screen",
    "ScrollbackLayout",
    "COLOR_DEFAULT",
    "STYLE_DEFAULT",
    "Color",
    "Style",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # UI
    "UI",
]
