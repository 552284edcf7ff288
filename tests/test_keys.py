"""Tests for irctui.keys."""

from __future__ import annotations

import pytest

from irctui.keys import LEGACY_KEY_SEQUENCES, is_text_input, parse_key


class TestParseKey:
    @pytest.mark.parametrize(
        "data,expected",
        [
            ("\x1b[A", "up"),
            ("\x1b[D", "left"),
            ("\x1bOC", "right"),
            ("\x1b[5~", "pageUp"),
            ("\x1b[6~", "pageDown"),
            ("\x1b[3~", "delete"),
        ],
    )
    def test_legacy_sequences(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    def test_every_legacy_sequence_parses(self) -> None:
        for data, name in LEGACY_KEY_SEQUENCES.items():
            assert parse_key(data) == name

    def test_modified_arrows(self) -> None:
        assert parse_key("\x1b[1;3C") == "alt+right"
        assert parse_key("\x1b[1;3D") == "alt+left"
        assert parse_key("\x1b[1;5A") == "ctrl+up"
        assert parse_key("\x1b[1;2H") == "shift+home"

    def test_modified_tilde_keys(self) -> None:
        assert parse_key("\x1b[5;5~") == "ctrl+pageUp"
        assert parse_key("\x1b[3;2~") == "shift+delete"

    def test_unknown_tilde_key(self) -> None:
        assert parse_key("\x1b[99;5~") is None

    def test_simple_keys(self) -> None:
        assert parse_key("\x1b") == "escape"
        assert parse_key("\r") == "enter"
        assert parse_key("\n") == "enter"
        assert parse_key("\t") == "tab"
        assert parse_key("\x7f") == "backspace"
        assert parse_key("\x08") == "backspace"
        assert parse_key("\x00") == "ctrl+space"

    def test_ctrl_letters(self) -> None:
        assert parse_key("\x03") == "ctrl+c"
        assert parse_key("\x0e") == "ctrl+n"
        assert parse_key("\x10") == "ctrl+p"

    def test_alt_keys(self) -> None:
        assert parse_key("\x1bb") == "alt+b"
        assert parse_key("\x1bB") == "alt+b"
        assert parse_key("\x1b\r") == "alt+enter"
        assert parse_key("\x1b\x7f") == "alt+backspace"

    def test_printable(self) -> None:
        assert parse_key("a") == "a"
        assert parse_key("世") == "世"

    def test_unrecognised(self) -> None:
        assert parse_key("") is None
        assert parse_key("\x1b[999z") is None


class TestIsTextInput:
    def test_text(self) -> None:
        assert is_text_input("a") is True
        assert is_text_input("héllo 世界") is True

    def test_control_characters(self) -> None:
        assert is_text_input("") is False
        assert is_text_input("\x1b[A") is False
        assert is_text_input("\x7f") is False
        assert is_text_input("a\tb") is False
