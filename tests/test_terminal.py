"""Key decoding and raw-mode guard."""

from __future__ import annotations

import io
import os

import pytest

from otp_tui import terminal
from otp_tui.keymap import InputController
from otp_tui.terminal import TerminalError, decode_key


@pytest.mark.parametrize(
    ("raw", "key"),
    [
        ("\x1b[A", "up"),
        ("\x1b[B", "down"),
        ("\x1bOA", "up"),
        ("\t", "tab"),
        ("\r", "enter"),
        ("\n", "enter"),
        ("\x7f", "backspace"),
        ("\x1b", "esc"),
        ("q", "q"),
        ("7", "7"),
        ("\x01", None),
        ("", None),
    ],
)
def test_decode_key(raw: str, key) -> None:
    assert decode_key(raw) == key


def test_raw_mode_requires_tty() -> None:
    with pytest.raises(TerminalError):
        with terminal.raw_mode(io.StringIO()):
            pass


def test_read_key_from_pipe() -> None:
    r, w = os.pipe()
    try:
        os.write(w, b"\x1b[Bx")
        assert terminal.read_key(0.5, fd=r) == "down"
        assert terminal.read_key(0.5, fd=r) == "x"
        assert terminal.read_key(0.0, fd=r) is None
    finally:
        os.close(r)
        os.close(w)


def _keys_from_pipe(payload: bytes) -> list:
    r, w = os.pipe()
    try:
        os.write(w, payload)
        keys = []
        while True:
            key = terminal.read_key(0.05, fd=r)
            keys.append(key)
            if key is None and not terminal._ready(r, 0.0):
                return keys
    finally:
        os.close(r)
        os.close(w)


@pytest.mark.parametrize("text", ["é", "ß", "€", "😀"])
def test_read_key_decodes_multibyte_characters(text: str) -> None:
    assert _keys_from_pipe(text.encode("utf-8")) == [text, None]


def test_accented_label_reaches_the_add_form() -> None:
    ctl = InputController()
    ctl.handle("a")
    for key in _keys_from_pipe("Zoé".encode("utf-8")):
        if key is not None:
            ctl.handle(key)
    assert ctl.account == "Zoé"


@pytest.mark.parametrize("sequence", [b"\x1b[3~", b"\x1b[1~", b"\x1b[4~", b"\x1b[5~", b"\x1b[6~", b"\x1b[1;5A"])
def test_unknown_escape_sequences_are_consumed_whole(sequence: bytes) -> None:
    assert _keys_from_pipe(sequence) == [None]


def test_delete_key_leaves_secret_untouched() -> None:
    ctl = InputController()
    ctl.handle("a")
    ctl.handle("tab")
    for key in _keys_from_pipe(b"ab\x1b[3~c"):
        if key is not None:
            ctl.handle(key)
    assert ctl.key == "abc"
