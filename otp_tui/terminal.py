"""
Raw-mode terminal key reader (POSIX).

read_key(timeout) waits up to `timeout` seconds on stdin and returns a key
name: a printable character, or one of "up", "down", "left", "right",
"tab", "enter", "backspace", "esc".
"""

from contextlib import contextmanager
from typing import Iterator, Optional
import codecs
import os
import select
import sys
import termios
import tty

from .otp_core import OTPError

ESCAPE_SEQUENCES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
}

SINGLE_KEYS = {
    "\t": "tab",
    "\r": "enter",
    "\n": "enter",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x1b": "esc",
}


class TerminalError(OTPError):
    pass


def decode_key(data: str) -> Optional[str]:
    """Map raw input to a key name; None for anything unsupported."""
    if data in ESCAPE_SEQUENCES:
        return ESCAPE_SEQUENCES[data]
    if data in SINGLE_KEYS:
        return SINGLE_KEYS[data]
    if len(data) == 1 and data.isprintable():
        return data
    return None


@contextmanager
def raw_mode(stream=None) -> Iterator[None]:
    stream = stream or sys.stdin
    if not stream.isatty():
        raise TerminalError("otp-tui needs an interactive terminal")
    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        # cbreak keeps ISIG for Ctrl+C; also turn off CR->NL so Enter reads "\r"
        attrs = termios.tcgetattr(fd)
        attrs[0] &= ~termios.ICRNL
        termios.tcsetattr(fd, termios.TCSADRAIN, attrs)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _ready(fd: int, timeout: float) -> bool:
    readable, _, _ = select.select([fd], [], [], timeout)
    return bool(readable)


def _read_char(fd: int) -> str:
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    char = decoder.decode(os.read(fd, 1))
    while not char and _ready(fd, 0.01):
        char = decoder.decode(os.read(fd, 1))
    return char or decoder.decode(b"", final=True)


def _read_escape(fd: int) -> str:
    # an escape sequence arrives in one burst; a lone Esc does not
    data = "\x1b"
    if not _ready(fd, 0.01):
        return data
    data += _read_char(fd)
    if data[-1] not in "[O":
        return data
    while _ready(fd, 0.01):
        data += _read_char(fd)
        # CSI/SS3 sequences end on a final byte in 0x40-0x7E
        if "\x40" <= data[-1] <= "\x7e":
            break
    return data


def read_key(timeout: float, fd: Optional[int] = None) -> Optional[str]:
    if fd is None:
        fd = sys.stdin.fileno()
    if not _ready(fd, timeout):
        return None
    data = _read_char(fd)
    if data == "\x1b":
        data = _read_escape(fd)
    return decode_key(data)
