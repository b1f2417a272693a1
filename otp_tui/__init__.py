"""
otp_tui package
===============

Terminal authenticator: keeps six-digit time-stepped codes for several
accounts on screen and refreshes them as the 30-second window rolls over.

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- counter = floor((timestamp - T0) / 30)
- digest  = HMAC-SHA256(key=secret, msg=counter, 8 bytes big-endian)
- code    = first 8 digest bytes (big-endian) mod 10^6
  (Truncation.RFC4226 switches to the standard dynamic offset)

──────────────────────────────────────────────
Pieces
──────────────────────────────────────────────
- otp_core   : derive / hotp / totp, pure functions
- registry   : AccountRegistry (add / remove / select)
- scheduler  : RefreshScheduler (countdown + cached codes)
- events     : EventSource producer thread, KeyPress / Tick, intents
- app        : App, the single consumer loop
- otp_cli    : `otp-tui` command

──────────────────────────────────────────────
Quick example
──────────────────────────────────────────────
>>> from otp_tui import derive, format_code
>>> format_code(derive(b"12345678901234567890", 59))
'533482'
"""

from .otp_core import (
    DEFAULT_DIGITS,
    DEFAULT_TIME_STEP,
    DerivationError,
    OTPError,
    Truncation,
    derive,
    format_code,
    generate_secret,
    hotp,
    totp,
)
from .registry import Account, AccountRegistry
from .scheduler import RefreshScheduler, Snapshot

__all__ = [
    "DEFAULT_DIGITS",
    "DEFAULT_TIME_STEP",
    "DerivationError",
    "OTPError",
    "Truncation",
    "derive",
    "format_code",
    "generate_secret",
    "hotp",
    "totp",
    "Account",
    "AccountRegistry",
    "RefreshScheduler",
    "Snapshot",
]
