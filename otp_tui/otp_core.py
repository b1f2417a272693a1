#!/usr/bin/env python3
"""
otp_core.py: Core library for the time-stepped one-time codes shown by otp-tui.

Goals:
- Pure functions only: no terminal, no threads, no file I/O.
- "Now" is always passed in by the caller so the scheduler and the tests
  decide which instant a code belongs to.

Algorithm (HOTP over a TOTP counter, HMAC-SHA256):
  counter = floor((timestamp - T0) / timestep)
  digest  = HMAC-SHA256(key=secret, msg=counter as 8-byte big-endian)
  value   = truncate(digest)
  code    = value mod 10^digits

Truncation:
- PREFIX (default): digest bytes 0..7 read as a big-endian unsigned 64-bit int.
- RFC4226: offset = last_byte & 0x0F, 4 bytes from offset, MSB cleared.
  Use this one when the codes must match a standard authenticator.
"""

from enum import Enum
from typing import Tuple, Union
import hashlib
import hmac
import logging
import struct
import time

import pyotp

log = logging.getLogger(__name__)

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # code length
DEFAULT_TIME_STEP = 30      # TOTP step (seconds)
T0 = 0                      # epoch origin
SECRET_BYTES = 20           # 160-bit random secrets
PLACEHOLDER = "-" * DEFAULT_DIGITS
PREFIX_BYTES = 8            # bytes read by PREFIX truncation
MAX_DIGEST_ATTEMPTS = 3


class OTPError(Exception):
    """Base class for otp-tui errors."""


class DerivationError(OTPError):
    """Raised when no usable digest could be produced for a secret."""


class Truncation(Enum):
    PREFIX = "prefix"
    RFC4226 = "rfc4226"


SecretLike = Union[bytes, str]


# --- Utility ---------------------------------------------------------------
def generate_secret() -> str:
    """
    Return a fresh random Base32 secret.

    The engine treats secrets as raw bytes, so the Base32 text itself is the
    key material (it is never decoded). pyotp sizes it to SECRET_BYTES of
    entropy rounded up to whole Base32 characters.
    """
    return pyotp.random_base32(length=(SECRET_BYTES * 8 + 4) // 5)


def secret_bytes(secret: SecretLike) -> bytes:
    """Text secrets are keyed by their UTF-8 bytes."""
    if isinstance(secret, str):
        return secret.encode("utf-8")
    return bytes(secret)


def format_code(value: int, digits: int = DEFAULT_DIGITS) -> str:
    """Zero-pad a code for display, e.g. format_code(42) -> '000042'."""
    return str(value).zfill(digits)


# --- Counter / truncation ----------------------------------------------------
def int_to_bytes(i: int) -> bytes:
    return struct.pack(">Q", i)


def time_counter(timestamp: int, timestep: int = DEFAULT_TIME_STEP, t0: int = T0) -> int:
    """Index of the window containing `timestamp`."""
    return (int(timestamp) - t0) // timestep


def remaining_seconds(timestamp: int, timestep: int = DEFAULT_TIME_STEP, t0: int = T0) -> int:
    """Seconds left before the window containing `timestamp` rolls over."""
    return int(timestep - ((int(timestamp) - t0) % timestep))


def prefix_truncate(hmac_digest: bytes) -> int:
    """
    Read the first 8 digest bytes as a big-endian unsigned 64-bit int.

    Raises:
        DerivationError: digest shorter than PREFIX_BYTES
    """
    if len(hmac_digest) < PREFIX_BYTES:
        raise DerivationError(f"digest too short: {len(hmac_digest)} bytes")
    return struct.unpack(">Q", hmac_digest[:PREFIX_BYTES])[0]


def dynamic_truncate(hmac_digest: bytes) -> int:
    """RFC 4226 section 5.3: 31 bits read at the offset named by the low nibble."""
    offset = hmac_digest[-1] & 0x0F
    return struct.unpack(">I", hmac_digest[offset:offset + 4])[0] & 0x7FFFFFFF


def _digest(key: bytes, counter: int) -> bytes:
    # SHA-256 always yields 32 bytes; the loop only guards the invariant
    # PREFIX truncation depends on and never recurses.
    msg = int_to_bytes(counter)
    for attempt in range(1, MAX_DIGEST_ATTEMPTS + 1):
        digest = hmac.new(key, msg, hashlib.sha256).digest()
        if len(digest) >= PREFIX_BYTES:
            return digest
        log.warning("short HMAC digest (%d bytes), attempt %d", len(digest), attempt)
    raise DerivationError(f"no usable digest after {MAX_DIGEST_ATTEMPTS} attempts")


def hotp(
    secret: SecretLike,
    counter: int,
    digits: int = DEFAULT_DIGITS,
    truncation: Truncation = Truncation.PREFIX,
) -> int:
    """
    HOTP value for `counter`.

    Steps:
    1. Message = 8-byte counter (big-endian)
    2. HMAC-SHA256(key=secret, message)
    3. Truncate (PREFIX or RFC4226)
    4. value % 10^digits

    Arguments:
        secret: raw key bytes, or text keyed by its UTF-8 bytes
        counter: non-negative integer counter
        digits: code length
        truncation: Truncation mode

    Returns:
        int in 0 .. 10^digits - 1 (not padded)

    Raises:
        DerivationError: if the digest is unusable (cannot happen with SHA-256)
    """
    digest = _digest(secret_bytes(secret), counter)
    if truncation is Truncation.RFC4226:
        value = dynamic_truncate(digest)
    else:
        value = prefix_truncate(digest)
    return value % (10 ** digits)


def derive(
    secret: SecretLike,
    unix_time_seconds: int,
    truncation: Truncation = Truncation.PREFIX,
) -> int:
    """
    Code for the 30-second window containing `unix_time_seconds`.

    Pure and deterministic: any two instants of the same window give the
    same code. Pad with format_code() for display.
    """
    counter = time_counter(unix_time_seconds)
    return hotp(secret, counter, DEFAULT_DIGITS, truncation)


def totp(
    secret: SecretLike,
    timestamp: int = None,
    truncation: Truncation = Truncation.PREFIX,
) -> Tuple[str, int]:
    """
    Padded code plus the seconds it stays valid.

    Arguments:
        secret: key material
        timestamp: epoch seconds (None -> time.time())
        truncation: Truncation mode

    Returns:
        (code, remaining_seconds)
    """
    if timestamp is None:
        timestamp = int(time.time())
    code = format_code(derive(secret, timestamp, truncation))
    return code, remaining_seconds(timestamp)
