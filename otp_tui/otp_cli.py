#!/usr/bin/env python3
"""
otp_cli.py: command line entry point for otp-tui.

Subcommands:
- tui    : interactive multi-account authenticator (default screen)
- code   : print the code for one secret at a given (or current) time
- watch  : print the code for one secret in real time, Ctrl+C to quit
- secret : print a fresh random secret
"""

import argparse
import logging
import sys
import time

from rich.console import Console
from rich.logging import RichHandler

from . import otp_core
from .app import App
from .events import TICK_RATE, EventSource
from .terminal import TerminalError, raw_mode, read_key

console = Console()
log = logging.getLogger("otp_tui")


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def truncation_of(args) -> otp_core.Truncation:
    return otp_core.Truncation.RFC4226 if args.rfc else otp_core.Truncation.PREFIX


# --- CLI command handlers ---
def cmd_help(args):
    console.print("No command specified. Use -h for help.")
    return 0


def cmd_tui(args):
    tick_rate = args.tick_ms / 1000.0
    app = App(tick_rate=tick_rate, truncation=truncation_of(args))
    try:
        with raw_mode():
            app.run(EventSource(read_key, tick_rate), console=console)
    except TerminalError as e:
        console.print(f"[red][!] {e}[/red]")
        return 1
    except KeyboardInterrupt:
        console.print("Bye.")
    return 0


def cmd_code(args):
    now = args.time if args.time is not None else int(time.time())
    code, remaining = otp_core.totp(args.secret, now, truncation_of(args))
    log.debug("counter=%d", otp_core.time_counter(now))
    console.print(f"{code}  (valid ~{remaining:2d}s)")
    return 0


def cmd_watch(args):
    truncation = truncation_of(args)
    console.print("Press Ctrl+C to quit. Generating codes in real time...\n")
    last_code = None
    try:
        while True:
            code, remaining = otp_core.totp(args.secret, int(time.time()), truncation)
            if code != last_code:
                console.print(f"TOTP: {code}  (valid ~{remaining:2d}s)")
                last_code = code
            else:
                console.print(f".. {remaining:2d}s left", end="\r")
            time.sleep(1)
    except KeyboardInterrupt:
        console.print("\nBye.")
    return 0


def cmd_secret(args):
    console.print(otp_core.generate_secret())
    return 0


def non_empty(value: str) -> str:
    if not value:
        raise argparse.ArgumentTypeError("secret must not be empty")
    return value


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError("time must not be negative")
    return number


# --- Argparse builder ---
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Multi-account TOTP authenticator for the terminal")
    p.add_argument("--verbose", action="store_true", help="Verbose output")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    pt = sub.add_parser("tui", help="Interactive authenticator")
    pt.add_argument("--tick-ms", type=int, default=int(TICK_RATE * 1000), help="Refresh cadence in milliseconds")
    pt.add_argument("--rfc", action="store_true", help="Use RFC 4226 dynamic truncation")
    pt.set_defaults(func=cmd_tui)

    pc = sub.add_parser("code", help="Print the code for a secret")
    pc.add_argument("--secret", type=non_empty, required=True)
    pc.add_argument("--time", type=non_negative_int, help="Unix time in seconds (default: now)")
    pc.add_argument("--rfc", action="store_true", help="Use RFC 4226 dynamic truncation")
    pc.set_defaults(func=cmd_code)

    pw = sub.add_parser("watch", help="Show the code for a secret in real time")
    pw.add_argument("--secret", type=non_empty, required=True)
    pw.add_argument("--rfc", action="store_true", help="Use RFC 4226 dynamic truncation")
    pw.set_defaults(func=cmd_watch)

    ps = sub.add_parser("secret", help="Generate a random secret")
    ps.set_defaults(func=cmd_secret)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    if getattr(args, "tick_ms", 1) <= 0:
        parser.error("--tick-ms must be positive")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
