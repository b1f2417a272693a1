"""Shared fixtures."""

from __future__ import annotations

import pytest

from otp_tui.registry import AccountRegistry

RFC_SECRET = b"12345678901234567890"


class FakeClock:
    """Settable wall clock returning float Unix seconds."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1_000.0)


@pytest.fixture
def registry() -> AccountRegistry:
    reg = AccountRegistry()
    reg.add("secretA", "Alice")
    reg.add("secretB", "Bob")
    return reg
