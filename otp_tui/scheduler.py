"""
Refresh scheduler: owns the countdown and keeps every account's cached code
in step with the current 30-second window.

Each tick advances the countdown by tick_interval / step. A full pass
(every account re-derived, countdown back to 0.0) runs when the countdown
passes 1.0 or when the wall-clock window has rolled over since the last
pass. Accounts added since the previous tick are derived on their first
tick without waiting for a pass.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import logging

from .otp_core import (
    DEFAULT_TIME_STEP,
    PLACEHOLDER,
    DerivationError,
    Truncation,
    derive,
    format_code,
    time_counter,
)
from .registry import Account, AccountRegistry

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to the renderer each frame."""

    rows: Tuple[Tuple[str, str], ...]
    selected: Optional[int]
    countdown: float


class RefreshScheduler:
    def __init__(
        self,
        registry: AccountRegistry,
        tick_interval: float,
        step_duration: int = DEFAULT_TIME_STEP,
        truncation: Truncation = Truncation.PREFIX,
    ):
        self.registry = registry
        self.increment = tick_interval / step_duration
        self.truncation = truncation
        self.countdown = 0.0
        self.passes = 0
        self._window: Optional[int] = None

    def on_tick(self, now: int) -> bool:
        """
        Advance one tick at wall-clock `now`.

        Returns True when a full recomputation pass ran.
        """
        self.countdown += self.increment
        window = time_counter(now)
        if self.countdown > 1.0 or (self._window is not None and window != self._window):
            self.recompute_all(now)
            return True
        for account in self.registry:
            if account.cached_code is None:
                self._refresh(account, now)
                if self._window is None:
                    self._window = window
        return False

    def recompute_all(self, now: int) -> None:
        for account in self.registry:
            self._refresh(account, now)
        self.countdown = 0.0
        self.passes += 1
        self._window = time_counter(now)
        log.debug("pass %d: %d account(s) at window %d", self.passes, len(self.registry), self._window)

    def _refresh(self, account: Account, now: int) -> None:
        try:
            account.cached_code = derive(account.secret, now, self.truncation)
        except DerivationError:
            # keep the previous code
            log.exception("could not refresh code for %r", account.label)

    def snapshot(self) -> Snapshot:
        rows = tuple(
            (a.label, PLACEHOLDER if a.cached_code is None else format_code(a.cached_code))
            for a in self.registry
        )
        return Snapshot(rows=rows, selected=self.registry.selected, countdown=self.countdown)
