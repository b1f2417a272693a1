"""
Input/tick event source and the intents the core understands.

A producer thread waits for keys with a bounded timeout and emits a Tick
whenever TICK_RATE has elapsed since the previous one. Events go through an
unbounded queue.Queue to the single consumer loop, which blocks on get().
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union
import logging
import queue
import threading
import time

log = logging.getLogger(__name__)

TICK_RATE = 0.2  # seconds


# --- Events ------------------------------------------------------------------
@dataclass(frozen=True)
class KeyPress:
    key: str


@dataclass(frozen=True)
class Tick:
    pass


Event = Union[KeyPress, Tick]


# --- Intents -----------------------------------------------------------------
@dataclass(frozen=True)
class AddAccount:
    secret: str
    label: str


@dataclass(frozen=True)
class RemoveSelected:
    pass


@dataclass(frozen=True)
class SelectNext:
    pass


@dataclass(frozen=True)
class SelectPrev:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Intent = Union[AddAccount, RemoveSelected, SelectNext, SelectPrev, Quit]


class EventSource:
    """
    Producer side of the event channel.

    Arguments:
        read_key: callable(timeout) -> key name or None; waits at most
            `timeout` seconds
        tick_rate: seconds between ticks
        monotonic: clock used for tick cadence
    """

    def __init__(
        self,
        read_key: Callable[[float], Optional[str]],
        tick_rate: float = TICK_RATE,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        self.read_key = read_key
        self.tick_rate = tick_rate
        self.monotonic = monotonic
        self.events: "queue.Queue[Event]" = queue.Queue()
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        self._thread = threading.Thread(target=self.run, name="otp-tui-events", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stopped.set()

    def run(self) -> None:
        last_tick = self.monotonic()
        while not self._stopped.is_set():
            self.poll_once(last_tick)
            if self.monotonic() - last_tick >= self.tick_rate:
                self.events.put(Tick())
                last_tick = self.monotonic()

    def poll_once(self, last_tick: float) -> None:
        """Wait for one key until the next tick is due."""
        timeout = max(0.0, self.tick_rate - (self.monotonic() - last_tick))
        key = self.read_key(timeout)
        if key is not None:
            self.events.put(KeyPress(key))

    def get(self, timeout: Optional[float] = None) -> Event:
        return self.events.get(timeout=timeout)
