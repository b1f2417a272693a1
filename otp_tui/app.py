"""
The single consumer loop.

App owns the registry and the scheduler and is the only writer to them.
Ticks go to the scheduler; key presses go through the InputController and
the resulting intents are applied here.
"""

from typing import Callable, Optional
import logging
import time

from rich.console import Console
from rich.live import Live

from .events import (
    TICK_RATE,
    AddAccount,
    Event,
    EventSource,
    Intent,
    KeyPress,
    Quit,
    RemoveSelected,
    SelectNext,
    SelectPrev,
    Tick,
)
from .keymap import InputController
from .otp_core import Truncation
from .registry import AccountRegistry
from .render import render
from .scheduler import RefreshScheduler

log = logging.getLogger(__name__)


class App:
    def __init__(
        self,
        tick_rate: float = TICK_RATE,
        truncation: Truncation = Truncation.PREFIX,
        clock: Callable[[], float] = time.time,
    ):
        self.registry = AccountRegistry()
        self.scheduler = RefreshScheduler(self.registry, tick_rate, truncation=truncation)
        self.controller = InputController()
        self.clock = clock
        self.message: Optional[str] = None

    def handle(self, event: Event) -> bool:
        """Process one event; False once the user asked to quit."""
        if isinstance(event, Tick):
            self.scheduler.on_tick(int(self.clock()))
            return True
        if isinstance(event, KeyPress):
            intent = self.controller.handle(event.key)
            if intent is None:
                return True
            return self.apply(intent)
        raise TypeError(f"unknown event {event!r}")

    def apply(self, intent: Intent) -> bool:
        if isinstance(intent, Quit):
            return False
        if isinstance(intent, AddAccount):
            index = self.registry.add(intent.secret, intent.label)
            self.message = "secret key must not be empty" if index is None else None
        elif isinstance(intent, RemoveSelected):
            self.registry.remove_selected()
        elif isinstance(intent, SelectNext):
            self.registry.select_next()
        elif isinstance(intent, SelectPrev):
            self.registry.select_prev()
        else:
            raise TypeError(f"unknown intent {intent!r}")
        return True

    def frame(self):
        return render(self.scheduler.snapshot(), self.controller, self.message)

    def run(self, source: EventSource, console: Optional[Console] = None) -> None:
        """Draw, block for the next event, repeat until Quit."""
        with Live(self.frame(), console=console, screen=True, auto_refresh=False) as live:
            source.start()
            try:
                while self.handle(source.get()):
                    live.update(self.frame(), refresh=True)
            finally:
                source.stop()
        log.debug("event loop finished with %d account(s)", len(self.registry))
