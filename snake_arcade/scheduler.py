"""Periodic tick driving on top of the asyncio event loop."""

import asyncio
import logging
from typing import Callable, Optional

from .game import GameState

logger = logging.getLogger(__name__)


class IntervalTimer:
    """Calls ``callback`` every ``interval_ms`` until cancelled."""

    def __init__(self, loop: asyncio.AbstractEventLoop, callback: Callable[[], None], interval_ms: float):
        self.loop = loop
        self.callback = callback
        self.interval_ms = interval_ms
        self.cancelled = False
        self._handle = loop.call_later(interval_ms / 1000, self._fire)

    def _fire(self):
        if self.cancelled:
            return
        # Next call is queued first so the callback may cancel this timer.
        self._handle = self.loop.call_later(self.interval_ms / 1000, self._fire)
        self.callback()

    def cancel(self):
        self.cancelled = True
        self._handle.cancel()


class Scheduler:
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop

    def schedule(self, callback: Callable[[], None], interval_ms: float) -> IntervalTimer:
        loop = self.loop or asyncio.get_running_loop()
        return IntervalTimer(loop, callback, interval_ms)

    def cancel(self, handle) -> None:
        handle.cancel()


class TickDriver:
    """Keeps exactly one periodic trigger running at the game's current interval.

    The driver listens to the game's interval notifications: a number means
    "tick at this rate from now on", ``None`` means "stop". Every
    notification replaces the previous trigger.
    """

    def __init__(self, game: GameState, scheduler, on_tick: Optional[Callable[[Optional[str]], None]] = None):
        self.game = game
        self.scheduler = scheduler
        self.on_tick = on_tick
        self.handle = None
        game.add_interval_listener(self.watch)

    def watch(self, interval: Optional[float]):
        self.stop()
        if interval is None:
            return
        self.handle = self.scheduler.schedule(self._tick, interval)
        logger.debug("Ticking every %.1fms", interval)

    def stop(self):
        if self.handle is not None:
            self.scheduler.cancel(self.handle)
            self.handle = None

    def close(self):
        self.stop()
        self.game.remove_interval_listener(self.watch)

    @property
    def running(self) -> bool:
        return self.handle is not None

    def _tick(self):
        outcome = self.game.tick()
        if self.on_tick is not None:
            self.on_tick(outcome)
