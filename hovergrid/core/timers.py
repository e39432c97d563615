"""Timer service used by the trail tracker and highlight scheduler."""

from __future__ import annotations

import asyncio
import time
from typing import Callable, Optional, Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """Handle returned by a timer service; cancelling it is idempotent."""

    def cancel(self) -> None: ...


@runtime_checkable
class TimerService(Protocol):
    """Monotonic clock with one-shot schedule/cancel."""

    def now(self) -> float:
        """Current monotonic time in seconds."""
        ...

    def schedule(self, delay_sec: float, callback: Callable[[], None]) -> TimerHandle:
        """Run callback once after delay_sec."""
        ...


class AsyncioTimerService:
    """Timer service backed by the running asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        if self._loop is not None:
            return self._loop.time()
        return time.monotonic()

    def schedule(self, delay_sec: float, callback: Callable[[], None]) -> TimerHandle:
        return self._get_loop().call_later(max(0.0, delay_sec), callback)


class TimerSlot:
    """Holds at most one pending timer.

    Scheduling into an occupied slot cancels the pending timer first, so a
    slot can never fire twice for superseded events.
    """

    def __init__(self, timers: TimerService, name: str) -> None:
        self._timers = timers
        self.name = name
        self._handle: Optional[TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, delay_sec: float, callback: Callable[[], None]) -> None:
        self.cancel()

        def _fire() -> None:
            self._handle = None
            callback()

        self._handle = self._timers.schedule(delay_sec, _fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
