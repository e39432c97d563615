"""Pytest configuration for hovergrid tests."""

import logging
import os

import pytest

# Keep a developer's ~/.hovergrid/hovergrid.yml out of test runs
os.environ.setdefault("HOVERGRID_CONFIG_PATH", os.path.join(os.path.dirname(__file__), "no-such-config.yml"))
os.environ.pop("HOVERGRID_CELL_SIZE", None)
logging.getLogger("hovergrid").handlers.clear()


class FakeTimerHandle:
    def __init__(self, service: "FakeTimerService", due: float, seq: int, callback) -> None:  # type: ignore[no-untyped-def]
        self._service = service
        self.due = due
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeTimerService:
    """Manual clock: timers only fire when the test advances time."""

    def __init__(self) -> None:
        self._now = 0.0
        self._seq = 0
        self._handles: list[FakeTimerHandle] = []

    def now(self) -> float:
        return self._now

    def schedule(self, delay_sec: float, callback) -> FakeTimerHandle:  # type: ignore[no-untyped-def]
        self._seq += 1
        handle = FakeTimerHandle(self, self._now + max(0.0, delay_sec), self._seq, callback)
        self._handles.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeTimerHandle]:
        return [h for h in self._handles if not h.cancelled]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers in (due, scheduling) order."""
        target = self._now + seconds
        while True:
            due = [h for h in self.pending if h.due <= target]
            if not due:
                break
            handle = min(due, key=lambda h: (h.due, h.seq))
            self._handles.remove(handle)
            self._now = handle.due
            handle.callback()
        self._now = target


@pytest.fixture
def fake_timers() -> FakeTimerService:
    return FakeTimerService()


def pytest_collection_modifyitems(config, items):
    """Set per-marker timeouts: unit=1s, integration=5s."""
    for item in items:
        if "unit" in item.keywords:
            item.add_marker(pytest.mark.timeout(1))
        elif "integration" in item.keywords:
            item.add_marker(pytest.mark.timeout(5))
