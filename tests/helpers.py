"""Shared test helpers for pomod."""

from __future__ import annotations

from pomod.app import ControlEvent
from pomod.timer.engine import Timer


class FakeClock:
    """Monotonic clock stand-in that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CallbackCollector:
    """Utility to capture callback invocations into a list."""

    def __init__(self):
        self.items: list = []

    def __call__(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __len__(self):
        return len(self.items)


def expire(timer: Timer, clock: FakeClock) -> None:
    """Run the current interval out, then poll once more to roll over."""
    clock.advance(timer.remaining)
    timer.poll()
    timer.poll()


class ScriptedEvents:
    """Event source replaying a fixed script, then timing out forever.

    Exceptions in the script are raised from ``wait``.
    """

    def __init__(self, *script):
        self._script = list(script)
        self.timeouts: list[float] = []

    def wait(self, timeout: float) -> ControlEvent | None:
        self.timeouts.append(timeout)
        if not self._script:
            return None
        item = self._script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item
