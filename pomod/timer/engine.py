"""Timer state machine for pomod.

Intervals
---------
PLANNED       Not started yet, placeholder shown until the first start.
WORK          Work interval counting down.
SHORT_BREAK   Short break counting down.
LONG_BREAK    Long break counting down, every ``BREAK_CYCLE`` work intervals.

Transitions
-----------
PLANNED → WORK                  (first start)
SHORT_BREAK | LONG_BREAK → WORK (expiry)
WORK → SHORT_BREAK              (expiry, cycle not complete)
WORK → LONG_BREAK               (expiry, last work interval of the cycle)

Pausing only freezes the countdown; the interval and the cycle position are
kept.  The timer never looks at the wall clock: elapsed time is measured
between polls on a monotonic clock, so expiry is noticed on the first poll
after ``remaining`` has run out.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class IntervalKind(Enum):
    PLANNED = "planned"
    WORK = "work"
    SHORT_BREAK = "short break"
    LONG_BREAK = "long break"

    @property
    def duration(self) -> float:
        """Nominal length of this interval in seconds."""
        return DEFAULT_DURATIONS[self]

    @property
    def icon(self) -> str:
        return ICONS[self]

    @property
    def label(self) -> str:
        return self.value


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_DURATIONS: dict[IntervalKind, float] = {
    IntervalKind.PLANNED: 25 * 60,
    IntervalKind.WORK: 25 * 60,
    IntervalKind.SHORT_BREAK: 5 * 60,
    IntervalKind.LONG_BREAK: 30 * 60,
}

# Nerd Font private-use glyphs
ICONS: dict[IntervalKind, str] = {
    IntervalKind.PLANNED: "\ue002",
    IntervalKind.WORK: "\ue003",
    IntervalKind.SHORT_BREAK: "\ue005",
    IntervalKind.LONG_BREAK: "\ue006",
}

BREAK_CYCLE = 4  # work intervals per long break

Clock = Callable[[], float]
ExpiryCallback = Callable[[IntervalKind], None]


# ── engine ────────────────────────────────────────────────────────────────


class Timer:
    """Polled countdown over the work/break rotation.

    The owner drives it: ``toggle()`` / ``reset()`` on control events and
    ``poll()`` at a fixed cadence.  When a poll finds the current interval
    expired, the timer moves to the next one and calls the callback
    registered with ``on_state_change`` with the new ``IntervalKind``.
    """

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._on_expire: ExpiryCallback | None = None
        self._initialise()

    def _initialise(self) -> None:
        self._running: bool = False
        self._kind: IntervalKind = IntervalKind.PLANNED
        self._started_at: float | None = None
        self._remaining: float = self._kind.duration
        self._last_polled: float = self._clock()
        self._break_count: int = 0

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def running(self) -> bool:
        return self._running

    @property
    def kind(self) -> IntervalKind:
        return self._kind

    @property
    def started_at(self) -> float | None:
        """Clock reading of the first start, ``None`` until then."""
        return self._started_at

    @property
    def remaining(self) -> float:
        """Seconds left in the current interval.

        Can dip below zero between the poll that runs it out and the poll
        that rolls over to the next interval.
        """
        return self._remaining

    @property
    def last_polled(self) -> float:
        return self._last_polled

    @property
    def break_count(self) -> int:
        """Completed work intervals in the current cycle, ``0 ≤ n < BREAK_CYCLE``."""
        return self._break_count

    @property
    def icon(self) -> str:
        return self._kind.icon

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start or resume.  The first start leaves PLANNED for WORK."""
        if self._running:
            return
        if self._started_at is None:
            self._started_at = self._clock()
            self._advance()
        self._running = True

    def stop(self) -> None:
        """Pause; the remaining time is kept."""
        self._running = False

    def toggle(self) -> None:
        if self._running:
            self.stop()
        else:
            self.start()

    def reset(self) -> None:
        """Back to a fresh PLANNED timer.  The callback stays registered."""
        self._initialise()

    def on_state_change(self, callback: ExpiryCallback | None) -> None:
        """Register the expiry callback, replacing any previous one."""
        self._on_expire = callback

    def poll(self) -> None:
        """Account for the time since the last poll and roll over on expiry.

        Expiry is checked before the elapsed time is subtracted, so the
        rollover becomes visible one poll after ``remaining`` ran out.
        """
        now = self._clock()
        if self._running:
            if int(self._remaining) <= 0:
                self._advance()
                logger.info("interval expired, next up: %s", self._kind.label)
                if self._on_expire is not None:
                    self._on_expire(self._kind)
            else:
                self._remaining -= now - self._last_polled
        self._last_polled = now

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _advance(self) -> None:
        """Move ``kind`` and ``break_count`` to the next interval."""
        if self._kind == IntervalKind.WORK:
            if self._break_count < BREAK_CYCLE - 1:
                self._kind = IntervalKind.SHORT_BREAK
            else:
                self._kind = IntervalKind.LONG_BREAK
            self._break_count = (self._break_count + 1) % BREAK_CYCLE
        else:
            self._kind = IntervalKind.WORK
        self._remaining = self._kind.duration
