"""Driver loop: control events in, one status line per poll out.

pomod is controlled with signals::

    kill -USR1 $(pidof pomod)   # toggle (start / pause / resume)
    kill -USR2 $(pidof pomod)   # reset

The signals are blocked for the whole process and only consumed inside
``SignalEventSource.wait``, so one that arrives while a line is being
rendered stays pending until the next wait instead of killing the daemon.
"""

from __future__ import annotations

import logging
import signal
import sys
from enum import Enum
from typing import Callable, Protocol, TextIO

from .settings import POLL_QUANTUM
from .timer.engine import Timer

logger = logging.getLogger(__name__)


class ControlEvent(Enum):
    TOGGLE = "toggle"
    RESET = "reset"


class EventSource(Protocol):
    def wait(self, timeout: float) -> ControlEvent | None:
        """Block up to *timeout* seconds; ``None`` when nothing arrived."""
        ...


class SignalEventSource:
    """Control events delivered as SIGUSR1 (toggle) and SIGUSR2 (reset).

    ``hold()`` must run before any other thread is started: threads inherit
    the signal mask of their creator, and a thread with the signals
    unblocked would take the default action (terminate) on delivery.
    """

    EVENTS: dict[signal.Signals, ControlEvent] = {
        signal.SIGUSR1: ControlEvent.TOGGLE,
        signal.SIGUSR2: ControlEvent.RESET,
    }

    def __init__(self) -> None:
        self._previous_mask: set[signal.Signals] | None = None

    def hold(self) -> None:
        """Block the control signals for this thread and its children."""
        self._previous_mask = signal.pthread_sigmask(
            signal.SIG_BLOCK, self.EVENTS,
        )

    def release(self) -> None:
        """Restore the mask in place before ``hold()``."""
        if self._previous_mask is None:
            return
        signal.pthread_sigmask(signal.SIG_SETMASK, self._previous_mask)
        self._previous_mask = None

    def wait(self, timeout: float) -> ControlEvent | None:
        # OSError here means the control channel is gone; let it propagate
        info = signal.sigtimedwait(self.EVENTS, timeout)
        if info is None:
            return None
        return self.EVENTS[signal.Signals(info.si_signo)]


# ── rendering ─────────────────────────────────────────────────────────────


def format_remaining(seconds: float) -> str:
    """``MM:SS`` of whole seconds left; a transient overrun shows ``00:00``."""
    m, s = divmod(max(0, int(seconds)), 60)
    return f"{m:02d}:{s:02d}"


def render_line(timer: Timer) -> str:
    return f"{timer.icon} {format_remaining(timer.remaining)}"


# ── daemon ────────────────────────────────────────────────────────────────


class PomodDaemon:
    """Owns the timer and runs the wait → poll → render cycle.

    *process_events* is called at the end of every cycle to let the Qt
    event loop deliver queued D-Bus messages and sound playback.
    """

    def __init__(
        self,
        timer: Timer,
        events: EventSource,
        *,
        out: TextIO | None = None,
        quantum: float = POLL_QUANTUM,
        process_events: Callable[[], None] | None = None,
    ) -> None:
        self._timer = timer
        self._events = events
        self._out = out if out is not None else sys.stdout
        self._quantum = quantum
        self._process_events = process_events

    @property
    def timer(self) -> Timer:
        return self._timer

    def handle(self, event: ControlEvent) -> None:
        logger.info("control event: %s", event.value)
        if event == ControlEvent.TOGGLE:
            self._timer.toggle()
        elif event == ControlEvent.RESET:
            self._timer.reset()

    def step(self) -> str:
        """One cycle; returns the line that was written."""
        event = self._events.wait(self._quantum)
        if event is not None:
            self.handle(event)

        self._timer.poll()

        line = render_line(self._timer)
        self._out.write(line + "\n")
        self._out.flush()

        if self._process_events is not None:
            self._process_events()
        return line

    def run(self) -> None:
        """Cycle until the process is stopped or the event wait fails."""
        while True:
            self.step()
