"""Timer package."""

from .engine import (
    Timer,
    IntervalKind,
    DEFAULT_DURATIONS,
    ICONS,
    BREAK_CYCLE,
)

__all__ = [
    "Timer",
    "IntervalKind",
    "DEFAULT_DURATIONS",
    "ICONS",
    "BREAK_CYCLE",
]
