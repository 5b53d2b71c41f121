"""Shared pytest fixtures for pomod tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from pomod.timer.engine import Timer

from helpers import CallbackCollector, FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timer(clock):
    """Fresh Timer on the fake clock."""
    return Timer(clock=clock)


@pytest.fixture
def expiries(timer):
    """Collects every IntervalKind the timer reports on expiry."""
    collector = CallbackCollector()
    timer.on_state_change(collector)
    return collector
