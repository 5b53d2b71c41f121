"""Tests for the ``python -m pomod`` entry point.

Qt, the bus, audio and the log file are replaced with mocks; only the
wiring and the exit behaviour of ``main()`` are exercised.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

import pomod.__main__ as entry
from pomod.app import PomodDaemon
from pomod.notifications import ExpiryAlert


@pytest.fixture
def wiring(monkeypatch):
    """Mocked collaborators; ``calls`` records the start-up order."""
    calls: list[str] = []

    source = MagicMock()
    source.hold.side_effect = lambda: calls.append("hold")
    monkeypatch.setattr(entry, "SignalEventSource", lambda: source)

    app = MagicMock()

    def make_app(argv):
        calls.append("app")
        return app

    monkeypatch.setattr(entry, "QCoreApplication", make_app)
    monkeypatch.setattr(entry, "SoundManager", MagicMock())
    monkeypatch.setattr(entry, "DesktopNotifier", MagicMock())

    logger = MagicMock()
    monkeypatch.setattr(entry, "get_logger", lambda: logger)

    daemons: list[PomodDaemon] = []

    def run_with(exc):
        def run(self):
            daemons.append(self)
            calls.append("run")
            raise exc
        monkeypatch.setattr(PomodDaemon, "run", run)

    return {
        "calls": calls, "source": source, "app": app, "logger": logger,
        "daemons": daemons, "run_with": run_with,
    }


def test_signals_held_before_qt_starts(wiring):
    wiring["run_with"](KeyboardInterrupt())
    entry.main()
    assert wiring["calls"] == ["hold", "app", "run"]


def test_daemon_wired_to_timer_and_signal_source(wiring):
    wiring["run_with"](KeyboardInterrupt())
    entry.main()
    daemon = wiring["daemons"][0]
    assert daemon._events is wiring["source"]
    assert daemon._process_events == wiring["app"].processEvents
    assert isinstance(daemon.timer._on_expire, ExpiryAlert)


def test_keyboard_interrupt_exits_cleanly(wiring):
    wiring["run_with"](KeyboardInterrupt())
    assert entry.main() == 0


def test_closed_stdout_exits_cleanly(wiring):
    wiring["run_with"](BrokenPipeError())
    assert entry.main() == 0
    wiring["logger"].exception.assert_not_called()


def test_broken_control_channel_is_logged_and_raised(wiring):
    wiring["run_with"](OSError("sigtimedwait failed"))
    with pytest.raises(OSError, match="sigtimedwait failed"):
        entry.main()
    wiring["logger"].exception.assert_called_once()
