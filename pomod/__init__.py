"""pomod: a Pomodoro timer daemon for status bars."""

__version__ = "0.1.0"
