"""Build-time constants for the pomod daemon.

There is no settings file and no flags: edit the values here (and the
durations / icons in ``pomod.timer.engine``) and reinstall.

Files live in the platform's per-user directories::

    ~/.cache/pomod/sounds/      synthesised WAV files
    ~/.local/state/pomod/log/   rotating log
"""

from __future__ import annotations

from pathlib import Path

from platformdirs import user_cache_dir


APP_NAME = "pomod"

# ── driver loop ───────────────────────────────────────────────────────
POLL_QUANTUM = 0.5  # seconds between polls when no control event arrives

# ── notifications ─────────────────────────────────────────────────────
NOTIFY_SUMMARY = "pomod: time's up"
NOTIFY_BODY = "next up: {label}"
NOTIFY_URGENCY = 2  # freedesktop "critical"
NOTIFY_TIMEOUT = -1  # let the notification server decide

# ── audio ─────────────────────────────────────────────────────────────
SOUND_ENABLED = True
SOUND_VOLUME = 70  # 0-100

# ── paths ─────────────────────────────────────────────────────────────
CACHE_DIR = Path(user_cache_dir(APP_NAME))
SOUNDS_DIR = CACHE_DIR / "sounds"
LOG_FILE = "pomod.log"
