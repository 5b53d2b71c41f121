"""Expiry chime synthesis and playback using numpy + QSoundEffect.

The chime is generated once as a WAV file in the user cache directory and
reused on every later start.  Playback goes through ``QSoundEffect``, which
queues the sound on Qt's audio backend and returns immediately, so playing
it from the poll loop never holds up interval accounting.

Sound names
-----------
- ``time_up``: three bell strikes, played when an interval expires
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import SOUND_ENABLED, SOUND_VOLUME, SOUNDS_DIR

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

# (frequency ratio, relative amplitude) of a struck bell
_BELL_PARTIALS = ((1.0, 1.0), (2.0, 0.45), (2.76, 0.25), (5.4, 0.1))


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════════


def _strike(freq: float, duration_s: float, decay: float = 6.0) -> np.ndarray:
    """One bell strike: summed partials under a fast-attack exponential decay."""
    n = int(SAMPLE_RATE * duration_s)
    t = np.arange(n) / SAMPLE_RATE
    tone = np.zeros(n, dtype=np.float64)
    for ratio, amp in _BELL_PARTIALS:
        tone += amp * np.sin(2 * np.pi * freq * ratio * t)
    tone /= sum(amp for _, amp in _BELL_PARTIALS)

    attack = min(int(SAMPLE_RATE * 0.005), n)
    env = np.exp(-decay * t)
    env[:attack] *= np.linspace(0.0, 1.0, attack)
    return tone * env


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Float samples in -1..1 to 16-bit mono PCM WAV bytes."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


def _generate_time_up() -> bytes:
    """Three descending strikes (E6, C6, A5) with a ringing tail."""
    strikes = [
        _strike(1318.51, 0.35) * 0.6,
        _strike(1046.50, 0.35) * 0.6,
        _strike(880.00, 0.9, decay=4.0) * 0.6,
    ]
    return _to_wav_bytes(np.concatenate(strikes))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "time_up": _generate_time_up,
}

SOUND_NAMES = tuple(_GENERATORS)


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Caches the synthesised sounds and plays them by name.

    Usage::

        sounds = SoundManager(parent=app)
        sounds.play("time_up")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
        enabled: bool = SOUND_ENABLED,
        volume: int = SOUND_VOLUME,
    ) -> None:
        super().__init__(parent)
        self._enabled = enabled
        self._volume = max(0, min(volume, 100)) / 100.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def volume(self) -> int:
        return round(self._volume * 100)

    @property
    def sounds_dir(self) -> Path:
        return self._sounds_dir

    def play(self, name: str) -> None:
        """Queue a sound.  No-op if disabled or the name is unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is None:
            logger.warning("no sound named %r", name)
            return
        effect.play()

    def _ensure_wav_files(self) -> None:
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, generate in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(generate())
                logger.info("wrote %s", path)

    def _load_effects(self) -> None:
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects[name] = effect
