"""Desktop notifications over the freedesktop D-Bus interface.

The daemon talks to whatever notification server owns
``org.freedesktop.Notifications`` on the session bus (dunst, mako,
gnome-shell, ...).  Messages are sent without waiting for a reply: the
server's answer (the notification id) is of no use to us, and a slow or
missing server must never hold up the poll loop.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QMetaType, QVariant
from PyQt6.QtDBus import QDBusArgument, QDBusConnection, QDBusMessage

from .audio.sounds import SoundManager
from .settings import (
    APP_NAME,
    NOTIFY_BODY,
    NOTIFY_SUMMARY,
    NOTIFY_TIMEOUT,
    NOTIFY_URGENCY,
)
from .timer.engine import IntervalKind

logger = logging.getLogger(__name__)

NOTIFY_SERVICE = "org.freedesktop.Notifications"
NOTIFY_PATH = "/org/freedesktop/Notifications"
NOTIFY_INTERFACE = "org.freedesktop.Notifications"


def _typed(value: int, type_: QMetaType.Type) -> QVariant:
    """Wrap *value* so it is marshalled with the exact D-Bus type."""
    variant = QVariant(value)
    variant.convert(QMetaType(type_.value))
    return variant


def build_notify_message(kind: IntervalKind) -> QDBusMessage:
    """The ``Notify`` call announcing that *kind* is up next."""
    message = QDBusMessage.createMethodCall(
        NOTIFY_SERVICE, NOTIFY_PATH, NOTIFY_INTERFACE, "Notify",
    )
    message.setArguments([
        APP_NAME,
        _typed(0, QMetaType.Type.UInt),  # replaces_id
        "",  # app_icon
        NOTIFY_SUMMARY,
        NOTIFY_BODY.format(label=kind.label),
        QDBusArgument([], QMetaType.Type.QStringList.value),  # actions
        {"urgency": _typed(NOTIFY_URGENCY, QMetaType.Type.UChar)},
        _typed(NOTIFY_TIMEOUT, QMetaType.Type.Int),
    ])
    return message


class DesktopNotifier:
    """Sends expiry notifications on the session bus.

    ``notify`` returns whether the message was handed to the bus; it never
    raises for delivery problems.
    """

    def __init__(self, bus: QDBusConnection | None = None) -> None:
        self._bus = bus if bus is not None else QDBusConnection.sessionBus()

    def notify(self, kind: IntervalKind) -> bool:
        if not self._bus.isConnected():
            logger.warning(
                "session bus unavailable, dropping notification: %s",
                self._bus.lastError().message(),
            )
            return False
        if not self._bus.send(build_notify_message(kind)):
            logger.warning(
                "notification not sent: %s", self._bus.lastError().message(),
            )
            return False
        return True


class ExpiryAlert:
    """Timer callback: notify the desktop and ring the chime.

    Registered with ``Timer.on_state_change``.  Runs inline with the poll,
    so both halves are fire-and-forget and any failure stops here.
    """

    def __init__(
        self,
        notifier: DesktopNotifier | None = None,
        sounds: SoundManager | None = None,
    ) -> None:
        self._notifier = notifier
        self._sounds = sounds

    def __call__(self, kind: IntervalKind) -> None:
        if self._notifier is not None:
            try:
                self._notifier.notify(kind)
            except Exception:
                logger.exception("desktop notification failed")
        if self._sounds is not None:
            try:
                self._sounds.play("time_up")
            except Exception:
                logger.exception("expiry sound failed")
