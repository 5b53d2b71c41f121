"""Allow running pomod as a module: python -m pomod."""

import os
import sys

from PyQt6.QtCore import QCoreApplication

from .app import PomodDaemon, SignalEventSource
from .audio.sounds import SoundManager
from .logger import get_logger
from .notifications import DesktopNotifier, ExpiryAlert
from .settings import APP_NAME
from .timer.engine import Timer


def main() -> int:
    logger = get_logger()

    # Before QCoreApplication: Qt's D-Bus and audio threads inherit the mask.
    events = SignalEventSource()
    events.hold()

    app = QCoreApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    timer = Timer()
    timer.on_state_change(
        ExpiryAlert(DesktopNotifier(), SoundManager(parent=app)),
    )
    daemon = PomodDaemon(timer, events, process_events=app.processEvents)

    logger.info("%s started, pid %d", APP_NAME, os.getpid())
    try:
        daemon.run()
    except KeyboardInterrupt:
        logger.info("interrupted, exiting")
    except BrokenPipeError:
        logger.info("status bar closed stdout, exiting")
    except OSError:
        logger.exception("waiting for control signals failed")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
