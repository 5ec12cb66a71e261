"""Desktop notifications shown on the cabinet when the card is switched."""

from typing import Protocol

import structlog
from plyer import notification

log = structlog.stdlib.get_logger()


class Notifier(Protocol):
    def notify(self, title: str, message: str) -> None: ...


class DesktopNotifier:
    """Shows notifications through the platform's native notification service."""

    def __init__(self, app_name: str = "aimeswitcher", timeout: int = 10):
        self._app_name = app_name
        self._timeout = timeout

    def notify(self, title: str, message: str) -> None:
        notification.notify(
            title=title,
            message=message,
            app_name=self._app_name,
            timeout=self._timeout,
        )


class NullNotifier:
    """Notifier used when desktop notifications are disabled."""

    def notify(self, title: str, message: str) -> None:
        log.debug("notification_skipped", title=title)
