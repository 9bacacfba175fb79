from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Outbound push delivery (token + title + body)."""

    def send(self, token: str, title: str, body: str) -> None:
        raise NotImplementedError


class LoggingNotifier:
    """Default notifier: records the message in the application log."""

    def send(self, token: str, title: str, body: str) -> None:
        logger.info("Push to %s...: %s - %s", token[:12], title, body)
