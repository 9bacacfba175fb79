from __future__ import annotations

import logging

from ..common.validators import require_non_empty
from .notifier import Notifier
from .repository import DeviceTokenRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Best-effort push notifications.

    Delivery problems are logged and never raised: the operation that
    triggered the notification has already succeeded.
    """

    def __init__(self, tokens: DeviceTokenRepository, notifier: Notifier):
        self._tokens = tokens
        self._notifier = notifier

    def register_token(self, *, intern_id: int, token: str) -> None:
        token = require_non_empty(token, "Token")
        self._tokens.save_token(intern_id=int(intern_id), token=token)
        logger.info("Saved device token for intern %s", intern_id)

    def notify_intern(self, intern_id: int, title: str, body: str) -> bool:
        try:
            token = self._tokens.get_token(int(intern_id))
        except Exception:
            logger.warning("Could not load device token for intern %s", intern_id, exc_info=True)
            return False

        if not token:
            logger.warning("Device token not found for intern %s, skipping notification", intern_id)
            return False

        try:
            self._notifier.send(token, title, body)
        except Exception:
            logger.warning("Failed to send notification to intern %s", intern_id, exc_info=True)
            return False
        return True
