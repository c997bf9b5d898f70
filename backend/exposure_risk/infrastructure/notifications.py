"""Logging Notification Dispatcher — records notification requests instead of delivering them.

Invariants:
    - notify() never raises
    - Every request is kept in `sent` in call order

Design Decisions:
    - Platform delivery is out of scope; this adapter is what the API process and
      local runs wire in
"""

import logging

from exposure_risk.core.domain_types import NotificationPriority

logger = logging.getLogger(__name__)


class LoggingNotificationDispatcher:
    def __init__(self):
        self.sent: list[tuple[str, NotificationPriority]] = []

    def notify(self, message: str, priority: NotificationPriority) -> None:
        self.sent.append((message, priority))
        logger.info(f"Notification ({priority.value}): {message}")
