"""Notifier that writes operation outcomes to the advisy.notifications logger."""

import logging
from typing import Any

logger = logging.getLogger("advisy.notifications")


class LoggingNotifier:
    """Default INotifier: success at INFO, failure at WARNING."""

    def success(self, message: str, **context: Any) -> None:
        logger.info(message, extra={"notification": "success", "context": context})

    def error(self, message: str, **context: Any) -> None:
        logger.warning(message, extra={"notification": "error", "context": context})
