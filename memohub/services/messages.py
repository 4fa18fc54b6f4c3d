from __future__ import annotations

import logging

from memohub.domain.interfaces import IMessageService

logger = logging.getLogger(__name__)


class LoggingMessageService(IMessageService):
    """Routes user-facing messages to the log; the CLI's console handler shows them."""

    def info(self, title: str, text: str) -> None:
        logger.info("%s: %s", title, text)

    def warning(self, title: str, text: str) -> None:
        logger.warning("%s: %s", title, text)

    def error(self, title: str, text: str) -> None:
        logger.error("%s: %s", title, text)
