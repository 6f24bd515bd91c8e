"""
User-visible notification sinks
"""

import logging

logger = logging.getLogger(__name__)

class NotificationService:
    """Write-only channel for user-facing messages; logs by default"""

    def success(self, message: str) -> None:
        logger.info(f"[notify] {message}")

    def error(self, message: str) -> None:
        logger.warning(f"[notify] {message}")
