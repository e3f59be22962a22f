"""
Transient user notifications ("toasts").

Only the most recent notification is shown; it disappears on its own once
its display duration has elapsed.
"""

import time
from collections import deque
from typing import Deque, Literal, Optional

from loguru import logger
from pydantic import BaseModel, Field

from .config import get_settings


NotificationKind = Literal["success", "error", "info"]

HISTORY_LIMIT = 50


class Notification(BaseModel):
    """A single message shown to the user."""
    text: str
    kind: NotificationKind = "info"
    created_at: float = Field(default_factory=time.time)


class NotificationCenter:
    """Holds the visible notification and expires it after a fixed delay."""

    def __init__(self, duration_seconds: Optional[float] = None, history_limit: int = HISTORY_LIMIT):
        if duration_seconds is None:
            duration_seconds = get_settings().toast_duration_seconds
        self.duration_seconds = duration_seconds
        self.history: Deque[Notification] = deque(maxlen=history_limit)
        self._current: Optional[Notification] = None

    def publish(self, text: str, kind: NotificationKind = "info") -> Notification:
        notification = Notification(text=text, kind=kind)
        # A new toast replaces whatever is on screen.
        self._current = notification
        self.history.append(notification)
        logger.debug(f"Notification ({kind}): {text}")
        return notification

    def success(self, text: str) -> Notification:
        return self.publish(text, "success")

    def error(self, text: str) -> Notification:
        return self.publish(text, "error")

    def info(self, text: str) -> Notification:
        return self.publish(text, "info")

    def current(self, now: Optional[float] = None) -> Optional[Notification]:
        """Return the visible notification, or None once it has expired."""
        if self._current is None:
            return None
        now = time.time() if now is None else now
        if now - self._current.created_at >= self.duration_seconds:
            self._current = None
        return self._current

    def dismiss(self) -> None:
        self._current = None
