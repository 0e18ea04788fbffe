"""Opt-in listeners for internal delivery failures."""

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

ErrorListener = Callable[[Exception], None]


class ErrorObserverRegistry:
    """Holds error listeners and notifies them in registration order."""

    def __init__(self) -> None:
        self._listeners: List[ErrorListener] = []

    def add(self, listener: ErrorListener) -> None:
        self._listeners.append(listener)

    def remove(self, listener: ErrorListener) -> bool:
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def __len__(self) -> int:
        return len(self._listeners)

    def notify(self, error: Exception) -> None:
        if not self._listeners:
            logger.error("error-notifier internal error (no listeners registered): %s", error)
            return

        for listener in list(self._listeners):
            try:
                listener(error)
            except Exception:  # listeners must not break delivery
                logger.exception("Error listener %r raised while handling %s", listener, error)
