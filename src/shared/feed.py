"""Explicit change-notification channel.

Components that need to react to changes (a cart badge, a product grid)
subscribe here instead of listening for ambient, process-wide events. Every
subscription hands back a callable that removes it again.
"""

from collections.abc import Callable
from typing import Generic, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Listener = Callable[[T], None]
Unsubscribe = Callable[[], None]


class ChangeFeed(Generic[T]):
    """A named list of listeners notified in subscription order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, value: T) -> None:
        # A failing listener must not stop the others or the mutation that triggered it
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:  # noqa: BLE001
                logger.exception("feed.listener_failed", feed=self.name)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def clear(self) -> None:
        self._listeners.clear()
