"""Push notification channels used by extractors and their consumers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EventChannel(Generic[T]):
    """An ordered subscription list for one kind of notification.

    Subscribers are called synchronously, in subscription order, with the
    same payload object. Payloads are expected to be immutable.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._callbacks: list[Callable[[T], None]] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[T], None]:
        """Register ``callback``; returns it so this works as a decorator."""
        if callback not in self._callbacks:
            self._callbacks.append(callback)
        return callback

    def unsubscribe(self, callback: Callable[[T], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def publish(self, payload: T) -> None:
        for callback in list(self._callbacks):
            try:
                callback(payload)
            except Exception:
                logger.exception("Subscriber of %r failed", self.name)
                raise


__all__ = ["EventChannel"]
