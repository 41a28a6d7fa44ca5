"""Minimal event emitter and disposable handles."""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Disposable:
    """Handle whose dispose() runs its callback at most once."""

    def __init__(self, on_dispose: Callable[[], None]) -> None:
        self._on_dispose = on_dispose
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._on_dispose()

    def __enter__(self) -> "Disposable":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()


class EventEmitter(Generic[T]):
    """Deliver each fired value to every subscribed listener, in subscription order."""

    def __init__(self) -> None:
        self._listeners: list[Callable[[T], None]] = []

    def event(self, listener: Callable[[T], None]) -> Disposable:
        self._listeners.append(listener)
        return Disposable(lambda: self._remove(listener))

    def fire(self, value: T) -> None:
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                logger.exception("Change listener raised")

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _remove(self, listener: Callable[[T], None]) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass
