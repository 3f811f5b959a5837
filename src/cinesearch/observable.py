"""Observable state slots.

A ``Slot`` holds one value and notifies subscribers whenever it is replaced.
Writers keep the ``Slot``; readers receive a ``ReadOnlySlot`` view that can
subscribe and read but not publish.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

from cinesearch.errors import ClosedError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Slot(Generic[T]):
    """Last-write-wins value holder with callback subscribers."""

    def __init__(self, initial: T, *, name: str) -> None:
        self.name = name
        self._value = initial
        self._subscribers: list[Callable[[T], None]] = []
        self._closed = False

    @property
    def value(self) -> T:
        """The most recently published value."""
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(
        self, callback: Callable[[T], None], *, replay: bool = True
    ) -> Callable[[], None]:
        """Register *callback*; returns a function that unsubscribes it.

        With ``replay`` the callback immediately receives the current value.
        A closed slot raises ``ClosedError``.
        """
        if self._closed:
            raise ClosedError(
                f"Cannot subscribe to slot {self.name!r}: it is closed",
                hint="Subscribe to the state of a live coordinator.",
            )
        self._subscribers.append(callback)
        if replay:
            callback(self._value)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: Callable[[T], None]) -> None:
        """Remove *callback*; unknown callbacks are ignored."""
        try:
            self._subscribers.remove(callback)
        except ValueError:
            return

    def publish(self, value: T) -> None:
        """Replace the value wholesale and notify subscribers in order."""
        self._value = value
        logger.debug(
            "slot %s published %s to %d subscribers",
            self.name,
            type(value).__name__,
            len(self._subscribers),
        )
        for callback in tuple(self._subscribers):
            callback(value)

    def close(self) -> None:
        """Drop every subscriber and refuse new ones; the value is kept."""
        self._closed = True
        self._subscribers.clear()

    def read_only(self) -> ReadOnlySlot[T]:
        return ReadOnlySlot(self)


class ReadOnlySlot(Generic[T]):
    """Subscriber-facing view of a ``Slot``."""

    __slots__ = ("_slot",)

    def __init__(self, slot: Slot[T]) -> None:
        self._slot = slot

    @property
    def name(self) -> str:
        return self._slot.name

    @property
    def value(self) -> T:
        return self._slot.value

    @property
    def closed(self) -> bool:
        return self._slot.closed

    def subscribe(
        self, callback: Callable[[T], None], *, replay: bool = True
    ) -> Callable[[], None]:
        return self._slot.subscribe(callback, replay=replay)

    def unsubscribe(self, callback: Callable[[T], None]) -> None:
        self._slot.unsubscribe(callback)

    def __repr__(self) -> str:
        return f"ReadOnlySlot(name={self.name!r}, value={self.value!r})"
