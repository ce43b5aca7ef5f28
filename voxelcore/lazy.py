"""A value that arrives later from another thread through a one-slot channel."""

from __future__ import annotations

import enum
import threading
from collections import deque
from typing import Generic, TypeVar

T = TypeVar("T")

_PENDING = object()


class Status(enum.Enum):
    WAITING = "waiting"
    RECEIVED = "received"


class _Disconnected(RuntimeError):
    pass


class _Channel:
    def __init__(self) -> None:
        self.cond = threading.Condition()
        self.items: deque = deque()
        self.sender_closed = False
        self.receiver_closed = False

    def recv(self):
        with self.cond:
            while not self.items and not self.sender_closed:
                self.cond.wait()
            return self._take()

    def try_recv(self):
        with self.cond:
            if not self.items and not self.sender_closed:
                return _PENDING
            return self._take()

    def _take(self):
        if not self.items:
            raise _Disconnected("is disconnected")
        value = self.items.popleft()
        self.receiver_closed = True
        self.cond.notify_all()
        return value


class Sender(Generic[T]):
    """Sending half of a lazy value; use as a context manager to close it."""

    def __init__(self, channel: _Channel) -> None:
        self._channel = channel

    def send(self, value: T) -> None:
        """Deliver the value, waiting while the slot is still occupied."""
        channel = self._channel
        with channel.cond:
            if channel.sender_closed:
                raise RuntimeError("sender is closed")
            while channel.items and not channel.receiver_closed:
                channel.cond.wait()
            if channel.receiver_closed:
                raise RuntimeError("receiver is gone")
            channel.items.append(value)
            channel.cond.notify_all()

    def __enter__(self) -> Sender[T]:
        return self

    def __exit__(self, *exc_info) -> None:
        channel = self._channel
        with channel.cond:
            channel.sender_closed = True
            channel.cond.notify_all()


class Lazy(Generic[T]):
    """Either a value already at hand or a channel it will arrive on."""

    def __init__(self, value=_PENDING, channel: _Channel | None = None) -> None:
        if value is _PENDING and channel is None:
            raise ValueError("a lazy value needs a value or a channel")
        self._value = value
        self._channel = channel

    @property
    def ready(self) -> bool:
        return self._value is not _PENDING

    def block_on(self) -> T:
        """Wait for the value and return it."""
        if self._value is _PENDING:
            self._value = self._channel.recv()
            self._channel = None
        return self._value

    def try_get(self) -> T | None:
        """Return the value if it has arrived, otherwise None."""
        if self._value is _PENDING:
            value = self._channel.try_recv()
            if value is _PENDING:
                return None
            self._value = value
            self._channel = None
        return self._value

    def check(self) -> Status:
        """Take the value if it has arrived and report whether it is here."""
        if self._value is _PENDING:
            try:
                value = self._channel.try_recv()
            except _Disconnected:
                return Status.WAITING
            if value is _PENDING:
                return Status.WAITING
            self._value = value
            self._channel = None
        return Status.RECEIVED

    def __repr__(self) -> str:
        if self._value is _PENDING:
            return "Lazy(<waiting>)"
        return f"Lazy({self._value!r})"


def open_lazy() -> tuple[Lazy, Sender]:
    """Return a waiting lazy value and the sender that fulfils it."""
    channel = _Channel()
    return Lazy(channel=channel), Sender(channel)


def lazy_value(value: T) -> Lazy[T]:
    """Return a lazy value that is already available."""
    return Lazy(value)