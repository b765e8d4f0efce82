"""Event sink interface."""

from __future__ import annotations

from typing import Protocol

from regnet.models.base import LedgerEvent


class EventSink(Protocol):
    """Destination for events emitted after a committed invocation."""

    def send(self, topic: str, event: LedgerEvent, key: str | None = None) -> None:
        ...

    def close(self) -> None:
        ...
