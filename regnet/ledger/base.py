"""Ledger access facade and tagged record reads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ContextManager, Generic, Protocol, TypeVar, Union

from regnet.codec import decode_record

T = TypeVar("T")


class Ledger(Protocol):
    """The only point of contact with the key-value ledger.

    Reads are idempotent and writes are last-write-wins. Whether the writes
    of one invocation commit together is up to the implementation hosting
    the invocation, not to callers of this interface.
    """

    def get(self, key: str) -> bytes | None:
        """Return the value stored at `key`, or None if nothing is stored."""
        ...

    def put(self, key: str, value: bytes) -> None:
        """Store `value` at `key`.

        Implementations raise `LedgerWriteError` if the write is rejected.
        """
        ...

    def make_composite_key(self, namespace: str, segments: list[str]) -> str:
        ...


class TransactionalLedger(Protocol):
    """A ledger that can host invocations as all-or-nothing transactions."""

    def transaction(self, tx_id: str | None = None) -> ContextManager[Ledger]:
        """Yield a `Ledger` view whose writes commit together when the block
        exits cleanly and are discarded if it raises.
        """
        ...


@dataclass(frozen=True)
class Found(Generic[T]):
    """A record that exists at `key`."""

    key: str
    record: T


@dataclass(frozen=True)
class Absent:
    """Nothing is stored at `key`."""

    key: str


Lookup = Union[Found[T], Absent]


def read_record(ledger: Ledger, key: str, record_type: type[T]) -> Lookup[T]:
    """Read and decode the record at `key`.

    Absence is reported as `Absent`; bytes that do not decode to
    `record_type` raise `RecordDecodeError` instead of passing for absence.
    """
    data = ledger.get(key)
    if data is None:
        return Absent(key)
    return Found(key, decode_record(data, record_type))
