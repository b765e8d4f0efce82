"""In-memory versioned ledger with per-invocation transactions."""

import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Iterator

from regnet.exceptions import LedgerWriteError, WriteConflictError
from regnet.keys import make_composite_key

logger = logging.getLogger(__name__)


class TransactionStub:
    """Ledger view handed to a single invocation.

    Reads see committed state and remember the version they observed.
    Writes are buffered; nothing reaches the ledger until the owning
    ``InMemoryLedger.transaction()`` block exits cleanly.
    """

    def __init__(self, ledger: "InMemoryLedger", tx_id: str) -> None:
        self.tx_id = tx_id
        self._ledger = ledger
        self._read_versions: dict[str, int] = {}
        self._writes: dict[str, bytes] = {}

    @property
    def read_set(self) -> dict[str, int]:
        return dict(self._read_versions)

    @property
    def write_set(self) -> dict[str, bytes]:
        return dict(self._writes)

    def get(self, key: str) -> bytes | None:
        self._read_versions.setdefault(key, self._ledger.version(key))
        return self._ledger.get(key)

    def put(self, key: str, value: bytes) -> None:
        if not key:
            raise LedgerWriteError("Cannot write to an empty key")
        if not isinstance(value, (bytes, bytearray)):
            raise LedgerWriteError(f"Value for {key!r} must be bytes, got {type(value).__name__}")
        self._writes[key] = bytes(value)

    def make_composite_key(self, namespace: str, segments: list[str]) -> str:
        return make_composite_key(namespace, segments)


class InMemoryLedger:
    """Dictionary-backed ledger with optimistic concurrency control.

    Every key carries a version that is bumped on each committed write. A
    transaction commits only if none of the keys it read changed since it
    read them; otherwise the whole write set is rejected. Validation and
    apply happen under one lock, so concurrent commits serialise.
    """

    def __init__(self) -> None:
        self._state: dict[str, bytes] = {}
        self._versions: dict[str, int] = {}
        self.commits = 0
        self._commit_lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        return self._state.get(key)

    def put(self, key: str, value: bytes) -> None:
        """Write a single key outside any invocation (e.g. for seeding)."""
        with self.transaction() as stub:
            stub.put(key, value)

    def make_composite_key(self, namespace: str, segments: list[str]) -> str:
        return make_composite_key(namespace, segments)

    def version(self, key: str) -> int:
        return self._versions.get(key, 0)

    def keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self._state if k.startswith(prefix))

    def snapshot(self) -> dict[str, bytes]:
        """Copy of the committed key-value state."""
        return dict(self._state)

    @contextmanager
    def transaction(self, tx_id: str | None = None) -> Iterator[TransactionStub]:
        """Run one invocation; commit its writes only if the block succeeds.

        Parameters
        ----------
        tx_id : str | None
            Transaction identifier (random if omitted).

        Yields
        ------
        TransactionStub
            The ledger view for the invocation.
        """
        stub = TransactionStub(self, tx_id or uuid.uuid4().hex)
        yield stub
        self.commit(stub)

    def commit(self, stub: TransactionStub) -> None:
        """Apply a transaction's write set atomically."""
        writes = stub.write_set
        with self._commit_lock:
            for key, seen in stub.read_set.items():
                if self.version(key) != seen:
                    logger.warning("Transaction %s conflicts on %r", stub.tx_id, key)
                    raise WriteConflictError(
                        f"Transaction {stub.tx_id} read a key that changed before commit"
                    )

            for key, value in writes.items():
                self._state[key] = value
                self._versions[key] = self.version(key) + 1
            if writes:
                self.commits += 1

        if writes:
            logger.debug("Committed transaction %s: %d writes", stub.tx_id, len(writes))
