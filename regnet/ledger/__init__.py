"""Ledger access facade and the in-memory ledger."""

from regnet.ledger.base import Absent, Found, Ledger, Lookup, TransactionalLedger, read_record
from regnet.ledger.memory import InMemoryLedger, TransactionStub

__all__ = [
    "Absent",
    "Found",
    "InMemoryLedger",
    "Ledger",
    "Lookup",
    "TransactionStub",
    "TransactionalLedger",
    "read_record",
]
