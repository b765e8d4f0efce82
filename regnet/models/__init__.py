"""Domain models for the property registration network."""

from regnet.models.base import LedgerEvent
from regnet.models.enums import ErrorKind, PropertyStatus, Role, Voucher
from regnet.models.records import (
    ApprovedProperty,
    ApprovedUser,
    PropertyRequest,
    PurchaseReceipt,
    UserRequest,
)

__all__ = [
    "ApprovedProperty",
    "ApprovedUser",
    "ErrorKind",
    "LedgerEvent",
    "PropertyRequest",
    "PropertyStatus",
    "PurchaseReceipt",
    "Role",
    "UserRequest",
    "Voucher",
]
