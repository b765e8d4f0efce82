"""Enumeration types for registry records and invocation outcomes."""

from enum import Enum


class Role(str, Enum):
    REGISTRAR = "registrar"
    USER = "user"


class PropertyStatus(str, Enum):
    REGISTERED = "registered"
    ON_SALE = "onSale"


class Voucher(str, Enum):
    """Bank voucher codes accepted by ``rechargeAccount``."""

    UPG100 = "upg100"
    UPG500 = "upg500"
    UPG1000 = "upg1000"

    @property
    def amount(self) -> int:
        return VOUCHER_AMOUNTS[self]


VOUCHER_AMOUNTS = {
    Voucher.UPG100: 100,
    Voucher.UPG500: 500,
    Voucher.UPG1000: 1000,
}


class ErrorKind(str, Enum):
    AUTHORIZATION = "AuthorizationError"
    NOT_FOUND = "NotFound"
    DUPLICATE_REQUEST = "DuplicateRequest"
    ALREADY_APPROVED = "AlreadyApproved"
    INVALID_STATUS = "InvalidStatus"
    INVALID_VOUCHER = "InvalidVoucher"
    INVALID_ARGUMENT = "InvalidArgument"
    NOT_OWNER = "NotOwner"
    NOT_FOR_SALE = "NotForSale"
    SELF_PURCHASE = "SelfPurchase"
    INSUFFICIENT_FUNDS = "InsufficientFunds"
    INTERNAL_INCONSISTENCY = "InternalInconsistency"
    UNKNOWN_OPERATION = "UnknownOperation"
    WRITE_CONFLICT = "WriteConflict"
    LEDGER_WRITE_FAILED = "LedgerWriteFailed"
    CONFIGURATION = "ConfigurationError"
    SINK = "SinkError"
