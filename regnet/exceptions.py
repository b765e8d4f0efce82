"""Custom exception hierarchy for regnet.

Every class carries the ``ErrorKind`` reported to callers when the error
reaches the invocation boundary.
"""

from regnet.models.enums import ErrorKind


class RegnetError(Exception):
    """Base exception for all regnet errors."""

    kind: ErrorKind = ErrorKind.INTERNAL_INCONSISTENCY


class AuthorizationError(RegnetError):
    """Raised when the invoking identity lacks the role an operation requires."""

    kind = ErrorKind.AUTHORIZATION


class EntityNotFoundError(RegnetError):
    """Raised when a referenced record does not exist."""

    kind = ErrorKind.NOT_FOUND


class DuplicateRequestError(RegnetError):
    """Raised when a request record already exists at its key."""

    kind = ErrorKind.DUPLICATE_REQUEST


class AlreadyApprovedError(RegnetError):
    """Raised when an approved record already exists at its key."""

    kind = ErrorKind.ALREADY_APPROVED


class InvalidStatusError(RegnetError):
    """Raised when a property status is outside the allowed values."""

    kind = ErrorKind.INVALID_STATUS


class InvalidVoucherError(RegnetError):
    """Raised when a recharge voucher code is not recognised."""

    kind = ErrorKind.INVALID_VOUCHER


class InvalidArgumentError(RegnetError):
    """Raised when an invocation argument is malformed."""

    kind = ErrorKind.INVALID_ARGUMENT


class NotOwnerError(RegnetError):
    """Raised when a caller tries to modify a property it does not own."""

    kind = ErrorKind.NOT_OWNER


class NotForSaleError(RegnetError):
    """Raised when purchasing a property that is not on sale."""

    kind = ErrorKind.NOT_FOR_SALE


class SelfPurchaseError(RegnetError):
    """Raised when the buyer already owns the property."""

    kind = ErrorKind.SELF_PURCHASE


class InsufficientFundsError(RegnetError):
    """Raised when the buyer's coin balance is below the asking price."""

    kind = ErrorKind.INSUFFICIENT_FUNDS


class InternalInconsistencyError(RegnetError):
    """Raised when stored state violates an invariant of the data model."""

    kind = ErrorKind.INTERNAL_INCONSISTENCY


class RecordDecodeError(InternalInconsistencyError):
    """Raised when bytes at a key cannot be decoded to the expected record."""


class UnknownOperationError(RegnetError):
    """Raised when an invocation names an operation that does not exist."""

    kind = ErrorKind.UNKNOWN_OPERATION


class LedgerError(RegnetError):
    """Base class for failures reported by the ledger itself."""


class LedgerWriteError(LedgerError):
    """Raised when the ledger rejects a put."""

    kind = ErrorKind.LEDGER_WRITE_FAILED


class WriteConflictError(LedgerError):
    """Raised when a key read by an invocation changed before it committed."""

    kind = ErrorKind.WRITE_CONFLICT


class ConfigurationError(RegnetError):
    """Raised when configuration is invalid or missing."""

    kind = ErrorKind.CONFIGURATION


class SinkError(RegnetError):
    """Raised when an event sink operation fails."""

    kind = ErrorKind.SINK
