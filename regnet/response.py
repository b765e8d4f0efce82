"""Wire responses returned by the registry's operation boundary."""

import json
from dataclasses import dataclass, fields, is_dataclass
from typing import Any

from regnet.codec import record_to_wire
from regnet.exceptions import RegnetError
from regnet.models.enums import ErrorKind


def payload_of(result: Any) -> Any:
    """Shape an operation result as JSON-ready data.

    Flat records use their ledger field names; bundles such as
    ``PurchaseReceipt`` are shaped member by member.
    """
    if is_dataclass(result):
        members = {f.name: getattr(result, f.name) for f in fields(result)}
        if any(is_dataclass(value) for value in members.values()):
            return {name: payload_of(value) for name, value in members.items()}
        return record_to_wire(result)
    return result


@dataclass
class Response:
    """Discriminated result of one invocation."""

    success: bool
    payload: Any = None
    error_kind: ErrorKind | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls, result: Any) -> "Response":
        return cls(success=True, payload=payload_of(result))

    @classmethod
    def fail(cls, error: RegnetError) -> "Response":
        return cls(success=False, error_kind=error.kind, error_message=str(error))

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "payload": self.payload}
        return {
            "success": False,
            "error": {
                "kind": self.error_kind.value if self.error_kind else None,
                "message": self.error_message,
            },
        }

    def to_bytes(self) -> bytes:
        return json.dumps(self.to_dict(), ensure_ascii=False).encode("utf-8")
