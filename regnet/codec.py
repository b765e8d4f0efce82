"""Serialization of registry records to and from ledger bytes."""

import json
from dataclasses import asdict, fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, TypeVar

from regnet.exceptions import RecordDecodeError
from regnet.models.enums import PropertyStatus

T = TypeVar("T")

# Python attribute -> JSON field stored on the ledger
WIRE_NAMES = {
    "name": "name",
    "email": "emailID",
    "phone": "phoneNumber",
    "national_id_number": "aadharNumber",
    "created_at": "createdAt",
    "coin_balance": "upGradCoins",
    "property_id": "propertyId",
    "owner_key": "owner",
    "price": "price",
    "status": "status",
}


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert dataclass to dict with proper serialization."""
    result = {}
    for key, value in asdict(obj).items():
        result[key] = serialize_value(value)
    return result


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def record_to_wire(record: Any) -> dict:
    """Convert a flat record dataclass to its ledger JSON shape."""
    return {
        WIRE_NAMES.get(f.name, f.name): serialize_value(getattr(record, f.name))
        for f in fields(record)
    }


def encode_record(record: Any) -> bytes:
    """Encode a record as the bytes stored on the ledger."""
    return json.dumps(record_to_wire(record), ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def _parse_datetime(value: Any) -> datetime:
    if not isinstance(value, str):
        raise TypeError("expected an ISO-8601 string")
    return datetime.fromisoformat(value)


def _parse_int(value: Any) -> int:
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError("expected an integer")
    return value


def _parse_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError("expected a string")
    return value


_PARSERS: dict[str, Callable[[Any], Any]] = {
    "created_at": _parse_datetime,
    "coin_balance": _parse_int,
    "price": _parse_int,
    "status": PropertyStatus,
}


def decode_record(data: bytes, record_type: type[T]) -> T:
    """Decode ledger bytes into ``record_type``.

    Parameters
    ----------
    data : bytes
        Raw value read from the ledger.
    record_type : type
        Record dataclass expected at the key.

    Returns
    -------
    T
        The decoded record.

    Raises
    ------
    RecordDecodeError
        If the bytes are not a JSON object of the expected shape.
    """
    try:
        payload = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RecordDecodeError(f"Stored value is not valid JSON for {record_type.__name__}") from exc

    if not isinstance(payload, dict):
        raise RecordDecodeError(f"Stored value for {record_type.__name__} is not an object")

    kwargs = {}
    for f in fields(record_type):
        wire_name = WIRE_NAMES.get(f.name, f.name)
        if wire_name not in payload:
            raise RecordDecodeError(f"{record_type.__name__} is missing field {wire_name!r}")
        parser = _PARSERS.get(f.name, _parse_str)
        try:
            kwargs[f.name] = parser(payload[wire_name])
        except (TypeError, ValueError) as exc:
            raise RecordDecodeError(
                f"{record_type.__name__} field {wire_name!r} is invalid: {exc}"
            ) from exc
    return record_type(**kwargs)
