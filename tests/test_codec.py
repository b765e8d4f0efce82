"""Tests for record serialization."""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from regnet.codec import decode_record, encode_record, record_to_wire, serialize_value, to_dict
from regnet.exceptions import InternalInconsistencyError, RecordDecodeError
from regnet.models.enums import PropertyStatus
from regnet.models.records import ApprovedProperty, ApprovedUser, UserRequest

CREATED = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@dataclass
class _SampleData:
    name: str
    amount: Decimal
    created_at: datetime


class TestSerializeValue:
    """Tests for serialize_value and to_dict."""

    def test_scalars(self) -> None:
        assert serialize_value(Decimal("99.99")) == "99.99"
        assert serialize_value(PropertyStatus.ON_SALE) == "onSale"
        assert serialize_value(date(2024, 6, 15)) == "2024-06-15"
        assert serialize_value(datetime(2024, 6, 15, 10, 30)) == "2024-06-15T10:30:00"

    def test_nested(self) -> None:
        result = serialize_value({"items": [PropertyStatus.REGISTERED], "when": {"at": date(2024, 1, 1)}})

        assert result == {"items": ["registered"], "when": {"at": "2024-01-01"}}

    def test_to_dict(self) -> None:
        result = to_dict(_SampleData(name="x", amount=Decimal("1.50"), created_at=datetime(2024, 1, 1)))

        assert result == {"name": "x", "amount": "1.50", "created_at": "2024-01-01T00:00:00"}
        assert to_dict({"k": "v"}) == {"k": "v"}
        assert to_dict(42) == {"value": "42"}


class TestRecordWireFormat:
    """Records use the field names stored by the deployed network."""

    def test_approved_user_fields(self) -> None:
        user = ApprovedUser("Asha", "a@example.com", "987", "123", CREATED, coin_balance=600)

        assert record_to_wire(user) == {
            "name": "Asha",
            "emailID": "a@example.com",
            "phoneNumber": "987",
            "aadharNumber": "123",
            "createdAt": "2024-01-02T03:04:05+00:00",
            "upGradCoins": 600,
        }

    def test_decode_returns_equal_record(self) -> None:
        prop = ApprovedProperty("P1", "\x00ns\x00Asha-123\x00", 500, PropertyStatus.ON_SALE)

        assert decode_record(encode_record(prop), ApprovedProperty) == prop

    def test_encoding_is_stable(self) -> None:
        user = UserRequest("Asha", "a@example.com", "987", "123", CREATED)

        assert encode_record(user) == encode_record(UserRequest("Asha", "a@example.com", "987", "123", CREATED))

    def test_extra_fields_are_ignored(self) -> None:
        user = ApprovedUser("Asha", "a@example.com", "987", "123", CREATED, coin_balance=10)

        request = decode_record(encode_record(user), UserRequest)

        assert request == UserRequest("Asha", "a@example.com", "987", "123", CREATED)


class TestDecodeFailures:
    """Undecodable bytes are an inconsistency, never absence."""

    @pytest.mark.parametrize(
        "data",
        [
            b"not json",
            b"\xff\xfe",
            b"[1, 2, 3]",
            b'{"propertyId": "P1", "owner": "k", "price": 500}',
            b'{"propertyId": "P1", "owner": "k", "price": "500", "status": "onSale"}',
            b'{"propertyId": "P1", "owner": "k", "price": true, "status": "onSale"}',
            b'{"propertyId": "P1", "owner": "k", "price": 5, "status": "sold"}',
        ],
    )
    def test_raises_record_decode_error(self, data: bytes) -> None:
        with pytest.raises(RecordDecodeError):
            decode_record(data, ApprovedProperty)

    def test_decode_error_is_internal_inconsistency(self) -> None:
        with pytest.raises(InternalInconsistencyError):
            decode_record(b'{"name": "Asha"}', ApprovedUser)
