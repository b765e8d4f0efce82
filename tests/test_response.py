"""Tests for wire responses."""

import json
from datetime import datetime, timezone

from regnet.exceptions import NotForSaleError
from regnet.models.enums import ErrorKind, PropertyStatus
from regnet.models.records import ApprovedProperty, ApprovedUser, PurchaseReceipt
from regnet.response import Response, payload_of

CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestPayloadOf:
    """Tests for payload shaping."""

    def test_flat_record_uses_ledger_names(self) -> None:
        prop = ApprovedProperty("P1", "owner-key", 500, PropertyStatus.ON_SALE)

        assert payload_of(prop) == {"propertyId": "P1", "owner": "owner-key", "price": 500, "status": "onSale"}

    def test_receipt_is_shaped_per_member(self) -> None:
        user = ApprovedUser("Asha", "a@example.com", "1", "123", CREATED, 10)
        prop = ApprovedProperty("P1", "owner-key", 500, PropertyStatus.REGISTERED)

        payload = payload_of(PurchaseReceipt(seller=user, buyer=user, property=prop))

        assert payload["seller"]["upGradCoins"] == 10
        assert payload["property"]["status"] == "registered"

    def test_plain_values_pass_through(self) -> None:
        assert payload_of({"a": 1}) == {"a": 1}


class TestResponse:
    """Tests for Response."""

    def test_ok(self) -> None:
        response = Response.ok(ApprovedProperty("P1", "k", 5, PropertyStatus.REGISTERED))

        assert response.success
        assert response.error_kind is None
        assert json.loads(response.to_bytes()) == {
            "success": True,
            "payload": {"propertyId": "P1", "owner": "k", "price": 5, "status": "registered"},
        }

    def test_fail(self) -> None:
        response = Response.fail(NotForSaleError("Property P1 is not for sale"))

        assert not response.success
        assert response.error_kind == ErrorKind.NOT_FOR_SALE
        assert json.loads(response.to_bytes()) == {
            "success": False,
            "error": {"kind": "NotForSale", "message": "Property P1 is not for sale"},
        }
