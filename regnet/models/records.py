"""Ledger records for users and properties.

Request and approved records live under different key namespaces; the
namespace a record sits in is its state. Properties refer to their owner
by the owner's approved-user key, never by a copy of the owner's data.
"""

from dataclasses import dataclass, replace
from datetime import datetime

from regnet.models.enums import PropertyStatus


@dataclass
class UserRequest:
    """Registration request raised by a user organisation member."""

    name: str
    email: str
    phone: str
    national_id_number: str
    created_at: datetime


@dataclass
class ApprovedUser:
    """User approved by a registrar, holding a coin balance."""

    name: str
    email: str
    phone: str
    national_id_number: str
    created_at: datetime
    coin_balance: int = 0

    @classmethod
    def from_request(cls, request: UserRequest) -> "ApprovedUser":
        return cls(
            name=request.name,
            email=request.email,
            phone=request.phone,
            national_id_number=request.national_id_number,
            created_at=request.created_at,
            coin_balance=0,
        )

    def credited(self, amount: int) -> "ApprovedUser":
        return replace(self, coin_balance=self.coin_balance + amount)

    def debited(self, amount: int) -> "ApprovedUser":
        return replace(self, coin_balance=self.coin_balance - amount)


@dataclass
class PropertyRequest:
    """Property registration request on behalf of an approved user."""

    property_id: str
    owner_key: str
    price: int
    status: PropertyStatus


@dataclass
class ApprovedProperty:
    """Property registered on the network."""

    property_id: str
    owner_key: str
    price: int
    status: PropertyStatus

    @classmethod
    def from_request(cls, request: PropertyRequest) -> "ApprovedProperty":
        return cls(
            property_id=request.property_id,
            owner_key=request.owner_key,
            price=request.price,
            status=request.status,
        )

    def with_status(self, status: PropertyStatus) -> "ApprovedProperty":
        return replace(self, status=status)

    def transferred_to(self, owner_key: str) -> "ApprovedProperty":
        """Return the property owned by ``owner_key`` and no longer on sale."""
        return replace(self, owner_key=owner_key, status=PropertyStatus.REGISTERED)


@dataclass
class PurchaseReceipt:
    """Updated seller, buyer and property after a purchase."""

    seller: ApprovedUser
    buyer: ApprovedUser
    property: ApprovedProperty
