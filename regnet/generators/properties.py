"""Property registration request generator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from regnet.generators.base import BaseGenerator
from regnet.generators.users import UserRequestParams
from regnet.models.enums import PropertyStatus


@dataclass
class PropertyRequestParams:
    """Arguments of one ``requestProperty`` invocation."""

    property_id: str
    price: int
    status: PropertyStatus
    owner_name: str
    owner_id_number: str

    def as_args(self) -> tuple[str, ...]:
        return (
            self.property_id,
            str(self.price),
            self.status.value,
            self.owner_name,
            self.owner_id_number,
        )


class PropertyGenerator(BaseGenerator):
    """Generate synthetic property registration requests."""

    # Prices in coins, kept within reach of a few voucher recharges
    PRICE_RANGE = (100, 2500)
    PRICE_STEP = 50
    ON_SALE_RATE = 0.3

    def __init__(self, seed: int | None = None, locale: str = "en_IN") -> None:
        super().__init__(seed, locale)
        self._sequence = 0

    def generate(self, owner: UserRequestParams) -> PropertyRequestParams:
        """Generate a request for a property owned by ``owner``."""
        self._sequence += 1
        low, high = self.PRICE_RANGE
        price = self.random.randrange(low, high + 1, self.PRICE_STEP)
        status = (
            PropertyStatus.ON_SALE
            if self.random.random() < self.ON_SALE_RATE
            else PropertyStatus.REGISTERED
        )
        return PropertyRequestParams(
            property_id=f"{self.fake.postcode()}-{self._sequence:03d}",
            price=price,
            status=status,
            owner_name=owner.name,
            owner_id_number=owner.national_id_number,
        )

    def generate_for_owners(
        self, owners: list[UserRequestParams], per_owner: int = 1
    ) -> Iterator[PropertyRequestParams]:
        """Generate ``per_owner`` requests for each owner."""
        for owner in owners:
            for _ in range(per_owner):
                yield self.generate(owner)
