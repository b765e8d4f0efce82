"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from typing import Callable

import pytest

from regnet.auth import InvocationContext
from regnet.ledger import InMemoryLedger
from regnet.registry import Registry

FIXED_TIME = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def ledger() -> InMemoryLedger:
    """Fresh ledger for each test."""
    return InMemoryLedger()


@pytest.fixture
def registry(ledger: InMemoryLedger) -> Registry:
    """Registry over the test ledger, no event sink."""
    return Registry(ledger)


@pytest.fixture
def user_ctx() -> InvocationContext:
    """Caller from the users organisation."""
    return InvocationContext(msp_id="usersMSP", timestamp=FIXED_TIME)


@pytest.fixture
def registrar_ctx() -> InvocationContext:
    """Caller from the registrar organisation."""
    return InvocationContext(msp_id="registrarMSP", timestamp=FIXED_TIME)


@pytest.fixture
def onboard(
    registry: Registry,
    user_ctx: InvocationContext,
    registrar_ctx: InvocationContext,
) -> Callable[..., tuple[str, str]]:
    """Register, approve and optionally recharge a user."""

    def _onboard(name: str, national_id: str, *vouchers: str) -> tuple[str, str]:
        email = f"{name.lower()}@example.com"
        assert registry.invoke(user_ctx, "requestUser", name, email, "9999999999", national_id).success
        assert registry.invoke(registrar_ctx, "approveUser", name, national_id).success
        for voucher in vouchers:
            assert registry.invoke(user_ctx, "rechargeAccount", name, national_id, voucher).success
        return name, national_id

    return _onboard


@pytest.fixture
def register_property(
    registry: Registry,
    user_ctx: InvocationContext,
    registrar_ctx: InvocationContext,
) -> Callable[..., str]:
    """Request and approve a property for an approved owner."""

    def _register(property_id: str, price: int, status: str, owner: tuple[str, str]) -> str:
        assert registry.invoke(user_ctx, "requestProperty", property_id, str(price), status, *owner).success
        assert registry.invoke(registrar_ctx, "approveProperty", property_id).success
        return property_id

    return _register
