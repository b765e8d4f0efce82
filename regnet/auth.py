"""Caller-role authorization."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from regnet.config import IdentityConfig
from regnet.exceptions import AuthorizationError
from regnet.models.enums import Role


@dataclass
class InvocationContext:
    """What the registry knows about the caller of one invocation.

    `msp_id` is the organisation claim of the invoking identity; `timestamp`
    is the transaction timestamp, used wherever a record needs a creation
    time so that replaying an invocation yields the same state.
    """

    msp_id: str
    tx_id: str = ""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def authorize(invoker_role: Role | None, required_role: Role) -> None:
    """Raise `AuthorizationError` unless `invoker_role` is `required_role`."""

    if invoker_role is not required_role:
        held = invoker_role.value if invoker_role is not None else "none"
        raise AuthorizationError(
            f"Operation requires the {required_role.value} role, caller holds {held}"
        )


class AuthorizationGuard:
    """Maps organisation ids to roles and checks them against operations."""

    def __init__(self, identity: IdentityConfig | None = None) -> None:
        identity = identity or IdentityConfig()
        self._roles = {
            identity.registrar_msp: Role.REGISTRAR,
            identity.user_msp: Role.USER,
        }

    def role_for(self, ctx: InvocationContext) -> Role | None:
        return self._roles.get(ctx.msp_id)

    def check(self, ctx: InvocationContext, required_role: Role | None) -> None:
        """Authorize `ctx` for an operation; `None` means unrestricted."""

        if required_role is None:
            return
        authorize(self.role_for(ctx), required_role)
