"""Registry state machine and its invocation boundary.

``RegistryStateMachine`` implements the user and property workflows over a
single invocation's ledger view. ``Registry`` is the boundary callers talk
to: it dispatches an operation by name inside one ledger transaction and
turns every outcome into a ``Response``.
"""

import logging
import uuid
from dataclasses import replace
from typing import Any

from regnet.auth import AuthorizationGuard, InvocationContext
from regnet.codec import encode_record
from regnet.config import RegnetConfig
from regnet.events.base import EventSink
from regnet.exceptions import (
    AlreadyApprovedError,
    DuplicateRequestError,
    EntityNotFoundError,
    InsufficientFundsError,
    InternalInconsistencyError,
    InvalidArgumentError,
    InvalidStatusError,
    InvalidVoucherError,
    NotForSaleError,
    NotOwnerError,
    RegnetError,
    SelfPurchaseError,
    SinkError,
    UnknownOperationError,
)
from regnet.keys import KeySchema
from regnet.ledger.base import Absent, Ledger, TransactionalLedger, read_record
from regnet.logging import InvocationLogger
from regnet.models.base import LedgerEvent
from regnet.models.enums import PropertyStatus, Role, Voucher
from regnet.models.records import (
    ApprovedProperty,
    ApprovedUser,
    PropertyRequest,
    PurchaseReceipt,
    UserRequest,
)
from regnet.response import Response, payload_of

logger = logging.getLogger(__name__)

# Wire operation name -> (method, number of arguments)
OPERATIONS: dict[str, tuple[str, int]] = {
    "requestUser": ("request_user", 4),
    "approveUser": ("approve_user", 2),
    "viewUser": ("view_user", 2),
    "rechargeAccount": ("recharge_account", 3),
    "requestProperty": ("request_property", 5),
    "approveProperty": ("approve_property", 1),
    "viewProperty": ("view_property", 1),
    "updateProperty": ("update_property", 4),
    "purchaseProperty": ("purchase_property", 3),
    # Names used by the first deployed contracts
    "requestNewUser": ("request_user", 4),
    "approveNewUser": ("approve_user", 2),
    "approvePropertyRegistration": ("approve_property", 1),
}


def parse_status(value: Any) -> PropertyStatus:
    try:
        return PropertyStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in PropertyStatus)
        raise InvalidStatusError(f"Status {value!r} is not one of: {allowed}") from None


def parse_price(value: Any) -> int:
    """Accept a non-negative integer, or its decimal string form."""
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    raise InvalidArgumentError(f"Price {value!r} is not a non-negative whole number of coins")


def _require_identifier(value: Any, what: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(f"{what} must be a non-empty string")
    return value


def _contact_field(value: Any, what: str) -> str:
    # Numbers are accepted as given; the stored record always holds text
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise InvalidArgumentError(f"{what} must be a string or a whole number")


class RegistryStateMachine:
    """User and property workflows for one invocation.

    Every mutating operation checks the caller's role before touching the
    ledger, reads everything it needs, and only then writes. References
    between records are ledger keys resolved afresh on each read.
    """

    def __init__(
        self,
        ledger: Ledger,
        ctx: InvocationContext,
        keys: KeySchema | None = None,
        guard: AuthorizationGuard | None = None,
    ) -> None:
        self.ledger = ledger
        self.ctx = ctx
        self.keys = keys or KeySchema()
        self.guard = guard or AuthorizationGuard()
        self.events: list[LedgerEvent] = []

    # Helpers
    def _require(self, role: Role) -> None:
        self.guard.check(self.ctx, role)

    def _write(self, *items: tuple[str, Any]) -> None:
        """Encode every record first, then put them in order."""
        encoded = [(key, encode_record(record)) for key, record in items]
        for key, data in encoded:
            self.ledger.put(key, data)

    def _emit(self, event_type: str, subject: str, result: Any) -> None:
        self.events.append(
            LedgerEvent(
                event_id=f"{self.ctx.tx_id}:{len(self.events)}",
                event_type=event_type,
                event_time=self.ctx.timestamp,
                source=self.keys.prefix,
                subject=subject,
                data=payload_of(result),
                metadata={"msp_id": self.ctx.msp_id},
            )
        )

    def _approved_user(self, key: str, what: str) -> ApprovedUser:
        lookup = read_record(self.ledger, key, ApprovedUser)
        if isinstance(lookup, Absent):
            raise EntityNotFoundError(f"{what} is either not approved or does not exist on the network")
        return lookup.record

    def _approved_property(self, property_id: str) -> ApprovedProperty:
        lookup = read_record(self.ledger, self.keys.approved_property(property_id), ApprovedProperty)
        if isinstance(lookup, Absent):
            raise EntityNotFoundError(
                f"Property {property_id} is either not approved or does not exist on the network"
            )
        return lookup.record

    # User workflows
    def request_user(self, name: str, email: str, phone: str, national_id_number: str) -> UserRequest:
        self._require(Role.USER)
        _require_identifier(name, "Name")
        _require_identifier(national_id_number, "National id number")
        email = _contact_field(email, "Email")
        phone = _contact_field(phone, "Phone number")
        key = self.keys.request_user(name, national_id_number)

        if not isinstance(read_record(self.ledger, key, UserRequest), Absent):
            raise DuplicateRequestError(f"User {name} has already requested registration")

        request = UserRequest(
            name=name,
            email=email,
            phone=phone,
            national_id_number=national_id_number,
            created_at=self.ctx.timestamp,
        )
        self._write((key, request))
        self._emit("user.requested", key, request)
        return request

    def approve_user(self, name: str, national_id_number: str) -> ApprovedUser:
        self._require(Role.REGISTRAR)
        request_key = self.keys.request_user(name, national_id_number)
        approved_key = self.keys.approved_user(name, national_id_number)

        lookup = read_record(self.ledger, request_key, UserRequest)
        if isinstance(lookup, Absent):
            raise EntityNotFoundError(f"No registration request exists for user {name}")
        if not isinstance(read_record(self.ledger, approved_key, ApprovedUser), Absent):
            raise AlreadyApprovedError(f"User {name} is already approved on the network")

        user = ApprovedUser.from_request(lookup.record)
        self._write((approved_key, user))
        self._emit("user.approved", approved_key, user)
        return user

    def view_user(self, name: str, national_id_number: str) -> ApprovedUser:
        return self._approved_user(self.keys.approved_user(name, national_id_number), f"User {name}")

    def recharge_account(self, name: str, national_id_number: str, voucher_code: str) -> ApprovedUser:
        self._require(Role.USER)
        key = self.keys.approved_user(name, national_id_number)
        user = self._approved_user(key, f"User {name}")

        try:
            voucher = Voucher(voucher_code)
        except ValueError:
            raise InvalidVoucherError(f"Voucher {voucher_code!r} is not a valid bank transaction id") from None

        user = user.credited(voucher.amount)
        self._write((key, user))
        self._emit("user.recharged", key, user)
        return user

    # Property workflows
    def request_property(
        self,
        property_id: str,
        price: int | str,
        status: str,
        owner_name: str,
        owner_id_number: str,
    ) -> PropertyRequest:
        self._require(Role.USER)
        _require_identifier(property_id, "Property id")
        price = parse_price(price)
        status = parse_status(status)
        key = self.keys.request_property(property_id)

        if not isinstance(read_record(self.ledger, key, PropertyRequest), Absent):
            raise DuplicateRequestError(f"A registration request for property {property_id} already exists")

        owner_key = self.keys.approved_user(owner_name, owner_id_number)
        self._approved_user(owner_key, f"Owner {owner_name}")

        request = PropertyRequest(
            property_id=property_id,
            owner_key=owner_key,
            price=price,
            status=status,
        )
        self._write((key, request))
        self._emit("property.requested", key, request)
        return request

    def approve_property(self, property_id: str) -> ApprovedProperty:
        self._require(Role.REGISTRAR)
        request_key = self.keys.request_property(property_id)
        approved_key = self.keys.approved_property(property_id)

        lookup = read_record(self.ledger, request_key, PropertyRequest)
        if isinstance(lookup, Absent):
            raise EntityNotFoundError(f"No registration request exists for property {property_id}")
        if not isinstance(read_record(self.ledger, approved_key, ApprovedProperty), Absent):
            raise AlreadyApprovedError(f"Property {property_id} is already registered on the network")

        prop = ApprovedProperty.from_request(lookup.record)
        self._write((approved_key, prop))
        self._emit("property.approved", approved_key, prop)
        return prop

    def view_property(self, property_id: str) -> ApprovedProperty:
        return self._approved_property(property_id)

    def update_property(
        self,
        property_id: str,
        owner_name: str,
        owner_id_number: str,
        new_status: str,
    ) -> ApprovedProperty:
        self._require(Role.USER)
        prop = self._approved_property(property_id)

        if self.keys.approved_user(owner_name, owner_id_number) != prop.owner_key:
            raise NotOwnerError(f"{owner_name} is not the owner of property {property_id}")

        prop = prop.with_status(parse_status(new_status))
        key = self.keys.approved_property(property_id)
        self._write((key, prop))
        self._emit("property.updated", key, prop)
        return prop

    def purchase_property(self, property_id: str, buyer_name: str, buyer_id_number: str) -> PurchaseReceipt:
        """Move a property on sale to the buyer in exchange for its price.

        All preconditions are checked before anything is written. The
        seller, buyer and property records are then written together in
        this invocation, so the ledger commits all three or none.
        """
        self._require(Role.USER)
        prop = self._approved_property(property_id)
        if prop.status is not PropertyStatus.ON_SALE:
            raise NotForSaleError(f"Property {property_id} is not for sale")

        buyer_key = self.keys.approved_user(buyer_name, buyer_id_number)
        buyer = self._approved_user(buyer_key, f"Buyer {buyer_name}")
        if buyer.coin_balance < prop.price:
            raise InsufficientFundsError(
                f"Buyer {buyer_name} holds {buyer.coin_balance} coins, property costs {prop.price}"
            )

        seller_key = prop.owner_key
        seller_lookup = read_record(self.ledger, seller_key, ApprovedUser)
        if not self.keys.is_approved_user_key(seller_key) or isinstance(seller_lookup, Absent):
            raise InternalInconsistencyError(
                f"Owner of property {property_id} does not resolve to an approved user"
            )
        if buyer_key == seller_key:
            raise SelfPurchaseError(f"{buyer_name} already owns property {property_id}")

        seller = seller_lookup.record.credited(prop.price)
        buyer = buyer.debited(prop.price)
        prop = prop.transferred_to(buyer_key)

        property_key = self.keys.approved_property(property_id)
        self._write((seller_key, seller), (buyer_key, buyer), (property_key, prop))

        receipt = PurchaseReceipt(seller=seller, buyer=buyer, property=prop)
        self._emit("property.purchased", property_key, receipt)
        return receipt


class Registry:
    """Operation boundary of the registry.

    Each ``invoke`` runs in its own ledger transaction. Failures come back
    as ``Response`` objects carrying the error kind; nothing a failed
    invocation wrote is committed.
    """

    def __init__(
        self,
        ledger: TransactionalLedger,
        config: RegnetConfig | None = None,
        sink: EventSink | None = None,
    ) -> None:
        self.ledger = ledger
        self.config = (config or RegnetConfig()).validate()
        self.keys = KeySchema(self.config.ledger.namespace_prefix)
        self.guard = AuthorizationGuard(self.config.identity)
        self.sink = sink

    def invoke(self, ctx: InvocationContext, operation: str, *args: Any) -> Response:
        """Run ``operation`` with positional wire arguments."""
        if not ctx.tx_id:
            ctx = replace(ctx, tx_id=uuid.uuid4().hex)
        log = InvocationLogger(logger, operation, ctx.tx_id, ctx.msp_id)
        log.debug("Invoking %s as %s (tx %s)", operation, ctx.msp_id, ctx.tx_id)
        try:
            result, events = self._run(ctx, operation, args)
        except InternalInconsistencyError as exc:
            log.error("%s failed with an internal inconsistency: %s", operation, exc)
            return Response.fail(exc)
        except RegnetError as exc:
            log.warning("%s rejected: %s: %s", operation, exc.kind.value, exc)
            return Response.fail(exc)

        if events:
            log.info("%s committed (tx %s)", operation, ctx.tx_id)
        self._publish(events, log)
        return Response.ok(result)

    def _run(self, ctx: InvocationContext, operation: str, args: tuple) -> tuple[Any, list[LedgerEvent]]:
        try:
            method_name, arity = OPERATIONS[operation]
        except KeyError:
            raise UnknownOperationError(f"Unknown operation {operation!r}") from None
        if len(args) != arity:
            raise InvalidArgumentError(f"{operation} takes {arity} arguments, got {len(args)}")

        with self.ledger.transaction(ctx.tx_id) as stub:
            machine = RegistryStateMachine(stub, ctx, self.keys, self.guard)
            result = getattr(machine, method_name)(*args)
        return result, machine.events

    def _publish(self, events: list[LedgerEvent], log: InvocationLogger) -> None:
        if self.sink is None:
            return
        for event in events:
            try:
                self.sink.send(self.config.events.topic, event, key=event.subject)
            except SinkError:
                log.error("Could not publish %s for %r", event.event_type, event.subject, exc_info=True)
