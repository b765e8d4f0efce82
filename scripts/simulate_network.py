#!/usr/bin/env python3
"""Simulate activity on a property registration network.

Registers and approves users, recharges their accounts, registers
properties, and lets users buy the properties that are on sale, all
against an in-memory ledger. Prints a summary at the end.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from regnet.auth import InvocationContext
from regnet.config import RegnetConfig
from regnet.events import ConsoleSink, KafkaSink
from regnet.generators import PropertyGenerator, UserGenerator
from regnet.keys import APPROVED_PROPERTY, APPROVED_USER, REQUEST_PROPERTY, REQUEST_USER
from regnet.ledger import InMemoryLedger
from regnet.logging import setup_logging
from regnet.models.enums import Voucher
from regnet.registry import Registry

logger = logging.getLogger("regnet.simulate")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate a property registration network")
    parser.add_argument("--users", type=int, default=10, help="Number of users to register")
    parser.add_argument("--properties-per-user", type=int, default=1)
    parser.add_argument("--recharges", type=int, default=2, help="upg1000 recharges per user")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--events", choices=["none", "console", "kafka"], default=None)
    parser.add_argument("--log-level", default=None)
    return parser.parse_args()


def build_sink(kind: str, config: RegnetConfig):
    if kind == "console":
        return ConsoleSink(pretty=False)
    if kind == "kafka":
        return KafkaSink(config.kafka)
    return None


def main() -> int:
    args = parse_args()
    config = RegnetConfig.from_env()
    setup_logging(args.log_level or config.log_level, config.log_format)

    ledger = InMemoryLedger()
    sink = build_sink(args.events or ("kafka" if config.events.enabled else "none"), config)
    registry = Registry(ledger, config, sink=sink)

    user = InvocationContext(msp_id=config.identity.user_msp)
    registrar = InvocationContext(msp_id=config.identity.registrar_msp)

    outcomes: dict[str, int] = {}

    def run(ctx: InvocationContext, operation: str, *op_args: str) -> bool:
        response = registry.invoke(ctx, operation, *op_args)
        label = "ok" if response.success else response.error_kind.value
        outcomes[f"{operation}:{label}"] = outcomes.get(f"{operation}:{label}", 0) + 1
        return response.success

    users = list(UserGenerator(seed=args.seed).generate_batch(args.users))
    logger.info("Registering %d users", len(users))
    for params in users:
        run(user, "requestUser", *params.as_args())
        run(registrar, "approveUser", params.name, params.national_id_number)
        for _ in range(args.recharges):
            run(user, "rechargeAccount", params.name, params.national_id_number, Voucher.UPG1000.value)

    property_gen = PropertyGenerator(seed=args.seed)
    properties = list(property_gen.generate_for_owners(users, per_owner=args.properties_per_user))
    logger.info("Registering %d properties", len(properties))
    for prop in properties:
        if run(user, "requestProperty", *prop.as_args()):
            run(registrar, "approveProperty", prop.property_id)

    # Every property is offered to the user after its owner; only those
    # on sale change hands
    for i, prop in enumerate(properties):
        buyer = users[(i // args.properties_per_user + 1) % len(users)]
        run(user, "purchaseProperty", prop.property_id, buyer.name, buyer.national_id_number)

    if sink is not None:
        sink.close()

    keys = registry.keys
    print(f"\n{'='*60}")
    print("Ledger summary")
    print("=" * 60)
    for namespace in (REQUEST_USER, APPROVED_USER, REQUEST_PROPERTY, APPROVED_PROPERTY):
        print(f"  {namespace}: {len(ledger.keys(chr(0) + keys.namespace(namespace) + chr(0)))} records")
    print(f"  commits: {ledger.commits}")
    print("\nInvocations")
    for label, count in sorted(outcomes.items()):
        print(f"  {label}: {count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
