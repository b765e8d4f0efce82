"""Base models shared across the registry."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class LedgerEvent:
    """Standard event envelope emitted after a committed invocation."""

    event_id: str
    event_type: str  # entity.action (e.g., property.purchased)
    event_time: datetime
    source: str  # Contract namespace that emitted it
    subject: str  # Ledger key of the entity affected
    data: dict
    metadata: dict = field(default_factory=dict)
