"""Configuration management for regnet."""

from dataclasses import dataclass, field
from typing import Any

from regnet.exceptions import ConfigurationError
from regnet.keys import DEFAULT_NAMESPACE_PREFIX


@dataclass
class LedgerConfig:
    """Key layout on the ledger."""

    namespace_prefix: str = DEFAULT_NAMESPACE_PREFIX


@dataclass
class IdentityConfig:
    """Organisation (MSP) ids mapped to registry roles."""

    registrar_msp: str = "registrarMSP"
    user_msp: str = "usersMSP"


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class EventConfig:
    """Chaincode event publishing."""

    enabled: bool = False
    topic: str = "regnet.events"


@dataclass
class RegnetConfig:
    """Main configuration for regnet."""

    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    identity: IdentityConfig = field(default_factory=IdentityConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    events: EventConfig = field(default_factory=EventConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    def validate(self) -> "RegnetConfig":
        """Check the configuration is usable and return it."""
        if not self.identity.registrar_msp or not self.identity.user_msp:
            raise ConfigurationError("Both registrar and user MSP ids must be set")
        if self.identity.registrar_msp == self.identity.user_msp:
            raise ConfigurationError(
                f"Registrar and user MSP ids must differ, both are {self.identity.user_msp!r}"
            )
        if not self.ledger.namespace_prefix:
            raise ConfigurationError("Namespace prefix must not be empty")
        if self.log_format not in ("standard", "json"):
            raise ConfigurationError(f"Unknown log format {self.log_format!r}")
        return self

    @classmethod
    def from_env(cls) -> "RegnetConfig":
        """Create config from environment variables."""
        import os

        ledger = LedgerConfig(
            namespace_prefix=os.getenv("REGNET_NAMESPACE_PREFIX", DEFAULT_NAMESPACE_PREFIX),
        )

        identity = IdentityConfig(
            registrar_msp=os.getenv("REGNET_REGISTRAR_MSP", "registrarMSP"),
            user_msp=os.getenv("REGNET_USER_MSP", "usersMSP"),
        )

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        events = EventConfig(
            enabled=os.getenv("REGNET_EVENTS_ENABLED", "false").lower() == "true",
            topic=os.getenv("REGNET_EVENT_TOPIC", "regnet.events"),
        )

        return cls(
            ledger=ledger,
            identity=identity,
            kafka=kafka,
            events=events,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        ).validate()
