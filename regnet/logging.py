"""Logging setup for regnet, with per-invocation context on each record."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, MutableMapping

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Libraries that log more than a ledger operator wants to see
QUIET_LOGGERS = ("confluent_kafka", "faker")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Route all regnet logging to stdout.

    Parameters
    ----------
    level : str
        Log level name; unknown names fall back to INFO.
    format_type : str
        "standard" for human-readable lines, "json" for one object per line
        carrying the invocation fields.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter: logging.Formatter
    if format_type == "json":
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    logging.getLogger("regnet").setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """Render a record as JSON, lifting its invocation fields to the top level."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(getattr(record, "invocation", {}))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class InvocationLogger(logging.LoggerAdapter):
    """Logger adapter that tags every record with one invocation's identity.

    The transaction id, caller MSP and operation name end up in the
    record's ``invocation`` attribute, which ``JsonFormatter`` emits.
    """

    def __init__(self, logger: logging.Logger, operation: str, tx_id: str, msp_id: str) -> None:
        super().__init__(logger, {"tx_id": tx_id, "msp_id": msp_id, "operation": operation})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["invocation"] = dict(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs
