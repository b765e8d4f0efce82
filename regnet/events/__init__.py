"""Sinks for events emitted by committed invocations."""

from regnet.events.base import EventSink
from regnet.events.console import ConsoleSink
from regnet.events.kafka import KafkaSink

__all__ = ["ConsoleSink", "EventSink", "KafkaSink"]
