"""Console sink for debugging and development."""

import json
from typing import Any

from regnet.codec import to_dict


class ConsoleSink:
    """Output events to console (stdout) for debugging."""

    def __init__(self, pretty: bool = True) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        """
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def send(self, topic: str, event: Any, key: str | None = None) -> None:
        """Print a single event."""
        data = to_dict(event)
        if self.pretty:
            print(f"[{topic}] " + json.dumps(data, indent=2, ensure_ascii=False, default=str))
        else:
            print(f"[{topic}] " + json.dumps(data, ensure_ascii=False, default=str))

        event_type = data.get("event_type", topic)
        self._counts[event_type] = self._counts.get(event_type, 0) + 1

    @property
    def counts(self) -> dict[str, int]:
        return dict(self._counts)

    def close(self) -> None:
        """Print summary and close."""
        print(f"\n{'='*60}")
        print("Console Sink Summary")
        print("=" * 60)
        for event_type, count in self._counts.items():
            print(f"  {event_type}: {count} events")
