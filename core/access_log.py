"""
Access Log

One line per inbound HTTP request, appended to a plain text file:

    [2025-04-01T12:00:00.000Z] IP: 127.0.0.1 | Method: POST | URL: /api/battleship/generate-proof | User-Agent: curl/8.5.0

The file is opened in append mode for every write and each line goes out
in a single write() call, so concurrent writers do not interleave.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path


def iso_timestamp(moment: datetime | None = None) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class AccessLogEntry:
    """A single inbound request."""
    timestamp: str
    client: str
    method: str
    url: str
    user_agent: str = "-"

    def format_line(self) -> str:
        return (
            f"[{self.timestamp}] IP: {self.client} | Method: {self.method} "
            f"| URL: {self.url} | User-Agent: {self.user_agent}\n"
        )


class AccessLog(ABC):
    """Sink for access log entries."""

    @abstractmethod
    def record(self, entry: AccessLogEntry) -> None:
        ...


class FileAccessLog(AccessLog):
    """Appends formatted entries to a text file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def record(self, entry: AccessLogEntry) -> None:
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(entry.format_line())


class MemoryAccessLog(AccessLog):
    """Keeps entries in memory."""

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: list[AccessLogEntry] = []

    def record(self, entry: AccessLogEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    @property
    def entries(self) -> list[AccessLogEntry]:
        with self._lock:
            return list(self._entries)


class NullAccessLog(AccessLog):
    """Discards entries."""

    def record(self, entry: AccessLogEntry) -> None:
        return None
