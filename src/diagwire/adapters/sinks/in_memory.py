"""In-memory sink for tests and embedding hosts."""

import threading

from diagwire.core.encoding.ndjson import decode_line
from diagwire.core.models import LogRecord


class InMemorySink:
    """In-memory implementation of DiagnosticSinkPort.

    Stores encoded lines in a list. Suitable for testing and for hosts
    that forward diagnostics somewhere other than a process stream.
    """

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._lock = threading.Lock()

    def write_line(self, line: str) -> None:
        """Store one encoded line."""
        with self._lock:
            self._lines.append(line)

    @property
    def lines(self) -> list[str]:
        """A copy of the stored lines, oldest first."""
        with self._lock:
            return list(self._lines)

    def records(self) -> list[LogRecord]:
        """Decode the stored lines."""
        return [decode_line(line) for line in self.lines]

    def clear(self) -> None:
        """Drop all stored lines."""
        with self._lock:
            self._lines.clear()
