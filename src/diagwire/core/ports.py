"""Port interfaces for diagnostic output.

The emitter depends only on this protocol, not on a concrete stream, so
hosts and tests can inject their own destination.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class DiagnosticSinkPort(Protocol):
    """Port for writing encoded diagnostic lines.

    Examples: StreamSink, InMemorySink.
    """

    def write_line(self, line: str) -> None:
        """Write one encoded record, followed by a line terminator.

        Implementations must write the whole line before any other
        concurrent caller's line.
        """
        ...
