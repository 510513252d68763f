"""Text stream sink, the protocol's standard error transport."""

import sys
import threading
from typing import TextIO


class StreamSink:
    """Implementation of DiagnosticSinkPort over a text stream.

    Each line and its terminator go out in a single ``write`` call under
    a lock, then the stream is flushed, so concurrent lines never tear.

    Args:
        stream: Target stream. None means whatever ``sys.stderr`` is at
            the time of each write.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        """The stream the next line will be written to."""
        return self._stream if self._stream is not None else sys.stderr

    def write_line(self, line: str) -> None:
        """Write one line followed by a newline and flush."""
        with self._lock:
            stream = self.stream
            stream.write(line + "\n")
            stream.flush()
