"""Emitter that writes diagnostic records as one JSON line per call.

Each line is its own command object:

- ``command``: the event kind, ``logInfo`` or ``logError``.
- ``parameters``: message, exception type name and callstack.
- ``properties``: arbitrary qualitative metrics supplied by the caller.
- ``measures``: arbitrary quantitative metrics supplied by the caller.

Example:
    ```python
    from diagwire import log_error, log_info

    log_info("indexing started", properties={"project": "core"})
    try:
        run()
    except Exception as exc:
        log_error(error=exc)
    ```
"""

import time
from collections.abc import Generator
from contextlib import contextmanager

from diagwire.core.encoding.ndjson import encode_record
from diagwire.core.models import (
    CALLSTACK_KEY,
    EXCEPTION_KEY,
    MESSAGE_KEY,
    UNKNOWN_EXCEPTION_TYPE,
    Command,
    ErrorDescription,
    LogRecord,
)
from diagwire.core.ports import DiagnosticSinkPort

ELAPSED_MEASURE = "elapsedMilliseconds"


class DiagnosticsEmitter:
    """Serializes diagnostic events and writes them to a sink.

    Calls are stateless and independent. Invalid caller data raises
    before anything is written; sink failures propagate unchanged.
    """

    def __init__(self, sink: DiagnosticSinkPort | None = None) -> None:
        """Initialize the emitter.

        Args:
            sink: Destination for encoded lines. Defaults to a StreamSink
                writing to the process's current ``sys.stderr``.
        """
        if sink is None:
            from diagwire.adapters.sinks.stream import StreamSink

            sink = StreamSink()
        self._sink = sink

    @property
    def sink(self) -> DiagnosticSinkPort:
        """The sink this emitter writes to."""
        return self._sink

    def emit(self, record: LogRecord) -> None:
        """Encode a prepared record and write it as one line."""
        self._sink.write_line(encode_record(record))

    def log_info(
        self,
        message: str | None = None,
        properties: dict[str, str] | None = None,
        measures: dict[str, float] | None = None,
    ) -> None:
        """Log diagnostics information and measurements.

        Args:
            message: An optional message.
            properties: Qualitative key/value metrics, passed through as-is.
            measures: Quantitative key/value metrics, passed through as-is.
        """
        parameters: dict[str, str] = {}
        if message is not None:
            parameters[MESSAGE_KEY] = message

        self.emit(LogRecord(Command.LOG_INFO, parameters, properties, measures))

    def log_error(
        self,
        message: str | None = None,
        error: BaseException | ErrorDescription | None = None,
        properties: dict[str, str] | None = None,
        measures: dict[str, float] | None = None,
    ) -> None:
        """Log an error.

        Args:
            message: The error message. If omitted, defaults to the
                error's own message.
            error: The caught exception, or a description of it.
            properties: Qualitative key/value metrics, passed through as-is.
            measures: Quantitative key/value metrics, passed through as-is.
        """
        if isinstance(error, BaseException):
            error = ErrorDescription.from_exception(error)

        parameters: dict[str, str] = {}

        message_value = message
        if message_value is None and error is not None:
            message_value = error.message
        if message_value is not None:
            parameters[MESSAGE_KEY] = message_value

        if error is not None:
            parameters[EXCEPTION_KEY] = error.type_name or UNKNOWN_EXCEPTION_TYPE
            if error.trace is not None:
                parameters[CALLSTACK_KEY] = error.trace

        self.emit(LogRecord(Command.LOG_ERROR, parameters, properties, measures))

    @contextmanager
    def timed_info(
        self,
        message: str,
        properties: dict[str, str] | None = None,
        measures: dict[str, float] | None = None,
        measure_name: str = ELAPSED_MEASURE,
    ) -> Generator[None]:
        """Context manager that logs elapsed wall time on exit.

        Emits a logInfo record when the body completes, or a logError
        record for the raised exception before re-raising it. Either way
        the elapsed milliseconds are added to ``measures`` under
        ``measure_name``.

        Args:
            message: Message for the emitted record.
            properties: Qualitative key/value metrics.
            measures: Quantitative key/value metrics to merge with the timing.
            measure_name: Measure key for the elapsed time.
        """
        start = time.perf_counter()
        try:
            yield
        except Exception as exc:
            elapsed = (time.perf_counter() - start) * 1000.0
            self.log_error(
                message, exc, properties, {**(measures or {}), measure_name: elapsed}
            )
            raise
        elapsed = (time.perf_counter() - start) * 1000.0
        self.log_info(message, properties, {**(measures or {}), measure_name: elapsed})
