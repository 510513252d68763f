"""Python logging handler adapter for diagwire.

This adapter bridges Python's standard library logging module to a
DiagnosticsEmitter, so existing ``logging`` calls end up on the
diagnostics stream.
"""

import logging

from diagwire.core.default import get_default_emitter
from diagwire.core.emitter import DiagnosticsEmitter

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


# Default attributes to extract from LogRecord
_DEFAULT_INCLUDE_ATTRS = ["module", "funcName", "lineno"]


class DiagnosticsHandler(logging.Handler):
    """Logging handler that writes log records as protocol lines.

    Records at or above ``error_level`` become logError lines, everything
    else logInfo.

    Example:
        ```python
        from diagwire import DiagnosticsHandler

        logging.getLogger().addHandler(DiagnosticsHandler())
        ```
    """

    def __init__(
        self,
        emitter: DiagnosticsEmitter | None = None,
        include_attrs: list[str] | None = None,
        error_level: int = logging.ERROR,
    ) -> None:
        """Initialize the handler.

        Args:
            emitter: Emitter to write through. Defaults to the process-wide
                default emitter, resolved at emit time.
            include_attrs: LogRecord attributes copied into properties.
                Defaults to ["module", "funcName", "lineno"].
            error_level: Lowest level logged as logError.
        """
        super().__init__()
        self._emitter = emitter
        self._include_attrs = (
            _DEFAULT_INCLUDE_ATTRS if include_attrs is None else include_attrs
        )
        self._error_level = error_level

    @property
    def emitter(self) -> DiagnosticsEmitter:
        """The emitter records are written through."""
        return self._emitter if self._emitter is not None else get_default_emitter()

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record as one protocol line.

        Args:
            record: The log record to emit.
        """
        try:
            properties: dict[str, str] = {"logger": record.name}
            for key in self._include_attrs:
                value = getattr(record, key, None)
                if value is not None:
                    properties[key] = str(value)

            # Extra fields: text goes to properties, numbers to measures
            measures: dict[str, float] = {}
            for key, value in record.__dict__.items():
                if key in _STANDARD_LOGRECORD_ATTRS or key in properties:
                    continue
                if isinstance(value, str):
                    properties[key] = value
                elif isinstance(value, (int, float)) and not isinstance(value, bool):
                    measures[key] = value

            message = record.getMessage()
            if record.levelno >= self._error_level:
                error = None
                if record.exc_info and record.exc_info[1] is not None:
                    error = record.exc_info[1]
                self.emitter.log_error(message, error, properties, measures or None)
            else:
                self.emitter.log_info(message, properties, measures or None)
        except Exception:
            self.handleError(record)
