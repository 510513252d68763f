"""Core domain models for the diagnostics wire protocol."""

import math
import traceback
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

# Well-known parameter keys
MESSAGE_KEY = "message"
EXCEPTION_KEY = "exception"
CALLSTACK_KEY = "callstack"

UNKNOWN_EXCEPTION_TYPE = "Unknown Exception Type"


class Command(str, Enum):
    """The event-kind tag of a LogRecord."""

    LOG_INFO = "logInfo"
    LOG_ERROR = "logError"


@dataclass(frozen=True)
class ErrorDescription:
    """A caught error, reduced to what the wire protocol carries.

    Attributes:
        type_name: Fully qualified name of the error type.
        message: The error's own message text.
        trace: Formatted stack trace, or None when none was captured.
    """

    type_name: str
    message: str
    trace: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorDescription":
        """Describe a native exception.

        Args:
            exc: The caught exception.

        Returns:
            ErrorDescription with the qualified type name, ``str(exc)`` and
            the traceback frames if the exception was raised.
        """
        trace = None
        if exc.__traceback__ is not None:
            trace = "".join(traceback.format_tb(exc.__traceback__))
        return cls(
            type_name=qualified_type_name(type(exc)),
            message=str(exc),
            trace=trace,
        )


def qualified_type_name(exc_type: type) -> str:
    """Return ``module.QualName`` for a type, without the builtins prefix."""
    name = getattr(exc_type, "__qualname__", None) or getattr(
        exc_type, "__name__", None
    )
    if not name:
        return UNKNOWN_EXCEPTION_TYPE
    module = getattr(exc_type, "__module__", None)
    if not module or module == "builtins":
        return name
    return f"{module}.{name}"


def _check_str_mapping(name: str, mapping: dict[str, str]) -> dict[str, str]:
    if not isinstance(mapping, Mapping):
        raise TypeError(f"{name} must be a mapping, got {type(mapping).__name__}")
    for key, value in mapping.items():
        if not isinstance(key, str):
            raise TypeError(f"{name} keys must be str, got {key!r}")
        if not isinstance(value, str):
            raise TypeError(f"{name}[{key!r}] must be str, got {type(value).__name__}")
    return dict(mapping)


def _check_measures(measures: dict[str, float]) -> dict[str, float]:
    if not isinstance(measures, Mapping):
        raise TypeError(f"measures must be a mapping, got {type(measures).__name__}")
    for key, value in measures.items():
        if not isinstance(key, str):
            raise TypeError(f"measures keys must be str, got {key!r}")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(
                f"measures[{key!r}] must be a number, got {type(value).__name__}"
            )
        try:
            finite = math.isfinite(value)
        except OverflowError:
            finite = False
        if not finite:
            raise ValueError(f"measures[{key!r}] must be finite, got {value!r}")
    return dict(measures)


@dataclass(frozen=True)
class LogRecord:
    """One structured diagnostic event, serialized as a single JSON line.

    Attributes:
        command: The event kind.
        parameters: Core text fields (message, exception, callstack).
        properties: Caller-supplied qualitative tags, or None to omit.
        measures: Caller-supplied quantitative metrics, or None to omit.
    """

    command: Command
    parameters: dict[str, str] = field(default_factory=dict)
    properties: dict[str, str] | None = None
    measures: dict[str, float] | None = None

    def __post_init__(self) -> None:
        # Accepts the plain wire string as well as the enum member
        object.__setattr__(self, "command", Command(self.command))
        object.__setattr__(
            self, "parameters", _check_str_mapping("parameters", self.parameters)
        )
        if self.properties is not None:
            object.__setattr__(
                self, "properties", _check_str_mapping("properties", self.properties)
            )
        if self.measures is not None:
            object.__setattr__(self, "measures", _check_measures(self.measures))

    @property
    def message(self) -> str | None:
        """The record's message parameter, if present."""
        return self.parameters.get(MESSAGE_KEY)

    @property
    def is_error(self) -> bool:
        """True for logError records."""
        return self.command is Command.LOG_ERROR
