"""Process-wide default emitter and the module-level logging functions."""

import threading
from collections.abc import Generator
from contextlib import contextmanager

from diagwire.core.emitter import ELAPSED_MEASURE, DiagnosticsEmitter
from diagwire.core.models import ErrorDescription

_default_emitter: DiagnosticsEmitter | None = None
_default_lock = threading.Lock()


def get_default_emitter() -> DiagnosticsEmitter:
    """Return the shared emitter, creating a stderr emitter on first use."""
    global _default_emitter
    if _default_emitter is None:
        with _default_lock:
            if _default_emitter is None:
                _default_emitter = DiagnosticsEmitter()
    return _default_emitter


def set_default_emitter(emitter: DiagnosticsEmitter | None) -> DiagnosticsEmitter | None:
    """Replace the shared emitter.

    Args:
        emitter: The new default, or None to fall back to stderr on next use.

    Returns:
        The previous default emitter, if one had been created.
    """
    global _default_emitter
    with _default_lock:
        previous = _default_emitter
        _default_emitter = emitter
    return previous


def log_info(
    message: str | None = None,
    properties: dict[str, str] | None = None,
    measures: dict[str, float] | None = None,
) -> None:
    """Log diagnostics information with the default emitter."""
    get_default_emitter().log_info(message, properties, measures)


def log_error(
    message: str | None = None,
    error: BaseException | ErrorDescription | None = None,
    properties: dict[str, str] | None = None,
    measures: dict[str, float] | None = None,
) -> None:
    """Log an error with the default emitter."""
    get_default_emitter().log_error(message, error, properties, measures)


@contextmanager
def timed_info(
    message: str,
    properties: dict[str, str] | None = None,
    measures: dict[str, float] | None = None,
    measure_name: str = ELAPSED_MEASURE,
) -> Generator[None]:
    """Time a block with the default emitter. See DiagnosticsEmitter.timed_info."""
    with get_default_emitter().timed_info(message, properties, measures, measure_name):
        yield
