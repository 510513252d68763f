"""diagwire - one-way NDJSON diagnostics over standard error."""

from diagwire.adapters.logging import DiagnosticsHandler
from diagwire.adapters.reader import DiagnosticsReport, collect, iter_records
from diagwire.adapters.sinks import InMemorySink, StreamSink
from diagwire.core.default import (
    get_default_emitter,
    log_error,
    log_info,
    set_default_emitter,
    timed_info,
)
from diagwire.core.emitter import DiagnosticsEmitter
from diagwire.core.encoding.ndjson import decode_line, encode_record
from diagwire.core.models import Command, ErrorDescription, LogRecord
from diagwire.core.ports import DiagnosticSinkPort

__all__ = [
    # Models
    "Command",
    "ErrorDescription",
    "LogRecord",
    # Ports
    "DiagnosticSinkPort",
    # Emitter
    "DiagnosticsEmitter",
    "get_default_emitter",
    "log_error",
    "log_info",
    "set_default_emitter",
    "timed_info",
    # Encoding
    "decode_line",
    "encode_record",
    # Adapters
    "DiagnosticsHandler",
    "DiagnosticsReport",
    "InMemorySink",
    "StreamSink",
    "collect",
    "iter_records",
]
