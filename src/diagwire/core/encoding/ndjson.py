"""NDJSON encoder and decoder for diagnostic log records."""

import json
from typing import Any

from diagwire.core.models import Command, LogRecord


def _record_to_obj(record: LogRecord) -> dict[str, Any]:
    obj: dict[str, Any] = {
        "command": record.command.value,
        "parameters": record.parameters,
    }
    if record.properties is not None:
        obj["properties"] = record.properties
    if record.measures is not None:
        obj["measures"] = record.measures
    return obj


def encode_record(record: LogRecord) -> str:
    """Encode a log record as a single JSON line.

    Args:
        record: The LogRecord to encode.

    Returns:
        JSON text without a trailing newline. Control characters and
        non-ASCII text are escaped, so the result never spans lines.

    Raises:
        ValueError: If a measure is not finite.
    """
    return json.dumps(_record_to_obj(record), allow_nan=False)


def _optional_mapping(obj: dict[str, Any], key: str) -> Any:
    value = obj.get(key)
    if value is not None and not isinstance(value, dict):
        raise ValueError(f"'{key}' must be an object, got {type(value).__name__}")
    return value


def decode_line(line: str) -> LogRecord:
    """Decode one NDJSON line into a LogRecord.

    A missing or null ``parameters`` field decodes as an empty mapping.

    Args:
        line: One line of protocol output, with or without its terminator.

    Returns:
        The decoded LogRecord.

    Raises:
        ValueError: If the line is not a JSON object of the protocol's shape.
    """
    try:
        obj = json.loads(line)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc.msg}") from exc
    except RecursionError:
        raise ValueError("invalid JSON: nested too deeply") from None

    if not isinstance(obj, dict):
        raise ValueError(f"expected a JSON object, got {type(obj).__name__}")

    try:
        command = Command(obj.get("command"))
    except ValueError:
        raise ValueError(f"unknown command: {obj.get('command')!r}") from None

    try:
        return LogRecord(
            command=command,
            parameters=_optional_mapping(obj, "parameters") or {},
            properties=_optional_mapping(obj, "properties"),
            measures=_optional_mapping(obj, "measures"),
        )
    except (TypeError, OverflowError) as exc:
        raise ValueError(str(exc)) from exc
