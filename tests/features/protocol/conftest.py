"""BDD step definitions for wire_protocol.feature."""

import json
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from diagwire.adapters.sinks.in_memory import InMemorySink
from diagwire.core.emitter import DiagnosticsEmitter
from diagwire.core.models import ErrorDescription

_ESCAPES = {"\\n": "\n", "\\t": "\t", "\\r": "\r"}
_CONTROL_CHARACTERS = {"a newline": "\n", "a carriage return": "\r"}


@dataclass
class ProtocolScenarioContext:
    """State shared between the steps of one scenario."""

    sink: InMemorySink = field(default_factory=InMemorySink)
    emitter: DiagnosticsEmitter | None = None

    def line(self) -> dict[str, Any]:
        lines = self.sink.lines
        assert len(lines) == 1, f"expected one line, got {len(lines)}"
        return json.loads(lines[0])


def _unescape(text: str) -> str:
    for escaped, raw in _ESCAPES.items():
        text = text.replace(escaped, raw)
    return text


@pytest.fixture
def ctx() -> ProtocolScenarioContext:
    """Fresh scenario context for each test."""
    return ProtocolScenarioContext()


# === Background Steps ===
@given("an emitter writing to an in-memory sink")
def step_emitter(ctx: ProtocolScenarioContext) -> None:
    ctx.emitter = DiagnosticsEmitter(ctx.sink)


# === When Steps ===
@when(parsers.parse('log_info is called with message "{message}"'))
def step_log_info_message(ctx: ProtocolScenarioContext, message: str) -> None:
    assert ctx.emitter is not None
    ctx.emitter.log_info(_unescape(message))


@when(
    parsers.parse(
        'log_info is called with property "{key}"="{value}" '
        'and measure "{measure}"={amount:g}'
    )
)
def step_log_info_metrics(
    ctx: ProtocolScenarioContext, key: str, value: str, measure: str, amount: float
) -> None:
    assert ctx.emitter is not None
    ctx.emitter.log_info(None, {key: value}, {measure: amount})


@when(
    parsers.parse(
        'log_error is called with message "{message}" and error type "{type_name}"'
    )
)
def step_log_error_typed(
    ctx: ProtocolScenarioContext, message: str, type_name: str
) -> None:
    assert ctx.emitter is not None
    error = ErrorDescription(type_name=type_name, message="operation is not valid")
    ctx.emitter.log_error(message, error, None, None)


@when(parsers.parse('log_error is called with a raised ValueError "{message}"'))
def step_log_error_raised(ctx: ProtocolScenarioContext, message: str) -> None:
    assert ctx.emitter is not None
    try:
        raise ValueError(message)
    except ValueError as exc:
        ctx.emitter.log_error(error=exc)


@when("log_error is called with no arguments")
def step_log_error_empty(ctx: ProtocolScenarioContext) -> None:
    assert ctx.emitter is not None
    ctx.emitter.log_error()


# === Then Steps ===
@then(parsers.parse("exactly {n:d} line is written"))
def step_line_count(ctx: ProtocolScenarioContext, n: int) -> None:
    assert len(ctx.sink.lines) == n


@then(parsers.parse('the line has command "{command}"'))
def step_command(ctx: ProtocolScenarioContext, command: str) -> None:
    assert ctx.line()["command"] == command


@then(parsers.parse('the line has parameter "{key}" equal to "{value}"'))
def step_parameter_equals(ctx: ProtocolScenarioContext, key: str, value: str) -> None:
    assert ctx.line()["parameters"][key] == value


@then(parsers.parse('the line has a parameter "{key}"'))
def step_parameter_present(ctx: ProtocolScenarioContext, key: str) -> None:
    assert key in ctx.line()["parameters"]


@then(parsers.parse('the line has no parameter "{key}"'))
def step_parameter_absent(ctx: ProtocolScenarioContext, key: str) -> None:
    assert key not in ctx.line()["parameters"]


@then(parsers.parse('the line has no "{name}" field'))
def step_field_absent(ctx: ProtocolScenarioContext, name: str) -> None:
    assert name not in ctx.line()


@then(parsers.parse('the line has property "{key}" equal to "{value}"'))
def step_property_equals(ctx: ProtocolScenarioContext, key: str, value: str) -> None:
    assert ctx.line()["properties"][key] == value


@then(parsers.parse('the line has measure "{key}" equal to {value:g}'))
def step_measure_equals(ctx: ProtocolScenarioContext, key: str, value: float) -> None:
    assert ctx.line()["measures"][key] == value


@then("the line is pure ASCII")
def step_ascii(ctx: ProtocolScenarioContext) -> None:
    [line] = ctx.sink.lines
    assert line.isascii()
    assert "\n" not in line


@then(parsers.parse("the decoded message contains {control}"))
def step_decoded_control(ctx: ProtocolScenarioContext, control: str) -> None:
    message = ctx.line()["parameters"]["message"]
    if control == "no control character":
        assert message.isprintable()
    else:
        assert _CONTROL_CHARACTERS[control] in message
