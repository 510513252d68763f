"""Sink adapters for diagnostic output."""

from diagwire.adapters.sinks.in_memory import InMemorySink
from diagwire.adapters.sinks.stream import StreamSink

__all__ = [
    "InMemorySink",
    "StreamSink",
]
