"""Core domain: records, encoding and the emitter."""
