"""Adapters connecting the core to streams, logging and readers."""
