"""Wire encoders for diagnostic records."""

from diagwire.core.encoding.ndjson import decode_line, encode_record

__all__ = [
    "decode_line",
    "encode_record",
]
