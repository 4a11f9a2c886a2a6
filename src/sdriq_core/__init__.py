"""SDR IQ Core - auxi record layout, codec and errors."""
from .errors import IoFailure, PrefixExceedsFileSize, SdrIqError, UnrecognizedFormat
from .record import MetadataParameters, decode_record, encode_record

__all__ = [
    "MetadataParameters",
    "encode_record",
    "decode_record",
    "SdrIqError",
    "UnrecognizedFormat",
    "PrefixExceedsFileSize",
    "IoFailure",
]
