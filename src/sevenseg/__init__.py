"""
Seven-Segment Signal Decoder

Deterministic, receipts-first decoder for scrambled seven-segment displays:
recover each entry's digits from size and anchor overlap, then sum the
decoded four-digit values.
"""

__version__ = "0.1.0"

from .kernel import (
    DecodeError,
    MissingAnchor,
    AmbiguousSignal,
    InvalidSignalLength,
    EntryShapeError,
    overlap,
    find_anchors,
    classify,
)
from .decoder import decode_entry, decode_value
from .aggregate import count_direct, sum_decoded
from .parser import ParseError, parse_line, parse_input

__all__ = [
    # Errors
    "DecodeError",
    "MissingAnchor",
    "AmbiguousSignal",
    "InvalidSignalLength",
    "EntryShapeError",
    "ParseError",

    # Core operations
    "overlap",
    "find_anchors",
    "classify",
    "decode_entry",
    "decode_value",
    "count_direct",
    "sum_decoded",

    # Parsing
    "parse_line",
    "parse_input",
]
