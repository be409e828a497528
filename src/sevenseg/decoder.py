"""
Entry Decoder

Decode one entry's four output signals into a single integer.

Steps:
  1. Shape check (10 inputs, 4 outputs)
  2. Anchors (digit 1, digit 4) from the inputs only
  3. Classify each output in order
  4. Fold digits most-significant first
"""

import logging
from typing import List, Optional, Tuple, TypedDict

from .core.bytesio import serialize_entry
from .core.hashing import blake3_hash
from .kernel import (
    Entry,
    DecodeError,
    validate_entry,
    find_anchors,
    classify,
    token_from_mask,
)

logger = logging.getLogger(__name__)

FOLD_BASE = 10


class EntryReceipt(TypedDict):
    index: Optional[int]
    entry_hash: str
    anchor1: str
    anchor4: str
    digits: List[int]
    value: int


def decode_entry(entry: Entry, index: Optional[int] = None) -> Tuple[int, EntryReceipt]:
    """
    Decode one entry.

    Args:
        entry: Entry with 10 input and 4 output masks.
        index: Position of the entry in its input (error reporting, receipts).

    Returns:
        Tuple of (value, receipt):
          - value: 4-digit number, first output most significant
          - receipt: EntryReceipt with anchors, digits and entry hash

    Raises:
        EntryShapeError: Wrong signal counts.
        MissingAnchor: No unique size-2 or size-4 input.
        InvalidSignalLength, AmbiguousSignal: An output cannot be classified.

    All raised DecodeErrors carry entry_index = index.
    """
    try:
        validate_entry(entry)
        anchor1, anchor4 = find_anchors(entry["inputs"])
        digits = [classify(signal, anchor1, anchor4) for signal in entry["outputs"]]
    except DecodeError as e:
        if e.entry_index is None:
            e.entry_index = index
        raise

    value = 0
    for digit in digits:
        value = value * FOLD_BASE + digit

    receipt: EntryReceipt = {
        "index": index,
        "entry_hash": blake3_hash(serialize_entry(entry["inputs"], entry["outputs"])),
        "anchor1": token_from_mask(anchor1),
        "anchor4": token_from_mask(anchor4),
        "digits": digits,
        "value": value,
    }
    logger.debug("entry %s -> %s", index, value)
    return value, receipt


def decode_value(entry: Entry) -> int:
    """Decoded integer of one entry (no receipt)."""
    value, _ = decode_entry(entry)
    return value
