"""
Aggregator

Two independent reductions over a list of entries:
  - count_direct: outputs whose size alone names the digit (1, 4, 7, 8)
  - sum_decoded: sum of every entry's decoded value
"""

import json
from typing import Dict, List, Tuple

from .core import Receipts, blake3_hash
from .decoder import decode_entry
from .kernel import Entry, signal_size

# [1, 4, 7, 8] use [2, 4, 3, 7] segments respectively
DIRECT_SIZES = (2, 3, 4, 7)


def count_direct(entries: List[Entry]) -> int:
    """
    Count output signals of size 2, 3, 4 or 7 across all entries.

    Only sizes are inspected; nothing is decoded, nothing can fail.
    """
    return sum(
        1
        for entry in entries
        for signal in entry["outputs"]
        if signal_size(signal) in DIRECT_SIZES
    )


def count_direct_receipts(entries: List[Entry]) -> Tuple[int, Dict]:
    """count_direct plus a per-size tally receipt."""
    receipts = Receipts("direct_count")

    per_size = {str(size): 0 for size in DIRECT_SIZES}
    for entry in entries:
        for signal in entry["outputs"]:
            size = signal_size(signal)
            if size in DIRECT_SIZES:
                per_size[str(size)] += 1

    total = count_direct(entries)
    receipts.put("num_entries", len(entries))
    receipts.put("per_size", per_size)
    receipts.put("direct_count", total)
    return total, receipts.digest()


def build_decode_section(entries: List[Entry]) -> Tuple[int, Receipts]:
    """
    Decode every entry and collect the "decode" section receipts.

    Fails as a whole on the first entry that cannot be decoded; the raised
    DecodeError carries that entry's index.

    Returns:
        Tuple of (total, Receipts) with the section not yet digested.
    """
    receipts = Receipts("decode")

    total = 0
    entry_receipts = []
    for index, entry in enumerate(entries):
        value, entry_receipt = decode_entry(entry, index=index)
        total += value
        entry_receipts.append(dict(entry_receipt))

    receipts.put("num_entries", len(entries))
    receipts.put("entries", entry_receipts)
    values_bytes = json.dumps([r["value"] for r in entry_receipts]).encode('utf-8')
    receipts.put("values_hash", blake3_hash(values_bytes))
    receipts.put("decoded_sum", total)
    return total, receipts


def sum_decoded(entries: List[Entry]) -> Tuple[int, Dict]:
    """
    Sum of decoded values over all entries.

    Returns:
        Tuple of (total, receipts_digest).

    Raises:
        DecodeError: From the first failing entry (entry_index set).
    """
    total, receipts = build_decode_section(entries)
    return total, receipts.digest()
