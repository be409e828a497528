"""
Signal Kernel

Pure operations on 7-bit signal masks.

Components:
  - symbols: pack/unpack tokens, size, overlap, entry shape
  - anchors: unique size-2 / size-4 signal lookup
  - classify: size + overlap rule table -> digit
"""

from .symbols import (
    ALPHABET,
    Entry,
    DecodeError,
    InvalidSignalLength,
    EntryShapeError,
    mask_from_token,
    token_from_mask,
    signal_size,
    overlap,
    make_entry,
    validate_entry
)
from .anchors import (
    MissingAnchor,
    unique_of_size,
    find_anchors
)
from .classify import (
    AmbiguousSignal,
    RuleTableError,
    classify,
    check_rule_table
)

__all__ = [
    # Symbols
    "ALPHABET",
    "Entry",
    "DecodeError",
    "InvalidSignalLength",
    "EntryShapeError",
    "mask_from_token",
    "token_from_mask",
    "signal_size",
    "overlap",
    "make_entry",
    "validate_entry",

    # Anchors
    "MissingAnchor",
    "unique_of_size",
    "find_anchors",

    # Classifier
    "AmbiguousSignal",
    "RuleTableError",
    "classify",
    "check_rule_table",

    # Receipts
    "kernel_receipts",
]


def kernel_receipts(section_label: str) -> dict:
    """
    Generate receipts for the rule table using the canonical glyphs.

    Args:
        section_label: ASCII identifier (e.g., "rule_table").

    Returns:
        dict: Receipt digest with per-digit classification proofs.

    Raises:
        RuleTableError: If the rule table fails its canonical check.
    """
    from ..core import Receipts, blake3_hash, serialize_signal, param_registry

    receipts = Receipts(section_label)

    table = check_rule_table()
    receipts.put("rule_rows", table["rows"])
    receipts.put("canonical_digits", table["digits"])
    receipts.put("canonical_all_ok", table["all_ok"])

    # Hash of each canonical glyph frame, digit order
    glyphs = param_registry()["canonical_glyphs"]
    glyph_hashes = []
    for digit in sorted(glyphs, key=int):
        mask = mask_from_token(glyphs[digit])
        glyph_hashes.append({
            "digit": int(digit),
            "token": token_from_mask(mask),
            "hash": blake3_hash(serialize_signal(mask)),
        })
    receipts.put("canonical_glyph_hashes", glyph_hashes)

    return receipts.digest()
