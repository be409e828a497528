"""
Signal Masks (SymbolSet) and Overlap

Scrambled seven-segment glyphs as 7-bit masks.

Mask representation:
  - Python int with 7 least-significant bits
  - Bit i (0-indexed) corresponds to segment ALPHABET[i] ('a' = bit 0)
  - bit i == 1 <=> segment i is lit in this signal

Equality of masks is equality of segment sets; token order and duplicate
letters vanish on packing.
"""

from typing import List, Optional, TypedDict


ALPHABET = "abcdefg"

# Sizes a signal may legally have
VALID_SIZES = (2, 3, 4, 5, 6, 7)

INPUTS_PER_ENTRY = 10
OUTPUTS_PER_ENTRY = 4


# ============================================================================
# Exception Classes
# ============================================================================

class DecodeError(Exception):
    """
    Base class for structural failures while decoding one entry.

    Carries the offending signal (mask) and, once known, the entry index.
    """

    def __init__(
        self,
        message: str,
        signal: Optional[int] = None,
        entry_index: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        self.signal = signal
        self.entry_index = entry_index

    def __str__(self) -> str:
        where = []
        if self.entry_index is not None:
            where.append(f"entry {self.entry_index}")
        if self.signal is not None:
            if self.signal >> len(ALPHABET):
                # Bits beyond 'g' have no letter; show the raw mask
                where.append(
                    f"signal mask {self.signal:#b} ({signal_size(self.signal)} segments)"
                )
            else:
                where.append(f"signal '{token_from_mask(self.signal)}'")
        if where:
            return f"{self.message} ({', '.join(where)})"
        return self.message


class InvalidSignalLength(DecodeError):
    """Raised when a signal's size is outside {2,3,4,5,6,7}."""
    pass


class EntryShapeError(DecodeError):
    """Raised when an entry does not hold exactly 10 inputs and 4 outputs."""
    pass


# ============================================================================
# Type Definitions
# ============================================================================

class Entry(TypedDict):
    """One puzzle line: ten input signals and four output signals."""
    inputs: List[int]
    outputs: List[int]


# ============================================================================
# Pack / Unpack
# ============================================================================

def mask_from_token(token: str) -> int:
    """
    Pack a letter token into a signal mask.

    Letters are case-insensitive; repeated letters collapse.

    Args:
        token: Non-empty string over a..g.

    Returns:
        int: Signal mask.

    Raises:
        InvalidSignalLength: If len(token) is outside 2..7.
        ValueError: If token holds a character outside the alphabet.
    """
    if len(token) not in VALID_SIZES:
        raise InvalidSignalLength(
            f"Token '{token}' has length {len(token)}, expected 2..7"
        )

    mask = 0
    for ch in token.lower():
        idx = ALPHABET.find(ch)
        if idx < 0:
            raise ValueError(f"Segment '{ch}' not in alphabet '{ALPHABET}' (token '{token}')")
        mask |= (1 << idx)
    return mask


def token_from_mask(mask: int) -> str:
    """Canonical token for a mask: lit segments in alphabet order."""
    return "".join(ch for i, ch in enumerate(ALPHABET) if (mask >> i) & 1)


def signal_size(mask: int) -> int:
    """Number of lit segments."""
    return bin(mask).count('1')


def overlap(a: int, b: int) -> int:
    """
    Count segments lit in both a and b.

    Pure and symmetric: overlap(a, b) == overlap(b, a).
    """
    return bin(a & b).count('1')


# ============================================================================
# Entry shape
# ============================================================================

def make_entry(inputs: List[int], outputs: List[int]) -> Entry:
    """Build an Entry and check its 10 + 4 shape."""
    entry: Entry = {"inputs": list(inputs), "outputs": list(outputs)}
    validate_entry(entry)
    return entry


def validate_entry(entry: Entry) -> None:
    """
    Check that an entry has exactly 10 input and 4 output signals.

    The size distribution of the inputs (one each of 2, 3, 4, 7; three each
    of 5 and 6) is not re-checked here; the anchor scan and classifier
    surface any violation that matters.

    Raises:
        EntryShapeError: On wrong counts.
    """
    n_in = len(entry["inputs"])
    n_out = len(entry["outputs"])
    if n_in != INPUTS_PER_ENTRY or n_out != OUTPUTS_PER_ENTRY:
        raise EntryShapeError(
            f"Entry has {n_in} inputs and {n_out} outputs, "
            f"expected {INPUTS_PER_ENTRY} and {OUTPUTS_PER_ENTRY}"
        )
