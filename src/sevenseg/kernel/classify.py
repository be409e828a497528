"""
Digit Classifier

Map one scrambled signal to its digit using only its size and its overlap
with the two anchors (digit 1 and digit 4) of the same entry.

Sizes 2, 3, 4 and 7 name their digit directly. Sizes 5 and 6 each hold
three candidates, told apart by a closed, ordered rule table keyed on
(size, overlap_with_1, overlap_with_4). Overlap counts survive any wire
permutation, so no permutation search is needed.
"""

from typing import Dict, List, Optional, Tuple

from .symbols import (
    DecodeError,
    InvalidSignalLength,
    VALID_SIZES,
    mask_from_token,
    overlap,
    signal_size,
)


# size -> digit (no anchors needed)
_DIRECT_SIZES: Dict[int, int] = {2: 1, 3: 7, 4: 4, 7: 8}

# size -> candidate digits (anchors needed)
_AMBIGUOUS_SIZES: Dict[int, Tuple[int, ...]] = {5: (2, 3, 5), 6: (0, 6, 9)}

# Frozen rule order (same rows as param_registry()["classify_rules"]).
# (size, overlap_with_1, overlap_with_4, digit); None matches anything.
_RULES: Tuple[Tuple[int, Optional[int], Optional[int], int], ...] = (
    (5, 2, None, 3),   # 3 holds both segments of 1
    (5, None, 3, 5),   # 5 holds three of 4's segments
    (5, None, 2, 2),   # 2 holds two of 4's segments
    (6, None, 4, 9),   # 9 holds all of 4
    (6, 2, None, 0),   # 0 holds all of 1
    (6, 1, None, 6),   # 6 holds one of 1's segments
)


class AmbiguousSignal(DecodeError):
    """Raised when a size-5/6 signal matches no rule row."""

    def __init__(self, message: str, signal: int, overlap1: int, overlap4: int, entry_index=None):
        super().__init__(message, signal=signal, entry_index=entry_index)
        self.overlap1 = overlap1
        self.overlap4 = overlap4


class RuleTableError(Exception):
    """Raised when the rule table disagrees with the canonical glyphs."""
    pass


def classify(signal: int, anchor1: int, anchor4: int) -> int:
    """
    Return the digit (0-9) a signal stands for within its entry.

    Args:
        signal: Signal mask to classify.
        anchor1: Mask of the entry's size-2 signal (digit 1).
        anchor4: Mask of the entry's size-4 signal (digit 4).

    Returns:
        int: Decoded digit.

    Raises:
        InvalidSignalLength: If the signal size is outside {2..7}.
        AmbiguousSignal: If a size-5/6 signal fits no rule row.
    """
    size = signal_size(signal)
    if size not in VALID_SIZES:
        raise InvalidSignalLength(
            f"Signal has {size} segments, expected one of {list(VALID_SIZES)}",
            signal=signal,
        )

    if size in _DIRECT_SIZES:
        return _DIRECT_SIZES[size]

    o1 = overlap(signal, anchor1)
    o4 = overlap(signal, anchor4)
    digit = _match_rule(size, o1, o4)
    if digit is None:
        raise AmbiguousSignal(
            f"Size-{size} signal overlaps anchor 1 by {o1} and anchor 4 by {o4}; no rule matches",
            signal=signal,
            overlap1=o1,
            overlap4=o4,
        )
    return digit


def _match_rule(size: int, o1: int, o4: int) -> Optional[int]:
    """First rule row matching (size, o1, o4), or None."""
    for r_size, r_o1, r_o4, digit in _RULES:
        if r_size != size:
            continue
        if r_o1 is not None and r_o1 != o1:
            continue
        if r_o4 is not None and r_o4 != o4:
            continue
        return digit
    return None


def check_rule_table() -> Dict:
    """
    Verify the rule table against the canonical (unscrambled) glyphs.

    Checks:
      1. Rule rows and size maps equal their param_registry() entries.
      2. Every canonical glyph classifies to its own digit using the
         canonical anchors.
      3. Each ambiguous size class yields exactly its candidate digit set.

    Returns:
        dict: Receipt payload with per-digit results.

    Raises:
        RuleTableError: On any mismatch.
    """
    from ..core import param_registry

    registry = param_registry()

    registry_rules = [tuple(row) for row in registry["classify_rules"]]
    if registry_rules != list(_RULES):
        raise RuleTableError(
            f"Classifier rules differ from registry: {list(_RULES)} != {registry_rules}"
        )
    registry_direct = {int(k): v for k, v in registry["direct_sizes"].items()}
    registry_ambiguous = {int(k): tuple(v) for k, v in registry["ambiguous_sizes"].items()}
    if registry_direct != _DIRECT_SIZES or registry_ambiguous != _AMBIGUOUS_SIZES:
        raise RuleTableError("Classifier size maps differ from registry")

    glyphs = {int(d): mask_from_token(seg) for d, seg in registry["canonical_glyphs"].items()}
    anchor1 = glyphs[1]
    anchor4 = glyphs[4]

    results: List[Dict] = []
    seen: Dict[int, set] = {size: set() for size in _AMBIGUOUS_SIZES}
    for digit in sorted(glyphs):
        mask = glyphs[digit]
        got = classify(mask, anchor1, anchor4)
        results.append({"digit": digit, "classified": got, "ok": got == digit})
        if got != digit:
            raise RuleTableError(f"Canonical glyph for {digit} classified as {got}")
        size = signal_size(mask)
        if size in seen:
            seen[size].add(got)

    for size, candidates in _AMBIGUOUS_SIZES.items():
        if seen[size] != set(candidates):
            raise RuleTableError(
                f"Size {size} covers {sorted(seen[size])}, expected {list(candidates)}"
            )

    return {
        "rows": len(_RULES),
        "digits": results,
        "all_ok": all(r["ok"] for r in results),
    }
