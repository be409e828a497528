"""
Anchor Finder

Locate the signals for digit 1 (size 2) and digit 4 (size 4) among an
entry's ten input signals. These two anchors drive every overlap test
in the classifier.
"""

from typing import List, Tuple

from .symbols import DecodeError, signal_size

# anchor digit -> size
ANCHOR_SIZES = {1: 2, 4: 4}


class MissingAnchor(DecodeError):
    """Raised when the inputs hold zero or several signals of an anchor size."""

    def __init__(self, message: str, digit: int, size: int, matches: int, entry_index=None):
        super().__init__(message, entry_index=entry_index)
        self.digit = digit
        self.size = size
        self.matches = matches


def unique_of_size(signals: List[int], size: int, digit: int) -> int:
    """
    Return the single signal with exactly `size` lit segments.

    Args:
        signals: Signal masks to scan (order irrelevant).
        size: Required size.
        digit: Digit the anchor stands for (error reporting only).

    Returns:
        int: The unique matching mask.

    Raises:
        MissingAnchor: If no signal or more than one signal has that size.
    """
    matches = [s for s in signals if signal_size(s) == size]
    if len(matches) != 1:
        raise MissingAnchor(
            f"Expected exactly one size-{size} signal for digit {digit}, found {len(matches)}",
            digit=digit,
            size=size,
            matches=len(matches),
        )
    return matches[0]


def find_anchors(inputs: List[int]) -> Tuple[int, int]:
    """
    Extract (anchor1, anchor4) from an entry's input signals.

    Only the inputs are scanned; outputs never serve as anchors.

    Raises:
        MissingAnchor: If either anchor is absent or not unique.
    """
    anchor1 = unique_of_size(inputs, ANCHOR_SIZES[1], 1)
    anchor4 = unique_of_size(inputs, ANCHOR_SIZES[4], 4)
    return anchor1, anchor4
