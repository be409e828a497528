"""
Tests for the entry decoder.

Verifies:
  - Worked single entry decodes to 5353
  - Decoding is idempotent and deterministic per signal
  - Output order drives digit order
  - Failures carry the entry index, no partial value
"""

import pytest

from sevenseg.decoder import decode_entry, decode_value
from sevenseg.kernel import (
    AmbiguousSignal,
    EntryShapeError,
    InvalidSignalLength,
    MissingAnchor,
    classify,
    find_anchors,
    make_entry,
    mask_from_token,
)
from sevenseg.parser import parse_line


def test_single_entry(single_line):
    entry = parse_line(single_line)
    value, receipt = decode_entry(entry, index=0)

    assert value == 5353
    assert receipt["digits"] == [5, 3, 5, 3]
    assert receipt["anchor1"] == "ab"
    assert receipt["anchor4"] == "abef"
    assert receipt["index"] == 0
    assert len(receipt["entry_hash"]) == 64


def test_sample_lines(sample_text, sample_values):
    lines = [line for line in sample_text.strip().splitlines()]
    assert [decode_value(parse_line(line)) for line in lines] == sample_values


def test_decode_idempotent(single_line):
    entry = parse_line(single_line)
    first = decode_entry(entry, index=7)
    second = decode_entry(entry, index=7)
    assert first == second


def test_identical_outputs_same_digit(sample_text):
    """Within an entry, equal output signals always get the same digit."""
    for line in sample_text.strip().splitlines():
        entry = parse_line(line)
        anchor1, anchor4 = find_anchors(entry["inputs"])
        seen = {}
        for signal in entry["outputs"]:
            digit = classify(signal, anchor1, anchor4)
            assert seen.setdefault(signal, digit) == digit


def test_output_order(single_line):
    entry = parse_line(single_line)
    reversed_entry = make_entry(entry["inputs"], list(reversed(entry["outputs"])))

    assert decode_value(entry) == 5353
    assert decode_value(reversed_entry) == 3535


def test_leading_zero_digit(canonical):
    """A leading 0 simply folds away: 0 1 2 3 -> 123."""
    glyphs = {d: mask_from_token(s) for d, s in canonical.items()}
    entry = make_entry(
        [glyphs[d] for d in range(10)],
        [glyphs[0], glyphs[1], glyphs[2], glyphs[3]],
    )
    assert decode_value(entry) == 123


def test_missing_anchor_carries_index(single_line):
    entry = parse_line(single_line)
    one = mask_from_token("ab")
    inputs = [s for s in entry["inputs"] if s != one] + [mask_from_token("abc")]
    broken = make_entry(inputs, entry["outputs"])

    with pytest.raises(MissingAnchor) as exc_info:
        decode_entry(broken, index=4)
    assert exc_info.value.entry_index == 4
    assert "entry 4" in str(exc_info.value)


def test_invalid_output_size(single_line):
    entry = parse_line(single_line)
    broken = make_entry(entry["inputs"], entry["outputs"][:3] + [0b1])

    with pytest.raises(InvalidSignalLength) as exc_info:
        decode_entry(broken, index=2)
    assert exc_info.value.entry_index == 2
    assert exc_info.value.signal == 0b1


def test_ambiguous_output(single_line):
    """A size-5 output inconsistent with the anchors surfaces as AmbiguousSignal."""
    entry = parse_line(single_line)
    # Swap anchor 4 for "cdeg": "acdeg" then overlaps 1 by one and 4 by four
    inputs = list(entry["inputs"])
    four = mask_from_token("abef")
    inputs[inputs.index(four)] = mask_from_token("cdeg")
    broken = make_entry(inputs, [mask_from_token("acdeg")] * 4)

    with pytest.raises(AmbiguousSignal) as exc_info:
        decode_entry(broken, index=9)
    assert exc_info.value.entry_index == 9


def test_wrong_shape():
    signal = mask_from_token("ab")
    entry = {"inputs": [signal] * 9, "outputs": [signal] * 4}
    with pytest.raises(EntryShapeError) as exc_info:
        decode_entry(entry, index=1)
    assert exc_info.value.entry_index == 1
