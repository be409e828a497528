"""
Byte Serialization (tagged frames)

Stable, deterministic byte serialization for signals and entries.

Bit mapping (frozen):
  - One byte per signal; bit i set <-> segment alphabet[i] lit
  - Bit 7 is always 0 (seven segments only)
  - Inputs serialized before outputs, each in the order given
"""


def serialize_signal(mask: int) -> bytes:
    """
    Encode a single signal mask as a tagged byte frame.

    Format (exact):
      - 4 ASCII bytes tag: b"SIG1"
      - 1 byte: signal mask

    Args:
        mask: Signal bitmask (0..127).

    Returns:
        bytes: Deterministic serialization.

    Raises:
        SerializationError: If mask is outside the 7-bit range.
    """
    _check_mask(mask)
    return b"SIG1" + bytes([mask])


def serialize_entry(inputs: list[int], outputs: list[int]) -> bytes:
    """
    Encode one entry (input signals + output signals) for hashing.

    Format (exact):
      - 4 ASCII bytes tag: b"ENT1"
      - 1 byte N_in, 1 byte N_out
      - N_in bytes: input masks in given order
      - N_out bytes: output masks in given order

    Args:
        inputs: Input signal masks.
        outputs: Output signal masks.

    Returns:
        bytes: Deterministic serialization.

    Raises:
        SerializationError: If any mask is outside the 7-bit range or a
            side holds more than 255 signals.
    """
    if len(inputs) > 255 or len(outputs) > 255:
        raise SerializationError(
            f"Too many signals: inputs={len(inputs)}, outputs={len(outputs)}"
        )

    stream = bytearray()
    stream.extend(b"ENT1")
    stream.append(len(inputs))
    stream.append(len(outputs))

    for mask in inputs:
        _check_mask(mask)
        stream.append(mask)
    for mask in outputs:
        _check_mask(mask)
        stream.append(mask)

    return bytes(stream)


def _check_mask(mask: int) -> None:
    if not isinstance(mask, int) or mask < 0 or mask > 0x7F:
        raise SerializationError(f"Signal mask {mask!r} out of 7-bit range")


class SerializationError(Exception):
    """Raised when a signal or entry cannot be framed."""
    pass
