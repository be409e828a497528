"""
Parameter Registry

Frozen constants for deterministic decoder operation.
All global parameters (alphabet, canonical glyphs, classification rules,
entry shape, hashing) are defined here with exact values.

No randomness, no environment leakage, no optionals.
"""


def param_registry() -> dict:
    """
    Returns a frozen mapping of all global constants used by the decoder.

    Keys and values are JSON-serializable primitives or lists/tuples.
    This registry is hashed into every section receipt to prove parametric consistency.

    Returns:
        dict: Frozen parameter mapping with exact keys and values.

    Raises:
        RegistryError: If any required key is missing (internal consistency check).
    """
    registry = {
        "registry_version": "1.0",

        # Segment alphabet; bit i of a signal mask <-> alphabet[i]
        "alphabet": "abcdefg",

        # Unscrambled seven-segment glyphs, digit -> segments
        "canonical_glyphs": {
            "0": "abcefg",
            "1": "cf",
            "2": "acdeg",
            "3": "acdfg",
            "4": "bcdf",
            "5": "abdfg",
            "6": "abdefg",
            "7": "acf",
            "8": "abcdefg",
            "9": "abcdfg",
        },

        # Sizes that identify a digit on their own (size -> digit)
        "direct_sizes": {"2": 1, "3": 7, "4": 4, "7": 8},

        # Sizes that need the anchors (size -> candidate digits)
        "ambiguous_sizes": {"5": [2, 3, 5], "6": [0, 6, 9]},

        # Ordered (size, overlap_with_1, overlap_with_4, digit); None = wildcard.
        # First matching row wins.
        "classify_rules": [
            [5, 2, None, 3],
            [5, None, 3, 5],
            [5, None, 2, 2],
            [6, None, 4, 9],
            [6, 2, None, 0],
            [6, 1, None, 6],
        ],

        # Anchor digits and their sizes
        "anchor_sizes": {"1": 2, "4": 4},

        # Entry shape
        "inputs_per_entry": 10,
        "outputs_per_entry": 4,

        # Output digits fold most-significant first in this base
        "fold_base": 10,

        # Hashing
        "hash_algo": "BLAKE3",

        # Byte frame tags for serialization (ASCII 4-byte tags)
        "byte_frame_tags": {
            "SIGNAL": "SIG1",
            "ENTRY": "ENT1"
        }
    }

    # Consistency check: ensure all required keys are present
    required_keys = {
        "registry_version", "alphabet", "canonical_glyphs", "direct_sizes",
        "ambiguous_sizes", "classify_rules", "anchor_sizes",
        "inputs_per_entry", "outputs_per_entry", "fold_base", "hash_algo",
        "byte_frame_tags"
    }

    actual_keys = set(registry.keys())
    if actual_keys != required_keys:
        missing = required_keys - actual_keys
        extra = actual_keys - required_keys
        raise RegistryError(
            f"param_registry() key mismatch. Missing: {missing}, Extra: {extra}"
        )

    return registry


class RegistryError(Exception):
    """Raised when param_registry() has missing or unexpected keys."""
    pass
