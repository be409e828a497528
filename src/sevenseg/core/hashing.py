"""
BLAKE3 Hashing

Deterministic hash function for all receipts and signal serialization.

No seeding, no randomness, no timestamps.
"""

import blake3


def blake3_hash(data: bytes) -> str:
    """
    Return hex-encoded BLAKE3 digest of the byte stream.

    Args:
        data: Raw bytes to hash.

    Returns:
        str: Hexadecimal digest (64 characters for BLAKE3-256).

    Notes:
        - No seeding or personalization.
        - Output is always lowercase hex.
        - Same bytes always give the same hash.
    """
    hasher = blake3.blake3()
    hasher.update(data)
    return hasher.hexdigest()
