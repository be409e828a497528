"""
Section Receipts & Double-Run Checker

The runner emits one receipt per section:
  - rule_table: canonical glyphs classified by the rule rows
  - parse: input hash, entry count, one ENT1 frame hash per entry
  - direct_count: size-2/3/4/7 output tally
  - decode: anchors, digits and value per entry, plus the sum

Every digest binds the registry hash (alphabet, glyphs, rule rows), so two
runs with different classification rules never share a section_hash.
"""

import json
from typing import Any, Callable

from .registry import param_registry
from .hashing import blake3_hash


class Receipts:
    """
    Receipt builder for one runner section.

    The decode section, for example, puts "num_entries", then "entries"
    (one EntryReceipt per line), "values_hash" and "decoded_sum". digest()
    wraps that payload with the section name, the registry version and the
    registry hash, then hashes the lot into section_hash.

    Payload values stay JSON-plain (int, bool, str, None, list, tuple, dict);
    anchors and signals go in as canonical tokens, never as raw objects.
    """

    def __init__(self, section: str):
        """
        Args:
            section: Section name ("rule_table", "parse", "direct_count", "decode").
        """
        self.section = section
        self.payload = []  # (key, value) in insertion order

    def put(self, key: str, value: Any) -> None:
        """
        Append one key/value pair to the section payload.

        Raises:
            ReceiptError: If key repeats or value holds a float or foreign type.
        """
        existing_keys = [k for k, _ in self.payload]
        if key in existing_keys:
            raise ReceiptError(f"Duplicate key in receipts: '{key}'")

        _validate_receipt_value(value, key)

        self.payload.append((key, value))

    def digest(self) -> dict:
        """
        Freeze the section into a hashed digest.

        Returns:
            dict: {"section", "registry_version", "param_registry_hash",
                   "payload", "section_hash"}; section_hash covers the other four.
        """
        registry = param_registry()
        registry_hash = blake3_hash(_stable_json_bytes(registry))

        pre_digest = {
            "section": self.section,
            "registry_version": registry["registry_version"],
            "param_registry_hash": registry_hash,
            "payload": {k: v for k, v in self.payload}
        }

        return {
            **pre_digest,
            "section_hash": blake3_hash(_stable_json_bytes(pre_digest))
        }


def assert_double_run_equal(build_section_callable: Callable[[], Receipts]) -> None:
    """
    Build a section twice and require the same section_hash.

    The runner passes a closure rebuilding the decode section over the same
    parsed entries; any drift in anchors, digits or values shows up as the
    first differing payload key.

    Raises:
        DeterminismError: If the two section hashes differ.
    """
    digest_a = build_section_callable().digest()
    hash_a = digest_a["section_hash"]

    digest_b = build_section_callable().digest()
    hash_b = digest_b["section_hash"]

    if hash_a != hash_b:
        # Find first differing key in payload
        payload_a = digest_a["payload"]
        payload_b = digest_b["payload"]

        differing_key = None
        val_a = val_b = None
        for key in sorted(set(payload_a.keys()) | set(payload_b.keys())):
            val_a = payload_a.get(key, "<MISSING>")
            val_b = payload_b.get(key, "<MISSING>")
            if val_a != val_b:
                differing_key = key
                break

        raise DeterminismError(
            section=digest_a["section"],
            first_differing_key=differing_key,
            value_a=val_a if differing_key else None,
            value_b=val_b if differing_key else None,
            hash_a=hash_a,
            hash_b=hash_b
        )


def _stable_json_bytes(obj: Any) -> bytes:
    """Sorted-key, compact UTF-8 JSON; same object, same bytes."""
    json_str = json.dumps(
        obj,
        sort_keys=True,
        ensure_ascii=False,
        separators=(',', ':')
    )
    return json_str.encode('utf-8')


def _validate_receipt_value(value: Any, key: str) -> None:
    """Reject floats, non-str dict keys and anything not JSON-plain, naming the nested key path."""
    if value is None or isinstance(value, (bool, int, str)):
        return

    if isinstance(value, float):
        raise ReceiptError(f"Floats forbidden in receipts (key: '{key}').")

    if isinstance(value, (list, tuple)):
        for i, item in enumerate(value):
            _validate_receipt_value(item, f"{key}[{i}]")
        return

    if isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                raise ReceiptError(
                    f"Dict keys must be strings in receipts (key: '{key}', dict_key: {k})"
                )
            _validate_receipt_value(v, f"{key}.{k}")
        return

    raise ReceiptError(
        f"Invalid type in receipts: {type(value).__name__} (key: '{key}'). "
        f"Allowed: int, bool, str, None, list, tuple, dict."
    )


class ReceiptError(Exception):
    """Raised when receipt construction fails (duplicate key, invalid type, etc.)."""
    pass


class DeterminismError(Exception):
    """Raised when double-run produces different section hashes."""

    def __init__(
        self,
        section: str,
        first_differing_key: str | None,
        value_a: Any,
        value_b: Any,
        hash_a: str,
        hash_b: str
    ):
        self.section = section
        self.first_differing_key = first_differing_key
        self.value_a = value_a
        self.value_b = value_b
        self.hash_a = hash_a
        self.hash_b = hash_b

        msg = (
            f"Double-run hash mismatch in section '{section}'.\n"
            f"  First differing key: '{first_differing_key}'\n"
            f"  Value A: {value_a}\n"
            f"  Value B: {value_b}\n"
            f"  Hash A: {hash_a}\n"
            f"  Hash B: {hash_b}"
        )
        super().__init__(msg)
