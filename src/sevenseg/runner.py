"""
Seven-Segment Decoder Runner

Text in, answers and sectioned receipts out.

Sections (in order):
  - rule_table: canonical glyph check of the classifier rules
  - parse: entry count and per-entry hashes
  - direct_count: outputs of size 2/3/4/7 (part 1)
  - decode: per-entry anchors, digits, values and their sum (part 2)

CLI:
  python -m sevenseg.runner input.txt
  python -m sevenseg.runner input.txt --part 1
  python -m sevenseg.runner input.txt --determinism-check --output result.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .core import (
    Receipts,
    blake3_hash,
    serialize_entry,
    assert_double_run_equal,
    DeterminismError
)
from .kernel import DecodeError, Entry, kernel_receipts
from .parser import ParseError, parse_input
from .aggregate import count_direct_receipts, build_decode_section

PARTS = ("direct_count", "decoded_sum")


class DecodeFailed(Exception):
    """Raised when an entry cannot be decoded; carries receipts gathered so far."""

    def __init__(self, error: DecodeError, receipts: Dict):
        super().__init__(str(error))
        self.error = error
        self.receipts = receipts


def parse_receipts(text: str, entries: List[Entry]) -> Dict:
    """Receipts for the parse section."""
    receipts = Receipts("parse")
    receipts.put("input_hash", blake3_hash(text.strip().encode('utf-8')))
    receipts.put("num_entries", len(entries))
    receipts.put("entry_hashes", [
        blake3_hash(serialize_entry(e["inputs"], e["outputs"])) for e in entries
    ])
    return receipts.digest()


def solve(text: str, parts: Tuple[str, ...] = PARTS) -> Tuple[Dict[str, int], Dict]:
    """
    Compute the requested answers for one puzzle input.

    Args:
        text: Raw puzzle input.
        parts: Subset of ("direct_count", "decoded_sum").

    Returns:
        Tuple of (answers, receipts_bundle):
          - answers: {part_name: int} for each requested part
          - receipts_bundle: {section: digest}

    Raises:
        ParseError: Malformed line.
        DecodeError: Malformed signal/entry found while parsing.
        DecodeFailed: An entry failed to decode (wraps the DecodeError).
        RuleTableError: Classifier rules disagree with the canonical glyphs.
    """
    unknown = set(parts) - set(PARTS)
    if unknown:
        raise ValueError(f"Unknown parts: {sorted(unknown)}")

    bundle: Dict[str, Dict] = {}
    answers: Dict[str, int] = {}

    bundle["rule_table"] = kernel_receipts("rule_table")

    entries = parse_input(text)
    bundle["parse"] = parse_receipts(text, entries)
    logging.info(f"Parsed {len(entries)} entries")

    if "direct_count" in parts:
        total, digest = count_direct_receipts(entries)
        bundle["direct_count"] = digest
        answers["direct_count"] = total
        logging.info(f"Direct-size outputs: {total}")

    if "decoded_sum" in parts:
        try:
            total, receipts = build_decode_section(entries)
        except DecodeError as e:
            raise DecodeFailed(e, bundle) from e
        bundle["decode"] = receipts.digest()
        answers["decoded_sum"] = total
        logging.info(f"Decoded sum: {total}")

    return answers, bundle


def solve_with_determinism_check(
    text: str,
    parts: Tuple[str, ...] = PARTS
) -> Tuple[Dict[str, int], Dict]:
    """
    Solve twice and verify identical receipts.

    The decode section is additionally rebuilt twice through
    assert_double_run_equal.

    Raises:
        RuntimeError: If the two runs' receipts differ.
        DeterminismError: If the decode section hash differs.
    """
    answers1, receipts1 = solve(text, parts)
    answers2, receipts2 = solve(text, parts)

    all_keys = sorted(set(receipts1) | set(receipts2))
    for key in all_keys:
        hash1 = receipts1.get(key, {}).get("section_hash")
        hash2 = receipts2.get(key, {}).get("section_hash")
        if hash1 != hash2:
            raise RuntimeError(
                f"Runner: Determinism check failed: receipts differ at section '{key}'\n"
                f"  Run 1: {hash1}\n"
                f"  Run 2: {hash2}"
            )

    if answers1 != answers2:
        raise RuntimeError(f"Runner: answers differ between runs: {answers1} != {answers2}")

    if "decoded_sum" in parts:
        entries = parse_input(text)
        assert_double_run_equal(lambda: build_decode_section(entries)[1])

    receipts_final = dict(receipts1)
    receipts_final["determinism.double_run_ok"] = True
    receipts_final["determinism.sections_checked"] = len(all_keys)

    return answers1, receipts_final


def _parts_from_arg(part: str) -> Tuple[str, ...]:
    if part == "1":
        return ("direct_count",)
    if part == "2":
        return ("decoded_sum",)
    return PARTS


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point with argparse."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
    )

    parser = argparse.ArgumentParser(
        description="Seven-segment signal decoder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Both answers
  python -m sevenseg.runner input.txt

  # Direct-size count only
  python -m sevenseg.runner input.txt --part 1

  # Double-run determinism check, results to file
  python -m sevenseg.runner input.txt --determinism-check --output result.json
        """
    )

    parser.add_argument(
        "input_file",
        type=Path,
        help="Path to puzzle input (one entry per line)"
    )

    parser.add_argument(
        "--part",
        type=str,
        choices=["1", "2", "both"],
        default="both",
        help="1: direct-size count, 2: decoded sum, both (default)."
    )

    parser.add_argument(
        "--determinism-check",
        action="store_true",
        help="Run double-solve determinism check. Default: False (single solve)."
    )

    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file for answers + receipts JSON. Default: print to stdout."
    )

    args = parser.parse_args(argv)
    parts = _parts_from_arg(args.part)

    try:
        text = args.input_file.read_text(encoding='utf-8')
    except FileNotFoundError:
        logging.error(f"Input file not found: {args.input_file}")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        logging.error(f"Cannot read input file {args.input_file}: {e}")
        return 1

    try:
        if args.determinism_check:
            answers, receipts = solve_with_determinism_check(text, parts)
        else:
            answers, receipts = solve(text, parts)
    except DecodeFailed as e:
        logging.error(f"DECODE_FAILED: {e}")
        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                json.dump({"error": str(e), "receipts": e.receipts}, f, indent=2)
            logging.error(f"Receipts written to: {args.output}")
        else:
            print(json.dumps(e.receipts, indent=2), file=sys.stderr)
        return 2
    except (ParseError, DecodeError, DeterminismError, RuntimeError) as e:
        logging.error(f"Error: {e}")
        return 1

    result = {
        "answers": answers,
        "receipts": receipts
    }

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump(result, f, indent=2)
        logging.info(f"Results written to: {args.output}")
    else:
        print(json.dumps(result, indent=2))

    return 0


if __name__ == "__main__":
    sys.exit(main())
