"""
Puzzle Input Parser

Text -> list of Entry.

Line format:
  <10 space-separated tokens> | <4 space-separated tokens>

Tokens are runs of letters a..g (case-insensitive). Whitespace around the
'|' is optional. Leading/trailing blank lines are ignored.
"""

import re
from typing import List, Optional

from .kernel import DecodeError, Entry, make_entry, mask_from_token

_TOKEN_RE = re.compile(r"^[A-Za-z]+$")


class ParseError(ValueError):
    """Raised when a line does not have the '<tokens> | <tokens>' shape."""

    def __init__(self, message: str, line: str, line_number: Optional[int] = None):
        self.message = message
        self.line = line
        self.line_number = line_number
        where = f"line {line_number}" if line_number is not None else "line"
        super().__init__(f"parse error ({message}) at {where}: {line}")


def parse_line(line: str, line_number: Optional[int] = None) -> Entry:
    """
    Parse one puzzle line into an Entry.

    Args:
        line: Raw text line.
        line_number: 1-based line number (error messages only).

    Returns:
        Entry: inputs and outputs as signal masks.

    Raises:
        ParseError: Missing or repeated '|', empty side, non-letter token,
            letter outside a..g.
        InvalidSignalLength: Token length outside 2..7.
        EntryShapeError: Not exactly 10 inputs and 4 outputs.
    """
    text = line.strip()
    parts = text.split("|")
    if len(parts) != 2:
        raise ParseError(f"expected one '|', found {len(parts) - 1}", line, line_number)

    sides = []
    for name, part in zip(("inputs", "outputs"), parts):
        tokens = part.split()
        if not tokens:
            raise ParseError(f"no {name}", line, line_number)
        masks = []
        for token in tokens:
            if not _TOKEN_RE.match(token):
                raise ParseError(f"bad token '{token}'", line, line_number)
            try:
                masks.append(mask_from_token(token))
            except ValueError as e:
                raise ParseError(str(e), line, line_number) from e
        sides.append(masks)

    return make_entry(sides[0], sides[1])


def parse_input(text: str) -> List[Entry]:
    """
    Parse the whole puzzle input.

    Blank lines are skipped. DecodeErrors raised while building an entry
    carry the entry's position in the returned list.

    Raises:
        ParseError, InvalidSignalLength, EntryShapeError: See parse_line.
    """
    entries: List[Entry] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            entries.append(parse_line(line, line_number))
        except DecodeError as e:
            if e.entry_index is None:
                e.entry_index = len(entries)
            raise
    return entries
