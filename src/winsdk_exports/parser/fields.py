"""
Strict readers for fixed-layout values.
"""
import re
from typing import List, Optional

from winsdk_exports.exceptions import FormatError
from .config import LABEL_WIDTH, FieldSpec

# dumpbin prints bare digits: no sign, prefix or separators
_LITERALS = {
    10: re.compile(r"[0-9]+"),
    16: re.compile(r"[0-9A-Fa-f]+"),
}


def _is_literal(token: str, base: int) -> bool:
    return _LITERALS[base].fullmatch(token) is not None


def extract_value(line: str, key: str) -> str:
    """
    Read the value of a "  <Key>      : <value>" line.

    The trimmed first LABEL_WIDTH characters must equal key exactly.

    Raises:
        FormatError: If the label does not match.
    """
    label = line[:LABEL_WIDTH].strip()
    if label != key:
        raise FormatError(f"Expected label '{key}', found '{label}'", line=line)
    return line[LABEL_WIDTH + 1:].strip()


def parse_int(text: str, base: int, line: Optional[str] = None) -> int:
    """
    Parse the leading whitespace-delimited token of text as an integer.

    Trailing annotations are ignored, so "14C (x86)" reads as 0x14C.

    Raises:
        FormatError: If text is blank or its first token is not a number.
    """
    tokens = text.split()
    if not tokens:
        raise FormatError("Expected a number, found a blank field", line=line)
    if not _is_literal(tokens[0], base):
        raise FormatError(f"Invalid base-{base} number '{tokens[0]}'", line=line)
    return int(tokens[0], base)


def parse_optional_int(text: str, base: int, line: Optional[str] = None) -> Optional[int]:
    """Like parse_int, but a blank field reads as None."""
    if not text.strip():
        return None
    return parse_int(text, base, line)


def try_parse_int(text: str, base: int = 10) -> Optional[int]:
    """Parse the leading token of text, or return None if there is no number."""
    tokens = text.split()
    if not tokens or not _is_literal(tokens[0], base):
        return None
    return int(tokens[0], base)


def read_field(block: List[str], spec: FieldSpec):
    """
    Read one labelled field from a block.

    Returns:
        The value as text, or as int when spec.base is set.

    Raises:
        FormatError: If the line is missing, mislabelled or not numeric.
    """
    if spec.line >= len(block):
        raise FormatError(
            f"Missing line {spec.line} for '{spec.label}' (block has {len(block)} lines)"
        )
    line = block[spec.line]
    value = extract_value(line, spec.label)
    if spec.base is None:
        return value
    return parse_int(value, spec.base, line)
