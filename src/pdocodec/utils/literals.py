"""Parsing of operator-supplied 32-bit literals."""

from __future__ import annotations

import re
from typing import Optional

from ..exceptions import LiteralError

WORD_MAX = 0xFFFFFFFF

_DECIMAL_RE = re.compile(r"^[0-9]+$")
_HEX_RE = re.compile(r"^0[xX][0-9a-fA-F]+$")


def parse_word(text: str, operation: Optional[str] = None) -> int:
    """Parse a decimal or 0x-prefixed hexadecimal 32-bit literal.

    Args:
        text: Literal as typed by the operator
        operation: What the literal is for, used in the error message

    Returns:
        The value, in [0, 0xFFFFFFFF]

    Raises:
        LiteralError: If text is not a number or does not fit in 32 bits

    Example:
        >>> parse_word("0x0001912c")
        102700
        >>> parse_word("102700")
        102700
    """
    literal = text.strip()
    if _HEX_RE.match(literal):
        value = int(literal[2:], 16)
    elif _DECIMAL_RE.match(literal):
        value = int(literal, 10)
    else:
        raise LiteralError(text, "expected a decimal or 0x-prefixed hex number", operation)

    if value > WORD_MAX:
        raise LiteralError(text, "does not fit in 32 bits", operation)
    return value


def format_word(word: int) -> str:
    """Render a 32-bit word as ``0x`` and 8 lowercase hex digits.

    Example:
        >>> format_word(102700)
        '0x0001912c'
    """
    return f"0x{word:08x}"
