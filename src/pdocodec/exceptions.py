"""Exception hierarchy for pdocodec.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from PdoCodecError for easy catching of any pdocodec-specific error.

The codec itself is deliberately lenient about attribute content: missing or
malformed attributes contribute zero, and unknown variants decode to an empty
field list. Only literal input that cannot be a 32-bit word is escalated.
"""

from __future__ import annotations


class PdoCodecError(Exception):
    """Base exception for all pdocodec errors."""

    pass


class LiteralError(PdoCodecError, ValueError):
    """Raised when a literal cannot be used as a 32-bit PDO/RDO word.

    Examples:
        - Not a decimal or 0x-prefixed hexadecimal number
        - Negative value
        - Value does not fit in 32 bits
    """

    def __init__(self, literal: str, reason: str, operation: str | None = None) -> None:
        self.literal = literal
        self.reason = reason
        self.operation = operation
        where = f" for {operation}" if operation else ""
        super().__init__(f"bad literal {literal!r}{where}: {reason}")


class ReferenceCodeError(PdoCodecError, ValueError):
    """Raised when an RDO reference code is not one of F, B, V, P, A, E, S."""

    pass


class WordRangeError(PdoCodecError, ValueError):
    """Raised when an integer handed to the codec is not a 32-bit word.

    Examples:
        - decode_pdo(-1)
        - decode_rdo(1 << 32, ...)
    """

    pass
