"""PDO variant classification and RDO reference selection.

A PDO word carries its own type in its top bits. An RDO does not: its
meaning depends on the PDO it requests, so the reference type always comes
from the caller.
"""

from __future__ import annotations

import enum
import re
from typing import Optional, Tuple

from ..exceptions import ReferenceCodeError, WordRangeError
from ..utils.literals import WORD_MAX


class PdoVariant(enum.Enum):
    """PDO/APDO type."""

    NULL = "null"
    FIXED = "fixed"
    BATTERY = "battery"
    VARIABLE = "variable"
    PPS = "pps"
    SPR_AVS = "spr_avs"
    EPR_AVS = "epr_avs"

    @property
    def description(self) -> str:
        """Type name as used in capability reports."""
        return _DESCRIPTIONS[self]

    @property
    def is_augmented(self) -> bool:
        return self in (PdoVariant.PPS, PdoVariant.SPR_AVS, PdoVariant.EPR_AVS)


_DESCRIPTIONS = {
    PdoVariant.NULL: "",
    PdoVariant.FIXED: "fixed supply",
    PdoVariant.BATTERY: "battery supply",
    PdoVariant.VARIABLE: "variable supply",
    PdoVariant.PPS: "programmable supply",
    PdoVariant.SPR_AVS: "spr adjustable supply",
    PdoVariant.EPR_AVS: "adjustable supply",
}


class RdoReference(enum.Enum):
    """Type of the PDO an RDO refers to."""

    FIXED_OR_VARIABLE = "fixed_or_variable"
    BATTERY = "battery"
    PPS = "pps"
    AVS = "avs"


_REFERENCE_CODES = {
    "F": RdoReference.FIXED_OR_VARIABLE,
    "V": RdoReference.FIXED_OR_VARIABLE,
    "B": RdoReference.BATTERY,
    "P": RdoReference.PPS,
    "A": RdoReference.AVS,
    "E": RdoReference.AVS,
    "S": RdoReference.AVS,
}

REFERENCE_CODES = "".join(_REFERENCE_CODES)

# B31..B30 of a PDO
_SUPPLY_TYPES = (PdoVariant.FIXED, PdoVariant.BATTERY, PdoVariant.VARIABLE)
# B29..B28 of an APDO; 0b11 is reserved
_APDO_TYPES = (PdoVariant.PPS, PdoVariant.EPR_AVS, PdoVariant.SPR_AVS, PdoVariant.NULL)


def check_word(word: int) -> int:
    """Return ``word`` unchanged if it is a 32-bit unsigned value.

    Raises:
        WordRangeError: If word is not an int in [0, 0xFFFFFFFF]
    """
    if isinstance(word, bool) or not isinstance(word, int):
        raise WordRangeError(f"word must be an int, got {type(word).__name__}")
    if word < 0 or word > WORD_MAX:
        raise WordRangeError(f"word {word} does not fit in 32 bits")
    return word


def classify_pdo(word: int) -> PdoVariant:
    """Classify a PDO word by its selector bits.

    The all-zero word is the "no PDO" filler and classifies as NULL, distinct
    from a Fixed PDO that merely has zero voltage and current.

    Args:
        word: 32-bit PDO

    Returns:
        PdoVariant of the word; NULL for the filler and reserved APDO types

    Examples:
        >>> classify_pdo(0x0001912C)
        <PdoVariant.FIXED: 'fixed'>
        >>> classify_pdo(0)
        <PdoVariant.NULL: 'null'>
    """
    check_word(word)
    if word == 0:
        return PdoVariant.NULL

    supply = (word >> 30) & 0x3
    if supply < 3:
        return _SUPPLY_TYPES[supply]
    return _APDO_TYPES[(word >> 28) & 0x3]


def rdo_reference_from_code(code: str) -> RdoReference:
    """Map a single-letter reference code to an RdoReference.

    F and V select Fixed/Variable, B Battery, P PPS, and A, E or S select AVS.

    Raises:
        ReferenceCodeError: If the code is not recognised
    """
    ref = _REFERENCE_CODES.get(code.strip().upper()) if isinstance(code, str) else None
    if ref is None:
        raise ReferenceCodeError(
            f"unknown RDO reference code {code!r}, expected one of {', '.join(REFERENCE_CODES)}"
        )
    return ref


_LEAF_KINDS = {
    "fixed_supply": PdoVariant.FIXED,
    "battery": PdoVariant.BATTERY,
    "variable_supply": PdoVariant.VARIABLE,
    "programmable_supply": PdoVariant.PPS,
    "spr_adjustable_supply": PdoVariant.SPR_AVS,
    "epr_adjustable_supply": PdoVariant.EPR_AVS,
}

_LEAF_RE = re.compile(r"^(\d+):(.*)$")


def variant_from_leaf_name(
    name: str, avs_variant: PdoVariant = PdoVariant.EPR_AVS
) -> Optional[Tuple[int, PdoVariant]]:
    """Parse a capability leaf name such as ``"1:fixed_supply"``.

    The plain ``adjustable_supply`` leaf does not say which power range it
    belongs to, so it resolves to ``avs_variant``.

    Args:
        name: Directory name of one PDO under source- or sink-capabilities
        avs_variant: Variant used for the ambiguous ``adjustable_supply`` leaf

    Returns:
        (object_index, variant), with NULL for unknown kinds, or None if the
        name does not start with ``<digits>:``
    """
    match = _LEAF_RE.match(name)
    if match is None:
        return None
    index = int(match.group(1))
    kind = match.group(2)
    if kind == "adjustable_supply":
        return index, avs_variant
    return index, _LEAF_KINDS.get(kind, PdoVariant.NULL)
