"""Table-driven PDO encoder.

This module provides the encode() function that packs the attribute map of
one capability entry (as found under a port's source-capabilities or
sink-capabilities directory) into a 32-bit PDO.

Attribute values are text with an implicit unit suffix ("5000mV", "3000mA",
"45000mW") or bare decimals for flags. An attribute that is missing or does
not parse contributes zero to its field; the encoder never raises for
attribute content.
"""

from __future__ import annotations

import logging
import re
from typing import Mapping, Optional

from .bitpack import WordPacker
from .classify import PdoVariant
from .fields import FieldDescriptor
from .table import lookup_block

logger = logging.getLogger(__name__)

AttributeMap = Mapping[str, str]

# Selector bits B31..B28 per variant
_SELECTORS = {
    PdoVariant.FIXED: 0,
    PdoVariant.BATTERY: 0b01 << 30,
    PdoVariant.VARIABLE: 0b10 << 30,
    PdoVariant.PPS: 0b11 << 30,
    PdoVariant.EPR_AVS: (0b11 << 30) | (0b01 << 28),
    PdoVariant.SPR_AVS: (0b11 << 30) | (0b10 << 28),
}

_NUMBER_RE = re.compile(r"^\s*(\d+)\s*([A-Za-z]*)\s*$")


def parse_attribute(text: Optional[str], unit: Optional[str] = None) -> int:
    """Parse an attribute value such as ``"5000mV"`` or ``"1"``.

    Args:
        text: Attribute text, or None if the attribute is absent
        unit: Expected unit suffix; None for bare numbers

    Returns:
        The unsigned integer value, or 0 if text is absent, is not a number,
        or carries a unit other than the expected one
    """
    if text is None:
        return 0
    match = _NUMBER_RE.match(text)
    if match is None:
        logger.debug("attribute value %r is not a number", text)
        return 0
    suffix = match.group(2)
    if suffix and suffix != unit:
        logger.debug("attribute value %r: expected unit %s", text, unit or "none")
        return 0
    return int(match.group(1))


def parse_millivolts(text: Optional[str]) -> int:
    return parse_attribute(text, "mV")


def parse_milliamps(text: Optional[str]) -> int:
    return parse_attribute(text, "mA")


def parse_milliwatts(text: Optional[str]) -> int:
    return parse_attribute(text, "mW")


def encode(
    variant: PdoVariant,
    is_source_capability: bool,
    object_index: int,
    attrs: AttributeMap,
) -> int:
    """Encode a capability entry's attributes as a 32-bit PDO.

    The encoder walks the same table block the decoder uses, so the set of
    attributes it reads is exactly the set of fields the decoder reports for
    the same variant, role and object position.

    Args:
        variant: PDO variant of the entry
        is_source_capability: True for source-capabilities, False for sink
        object_index: 1-based position of the PDO in its capability list
        attrs: Attribute name to text value

    Returns:
        Packed word; 0 for NULL or unknown variants

    Examples:
        ```python
        from pdocodec import PdoVariant, encode

        word = encode(
            PdoVariant.FIXED,
            True,
            1,
            {"voltage": "5000mV", "maximum_current": "3000mA", "dual_role_data": "1"},
        )
        assert word == 0x0201912C
        ```
    """
    selector = _SELECTORS.get(variant)
    if selector is None:
        logger.debug("no encoding for PDO variant %s", variant)
        return 0

    packer = WordPacker(selector)
    handle = lookup_block(variant, object_index == 1)
    for descriptor in handle.select(is_source_capability):
        _encode_field(packer, descriptor, attrs.get(descriptor.name.value))
    return packer.word


def _encode_field(packer: WordPacker, descriptor: FieldDescriptor, text: Optional[str]) -> None:
    """Encode one attribute into its field.

    Scaled fields are converted to the field's native step (50 mV, 10 mA,
    250 mW, ...). Single-bit flags are set for any non-zero value; wider
    unitless fields keep their low bits.
    """
    if text is None:
        return

    if descriptor.scale.is_unitless:
        value = parse_attribute(text)
        if descriptor.bit_width == 1:
            packer.write_bool(value != 0, descriptor.bit_offset)
        else:
            packer.write_uint(value, descriptor.bit_offset, descriptor.bit_width)
        return

    milli = parse_attribute(text, descriptor.name.unit)
    packer.write_uint(
        milli // descriptor.scale.step_milli, descriptor.bit_offset, descriptor.bit_width
    )
