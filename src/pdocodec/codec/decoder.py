"""Table-driven PDO/RDO decoder.

This module provides decode_pdo() and decode_rdo(), which turn a 32-bit word
into an ordered list of named, scaled fields.

An unclassifiable PDO or unsupported RDO reference decodes to an object with
no fields. "No fields" is the canonical could-not-decode signal; callers may
report it, the decoder only logs it.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..models.objects import DecodedField, DecodedObject
from .bitpack import WordUnpacker
from .classify import PdoVariant, RdoReference, classify_pdo
from .fields import FieldDescriptor
from .table import lookup_block, lookup_rdo_block

logger = logging.getLogger(__name__)

GIVEBACK_BIT = 27


def decode_pdo(
    word: int,
    object_index_is_one: bool = False,
    is_source_capability: bool = True,
    variant: Optional[PdoVariant] = None,
) -> DecodedObject:
    """Decode a PDO word.

    Args:
        word: 32-bit PDO
        object_index_is_one: True if this is the first PDO of its list, which
            defines the extra Fixed PDO capability bits
        is_source_capability: True for source capabilities, False for sink
        variant: Variant to decode as, for callers that know it from
            elsewhere (e.g. the sysfs leaf name); classified from the word
            when None

    Returns:
        DecodedObject with fields in table order

    Raises:
        WordRangeError: If word is not a 32-bit unsigned value

    Examples:
        ```python
        decoded = decode_pdo(0x0001912C)
        print(decoded.as_text())
        # peak_current=0
        # voltage=5.00
        # maximum_current=3.00
        ```
    """
    unpacker = WordUnpacker(word)
    if variant is None:
        variant = classify_pdo(word)

    handle = lookup_block(variant, object_index_is_one)
    if handle.is_empty:
        logger.debug("PDO 0x%08x: no field block for variant %s", word, variant.value)

    fields = _decode_fields(unpacker, handle.select(is_source_capability))
    return DecodedObject(kind="pdo", word=word, variant=variant.value, fields=fields)


def decode_rdo(word: int, reference: RdoReference) -> DecodedObject:
    """Decode an RDO word against the type of the PDO it requests.

    The giveback flag (B27) selects between the minimum and maximum operating
    current or power in the low field of Fixed, Variable and Battery requests.

    Args:
        word: 32-bit RDO
        reference: Type of the requested PDO

    Returns:
        DecodedObject with fields in table order

    Raises:
        WordRangeError: If word is not a 32-bit unsigned value
    """
    unpacker = WordUnpacker(word)
    giveback = unpacker.read_bool(GIVEBACK_BIT)

    handle = lookup_rdo_block(reference, giveback)
    if handle.is_empty:
        logger.debug("RDO 0x%08x: no field block for reference %s", word, reference)
        fields: list[DecodedField] = []
    else:
        fields = _decode_fields(unpacker, handle.select())

    name = reference.value if isinstance(reference, RdoReference) else str(reference)
    return DecodedObject(kind="rdo", word=word, variant=name, fields=fields)


def _decode_fields(
    unpacker: WordUnpacker, descriptors: Iterable[FieldDescriptor]
) -> list[DecodedField]:
    fields = []
    for descriptor in descriptors:
        raw = unpacker.read_uint(descriptor.bit_offset, descriptor.bit_width)
        fields.append(
            DecodedField(
                name=descriptor.name,
                raw_bits=raw,
                display_value=descriptor.scale.display(raw),
            )
        )
    return fields
