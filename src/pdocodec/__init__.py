"""pdocodec: USB Power Delivery PDO/RDO codec

A Python library for decoding and encoding the 32-bit Power Data Objects
(PDOs) and Request Data Objects (RDOs) of USB Power Delivery, as exposed by
the Linux usb_power_delivery class in sysfs.

Key Features:
- Declarative field table covering Fixed, Battery, Variable, PPS and
  SPR/EPR AVS PDOs and the four RDO shapes
- Table-driven encoder from sysfs-style attribute maps
- Decoder producing named, scaled fields as Pydantic models
- Fail-soft behaviour: unknown variants decode to no fields

Quick Start:
    >>> from pdocodec import PdoVariant, RdoReference, decode_pdo, decode_rdo, encode
    >>>
    >>> word = encode(PdoVariant.FIXED, True, 1, {"voltage": "5000mV", "maximum_current": "3000mA"})
    >>> hex(word)
    '0x1912c'
    >>> decode_pdo(word, object_index_is_one=True).get("voltage").display_value
    '5.00'
    >>> decode_rdo(0x1304B12C, RdoReference.FIXED_OR_VARIABLE).get("object_position").raw_bits
    1
"""

from __future__ import annotations

from .codec import (
    FIELD_TABLE,
    DescriptorFlag,
    FieldDescriptor,
    FieldName,
    PdoVariant,
    RdoReference,
    Scale,
    classify_pdo,
    decode_pdo,
    decode_rdo,
    encode,
    lookup_block,
    lookup_rdo_block,
    rdo_reference_from_code,
    summarize,
    variant_from_leaf_name,
)
from .config import OutputConfig
from .exceptions import LiteralError, PdoCodecError, ReferenceCodeError, WordRangeError
from .models import DecodedField, DecodedObject, PdoQuery, RdoQuery
from .utils import format_word, parse_word

__version__ = "0.1.0"

__all__ = [
    # Core API
    "encode",
    "decode_pdo",
    "decode_rdo",
    "classify_pdo",
    "summarize",
    # Table
    "FIELD_TABLE",
    "FieldDescriptor",
    "FieldName",
    "DescriptorFlag",
    "Scale",
    "lookup_block",
    "lookup_rdo_block",
    # Variants
    "PdoVariant",
    "RdoReference",
    "rdo_reference_from_code",
    "variant_from_leaf_name",
    # Models
    "DecodedField",
    "DecodedObject",
    "PdoQuery",
    "RdoQuery",
    # Input and configuration
    "parse_word",
    "format_word",
    "OutputConfig",
    # Exceptions
    "PdoCodecError",
    "LiteralError",
    "ReferenceCodeError",
    "WordRangeError",
    # Version
    "__version__",
]
