"""PDO/RDO codec for pdocodec.

This module provides the static field table and the encoding, decoding and
classification functions built on it.
"""

from __future__ import annotations

from .fields import DescriptorFlag, FieldDescriptor, FieldName, Scale
from .classify import (
    PdoVariant,
    RdoReference,
    classify_pdo,
    rdo_reference_from_code,
    variant_from_leaf_name,
)
from .table import FIELD_TABLE, BlockHandle, BlockKey, lookup_block, lookup_rdo_block
from .encoder import encode
from .decoder import decode_pdo, decode_rdo
from .summary import summarize

__all__ = [
    "encode",
    "decode_pdo",
    "decode_rdo",
    "summarize",
    "classify_pdo",
    "rdo_reference_from_code",
    "variant_from_leaf_name",
    "lookup_block",
    "lookup_rdo_block",
    "PdoVariant",
    "RdoReference",
    "FieldName",
    "FieldDescriptor",
    "DescriptorFlag",
    "Scale",
    "FIELD_TABLE",
    "BlockHandle",
    "BlockKey",
]
