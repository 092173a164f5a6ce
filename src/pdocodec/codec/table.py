"""Static field table for PDO and RDO words.

The table is an ordered tuple of FieldDescriptor rows, split into contiguous
blocks. Each block starts with a GROUP_START row and covers one PDO variant
or one RDO reference type. Rows within a block run from the most significant
field down. Bit positions and units follow USB Power Delivery r3.2,
section 6.4.

The Fixed PDO is split over two adjacent blocks. FIXED holds the fields every
Fixed PDO has; its last row carries CONTINUE_GROUP. FIXED_FIRST follows it
and holds the bits that only the first PDO of a capability list defines. A
walk for object position 1 carries on from FIXED into FIXED_FIRST; a walk for
any other position stops at the end of FIXED.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from .classify import PdoVariant, RdoReference
from .fields import DescriptorFlag, FieldDescriptor, FieldName, Scale

F = FieldName
GS = DescriptorFlag.GROUP_START
SRC = DescriptorFlag.SOURCE_ONLY
SNK = DescriptorFlag.SINK_ONLY
CONT = DescriptorFlag.CONTINUE_GROUP

MV50 = Scale.linear(5)
MV100 = Scale.linear(10)
MV20 = Scale.linear(2)
MA10 = Scale.linear(1)
MA50 = Scale.linear(5)
MW250 = Scale.linear(25)
W1 = Scale.linear(100)


class BlockKey(enum.Enum):
    FIXED = "fixed"
    FIXED_FIRST = "fixed_first"
    BATTERY = "battery"
    VARIABLE = "variable"
    PPS = "pps"
    SPR_AVS = "spr_avs"
    EPR_AVS = "epr_avs"
    RDO_FIXED_OR_VARIABLE = "rdo_fixed_or_variable"
    RDO_BATTERY = "rdo_battery"
    RDO_PPS = "rdo_pps"
    RDO_AVS = "rdo_avs"


def _rdo_flags(first: Optional[FieldDescriptor]) -> Tuple[FieldDescriptor, ...]:
    # B31..B22 shared by every RDO; giveback is absent from PPS/AVS requests
    rows = [
        FieldDescriptor(F.OBJECT_POSITION, 28, 4, flags=GS),
        first,
        FieldDescriptor(F.CAPABILITY_MISMATCH, 26, 1),
        FieldDescriptor(F.USB_COMMUNICATION_CAPABLE, 25, 1),
        FieldDescriptor(F.NO_USB_SUSPEND, 24, 1),
        FieldDescriptor(F.UNCHUNKED_EXTENDED_MESSAGES_SUPPORTED, 23, 1),
        FieldDescriptor(F.EPR_MODE_CAPABLE, 22, 1),
    ]
    return tuple(row for row in rows if row is not None)


_BLOCKS: Tuple[Tuple[BlockKey, Tuple[FieldDescriptor, ...]], ...] = (
    (
        BlockKey.FIXED,
        (
            FieldDescriptor(F.PEAK_CURRENT, 20, 2, flags=GS | SRC),
            FieldDescriptor(F.VOLTAGE, 10, 10, MV50),
            FieldDescriptor(F.MAXIMUM_CURRENT, 0, 10, MA10, SRC),
            FieldDescriptor(F.OPERATIONAL_CURRENT, 0, 10, MA10, SNK | CONT),
        ),
    ),
    (
        BlockKey.FIXED_FIRST,
        (
            FieldDescriptor(F.DUAL_ROLE_POWER, 29, 1, flags=GS),
            FieldDescriptor(F.USB_SUSPEND_SUPPORTED, 28, 1, flags=SRC),
            FieldDescriptor(F.HIGHER_CAPABILITY, 28, 1, flags=SNK),
            FieldDescriptor(F.UNCONSTRAINED_POWER, 27, 1),
            FieldDescriptor(F.USB_COMMUNICATION_CAPABLE, 26, 1),
            FieldDescriptor(F.DUAL_ROLE_DATA, 25, 1),
            FieldDescriptor(F.UNCHUNKED_EXTENDED_MESSAGES_SUPPORTED, 24, 1, flags=SRC),
            FieldDescriptor(F.EPR_MODE_CAPABLE, 23, 1, flags=SRC),
            FieldDescriptor(F.FAST_ROLE_SWAP_CURRENT, 23, 2, flags=SNK),
        ),
    ),
    (
        BlockKey.BATTERY,
        (
            FieldDescriptor(F.MAXIMUM_VOLTAGE, 20, 10, MV50, GS),
            FieldDescriptor(F.MINIMUM_VOLTAGE, 10, 10, MV50),
            FieldDescriptor(F.MAXIMUM_ALLOWABLE_POWER, 0, 10, MW250, SRC),
            FieldDescriptor(F.OPERATIONAL_POWER, 0, 10, MW250, SNK),
        ),
    ),
    (
        BlockKey.VARIABLE,
        (
            FieldDescriptor(F.MAXIMUM_VOLTAGE, 20, 10, MV50, GS),
            FieldDescriptor(F.MINIMUM_VOLTAGE, 10, 10, MV50),
            FieldDescriptor(F.MAXIMUM_CURRENT, 0, 10, MA10, SRC),
            FieldDescriptor(F.OPERATIONAL_CURRENT, 0, 10, MA10, SNK),
        ),
    ),
    (
        BlockKey.PPS,
        (
            FieldDescriptor(F.PPS_POWER_LIMITED, 27, 1, flags=GS | SRC),
            FieldDescriptor(F.MAXIMUM_VOLTAGE, 17, 8, MV100),
            FieldDescriptor(F.MINIMUM_VOLTAGE, 8, 8, MV100),
            FieldDescriptor(F.MAXIMUM_CURRENT, 0, 7, MA50),
        ),
    ),
    (
        BlockKey.SPR_AVS,
        (
            FieldDescriptor(F.PEAK_CURRENT, 26, 2, flags=GS | SRC),
            FieldDescriptor(F.MAXIMUM_CURRENT_9V_TO_15V, 10, 10, MA10),
            FieldDescriptor(F.MAXIMUM_CURRENT_15V_TO_20V, 0, 10, MA10),
        ),
    ),
    (
        BlockKey.EPR_AVS,
        (
            FieldDescriptor(F.PEAK_CURRENT, 26, 2, flags=GS | SRC),
            FieldDescriptor(F.MAXIMUM_VOLTAGE, 17, 9, MV100),
            FieldDescriptor(F.MINIMUM_VOLTAGE, 8, 8, MV100),
            FieldDescriptor(F.PDP, 0, 8, W1),
        ),
    ),
    (
        BlockKey.RDO_FIXED_OR_VARIABLE,
        _rdo_flags(FieldDescriptor(F.GIVEBACK_FLAG, 27, 1))
        + (
            FieldDescriptor(F.OPERATING_CURRENT, 10, 10, MA10),
            FieldDescriptor(F.MINIMUM_OPERATING_CURRENT, 0, 10, MA10, SRC),
            FieldDescriptor(F.MAXIMUM_OPERATING_CURRENT, 0, 10, MA10, SNK),
        ),
    ),
    (
        BlockKey.RDO_BATTERY,
        _rdo_flags(FieldDescriptor(F.GIVEBACK_FLAG, 27, 1))
        + (
            FieldDescriptor(F.OPERATING_POWER, 10, 10, MW250),
            FieldDescriptor(F.MINIMUM_OPERATING_POWER, 0, 10, MW250, SRC),
            FieldDescriptor(F.MAXIMUM_OPERATING_POWER, 0, 10, MW250, SNK),
        ),
    ),
    (
        BlockKey.RDO_PPS,
        _rdo_flags(None)
        + (
            FieldDescriptor(F.OUTPUT_VOLTAGE, 9, 12, MV20),
            FieldDescriptor(F.OPERATING_CURRENT, 0, 7, MA50),
        ),
    ),
    (
        BlockKey.RDO_AVS,
        _rdo_flags(None)
        + (
            FieldDescriptor(F.OUTPUT_VOLTAGE, 9, 12, Scale.HALVED_QUARTER_VOLT),
            FieldDescriptor(F.OPERATING_CURRENT, 0, 7, MA50),
        ),
    ),
)


def _build() -> Tuple[Tuple[FieldDescriptor, ...], Dict[BlockKey, int]]:
    rows = []
    starts = {}
    for key, block in _BLOCKS:
        if not block or not block[0].starts_group:
            raise ValueError(f"block {key.value} must open with a GROUP_START row")
        if any(row.starts_group for row in block[1:]):
            raise ValueError(f"block {key.value} has a GROUP_START row past its head")
        starts[key] = len(rows)
        rows.extend(block)
    return tuple(rows), starts


FIELD_TABLE, _BLOCK_STARTS = _build()

_PDO_BLOCKS = {
    PdoVariant.FIXED: BlockKey.FIXED,
    PdoVariant.BATTERY: BlockKey.BATTERY,
    PdoVariant.VARIABLE: BlockKey.VARIABLE,
    PdoVariant.PPS: BlockKey.PPS,
    PdoVariant.SPR_AVS: BlockKey.SPR_AVS,
    PdoVariant.EPR_AVS: BlockKey.EPR_AVS,
}

_RDO_BLOCKS = {
    RdoReference.FIXED_OR_VARIABLE: BlockKey.RDO_FIXED_OR_VARIABLE,
    RdoReference.BATTERY: BlockKey.RDO_BATTERY,
    RdoReference.PPS: BlockKey.RDO_PPS,
    RdoReference.AVS: BlockKey.RDO_AVS,
}


@dataclass(frozen=True)
class BlockHandle:
    """Start point of a walk through FIELD_TABLE.

    Attributes:
        key: Block the walk starts in, None for the empty handle
        source_side: Role pre-selected by the lookup (the giveback flag for
            RDO handles), None when the caller supplies the role
        continued: Follow a CONTINUE_GROUP row into the next block
    """

    key: Optional[BlockKey]
    source_side: Optional[bool] = None
    continued: bool = False

    @property
    def is_empty(self) -> bool:
        return self.key is None

    def walk(self) -> Iterator[FieldDescriptor]:
        """Yield the descriptors of the block, unfiltered, in table order.

        Phase one walks the starting block up to the next GROUP_START. If the
        handle is continued and the last row asks for continuation, phase two
        walks the following block up to that block's own next GROUP_START.
        """
        if self.key is None:
            return
        start = _BLOCK_STARTS[self.key]
        last = None
        for row in _rows_until_next_group(start):
            last = row
            yield row
            start += 1
        if self.continued and last is not None and last.continues_group:
            yield from _rows_until_next_group(start)

    def select(self, source_side: Optional[bool] = None) -> Iterator[FieldDescriptor]:
        """Walk the block, keeping only rows that apply to ``source_side``.

        Args:
            source_side: Role to filter by; defaults to the handle's own
        """
        side = self.source_side if source_side is None else source_side
        if side is None:
            raise ValueError("no role given for this block")
        return (row for row in self.walk() if row.applies_to(side))


def _rows_until_next_group(start: int) -> Iterator[FieldDescriptor]:
    for index in range(start, len(FIELD_TABLE)):
        row = FIELD_TABLE[index]
        if index != start and row.starts_group:
            return
        yield row


EMPTY_BLOCK = BlockHandle(None)


def lookup_block(variant: PdoVariant, object_index_is_one: bool) -> BlockHandle:
    """Find the table block for a PDO variant.

    Args:
        variant: PDO variant
        object_index_is_one: True for the first PDO of a capability list,
            which appends the FIXED_FIRST rows for Fixed PDOs

    Returns:
        BlockHandle; the empty handle for NULL or unknown variants
    """
    key = _PDO_BLOCKS.get(variant)
    if key is None:
        return EMPTY_BLOCK
    return BlockHandle(key, continued=key is BlockKey.FIXED and bool(object_index_is_one))


def lookup_rdo_block(reference: RdoReference, giveback: bool) -> BlockHandle:
    """Find the table block for an RDO of the given reference type.

    The giveback flag is bound to the handle as its role: SOURCE_ONLY rows
    apply when giveback is set, SINK_ONLY rows when it is clear.

    Returns:
        BlockHandle; the empty handle for unsupported references
    """
    key = _RDO_BLOCKS.get(reference)
    if key is None:
        return EMPTY_BLOCK
    return BlockHandle(key, source_side=bool(giveback))


def block_rows(key: BlockKey) -> Tuple[FieldDescriptor, ...]:
    """Return the rows of one physical block, without continuation."""
    start = _BLOCK_STARTS[key]
    return tuple(_rows_until_next_group(start))
