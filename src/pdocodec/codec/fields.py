"""Field names, scales and descriptors for PDO/RDO words.

A FieldDescriptor is one row of the static field table: where a field sits
in the 32-bit word, how its raw bits are scaled for display and which
capability role it applies to.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar, Optional


class FieldName(enum.Enum):
    """Closed set of field names; values are the sysfs attribute names."""

    # PDO fields
    VOLTAGE = "voltage"
    MAXIMUM_CURRENT = "maximum_current"
    OPERATIONAL_CURRENT = "operational_current"
    PEAK_CURRENT = "peak_current"
    DUAL_ROLE_POWER = "dual_role_power"
    USB_SUSPEND_SUPPORTED = "usb_suspend_supported"
    HIGHER_CAPABILITY = "higher_capability"
    UNCONSTRAINED_POWER = "unconstrained_power"
    USB_COMMUNICATION_CAPABLE = "usb_communication_capable"
    DUAL_ROLE_DATA = "dual_role_data"
    UNCHUNKED_EXTENDED_MESSAGES_SUPPORTED = "unchunked_extended_messages_supported"
    EPR_MODE_CAPABLE = "epr_mode_capable"
    FAST_ROLE_SWAP_CURRENT = "fast_role_swap_current"
    MINIMUM_VOLTAGE = "minimum_voltage"
    MAXIMUM_VOLTAGE = "maximum_voltage"
    MAXIMUM_ALLOWABLE_POWER = "maximum_allowable_power"
    OPERATIONAL_POWER = "operational_power"
    PPS_POWER_LIMITED = "pps_power_limited"
    PDP = "pdp"
    MAXIMUM_CURRENT_9V_TO_15V = "maximum_current_9V_to_15V"
    MAXIMUM_CURRENT_15V_TO_20V = "maximum_current_15V_to_20V"

    # RDO fields
    OBJECT_POSITION = "object_position"
    GIVEBACK_FLAG = "giveback_flag"
    CAPABILITY_MISMATCH = "capability_mismatch"
    NO_USB_SUSPEND = "no_usb_suspend"
    OPERATING_CURRENT = "operating_current"
    MAXIMUM_OPERATING_CURRENT = "maximum_operating_current"
    MINIMUM_OPERATING_CURRENT = "minimum_operating_current"
    OPERATING_POWER = "operating_power"
    MAXIMUM_OPERATING_POWER = "maximum_operating_power"
    MINIMUM_OPERATING_POWER = "minimum_operating_power"
    OUTPUT_VOLTAGE = "output_voltage"

    @property
    def unit(self) -> Optional[str]:
        """Unit suffix carried by the attribute text, or None for bare numbers."""
        return _UNITS.get(self)

    @classmethod
    def from_attribute(cls, name: str) -> Optional[FieldName]:
        """Map a sysfs attribute name to its FieldName, or None if unknown."""
        try:
            return cls(name)
        except ValueError:
            return None


_UNITS = {
    FieldName.VOLTAGE: "mV",
    FieldName.MINIMUM_VOLTAGE: "mV",
    FieldName.MAXIMUM_VOLTAGE: "mV",
    FieldName.OUTPUT_VOLTAGE: "mV",
    FieldName.MAXIMUM_CURRENT: "mA",
    FieldName.OPERATIONAL_CURRENT: "mA",
    FieldName.MAXIMUM_CURRENT_9V_TO_15V: "mA",
    FieldName.MAXIMUM_CURRENT_15V_TO_20V: "mA",
    FieldName.OPERATING_CURRENT: "mA",
    FieldName.MAXIMUM_OPERATING_CURRENT: "mA",
    FieldName.MINIMUM_OPERATING_CURRENT: "mA",
    FieldName.MAXIMUM_ALLOWABLE_POWER: "mW",
    FieldName.OPERATIONAL_POWER: "mW",
    FieldName.PDP: "mW",
    FieldName.OPERATING_POWER: "mW",
    FieldName.MAXIMUM_OPERATING_POWER: "mW",
    FieldName.MINIMUM_OPERATING_POWER: "mW",
}


class DescriptorFlag(enum.Flag):
    """Traversal and role flags of a FieldDescriptor."""

    NONE = 0
    GROUP_START = enum.auto()
    SOURCE_ONLY = enum.auto()
    SINK_ONLY = enum.auto()
    CONTINUE_GROUP = enum.auto()


class ScaleKind(enum.Enum):
    UNITLESS = "unitless"
    LINEAR = "linear"
    HALVED_QUARTER_VOLT = "halved_quarter_volt"


@dataclass(frozen=True)
class Scale:
    """How raw field bits turn into a displayed value.

    Scaled values are held as hundredths of the natural unit (volts, amps,
    watts) and shown as ``whole.hundredths``.

    Attributes:
        kind: Scaling rule
        multiplier: Hundredths per raw step (LINEAR only)
    """

    kind: ScaleKind
    multiplier: int = 1

    UNITLESS: ClassVar[Scale]
    HALVED_QUARTER_VOLT: ClassVar[Scale]

    @classmethod
    def linear(cls, multiplier: int) -> Scale:
        """Create a linear scale of ``multiplier`` hundredths per raw step."""
        if multiplier < 1:
            raise ValueError(f"multiplier must be >= 1, got {multiplier}")
        return cls(ScaleKind.LINEAR, multiplier)

    @property
    def is_unitless(self) -> bool:
        return self.kind is ScaleKind.UNITLESS

    @property
    def step_milli(self) -> int:
        """Native step size in milli-units (mV, mA, mW) used by the encoder.

        One hundredth is ten milli-units, so a multiplier of 5 is a 50 mV step.
        Only linear scales have one; every scaled PDO field is linear.

        Raises:
            ValueError: For unitless and halved-quarter-volt scales
        """
        if self.kind is not ScaleKind.LINEAR:
            raise ValueError(f"{self.kind.value} scale has no encoder step")
        return self.multiplier * 10

    def hundredths(self, raw: int) -> Optional[int]:
        """Return the scaled value in hundredths, or None for unitless fields."""
        if self.kind is ScaleKind.LINEAR:
            return raw * self.multiplier
        if self.kind is ScaleKind.HALVED_QUARTER_VOLT:
            return (raw >> 1) * 25
        return None

    def display(self, raw: int) -> str:
        """Format raw field bits for display.

        Examples:
            >>> Scale.linear(5).display(100)
            '5.00'
            >>> Scale.HALVED_QUARTER_VOLT.display(40)
            '5.00'
            >>> Scale.UNITLESS.display(3)
            '3'
        """
        value = self.hundredths(raw)
        if value is None:
            return str(raw)
        return format_hundredths(value)


Scale.UNITLESS = Scale(ScaleKind.UNITLESS)
Scale.HALVED_QUARTER_VOLT = Scale(ScaleKind.HALVED_QUARTER_VOLT)


def format_hundredths(value: int) -> str:
    """Render hundredths as ``whole.hh`` with a zero-padded fraction."""
    return f"{value // 100}.{value % 100:02d}"


@dataclass(frozen=True)
class FieldDescriptor:
    """Bit layout and display rule of one field in a PDO/RDO word.

    Attributes:
        name: Field name
        bit_offset: Position of the least significant bit (0-31)
        bit_width: Number of bits (1-16)
        scale: Display scaling rule
        flags: Group and role flags
    """

    name: FieldName
    bit_offset: int
    bit_width: int
    scale: Scale = Scale.UNITLESS
    flags: DescriptorFlag = DescriptorFlag.NONE

    def __post_init__(self) -> None:
        if not 0 <= self.bit_offset <= 31:
            raise ValueError(f"{self.name.value}: bit_offset must be 0-31, got {self.bit_offset}")
        if not 1 <= self.bit_width <= 16:
            raise ValueError(f"{self.name.value}: bit_width must be 1-16, got {self.bit_width}")
        if self.bit_offset + self.bit_width > 32:
            raise ValueError(f"{self.name.value}: field runs past bit 31")

    @property
    def mask(self) -> int:
        return (1 << self.bit_width) - 1

    @property
    def starts_group(self) -> bool:
        return bool(self.flags & DescriptorFlag.GROUP_START)

    @property
    def continues_group(self) -> bool:
        return bool(self.flags & DescriptorFlag.CONTINUE_GROUP)

    def applies_to(self, source_side: bool) -> bool:
        """Whether the role filter keeps this field.

        For PDOs ``source_side`` is the capability role. For RDOs it is the
        giveback flag.
        """
        if self.flags & DescriptorFlag.SOURCE_ONLY:
            return source_side
        if self.flags & DescriptorFlag.SINK_ONLY:
            return not source_side
        return True
