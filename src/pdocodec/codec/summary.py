"""One-line summaries of capability entries.

These are the short descriptions shown next to each PDO in a port listing,
built straight from the entry's attribute map.
"""

from __future__ import annotations

from .classify import PdoVariant
from .encoder import (
    AttributeMap,
    parse_attribute,
    parse_milliamps,
    parse_millivolts,
    parse_milliwatts,
)


def _milli(value: int) -> str:
    # mV/mA/mW shown in V/A/W with two (truncated) decimals
    return f"{value // 1000}.{(value % 1000) // 10:02d}"


def summarize(variant: PdoVariant, is_source_capability: bool, attrs: AttributeMap) -> str:
    """Summarize a capability entry.

    Args:
        variant: PDO variant of the entry
        is_source_capability: True for source capabilities, False for sink
        attrs: Attribute name to text value

    Returns:
        Summary line, or "" for NULL/unknown variants or an empty map

    Example:
        >>> summarize(PdoVariant.FIXED, True, {"voltage": "5000mV", "maximum_current": "3000mA"})
        'fixed: 5.00 Volts, 3.00 Amps (max)'
    """
    if not attrs:
        return ""

    role = "max" if is_source_capability else "op"
    current_name = "maximum_current" if is_source_capability else "operational_current"

    if variant is PdoVariant.FIXED:
        mv = parse_millivolts(attrs.get("voltage"))
        ma = parse_milliamps(attrs.get(current_name))
        return f"fixed: {_milli(mv)} Volts, {_milli(ma)} Amps ({role})"

    if variant is PdoVariant.BATTERY:
        power_name = "maximum_allowable_power" if is_source_capability else "operational_power"
        mw = parse_milliwatts(attrs.get(power_name))
        mv_min = parse_millivolts(attrs.get("minimum_voltage"))
        mv = parse_millivolts(attrs.get("maximum_voltage"))
        return (
            f"battery: {_milli(mv_min)} to {_milli(mv)} Volts, "
            f"{_milli(mw)} Watts ({role})"
        )

    if variant is PdoVariant.VARIABLE:
        ma = parse_milliamps(attrs.get(current_name))
        mv_min = parse_millivolts(attrs.get("minimum_voltage"))
        mv = parse_millivolts(attrs.get("maximum_voltage"))
        return (
            f"variable: {_milli(mv_min)} to {_milli(mv)} Volts, "
            f"{_milli(ma)} Amps ({role})"
        )

    if variant is PdoVariant.PPS:
        ma = parse_milliamps(attrs.get("maximum_current"))
        mv_min = parse_millivolts(attrs.get("minimum_voltage"))
        mv = parse_millivolts(attrs.get("maximum_voltage"))
        limited = is_source_capability and parse_attribute(attrs.get("pps_power_limited")) != 0
        return (
            f"pps: {_milli(mv_min)} to {_milli(mv)} Volts, "
            f"{_milli(ma)} Amps (max){' [PL]' if limited else ''}"
        )

    if variant is PdoVariant.EPR_AVS:
        mw = parse_milliwatts(attrs.get("pdp"))
        mv_min = parse_millivolts(attrs.get("minimum_voltage"))
        mv = parse_millivolts(attrs.get("maximum_voltage"))
        peak = parse_attribute(attrs.get("peak_current"))
        return (
            f"avs: {_milli(mv_min)} to {_milli(mv)} Volts, "
            f"{_milli(mw)} Watts, Peak current setting {peak}"
        )

    if variant is PdoVariant.SPR_AVS:
        ma_15 = parse_milliamps(attrs.get("maximum_current_9V_to_15V"))
        ma_20 = parse_milliamps(attrs.get("maximum_current_15V_to_20V"))
        peak = parse_attribute(attrs.get("peak_current"))
        return (
            f"spr avs: {_milli(ma_15)} Amps (9-15V), {_milli(ma_20)} Amps (15-20V), "
            f"Peak current setting {peak}"
        )

    return ""
