#!/usr/bin/env python3
"""Basic usage example for pdocodec.

This example demonstrates:
1. Encoding a capability entry's attributes into a PDO
2. Decoding PDOs from a source capability list
3. Decoding the request a sink sends back
4. Summarizing capability entries
"""

from __future__ import annotations

from pdocodec import (
    RdoReference,
    decode_pdo,
    decode_rdo,
    encode,
    format_word,
    summarize,
    variant_from_leaf_name,
)

# Attributes as read from /sys/class/usb_power_delivery/pd0/source-capabilities
CAPABILITIES = {
    "1:fixed_supply": {
        "unconstrained_power": "1",
        "usb_communication_capable": "1",
        "voltage": "5000mV",
        "maximum_current": "3000mA",
    },
    "2:fixed_supply": {"voltage": "9000mV", "maximum_current": "3000mA"},
    "3:programmable_supply": {
        "maximum_voltage": "11000mV",
        "minimum_voltage": "3300mV",
        "maximum_current": "3000mA",
    },
}


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("pdocodec Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Encoding source capabilities...")
    words = []
    for leaf, attrs in CAPABILITIES.items():
        index, variant = variant_from_leaf_name(leaf)
        word = encode(variant, True, index, attrs)
        words.append(word)
        print(f"   {leaf}: {format_word(word)}")
    print()

    print("2. Decoding them back...")
    for position, word in enumerate(words, start=1):
        decoded = decode_pdo(word, object_index_is_one=position == 1)
        print(f"   PDO {position} ({decoded.variant}):")
        for field in decoded.fields:
            print(f"      {field.name.value} = {field.display_value}")
    print()

    print("3. Decoding a request for PDO 2...")
    request = decode_rdo(0x2304B12C, RdoReference.FIXED_OR_VARIABLE)
    for field in request.fields:
        print(f"   {field.name.value} = {field.display_value}")
    print()

    print("4. Summaries...")
    for leaf, attrs in CAPABILITIES.items():
        _, variant = variant_from_leaf_name(leaf)
        print(f"   {leaf}: {summarize(variant, True, attrs)}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
