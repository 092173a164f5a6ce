"""Field packing and extraction for 32-bit data objects.

This module provides the low-level bit manipulation used by the encoder and
decoder. Fields are addressed by the position of their least significant bit,
matching how the USB PD specification numbers bits (B0..B31).
"""

from __future__ import annotations

from .classify import check_word


def _check_span(offset: int, num_bits: int) -> None:
    if num_bits < 1 or num_bits > 32:
        raise ValueError(f"num_bits must be 1-32, got {num_bits}")
    if offset < 0 or offset + num_bits > 32:
        raise ValueError(f"field at offset {offset} with {num_bits} bits does not fit in 32 bits")


class WordPacker:
    """Builds a 32-bit word one field at a time.

    Values are masked to their field width before being ORed in, so an
    oversized value loses its high bits rather than spilling into the
    neighbouring field.

    Example:
        >>> packer = WordPacker()
        >>> packer.write_uint(100, offset=10, num_bits=10)
        >>> packer.write_uint(300, offset=0, num_bits=10)
        >>> hex(packer.word)
        '0x1912c'
    """

    def __init__(self, initial: int = 0) -> None:
        """Initialize the packer.

        Args:
            initial: Starting word, e.g. selector bits
        """
        self._word = check_word(initial)

    @property
    def word(self) -> int:
        """The packed word."""
        return self._word

    def write_uint(self, value: int, offset: int, num_bits: int) -> None:
        """OR an unsigned value into the field at ``offset``.

        Args:
            value: Unsigned integer value to write (must be >= 0)
            offset: Bit position of the field's least significant bit
            num_bits: Field width in bits

        Raises:
            ValueError: If value is negative or the field does not fit
        """
        if value < 0:
            raise ValueError(f"write_uint requires non-negative value, got {value}")
        _check_span(offset, num_bits)
        self._word |= (value & ((1 << num_bits) - 1)) << offset

    def write_bool(self, value: bool, offset: int) -> None:
        """Set the single bit at ``offset`` when value is true."""
        if value:
            self.write_uint(1, offset, 1)


class WordUnpacker:
    """Reads fields out of a 32-bit word.

    Example:
        >>> unpacker = WordUnpacker(0x0001912C)
        >>> unpacker.read_uint(offset=10, num_bits=10)
        100
    """

    def __init__(self, word: int) -> None:
        """Initialize the unpacker.

        Raises:
            WordRangeError: If word is not a 32-bit unsigned value
        """
        self._word = check_word(word)

    @property
    def word(self) -> int:
        return self._word

    def read_uint(self, offset: int, num_bits: int) -> int:
        """Extract ``(word >> offset) & ((1 << num_bits) - 1)``."""
        _check_span(offset, num_bits)
        return (self._word >> offset) & ((1 << num_bits) - 1)

    def read_bool(self, offset: int) -> bool:
        return self.read_uint(offset, 1) == 1
