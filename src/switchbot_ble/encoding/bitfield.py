"""Bit-field extraction from advertisement and response bytes.

All helpers are pure. Masks are given as literal bit patterns so a parser
reads like the byte layout it decodes, e.g. ``bits(byte7, 0b01110000)``
yields the 3-bit field stored in bits 4-6.
"""

from __future__ import annotations


def bit(value: int, mask: int) -> bool:
    """Return True if the single bit selected by ``mask`` is set.

    Raises:
        ValueError: If mask does not select exactly one bit
    """
    if mask <= 0 or mask & (mask - 1):
        raise ValueError(f"Mask 0b{mask:b} does not select a single bit")
    return bool(value & mask)


def bits(value: int, mask: int) -> int:
    """Extract the field selected by ``mask`` and shift it down to bit 0."""
    if mask <= 0:
        raise ValueError(f"Mask must be positive, got {mask}")
    shift = (mask & -mask).bit_length() - 1
    return (value & mask) >> shift


def clamp(value: int | float, low: int | float, high: int | float) -> int | float:
    """Clamp value into the closed interval [low, high]."""
    return max(low, min(value, high))


def percent(value: int) -> int:
    """Mask a 7-bit percentage field and clamp it to 0-100."""
    return int(clamp(value & 0b01111111, 0, 100))


def u16be(data: bytes, offset: int) -> int:
    """Read a big-endian uint16 as ``(high << 8) + low``.

    Raises:
        IndexError: If fewer than two bytes are available at offset
    """
    if offset < 0 or offset + 2 > len(data):
        raise IndexError(
            f"Need 2 bytes at offset {offset}, buffer has {len(data)}"
        )
    return (data[offset] << 8) + data[offset + 1]
