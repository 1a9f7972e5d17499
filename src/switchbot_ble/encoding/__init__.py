"""Byte-level encoding helpers."""

from .bitfield import bit, bits, clamp, percent, u16be

__all__ = [
    "bit",
    "bits",
    "clamp",
    "percent",
    "u16be",
]
