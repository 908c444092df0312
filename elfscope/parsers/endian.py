"""
Endian / Width Utilities
=========================

Pure helpers for byte-order handling: detection of the host byte order
and byte-reversal of unsigned 16-, 32-, and 64-bit values.

Each swap is its own inverse: ``swap32(swap32(x)) == x`` for every
32-bit ``x``.
"""

from __future__ import annotations

import sys
from typing import Literal

ByteOrder = Literal["little", "big"]

_MASKS: dict[int, int] = {
    2: 0xFFFF,
    4: 0xFFFF_FFFF,
    8: 0xFFFF_FFFF_FFFF_FFFF,
}


def host_byte_order() -> ByteOrder:
    """Byte order of the machine running this interpreter."""
    return "little" if sys.byteorder == "little" else "big"


def needs_swap(byte_order: ByteOrder) -> bool:
    """Whether values stored in *byte_order* must be swapped for the host."""
    return byte_order != host_byte_order()


def swap(value: int, width: int) -> int:
    """Reverse the byte order of an unsigned *width*-byte integer.

    Args:
        value: Unsigned value that fits in *width* bytes.
        width: Field width in bytes: 2, 4, or 8.

    Raises:
        ValueError: If *width* is unsupported or *value* does not fit.
    """
    mask = _MASKS.get(width)
    if mask is None:
        raise ValueError(f"unsupported field width: {width} bytes")
    if value < 0 or value > mask:
        raise ValueError(f"value {value:#x} does not fit in {width} bytes")
    return int.from_bytes(value.to_bytes(width, "little"), "big")


def swap16(value: int) -> int:
    """Byte-swap a 16-bit value."""
    return swap(value, 2)


def swap32(value: int) -> int:
    """Byte-swap a 32-bit value."""
    return swap(value, 4)


def swap64(value: int) -> int:
    """Byte-swap a 64-bit value."""
    return swap(value, 8)
