"""
Record Layouts and Normalisation
=================================

On-disk layouts of the ELF file header and section header for both word
widths, and the single routine that turns raw record bytes into
canonical values.

Normalisation runs in two steps, per field:

1. *Promotion*: the record is unpacked with host byte order and each
   value becomes a Python ``int``; 32-bit addresses and offsets are
   thereby zero-extended into the 64-bit canonical fields.
2. *Endian correction*: if the file's byte order differs from the host's,
   each value is byte-reversed using the width the field has on disk.
   A promoted 32-bit ``sh_offset`` is swapped as a 32-bit value, never
   as the 64-bit field it now occupies.
"""

from __future__ import annotations

import struct
from typing import NamedTuple

from elfscope.parsers.endian import ByteOrder, needs_swap, swap


class RecordLayout(NamedTuple):
    """Ordered ``(field_name, struct_code)`` pairs of one on-disk record."""

    fields: tuple[tuple[str, str], ...]

    @property
    def format(self) -> str:
        # "=" selects host byte order with standard sizes and no padding
        return "=" + "".join(code for _, code in self.fields)

    @property
    def size(self) -> int:
        return struct.calcsize(self.format)

    def widths(self) -> list[int]:
        return [struct.calcsize(code) for _, code in self.fields]


# ---------------------------------------------------------------------------
# File header layouts (bytes 16.. of the header, after e_ident)
# ---------------------------------------------------------------------------

EHDR32 = RecordLayout((
    ("type", "H"), ("machine", "H"), ("version", "I"),
    ("entry", "I"), ("phoff", "I"), ("shoff", "I"),
    ("flags", "I"), ("ehsize", "H"), ("phentsize", "H"), ("phnum", "H"),
    ("shentsize", "H"), ("shnum", "H"), ("shstrndx", "H"),
))

EHDR64 = RecordLayout((
    ("type", "H"), ("machine", "H"), ("version", "I"),
    ("entry", "Q"), ("phoff", "Q"), ("shoff", "Q"),
    ("flags", "I"), ("ehsize", "H"), ("phentsize", "H"), ("phnum", "H"),
    ("shentsize", "H"), ("shnum", "H"), ("shstrndx", "H"),
))

# ---------------------------------------------------------------------------
# Section header layouts
# ---------------------------------------------------------------------------

SHDR32 = RecordLayout((
    ("sh_name", "I"), ("type", "I"), ("flags", "I"), ("addr", "I"),
    ("offset", "I"), ("size", "I"), ("link", "I"), ("info", "I"),
    ("addralign", "I"), ("entsize", "I"),
))

SHDR64 = RecordLayout((
    ("sh_name", "I"), ("type", "I"), ("flags", "Q"), ("addr", "Q"),
    ("offset", "Q"), ("size", "Q"), ("link", "I"), ("info", "I"),
    ("addralign", "Q"), ("entsize", "Q"),
))


def header_layout(bits: int) -> RecordLayout:
    """File header layout for a 32- or 64-bit file."""
    return EHDR64 if bits == 64 else EHDR32


def section_layout(bits: int) -> RecordLayout:
    """Section header layout for a 32- or 64-bit file."""
    return SHDR64 if bits == 64 else SHDR32


def promote(raw: bytes, layout: RecordLayout) -> dict[str, int]:
    """Unpack *raw* in host byte order into canonical 64-bit field values."""
    values = struct.unpack(layout.format, raw)
    return {name: int(value) for (name, _), value in zip(layout.fields, values)}


def correct_endian(
    values: dict[str, int],
    layout: RecordLayout,
    byte_order: ByteOrder,
) -> dict[str, int]:
    """Byte-reverse every field whose file byte order differs from the host's."""
    if not needs_swap(byte_order):
        return values
    return {
        name: swap(values[name], width)
        for (name, _), width in zip(layout.fields, layout.widths())
    }


def normalize(raw: bytes, layout: RecordLayout, byte_order: ByteOrder) -> dict[str, int]:
    """Promote then endian-correct one record.

    Args:
        raw: Exactly ``layout.size`` bytes of the record as stored on disk.
        layout: On-disk layout of the record.
        byte_order: Byte order declared by the file's EI_DATA.
    """
    return correct_endian(promote(raw, layout), layout, byte_order)
