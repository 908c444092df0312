"""
ELF Header Normalizer
======================

Parses the identification block and the file header, validating the
magic number before trusting anything else, and produces the canonical
:class:`~elfscope.core.models.FileHeader` (64-bit fields, host byte
order) regardless of the file's own word width and byte order.
"""

from __future__ import annotations

from elfscope.core.errors import InvalidMagic, TruncatedFile, UnsupportedFormat
from elfscope.core.models import FileHeader, FileIdentity
from elfscope.parsers.constants import (
    EI_ABIVERSION,
    EI_CLASS,
    EI_DATA,
    EI_NIDENT,
    EI_OSABI,
    EI_VERSION,
    ELF64_EHDR_SIZE,
    ELF_MAGIC,
    ELFCLASS32,
    ELFCLASS64,
    ELFDATA2LSB,
    ELFDATA2MSB,
)
from elfscope.parsers.layout import header_layout, normalize
from elfscope.parsers.reader import ByteReader

_BITS: dict[int, int] = {ELFCLASS32: 32, ELFCLASS64: 64}
_BYTE_ORDER: dict[int, str] = {ELFDATA2LSB: "little", ELFDATA2MSB: "big"}


def parse_identity(data: bytes) -> FileIdentity:
    """Parse the 16-byte ``e_ident`` block.

    Raises:
        InvalidMagic: The data does not start with ``7F 45 4C 46``.
        TruncatedFile: Fewer than 16 bytes follow a valid magic.
        UnsupportedFormat: EI_CLASS or EI_DATA is not a known value.
    """
    if data[:4] != ELF_MAGIC:
        raise InvalidMagic(
            "Not an ELF file - it has the wrong magic bytes at the start"
        )
    if len(data) < EI_NIDENT:
        raise TruncatedFile(
            f"identification block needs {EI_NIDENT} bytes, only {len(data)} available"
        )

    ei_class = data[EI_CLASS]
    ei_data = data[EI_DATA]
    if ei_class not in _BITS:
        raise UnsupportedFormat(f"unsupported EI_CLASS value {ei_class}")
    if ei_data not in _BYTE_ORDER:
        raise UnsupportedFormat(f"unsupported EI_DATA value {ei_data}")

    return FileIdentity(
        ident=bytes(data[:EI_NIDENT]),
        magic=bytes(data[:4]),
        bits=_BITS[ei_class],
        byte_order=_BYTE_ORDER[ei_data],
        version=data[EI_VERSION],
        osabi=data[EI_OSABI],
        abi_version=data[EI_ABIVERSION],
    )


def parse_header(data: bytes) -> FileHeader:
    """Parse and normalise an ELF file header.

    Args:
        data: The leading bytes of the file; 64 are read by
              :func:`read_header`, 52 suffice for ELF32.

    Returns:
        The canonical header.

    Raises:
        InvalidMagic: Checked first, before width or byte order are read.
        TruncatedFile: The data is shorter than the identified layout.
        UnsupportedFormat: Unknown EI_CLASS / EI_DATA.
    """
    identity = parse_identity(data)
    layout = header_layout(identity.bits)
    end = EI_NIDENT + layout.size
    if len(data) < end:
        raise TruncatedFile(
            f"ELF{identity.bits} header needs {end} bytes, only {len(data)} available"
        )

    fields = normalize(bytes(data[EI_NIDENT:end]), layout, identity.byte_order)
    return FileHeader(identity=identity, **fields)


def read_header(reader: ByteReader) -> FileHeader:
    """Read the first 64 bytes of *reader* and parse them."""
    return parse_header(reader.read_at(0, ELF64_EHDR_SIZE))
