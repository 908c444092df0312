"""
Section Table Builder and Name Resolver
========================================

Reads the ``e_shnum`` section header records at ``e_shoff``, normalises
each one the same way as the file header, and resolves every section's
name through the section-name string table designated by
``e_shstrndx``.
"""

from __future__ import annotations

from elfscope.core.errors import MissingStringTable, TruncatedFile, UnterminatedName
from elfscope.core.models import FileHeader, SectionHeaderEntry, SectionTable
from elfscope.parsers.constants import SHN_UNDEF
from elfscope.parsers.layout import normalize, section_layout
from elfscope.parsers.reader import ByteReader

# Default bound for the NUL scan of a single section name
DEFAULT_MAX_NAME_LENGTH: int = 128


def build_sections(reader: ByteReader, header: FileHeader) -> SectionTable:
    """Read and normalise the section header table.

    Each record is taken as ``e_shentsize`` raw bytes.  A record shorter
    than the layout's record size is zero-padded, a longer one has its
    trailing bytes ignored.

    Args:
        reader: Reader over the file described by *header*.
        header: The file's canonical header.

    Returns:
        A table of exactly ``header.shnum`` entries in file order.  Names
        are left empty; see :func:`resolve_names`.

    Raises:
        TruncatedFile: The file ends before the last record.
    """
    if header.shnum == 0:
        return SectionTable([])

    layout = section_layout(header.identity.bits)
    entsize = header.shentsize
    raw = reader.read_exact(
        header.shoff,
        header.shnum * entsize,
        TruncatedFile,
        what=f"section header table ({header.shnum} x {entsize} bytes)",
    )

    entries: list[SectionHeaderEntry] = []
    for index in range(header.shnum):
        record = raw[index * entsize:(index + 1) * entsize]
        record = record[:layout.size].ljust(layout.size, b"\x00")
        fields = normalize(record, layout, header.identity.byte_order)
        entries.append(SectionHeaderEntry(index=index, **fields))

    return SectionTable(entries)


def resolve_names(
    table: SectionTable,
    reader: ByteReader,
    header: FileHeader,
    max_length: int = DEFAULT_MAX_NAME_LENGTH,
) -> None:
    """Fill in ``name`` on every entry of *table*.

    The names live in the section at index ``header.shstrndx``; each
    entry's ``sh_name`` is a byte offset into that section's file bytes,
    pointing at a NUL-terminated string.

    Raises:
        MissingStringTable: ``shstrndx`` is ``SHN_UNDEF`` or out of range.
        UnterminatedName: No NUL within *max_length* bytes or before EOF.
    """
    if len(table) == 0:
        return

    strndx = header.shstrndx
    if strndx == SHN_UNDEF or strndx >= len(table):
        raise MissingStringTable(
            f"section name string table index {strndx} is not a valid "
            f"section (table has {len(table)} entries)"
        )

    base = table[strndx].offset
    for entry in table:
        raw = reader.read_until(base + entry.sh_name, b"\x00", max_length)
        if raw is None:
            raise UnterminatedName(
                f"name of section [{entry.index}] at offset "
                f"{base + entry.sh_name:#x} has no NUL within {max_length} bytes"
            )
        entry.name = raw.decode("ascii", errors="replace")


def read_section_table(
    reader: ByteReader,
    header: FileHeader,
    max_name_length: int = DEFAULT_MAX_NAME_LENGTH,
) -> SectionTable:
    """Build the section table and resolve its names in one step."""
    table = build_sections(reader, header)
    resolve_names(table, reader, header, max_name_length)
    return table
