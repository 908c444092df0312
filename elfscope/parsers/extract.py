"""
Section Locator and Raw Extractor
==================================

Maps user-supplied section names onto table entries and streams the
exact on-disk bytes of the selected sections.
"""

from __future__ import annotations

from typing import Iterable, Optional

from elfscope.core.errors import ShortRead
from elfscope.core.models import (
    SectionDump,
    SectionHeaderEntry,
    SectionSelection,
    SectionTable,
)
from elfscope.parsers.constants import SHT_NOBITS
from elfscope.parsers.reader import ByteReader


def find_by_name(table: SectionTable, name: str) -> Optional[int]:
    """Index of the first section named exactly *name*, or ``None``.

    Section names need not be unique; the lowest index wins.
    """
    for entry in table:
        if entry.name == name:
            return entry.index
    return None


def select_sections(table: SectionTable, names: Iterable[str]) -> SectionSelection:
    """Resolve requested section names into a selection.

    Unknown names are collected in ``missing`` (once each, in request
    order) rather than raised.
    """
    indices: set[int] = set()
    missing: list[str] = []
    for name in names:
        index = find_by_name(table, name)
        if index is None:
            if name not in missing:
                missing.append(name)
        else:
            indices.add(index)
    return SectionSelection(indices=frozenset(indices), missing=missing)


def extract(reader: ByteReader, entry: SectionHeaderEntry) -> bytes:
    """Return exactly ``entry.size`` bytes starting at ``entry.offset``.

    Zero-size sections and ``SHT_NOBITS`` sections (which occupy no
    file space) yield ``b""``.

    Raises:
        ShortRead: The file ends before ``offset + size``.
    """
    if entry.size == 0 or entry.type == SHT_NOBITS:
        return b""
    return reader.read_exact(
        entry.offset,
        entry.size,
        ShortRead,
        what=f"section '{entry.name}'",
    )


def dump_selected(
    reader: ByteReader,
    table: SectionTable,
    selection: SectionSelection,
) -> list[SectionDump]:
    """Extract every selected section, in table order."""
    dumps: list[SectionDump] = []
    for entry in table:
        if entry.index not in selection:
            continue
        dumps.append(SectionDump(
            index=entry.index,
            name=entry.name,
            offset=entry.offset,
            data=extract(reader, entry),
            nobits=entry.type == SHT_NOBITS,
        ))
    return dumps
