"""
Shared fixtures: a small in-memory ELF image builder.

Images are laid out as::

    file header | section bodies (table order) | pad to 8 | section headers

Index 0 is always the ``SHT_NULL`` entry.  The ``.shstrtab`` section is
appended last unless ``strtab_index`` places it elsewhere.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, Optional, Sequence

import pytest

from shared.logger import ElfscopeLogger

from elfscope.parsers.constants import (
    EM_X86_64,
    ET_REL,
    SHF_ALLOC,
    SHF_EXECINSTR,
    SHF_WRITE,
    SHT_NOBITS,
    SHT_NULL,
    SHT_PROGBITS,
    SHT_STRTAB,
)

_EHDR = {32: "HHIIIIIHHHHHH", 64: "HHIQQQIHHHHHH"}
_SHDR = {32: "IIIIIIIIII", 64: "IIQQQQIIQQ"}


@dataclass
class Section:
    """One section to place in a built image."""

    name: str
    type: int = SHT_PROGBITS
    flags: int = 0
    data: bytes = b""
    addr: int = 0
    size: Optional[int] = None  # declared sh_size; defaults to len(data)
    addralign: int = 1
    entsize: int = 0


class ElfImage(NamedTuple):
    data: bytes
    offsets: dict[str, int]
    shoff: int
    shnum: int


def build_elf(
    sections: Sequence[Section],
    *,
    bits: int = 64,
    byte_order: str = "little",
    strtab_index: Optional[int] = None,
    shstrndx: Optional[int] = None,
    shentsize: Optional[int] = None,
    machine: int = EM_X86_64,
    e_type: int = ET_REL,
    entry: int = 0,
) -> ElfImage:
    """Assemble an ELF image with the given sections."""
    prefix = "<" if byte_order == "little" else ">"
    ehsize = 52 if bits == 32 else 64
    record_size = 40 if bits == 32 else 64
    entsize = record_size if shentsize is None else shentsize

    table = [s for s in sections]
    strtab = Section(".shstrtab", type=SHT_STRTAB)
    position = len(table) if strtab_index is None else strtab_index - 1
    table.insert(position, strtab)
    table.insert(0, Section("", type=SHT_NULL))

    names = b"\x00"
    name_offsets: dict[int, int] = {0: 0}
    for index, section in enumerate(table[1:], start=1):
        name_offsets[index] = len(names)
        names += section.name.encode("ascii") + b"\x00"
    strtab.data = names

    body = bytearray()
    offsets: dict[str, int] = {}
    section_offsets: list[int] = [0]
    for section in table[1:]:
        offset = ehsize + len(body)
        offsets.setdefault(section.name, offset)
        section_offsets.append(offset)
        if section.type != SHT_NOBITS:
            body += section.data

    shoff = ehsize + len(body)
    shoff += -shoff % 8
    body += b"\x00" * (shoff - ehsize - len(body))

    records = bytearray()
    for index, section in enumerate(table):
        size = len(section.data) if section.size is None else section.size
        record = struct.pack(
            prefix + _SHDR[bits],
            name_offsets[index], section.type, section.flags, section.addr,
            section_offsets[index] if index else 0, size if index else 0,
            0, 0, section.addralign if index else 0, section.entsize,
        )
        records += record[:entsize].ljust(entsize, b"\x00")

    ident = (
        b"\x7fELF"
        + bytes([1 if bits == 32 else 2, 1 if byte_order == "little" else 2, 1, 0, 0])
        + b"\x00" * 7
    )
    header = ident + struct.pack(
        prefix + _EHDR[bits],
        e_type, machine, 1, entry, 0, shoff,
        0, ehsize, 0, 0, entsize, len(table),
        table.index(strtab) if shstrndx is None else shstrndx,
    )

    return ElfImage(bytes(header + body + records), offsets, shoff, len(table))


TEXT = b"\x55\x48\x89\xe5\x90\xc3"
DATA = b"hello, world\x00\x00\x00\x00"


def standard_sections() -> list[Section]:
    """``.text`` and ``.data``; ``.shstrtab`` is added by the builder."""
    return [
        Section(".text", flags=SHF_ALLOC | SHF_EXECINSTR, data=TEXT, addralign=16),
        Section(".data", flags=SHF_ALLOC | SHF_WRITE, data=DATA, addralign=8),
    ]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def elf64() -> ElfImage:
    return build_elf(standard_sections())


@pytest.fixture
def elf_file(tmp_path: Path, elf64: ElfImage) -> Path:
    path = tmp_path / "sample.o"
    path.write_bytes(elf64.data)
    return path


@pytest.fixture
def not_elf_file(tmp_path: Path) -> Path:
    path = tmp_path / "notes.txt"
    path.write_bytes(b"just some text, definitely not an object file\n")
    return path


@pytest.fixture
def quiet_logger() -> ElfscopeLogger:
    return ElfscopeLogger("test", log_level="CRITICAL", console_output=False)
