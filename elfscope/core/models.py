"""
Elfscope Data Models
=====================

Pydantic-based data models for the canonical, normalised view of an ELF
file produced by the parsing engine.

Whatever the on-disk word width (ELF32 / ELF64) or byte order (LSB /
MSB), every numeric field below holds the value a native 64-bit reader
would see: addresses and offsets zero-extended to 64 bits, all
multi-byte fields already corrected to host byte order.

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2.
    - System V Application Binary Interface, Edition 4.1, chapter 4.
"""

from __future__ import annotations

from typing import Iterator, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_serializer


# ---------------------------------------------------------------------------
# File identity and header
# ---------------------------------------------------------------------------

class FileIdentity(BaseModel):
    """The ``e_ident`` block: the first 16 bytes of every ELF file.

    Attributes:
        ident: The raw 16 identification bytes, kept for display.
        magic: ``b"\\x7fELF"`` on every accepted file.
        bits: Word width, 32 or 64 (from EI_CLASS).
        byte_order: ``"little"`` or ``"big"`` (from EI_DATA).
        version: EI_VERSION.
        osabi: EI_OSABI.
        abi_version: EI_ABIVERSION.
    """
    model_config = ConfigDict(frozen=True)

    ident: bytes
    magic: bytes
    bits: Literal[32, 64]
    byte_order: Literal["little", "big"]
    version: int = 0
    osabi: int = 0
    abi_version: int = 0

    @property
    def ei_class(self) -> int:
        """Raw EI_CLASS byte."""
        return self.ident[4]

    @property
    def ei_data(self) -> int:
        """Raw EI_DATA byte."""
        return self.ident[5]

    @field_serializer("ident", "magic", when_used="json")
    def _bytes_as_hex(self, value: bytes) -> str:
        return value.hex()


class FileHeader(BaseModel):
    """Canonical ELF file header (``Elf64_Ehdr`` shape, host byte order).

    Created once per file by :func:`elfscope.parsers.header.parse_header`
    and never mutated afterwards.
    """
    model_config = ConfigDict(frozen=True)

    identity: FileIdentity
    type: int = 0
    machine: int = 0
    version: int = 0
    entry: int = 0
    phoff: int = 0
    shoff: int = 0
    flags: int = 0
    ehsize: int = 0
    phentsize: int = 0
    phnum: int = 0
    shentsize: int = 0
    shnum: int = 0
    shstrndx: int = 0


# ---------------------------------------------------------------------------
# Section header table
# ---------------------------------------------------------------------------

class SectionHeaderEntry(BaseModel):
    """One normalised section header record.

    Attributes:
        index: Ordinal position in the section header table (0-based).
        sh_name: Byte offset of the name in the section-name string table.
        type: ``sh_type``.
        flags: ``sh_flags``.
        addr: Virtual address when loaded into memory.
        offset: File offset of the section body.
        size: Size of the section body in bytes.
        link: ``sh_link``.
        info: ``sh_info``.
        addralign: Address alignment constraint.
        entsize: Size of fixed-size entries, or 0.
        name: Display name resolved from the string table.
    """
    index: int
    sh_name: int = 0
    type: int = 0
    flags: int = 0
    addr: int = 0
    offset: int = 0
    size: int = 0
    link: int = 0
    info: int = 0
    addralign: int = 0
    entsize: int = 0
    name: str = ""


class SectionTable(RootModel[list[SectionHeaderEntry]]):
    """Section header entries in on-disk order, indexable by section number."""
    root: list[SectionHeaderEntry] = Field(default_factory=list)

    def __iter__(self) -> Iterator[SectionHeaderEntry]:  # type: ignore[override]
        return iter(self.root)

    def __getitem__(self, index: int) -> SectionHeaderEntry:
        return self.root[index]

    def __len__(self) -> int:
        return len(self.root)

    def names(self) -> list[str]:
        """Resolved names in table order."""
        return [entry.name for entry in self.root]


class SectionSelection(BaseModel):
    """Sections marked for extraction, plus the names that did not resolve.

    Attributes:
        indices: Table indices of the selected sections.
        missing: Requested names with no matching section, in request order.
    """
    indices: frozenset[int] = Field(default_factory=frozenset)
    missing: list[str] = Field(default_factory=list)

    def __contains__(self, index: object) -> bool:
        return index in self.indices


# ---------------------------------------------------------------------------
# Requests and results
# ---------------------------------------------------------------------------

class InspectRequest(BaseModel):
    """What to produce for each file.

    Attributes:
        show_file_header: Report the ELF file header.
        show_section_headers: Report the section header table.
        dump_sections: Names of sections whose raw bytes are wanted.
    """
    model_config = ConfigDict(frozen=True)

    show_file_header: bool = False
    show_section_headers: bool = False
    dump_sections: tuple[str, ...] = ()

    @property
    def needs_sections(self) -> bool:
        """Whether the section header table has to be read at all."""
        return self.show_section_headers or bool(self.dump_sections)

    @property
    def is_empty(self) -> bool:
        """``True`` when nothing at all was requested."""
        return not (self.show_file_header or self.needs_sections)


class SectionDump(BaseModel):
    """Raw bytes of one extracted section.

    An empty ``data`` is the explicit "nothing to dump" marker for
    zero-size and ``SHT_NOBITS`` sections; ``nobits`` tells the two apart.
    """
    index: int
    name: str
    offset: int = 0
    data: bytes = b""
    nobits: bool = False

    @property
    def size(self) -> int:
        return len(self.data)

    @field_serializer("data", when_used="json")
    def _data_as_hex(self, value: bytes) -> str:
        return value.hex()


class FileReport(BaseModel):
    """Outcome of inspecting a single file.

    Attributes:
        path: Path of the inspected file as given by the caller.
        header: Normalised file header (``None`` if parsing failed first).
        sections: Section table with resolved names, when requested.
        dumps: Extracted sections, in table order.
        missing_sections: Requested section names that do not exist.
        error_kind: :attr:`ElfError.kind` of the failure, if any.
        error: Human-readable failure message, if any.
    """
    path: str
    header: Optional[FileHeader] = None
    sections: Optional[SectionTable] = None
    dumps: list[SectionDump] = Field(default_factory=list)
    missing_sections: list[str] = Field(default_factory=list)
    error_kind: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None
