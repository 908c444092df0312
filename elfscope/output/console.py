"""
Elfscope Console Output
========================

Terminal rendering of inspection reports in the spirit of binutils
``readelf``: the ELF header as a labelled listing, the section header
table as fixed-width rows, and section contents as a hex + ASCII dump.
Rows are plain text so that piped or narrow output never truncates a
column.

All value-to-label translation (class, data encoding, OS/ABI, file type,
machine, section type, section flags) happens here; the parsing engine
only ever deals in numbers.

References:
    - Rich library: https://github.com/Textualize/rich
    - GNU Binutils readelf(1).
"""

from __future__ import annotations

from shared.console import ElfscopeConsole

from elfscope.core.models import (
    FileHeader,
    FileReport,
    InspectRequest,
    SectionDump,
    SectionTable,
)
from elfscope.parsers.constants import (
    CLASS_NAMES,
    DATA_NAMES,
    EV_CURRENT,
    MACHINE_NAMES,
    OSABI_NAMES,
    SECTION_FLAG_KEYS,
    SECTION_TYPE_NAMES,
    TYPE_NAMES,
)

_LABEL_WIDTH: int = 35


# ---------------------------------------------------------------------------
# Label helpers
# ---------------------------------------------------------------------------

def section_type_name(sh_type: int) -> str:
    """Readable name of a section type, e.g. ``PROGBITS``."""
    return SECTION_TYPE_NAMES.get(sh_type, f"0x{sh_type:x}")


def section_flags_str(flags: int) -> str:
    """Convert a section flags bitmask to readelf letters, e.g. ``"WAX"``.

    Bits without a letter are shown as a trailing ``x``.
    """
    letters = [key for bit, key in SECTION_FLAG_KEYS if flags & bit]
    known = 0
    for bit, _ in SECTION_FLAG_KEYS:
        known |= bit
    if flags & ~known:
        letters.append("x")
    return "".join(letters)


def format_hex_dump(
    data: bytes,
    bytes_per_line: int = 16,
    group_size: int = 4,
    base_address: int = 0,
) -> list[str]:
    """Render *data* as hex dump lines.

    Each line is ``  0x<address> `` followed by the bytes in hex, a space
    after every *group_size* bytes, padding so that the ASCII column of
    a short last line stays aligned, then the bytes as ASCII with ``.``
    for anything outside 0x20-0x7e.

    Example::

        >>> format_hex_dump(b"ELF\\x00")
        ['  0x00000000 454c4600                            ELF.']
    """
    lines: list[str] = []
    for start in range(0, len(data), bytes_per_line):
        chunk = data[start:start + bytes_per_line]
        parts: list[str] = [f"  0x{base_address + start:08x} "]

        for i in range(bytes_per_line):
            parts.append(f"{chunk[i]:02x}" if i < len(chunk) else "  ")
            if (i + 1) % group_size == 0:
                parts.append(" ")

        parts.append("".join(
            chr(b) if 0x20 <= b <= 0x7E else "." for b in chunk
        ))
        lines.append("".join(parts))
    return lines


def format_section_table(table: SectionTable, bits: int = 64) -> list[str]:
    """Render the section header table as fixed-width readelf-style lines.

    Address, size, and offset columns always carry every digit; a value
    or name wider than its column pushes the rest of the row right
    instead of being cut.

    Args:
        table: Section table with resolved names.
        bits: Word width of the file; 64-bit files get 16-digit addresses.
    """
    aw = 16 if bits == 64 else 8
    lines = [
        f"  {'[Nr]':<5}{'Name':<18}{'Type':<16}{'Address':<{aw + 1}}"
        f"{'Off':<7}{'Size':<7}{'ES':<3}{'Flg':>3} {'Lk':>2} {'Inf':>3} {'Al':>2}"
    ]
    for entry in table:
        lines.append(
            f"  [{entry.index:2d}] {entry.name:<17} "
            f"{section_type_name(entry.type):<15} "
            f"{entry.addr:0{aw}x} {entry.offset:06x} {entry.size:06x} "
            f"{entry.entsize:02x} {section_flags_str(entry.flags):>3} "
            f"{entry.link:>2} {entry.info:>3} {entry.addralign:>2}"
        )
    return lines


# ---------------------------------------------------------------------------
# ElfConsoleOutput
# ---------------------------------------------------------------------------

class ElfConsoleOutput:
    """Rich terminal display for Elfscope inspection reports.

    Usage::

        output = ElfConsoleOutput()
        output.display(report, request)
    """

    def __init__(
        self,
        console: ElfscopeConsole | None = None,
        bytes_per_line: int = 16,
        group_size: int = 4,
    ) -> None:
        """Initialise the output renderer.

        Args:
            console: Optional ElfscopeConsole instance.  A new one is
                     created if not provided.
            bytes_per_line: Bytes per hex dump line.
            group_size: Bytes per space-separated hex group.
        """
        self._console: ElfscopeConsole = console or ElfscopeConsole()
        self._bytes_per_line = bytes_per_line
        self._group_size = group_size

    def display(self, report: FileReport, request: InspectRequest) -> None:
        """Render whatever *request* asked for from a successful *report*."""
        header = report.header
        if header is None:
            return

        if request.show_file_header:
            self.display_file_header(header)

        if request.show_section_headers and report.sections is not None:
            if not request.show_file_header:
                self.display_section_summary(header)
            self.display_sections(report.sections, header.identity.bits)

        for dump in report.dumps:
            self.display_hex_dump(dump)

    # ------------------------------------------------------------------ #
    #  File header
    # ------------------------------------------------------------------ #

    def _field(self, label: str, value: str) -> None:
        self._console.plain(f"  {(label + ':').ljust(_LABEL_WIDTH)}{value}")

    def display_file_header(self, header: FileHeader) -> None:
        """Display the ELF header as a labelled listing."""
        ident = header.identity
        self._console.section("ELF Header:")
        self._console.plain("  Magic:   " + " ".join(f"{b:02x}" for b in ident.ident))

        self._field("Class", CLASS_NAMES.get(ident.ei_class, f"<unknown: {ident.ei_class:x}>"))
        self._field("Data", DATA_NAMES.get(ident.ei_data, f"<unknown: {ident.ei_data:x}>"))
        version = f"{ident.version} (current)" if ident.version == EV_CURRENT else str(ident.version)
        self._field("Version", version)
        self._field("OS/ABI", OSABI_NAMES.get(ident.osabi, f"<unknown: {ident.osabi:x}>"))
        self._field("ABI Version", str(ident.abi_version))
        self._field("Type", TYPE_NAMES.get(header.type, f"<unknown>: {header.type:x}"))
        self._field("Machine", MACHINE_NAMES.get(header.machine, f"<unknown>: 0x{header.machine:x}"))
        self._field("Version", f"0x{header.version:x}")
        self._field("Entry point address", f"0x{header.entry:x}")
        self._field("Start of program headers", f"{header.phoff} (bytes into file)")
        self._field("Start of section headers", f"{header.shoff} (bytes into file)")
        self._field("Flags", f"0x{header.flags:x}")
        self._field("Size of this header", f"{header.ehsize} (bytes)")
        self._field("Size of program headers", f"{header.phentsize} (bytes)")
        self._field("Number of program headers", str(header.phnum))
        self._field("Size of section headers", f"{header.shentsize} (bytes)")
        self._field("Number of section headers", str(header.shnum))
        self._field("Section header string table index", str(header.shstrndx))
        self._console.blank()

    # ------------------------------------------------------------------ #
    #  Section headers
    # ------------------------------------------------------------------ #

    def display_section_summary(self, header: FileHeader) -> None:
        """Print the one-line preamble shown when the ELF header is not."""
        self._console.plain(
            f"There are {header.shnum} section headers, "
            f"starting at offset 0x{header.shoff:x}:"
        )
        self._console.blank()

    def display_sections(self, table: SectionTable, bits: int = 64) -> None:
        """Display the section header table.

        Args:
            table: Section table with resolved names.
            bits: Word width of the file; selects address column width.
        """
        self._console.section("Section Headers:")
        for line in format_section_table(table, bits):
            self._console.plain(line)
        self._console.plain(
            "Key to Flags:\n"
            "  W (write), A (alloc), X (execute), M (merge), S (strings), "
            "I (info),\n"
            "  L (link order), O (extra OS processing required), G (group), "
            "T (TLS),\n"
            "  C (compressed), x (unknown)"
        )
        self._console.blank()

    # ------------------------------------------------------------------ #
    #  Hex dump
    # ------------------------------------------------------------------ #

    def display_hex_dump(self, dump: SectionDump) -> None:
        """Display one extracted section, or note that it is empty."""
        if dump.size == 0:
            self._console.plain(f"Section '{dump.name}' has no data to dump.")
            return

        self._console.blank()
        self._console.plain(f"Hex dump of section '{dump.name}':")
        for line in format_hex_dump(dump.data, self._bytes_per_line, self._group_size):
            self._console.plain(line)
        self._console.blank()
