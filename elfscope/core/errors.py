"""
Elfscope Error Hierarchy
=========================

Every failure the parsing engine can report for a single file.  All of
them are deterministic consequences of malformed, truncated, or
unreadable input: processing of the affected file stops, nothing is
retried.

The ``kind`` class attribute is a stable identifier used in logs and
JSON reports.
"""

from __future__ import annotations


class ElfError(Exception):
    """Base class for all per-file inspection failures."""

    kind: str = "ElfError"


class InvalidMagic(ElfError):
    """The first four bytes are not ``7F 45 4C 46``: the file is not ELF."""

    kind = "InvalidMagic"


class TruncatedFile(ElfError):
    """Fewer bytes are available than a declared count or layout requires."""

    kind = "TruncatedFile"


class UnsupportedFormat(ElfError):
    """EI_CLASS or EI_DATA holds a value other than the 32/64-bit LSB/MSB ones."""

    kind = "UnsupportedFormat"


class MissingStringTable(ElfError):
    """``e_shstrndx`` does not designate a section of the table."""

    kind = "MissingStringTable"


class UnterminatedName(ElfError):
    """A section name has no NUL terminator within the scan limit."""

    kind = "UnterminatedName"


class ShortRead(ElfError):
    """A section body is shorter on disk than its declared ``sh_size``."""

    kind = "ShortRead"


class IOFailure(ElfError):
    """Open, seek, or read failed at the operating-system level."""

    kind = "IOFailure"


__all__ = [
    "ElfError",
    "InvalidMagic",
    "TruncatedFile",
    "UnsupportedFormat",
    "MissingStringTable",
    "UnterminatedName",
    "ShortRead",
    "IOFailure",
]
