"""
Elfscope -- ELF File Inspector
===============================

Read-only introspection of ELF object files: the file header, the
section header table, and the raw bytes of named sections.

Every file, 32- or 64-bit, little- or big-endian, is normalised into one
canonical in-memory form (64-bit fields in host byte order) before
anything downstream looks at it.

Capabilities:
    - ELF identification and file header parsing with magic validation
    - 32-to-64-bit field promotion and per-field endian correction
    - Section header table parsing with name resolution via e_shstrndx
    - Section lookup by name and exact-length raw extraction
    - readelf-style terminal output and JSON reports

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2.
    - System V Application Binary Interface, Edition 4.1.
"""

__version__ = "1.0.0"

from elfscope.core.engine import InspectEngine
from elfscope.core.models import FileReport, InspectRequest
from elfscope.output.console import ElfConsoleOutput

__all__ = [
    "InspectEngine",
    "InspectRequest",
    "FileReport",
    "ElfConsoleOutput",
]
