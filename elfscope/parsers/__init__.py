"""
Elfscope Parsers
=================

Binary normalisation and parsing engine: byte reader, endian utilities,
header normalizer, section table builder, name resolver, section
locator, and raw extractor.
"""

from elfscope.parsers.extract import dump_selected, extract, find_by_name, select_sections
from elfscope.parsers.header import parse_header, parse_identity, read_header
from elfscope.parsers.reader import ByteReader
from elfscope.parsers.sections import build_sections, read_section_table, resolve_names

__all__ = [
    "ByteReader",
    "parse_identity",
    "parse_header",
    "read_header",
    "build_sections",
    "resolve_names",
    "read_section_table",
    "find_by_name",
    "select_sections",
    "extract",
    "dump_selected",
]
