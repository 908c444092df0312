"""Elfscope output renderers: terminal display and JSON reports."""

from elfscope.output.console import ElfConsoleOutput, format_hex_dump, format_section_table
from elfscope.output.report import generate_json, reports_to_json

__all__ = [
    "ElfConsoleOutput",
    "format_hex_dump",
    "format_section_table",
    "generate_json",
    "reports_to_json",
]
