"""Tests for terminal rendering and JSON reports."""

import json

import pytest

from shared.console import ElfscopeConsole

from elfscope.core.models import FileReport, InspectRequest, SectionDump
from elfscope.output.console import (
    ElfConsoleOutput,
    format_hex_dump,
    format_section_table,
    section_flags_str,
    section_type_name,
)
from elfscope.output.report import build_report, generate_json, reports_to_json
from elfscope.parsers.constants import SHF_ALLOC, SHF_EXECINSTR, SHF_WRITE, SHT_NOBITS, SHT_PROGBITS
from elfscope.parsers.header import parse_header
from elfscope.parsers.reader import ByteReader
from elfscope.parsers.sections import read_section_table

from conftest import TEXT, Section, build_elf


class TestHexDump:
    def test_short_line_is_padded(self):
        assert format_hex_dump(b"ELF\x00") == [
            "  0x00000000 454c4600" + " " * 28 + "ELF."
        ]

    def test_full_line(self):
        assert format_hex_dump(b"0123456789abcdef") == [
            "  0x00000000 30313233 34353637 38396162 63646566 0123456789abcdef"
        ]

    def test_addresses_advance(self):
        lines = format_hex_dump(bytes(range(40)))
        assert len(lines) == 3
        assert lines[1].startswith("  0x00000010 10111213 ")
        assert lines[2].startswith("  0x00000020 20212223 24252627 ")

    def test_non_printable_as_dots(self):
        line = format_hex_dump(b"\x00\x1f A~\x7f\xff")[0]
        assert line.endswith(".. A~..")

    def test_ascii_column_aligned(self):
        full, short = format_hex_dump(b"x" * 17)
        assert full.index("x" * 16) == short.rindex("x")

    def test_custom_layout(self):
        assert format_hex_dump(b"\x01\x02\x03\x04", bytes_per_line=4, group_size=2) == [
            "  0x00000000 0102 0304 ...."
        ]

    def test_empty(self):
        assert format_hex_dump(b"") == []


class TestSectionTable:
    @staticmethod
    def _table(image):
        reader = ByteReader.from_bytes(image.data)
        return read_section_table(reader, parse_header(image.data))

    def test_header_row(self, elf64):
        header = format_section_table(self._table(elf64))[0]
        assert header.split() == [
            "[Nr]", "Name", "Type", "Address", "Off", "Size", "ES", "Flg", "Lk", "Inf", "Al",
        ]

    def test_elf64_row_keeps_every_digit(self, elf64):
        lines = format_section_table(self._table(elf64))
        assert len(lines) == 5
        assert lines[2] == (
            "  [ 1] .text" + " " * 13 + "PROGBITS" + " " * 8
            + "0000000000000000 000040 000006 00  AX  0   0 16"
        )

    def test_elf32_addresses_are_eight_digits(self):
        sections = [Section(".text", flags=SHF_ALLOC, data=TEXT, addr=0x08049000)]
        image = build_elf(sections, bits=32)
        row = format_section_table(self._table(image), bits=32)[2]
        assert " 08049000 000034 000006 " in row

    def test_long_name_is_not_cut(self):
        name = ".gnu.linkonce.this_is_a_long_name"
        image = build_elf([Section(name, data=b"x")])
        row = format_section_table(self._table(image))[2]
        assert f"[ 1] {name} PROGBITS" in row

    def test_column_header_aligns_with_rows(self, elf64):
        header, _, text = format_section_table(self._table(elf64))[:3]
        assert header.index("Address") == text.index("0000000000000000")
        assert header.index("Type") == text.index("PROGBITS")


class TestLabels:
    @pytest.mark.parametrize("flags, expected", [
        (0, ""),
        (SHF_ALLOC | SHF_EXECINSTR, "AX"),
        (SHF_WRITE | SHF_ALLOC, "WA"),
        (0x30, "MS"),
        (0x1000, "x"),
        (SHF_ALLOC | 0x0100_0000, "Ax"),
    ])
    def test_flags(self, flags, expected):
        assert section_flags_str(flags) == expected

    def test_type_names(self):
        assert section_type_name(SHT_PROGBITS) == "PROGBITS"
        assert section_type_name(SHT_NOBITS) == "NOBITS"
        assert section_type_name(0x12345) == "0x12345"


@pytest.fixture
def report(elf64):
    reader = ByteReader.from_bytes(elf64.data)
    header = parse_header(elf64.data)
    return FileReport(
        path="sample.o",
        header=header,
        sections=read_section_table(reader, header),
        dumps=[
            SectionDump(index=1, name=".text", offset=64, data=TEXT),
            SectionDump(index=4, name=".bss", offset=200, data=b""),
        ],
    )


def _render(report, request):
    console = ElfscopeConsole(record=True, width=200)
    ElfConsoleOutput(console=console).display(report, request)
    return console.export_text()


class TestConsoleOutput:
    def test_file_header(self, report):
        text = _render(report, InspectRequest(show_file_header=True))
        assert "ELF Header:" in text
        assert "Magic:   7f 45 4c 46 02 01 01 00" in text
        assert "ELF64" in text
        assert "2's complement, little endian" in text
        assert "REL (Relocatable file)" in text
        assert "Advanced Micro Devices X86-64" in text
        assert "Number of section headers:" in text

    def test_section_table(self, report):
        text = _render(report, InspectRequest(show_section_headers=True))
        assert "There are 4 section headers, starting at offset 0x70:" in text
        assert "Section Headers:" in text
        assert "[Nr]" in text
        assert "[ 1]" in text
        assert ".shstrtab" in text
        assert "PROGBITS" in text
        assert "Key to Flags:" in text

    def test_summary_omitted_with_file_header(self, report):
        request = InspectRequest(show_file_header=True, show_section_headers=True)
        assert "There are" not in _render(report, request)

    def test_hex_dumps(self, report):
        text = _render(report, InspectRequest(dump_sections=(".text", ".bss")))
        assert "Hex dump of section '.text':" in text
        assert "  0x00000000 554889e5 90c3" in text
        assert "Section '.bss' has no data to dump." in text

    def test_failed_report_renders_nothing(self):
        text = _render(FileReport(path="x", error_kind="InvalidMagic", error="bad"),
                       InspectRequest(show_file_header=True))
        assert text == ""


class TestJsonReport:
    def test_structure(self, report):
        doc = build_report([report], version="9.9.9")
        assert doc["report_type"] == "elfscope_inspection"
        assert doc["version"] == "9.9.9"
        (entry,) = doc["files"]
        assert entry["path"] == "sample.o"
        assert entry["header"]["identity"]["bits"] == 64
        assert entry["header"]["identity"]["magic"] == "7f454c46"
        assert [s["name"] for s in entry["sections"]] == ["", ".text", ".data", ".shstrtab"]
        assert entry["dumps"][0]["data"] == TEXT.hex()
        assert entry["error_kind"] is None

    def test_round_trips_through_json(self, report):
        doc = json.loads(reports_to_json([report]))
        assert doc["files"][0]["header"]["shnum"] == 4

    def test_error_report(self):
        failed = FileReport(path="bad", error_kind="TruncatedFile", error="too short")
        entry = build_report([failed])["files"][0]
        assert entry["header"] is None
        assert entry["error_kind"] == "TruncatedFile"

    def test_generate_json(self, report, tmp_path):
        path = generate_json([report], tmp_path / "out" / "report.json")
        assert path.is_file()
        assert json.loads(path.read_text(encoding="utf-8"))["files"][0]["path"] == "sample.o"
