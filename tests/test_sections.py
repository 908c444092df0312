"""Tests for the section table builder and the name resolver."""

import pytest

from elfscope.core.errors import MissingStringTable, TruncatedFile, UnterminatedName
from elfscope.core.models import SectionTable
from elfscope.parsers.constants import SHF_ALLOC, SHF_EXECINSTR, SHF_WRITE, SHT_NULL, SHT_PROGBITS, SHT_STRTAB
from elfscope.parsers.header import parse_header
from elfscope.parsers.reader import ByteReader
from elfscope.parsers.sections import build_sections, read_section_table, resolve_names

from conftest import DATA, TEXT, ElfImage, Section, build_elf, standard_sections


def _table(image, **kwargs):
    reader = ByteReader.from_bytes(image.data)
    header = parse_header(image.data)
    return read_section_table(reader, header, **kwargs)


class TestBuildSections:
    def test_three_sections_in_file_order(self, elf64):
        table = _table(elf64)

        assert len(table) == 4
        assert table.names() == ["", ".text", ".data", ".shstrtab"]
        assert [entry.index for entry in table] == [0, 1, 2, 3]

        assert table[0].type == SHT_NULL
        text, data, strtab = table[1], table[2], table[3]
        assert text.offset == 64 == elf64.offsets[".text"]
        assert text.size == len(TEXT)
        assert text.flags == SHF_ALLOC | SHF_EXECINSTR
        assert text.addralign == 16
        assert data.offset == 64 + len(TEXT)
        assert data.size == len(DATA)
        assert data.flags == SHF_ALLOC | SHF_WRITE
        assert strtab.type == SHT_STRTAB
        assert strtab.offset == 64 + len(TEXT) + len(DATA)

    def test_length_equals_shnum(self, elf64):
        header = parse_header(elf64.data)
        table = build_sections(ByteReader.from_bytes(elf64.data), header)
        assert len(table) == header.shnum

    def test_names_empty_before_resolution(self, elf64):
        header = parse_header(elf64.data)
        table = build_sections(ByteReader.from_bytes(elf64.data), header)
        assert all(entry.name == "" for entry in table)
        assert table[1].sh_name == 1

    def test_zero_sections(self, elf64):
        data = bytearray(elf64.data)
        data[60:62] = b"\x00\x00"  # e_shnum
        data[62:64] = b"\x00\x00"  # e_shstrndx
        assert len(_table(ElfImage(bytes(data), {}, 0, 0))) == 0

    def test_truncated_table(self, elf64):
        cut = elf64.data[:elf64.shoff + 100]
        with pytest.raises(TruncatedFile, match="section header table"):
            _table(ElfImage(cut, {}, 0, 0))

    def test_elf32(self):
        image = build_elf(standard_sections(), bits=32)
        table = _table(image)
        assert table.names() == ["", ".text", ".data", ".shstrtab"]
        assert table[1].offset == 52
        assert table[2].size == len(DATA)

    @pytest.mark.parametrize("bits", [32, 64])
    def test_big_endian(self, bits):
        little = _table(build_elf(standard_sections(), bits=bits))
        big = _table(build_elf(standard_sections(), bits=bits, byte_order="big"))
        assert big.model_dump() == little.model_dump()

    def test_short_records_are_zero_padded(self):
        sections = [Section(".text", data=TEXT, addralign=16, entsize=8)]
        image = build_elf(sections, shentsize=56)  # drops sh_entsize
        table = _table(image)
        assert table.names() == ["", ".text", ".shstrtab"]
        assert table[1].addralign == 16
        assert table[1].entsize == 0

    def test_long_records_ignore_trailing_bytes(self):
        sections = [Section(".text", data=TEXT, addralign=16, entsize=8)]
        image = build_elf(sections, shentsize=80)
        table = _table(image)
        assert table.names() == ["", ".text", ".shstrtab"]
        assert table[1].entsize == 8
        assert table[1].offset == 64


class TestResolveNames:
    def test_string_table_not_last(self):
        image = build_elf(standard_sections(), strtab_index=1)
        table = _table(image)
        assert table.names() == ["", ".shstrtab", ".text", ".data"]
        assert table[2].size == len(TEXT)

    def test_string_table_not_last_elf32_big_endian(self):
        image = build_elf(standard_sections(), bits=32, byte_order="big", strtab_index=2)
        table = _table(image)
        assert table.names() == ["", ".text", ".shstrtab", ".data"]

    @pytest.mark.parametrize("shstrndx", [0, 4, 0xFFFF])
    def test_invalid_shstrndx(self, shstrndx):
        image = build_elf(standard_sections(), shstrndx=shstrndx)
        with pytest.raises(MissingStringTable):
            _table(image)

    def test_unterminated_name(self):
        sections = [Section(".a_rather_long_section_name", type=SHT_PROGBITS, data=TEXT)]
        image = build_elf(sections)
        with pytest.raises(UnterminatedName):
            _table(image, max_name_length=8)

    def test_name_at_limit(self):
        # ".shstrtab" is nine bytes; the NUL is the tenth
        table = _table(build_elf(standard_sections()), max_name_length=10)
        assert table[3].name == ".shstrtab"
        with pytest.raises(UnterminatedName, match=r"section \[3\]"):
            _table(build_elf(standard_sections()), max_name_length=9)

    def test_duplicate_names_kept(self):
        sections = [Section(".note", data=b"a"), Section(".note", data=b"bb")]
        table = _table(build_elf(sections))
        assert table.names() == ["", ".note", ".note", ".shstrtab"]

    def test_resolve_on_empty_table(self, elf64):
        table = SectionTable([])
        header = parse_header(elf64.data)
        resolve_names(table, ByteReader.from_bytes(elf64.data), header)
        assert len(table) == 0
