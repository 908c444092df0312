"""Tests for byte-order helpers."""

import pytest

from elfscope.parsers.endian import host_byte_order, needs_swap, swap, swap16, swap32, swap64


class TestSwap:
    def test_swap16(self):
        assert swap16(0x1234) == 0x3412

    def test_swap32(self):
        assert swap32(0x12345678) == 0x78563412

    def test_swap64(self):
        assert swap64(0x0102030405060708) == 0x0807060504030201

    @pytest.mark.parametrize("value, width", [
        (0, 2), (0xFFFF, 2), (0xBEEF, 2),
        (0, 4), (0xFFFF_FFFF, 4), (0xDEADBEEF, 4),
        (0, 8), (0xFFFF_FFFF_FFFF_FFFF, 8), (0x0000_7FFF_1234_0000, 8),
    ])
    def test_self_inverse(self, value, width):
        assert swap(swap(value, width), width) == value

    def test_swap_uses_field_width(self):
        # a 32-bit offset must not land in the upper half of a 64-bit field
        assert swap(0x40, 4) == 0x40000000
        assert swap(0x40, 8) == 0x4000000000000000

    def test_unsupported_width(self):
        with pytest.raises(ValueError, match="unsupported field width"):
            swap(1, 3)

    def test_value_too_wide(self):
        with pytest.raises(ValueError, match="does not fit"):
            swap(0x1_0000, 2)

    def test_negative_value(self):
        with pytest.raises(ValueError):
            swap(-1, 4)


class TestHostOrder:
    def test_host_order_is_known(self):
        assert host_byte_order() in ("little", "big")

    def test_no_swap_for_host_order(self):
        assert needs_swap(host_byte_order()) is False

    def test_swap_for_foreign_order(self):
        foreign = "big" if host_byte_order() == "little" else "little"
        assert needs_swap(foreign) is True
