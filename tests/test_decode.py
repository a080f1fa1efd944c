"""Tests for instruction decoding and disassembly."""

import pytest
from chipjax import decode, disassemble


class TestDecode:
    """Field extraction from raw instruction words."""

    def test_decode_fields(self):
        decoded = decode(0x1234)
        assert decoded.raw == 0x1234
        assert decoded.category == 0x1
        assert decoded.x == 0x2
        assert decoded.y == 0x3
        assert decoded.n == 0x4
        assert decoded.nn == 0x34
        assert decoded.nnn == 0x234

    def test_decode_extremes(self):
        """Every 16-bit word decodes, including all-zero and all-one."""
        zero = decode(0x0000)
        assert (zero.category, zero.x, zero.y, zero.n, zero.nn, zero.nnn) == (0, 0, 0, 0, 0, 0)

        ones = decode(0xFFFF)
        assert (ones.category, ones.x, ones.y, ones.n, ones.nn, ones.nnn) == (0xF, 0xF, 0xF, 0xF, 0xFF, 0xFFF)

    def test_decode_draw(self):
        decoded = decode(0xD01F)
        assert decoded.category == 0xD
        assert decoded.x == 0
        assert decoded.y == 1
        assert decoded.n == 0xF


class TestDisassemble:
    """Mnemonics used in traces and error reports."""

    @pytest.mark.parametrize("instruction, expected", [
        (0x00E0, "CLS"),
        (0x00EE, "RET"),
        (0x1228, "JP $228"),
        (0x2300, "CALL $300"),
        (0x3A42, "SE VA, $42"),
        (0x4A42, "SNE VA, $42"),
        (0x5120, "SE V1, V2"),
        (0x600A, "LD V0, $0A"),
        (0x7105, "ADD V1, $05"),
        (0x8124, "ADD V1, V2"),
        (0x812E, "SHL V1, V2"),
        (0x9780, "SNE V7, V8"),
        (0xA123, "LD I, $123"),
        (0xB250, "JP V0, $250"),
        (0xC1FF, "RND V1, $FF"),
        (0xD015, "DRW V0, V1, 5"),
        (0xE59E, "SKP V5"),
        (0xE5A1, "SKNP V5"),
        (0xF30A, "LD V3, K"),
        (0xF233, "LD B, V2"),
        (0xFF65, "LD VF, [I]"),
    ])
    def test_known_instructions(self, instruction, expected):
        assert disassemble(instruction) == expected

    @pytest.mark.parametrize("instruction", [0x0123, 0x8128, 0xE000, 0xF0FF])
    def test_unknown_instructions(self, instruction):
        assert disassemble(instruction) == f"??? ${instruction:04X}"
