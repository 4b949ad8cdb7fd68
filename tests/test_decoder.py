"""
Decoder Tests for CHIP-8 VM.

Field extraction, opcode table lookup and disassembly.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from chip8_vm.cpu.decoder import (
    decode, lookup, decode_opcode, disassemble, NONE, ADDR, VX_KK, VX_VY,
)
from chip8_vm.faults import UnimplementedOpcode, MemoryAccessError
from chip8_vm.mem.memory import Memory


class TestFieldExtraction:
    """Every field is a fixed mask of the word, whatever the opcode."""

    def test_call_address(self):
        """CALL 0x100 → addr=0x100"""
        instr = decode(0x2100)
        assert instr.op == 0x2
        assert instr.addr == 0x100

    def test_all_fields(self):
        """0x8AB4 → x=A, y=B, kk=B4, n=4, addr=AB4"""
        instr = decode(0x8AB4)
        assert instr.raw == 0x8AB4
        assert instr.op == 0x8
        assert instr.x == 0xA
        assert instr.y == 0xB
        assert instr.kk == 0xB4
        assert instr.n == 0x4
        assert instr.addr == 0xAB4

    def test_masks_match_definition(self):
        """Sampled words across the full 16-bit range."""
        for word in list(range(0, 0x10000, 0x0123)) + [0x0000, 0xFFFF]:
            instr = decode(word)
            assert instr.x == (word & 0x0F00) >> 8
            assert instr.y == (word & 0x00F0) >> 4
            assert instr.kk == word & 0x00FF
            assert instr.n == word & 0x000F
            assert instr.addr == word & 0x0FFF
            assert instr.op == word >> 12

    def test_out_of_range_word(self):
        with pytest.raises(ValueError):
            decode(0x10000)
        with pytest.raises(ValueError):
            decode(-1)


class TestLookup:
    """Opcode table — every implemented pattern and the gaps around it."""

    def test_implemented_patterns(self):
        cases = [
            (0x0000, 'HALT',  NONE),
            (0x00E0, 'CLS',   NONE),
            (0x00EE, 'RET',   NONE),
            (0x1234, 'JP',    ADDR),
            (0x2FFF, 'CALL',  ADDR),
            (0x3A42, 'SE',    VX_KK),
            (0x4A42, 'SNE',   VX_KK),
            (0x5AB0, 'SE_V',  VX_VY),
            (0x6A42, 'LD',    VX_KK),
            (0x7A42, 'ADD',   VX_KK),
            (0x8AB0, 'LD_V',  VX_VY),
            (0x8AB1, 'OR',    VX_VY),
            (0x8AB2, 'AND',   VX_VY),
            (0x8AB3, 'XOR',   VX_VY),
            (0x8AB4, 'ADD_V', VX_VY),
        ]
        for word, mnem, form in cases:
            assert lookup(decode(word)) == (mnem, form), f"{word:04X}"

    def test_unimplemented_groups(self):
        """9xy0 through Fxxx are outside the subset."""
        for word in (0x9000, 0xA123, 0xB123, 0xC123, 0xD123, 0xE19E, 0xF107):
            with pytest.raises(UnimplementedOpcode) as exc:
                lookup(decode(word))
            assert exc.value.opcode == word

    def test_unimplemented_system_words(self):
        """0nnn other than 0000/00E0/00EE (e.g. SYS addr) is not decoded."""
        for word in (0x0001, 0x00E1, 0x00EF, 0x0123):
            with pytest.raises(UnimplementedOpcode):
                lookup(decode(word))

    def test_unimplemented_alu_subops(self):
        """8xy5–8xyF are outside the subset."""
        for n in range(5, 16):
            with pytest.raises(UnimplementedOpcode):
                lookup(decode(0x8120 | n))

    def test_5xy_requires_zero_low_nibble(self):
        with pytest.raises(UnimplementedOpcode):
            lookup(decode(0x5121))

    def test_fault_carries_pc(self):
        with pytest.raises(UnimplementedOpcode) as exc:
            lookup(decode(0x9000), pc=0x204)
        assert exc.value.pc == 0x204
        assert "9000" in str(exc.value)


class TestDecodeOpcode:
    """Fetch + decode from memory."""

    def test_big_endian_fetch(self):
        mem = Memory()
        mem.load(bytes([0x21, 0x00]), 0x010)  # CALL 0x100
        instr, mnem, form = decode_opcode(mem, 0x010)
        assert instr.raw == 0x2100
        assert mnem == 'CALL'
        assert form == ADDR

    def test_last_full_word(self):
        mem = Memory()
        mem.load(bytes([0x00, 0xE0]), 0xFFE)  # CLS
        _, mnem, _ = decode_opcode(mem, 0xFFE)
        assert mnem == 'CLS'

    def test_fetch_past_end(self):
        """$FFF has only one byte behind it."""
        with pytest.raises(MemoryAccessError):
            decode_opcode(Memory(), 0xFFF)


class TestDisassembler:

    def test_mnemonics(self):
        cases = [
            (0x0000, "HALT"),
            (0x00E0, "CLS"),
            (0x00EE, "RET"),
            (0x1200, "JP 0x200"),
            (0x2100, "CALL 0x100"),
            (0x3A05, "SE VA, 0x05"),
            (0x4A05, "SNE VA, 0x05"),
            (0x5AB0, "SE VA, VB"),
            (0x6005, "LD V0, 0x05"),
            (0x70FF, "ADD V0, 0xFF"),
            (0x8010, "LD V0, V1"),
            (0x8011, "OR V0, V1"),
            (0x8012, "AND V0, V1"),
            (0x8013, "XOR V0, V1"),
            (0x8014, "ADD V0, V1"),
        ]
        for word, text in cases:
            assert disassemble(word) == text

    def test_unknown_word(self):
        assert disassemble(0x9000) == "??? 0x9000"
