"""
CHIP-8 VM — Instruction Decoder / Opcode Table

Every instruction is one 16-bit big-endian word. Fields are fixed
bit-slices of that word, whatever the opcode:

  op   = (W & 0xF000) >> 12   top nibble, selects the instruction group
  x    = (W & 0x0F00) >> 8    register index
  y    = (W & 0x00F0) >> 4    register index
  kk   =  W & 0x00FF          8-bit immediate
  n    =  W & 0x000F          sub-opcode selector (8xyN, 5xy0)
  addr =  W & 0x0FFF          12-bit address

This module maps a word to (mnemonic, operand_form). Three lookups:
  - SYSTEM_OPCODES: whole-word matches in the 0nnn group
  - OPCODES:        top-nibble groups 1–7
  - ALU_OPCODES:    8xyN, keyed on n

Operand forms (used by the disassembler):
  NONE    no operands
  ADDR    12-bit address
  VX_KK   register, immediate
  VX_VY   register, register
"""

from dataclasses import dataclass
from typing import Tuple

from ..config import HALT_WORD
from ..faults import UnimplementedOpcode

# ──────────────────────────────────────────────
# Operand form constants
# ──────────────────────────────────────────────

NONE  = 'NONE'
ADDR  = 'ADDR'
VX_KK = 'VX_KK'
VX_VY = 'VX_VY'


# ──────────────────────────────────────────────
# Opcode tables
# ──────────────────────────────────────────────
# Format: key -> (mnemonic, operand_form)
# Mnemonics are also the interpreter's dispatch keys, so the two
# compare-and-skip forms and the two load/add forms get distinct names.

SYSTEM_OPCODES = {
    HALT_WORD: ('HALT', NONE),   # interpreter stop sentinel
    0x00E0:    ('CLS',  NONE),   # no display: no-op
    0x00EE:    ('RET',  NONE),
}

OPCODES = {
    0x1: ('JP',     ADDR),
    0x2: ('CALL',   ADDR),
    0x3: ('SE',     VX_KK),
    0x4: ('SNE',    VX_KK),
    0x5: ('SE_V',   VX_VY),     # 5xy0 only, checked in lookup()
    0x6: ('LD',     VX_KK),
    0x7: ('ADD',    VX_KK),
}

ALU_OPCODES = {
    0x0: ('LD_V',   VX_VY),
    0x1: ('OR',     VX_VY),
    0x2: ('AND',    VX_VY),
    0x3: ('XOR',    VX_VY),
    0x4: ('ADD_V',  VX_VY),
}

# Assembly spelling for each dispatch mnemonic
DISPLAY_NAMES = {
    'SE_V':  'SE',
    'LD_V':  'LD',
    'ADD_V': 'ADD',
}


@dataclass(frozen=True)
class Instruction:
    """One decoded instruction word with every field extracted."""
    raw: int
    op: int
    x: int
    y: int
    kk: int
    n: int
    addr: int


def decode(word: int) -> Instruction:
    """Split a 16-bit word into its fixed fields."""
    if not 0 <= word <= 0xFFFF:
        raise ValueError(f"Instruction word out of 16-bit range: {word}")
    return Instruction(
        raw=word,
        op=(word & 0xF000) >> 12,
        x=(word & 0x0F00) >> 8,
        y=(word & 0x00F0) >> 4,
        kk=word & 0x00FF,
        n=word & 0x000F,
        addr=word & 0x0FFF,
    )


def lookup(instr: Instruction, pc: int = None) -> Tuple[str, str]:
    """Find (mnemonic, operand_form) for a decoded instruction.

    Raises UnimplementedOpcode for anything outside the tables,
    including 5xyN with N != 0 and 8xyN with N > 4.
    """
    if instr.op == 0x0:
        entry = SYSTEM_OPCODES.get(instr.raw)
    elif instr.op == 0x8:
        entry = ALU_OPCODES.get(instr.n)
    elif instr.op == 0x5 and instr.n != 0:
        entry = None
    else:
        entry = OPCODES.get(instr.op)

    if entry is None:
        raise UnimplementedOpcode(instr.raw, pc)
    return entry


def decode_opcode(memory, pc: int) -> Tuple[Instruction, str, str]:
    """Fetch and decode the word at pc.

    Returns: (instruction, mnemonic, operand_form)

    Raises MemoryAccessError if pc has no full word behind it, and
    UnimplementedOpcode if the word is not in the tables. Neither
    touches machine state.
    """
    instr = decode(memory.read16(pc, pc))
    mnem, form = lookup(instr, pc)
    return instr, mnem, form


def disassemble(word: int) -> str:
    """Render one word as assembly text, e.g. 'CALL 0x100', 'ADD V0, V1'."""
    instr = decode(word)
    try:
        mnem, form = lookup(instr)
    except UnimplementedOpcode:
        return f"??? 0x{word:04X}"

    name = DISPLAY_NAMES.get(mnem, mnem)
    if form == ADDR:
        return f"{name} 0x{instr.addr:03X}"
    if form == VX_KK:
        return f"{name} V{instr.x:X}, 0x{instr.kk:02X}"
    if form == VX_VY:
        return f"{name} V{instr.x:X}, V{instr.y:X}"
    return name
