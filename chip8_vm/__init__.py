"""
CHIP-8 VM
=========
A small fetch/decode/execute interpreter for a CHIP-8-style instruction
subset: HALT, CLS, RET, JP, CALL, SE/SNE, LD, ADD and the 8xy0–8xy4
register group.

Layout:
    ┌────────────┐    ┌────────────┐    ┌───────────────┐
    │ Memory     │───>│ Decoder    │───>│ Interpreter   │
    │ (4K image) │    │ (fields +  │    │ (handlers on  │
    │            │    │  tables)   │    │  MachineState)│
    └────────────┘    └────────────┘    └───────────────┘

    - mem/memory.py:   bounds-checked bytearray, big-endian words
    - cpu/regs.py:     range-checked V0–VF and the 16-slot call stack
    - cpu/alu.py:      wrapping 8-bit arithmetic, bitwise ops
    - cpu/decoder.py:  field extraction, opcode tables, disassembler
    - state.py:        MachineState the caller builds and inspects
    - emu.py:          Interpreter.step()/run()
    - faults.py:       MachineFault and its subclasses
"""

__version__ = "0.1.0"

from .faults import (
    MachineFault, StackOverflow, StackUnderflow,
    UnimplementedOpcode, MemoryAccessError, RegisterIndexError,
)
from .cpu.decoder import Instruction, decode, disassemble
from .cpu.regs import RegisterFile, CallStack
from .mem.memory import Memory
from .state import MachineState
from .emu import Interpreter, run
