"""
CHIP-8 VM — Machine State

Everything the interpreter reads or writes lives in one MachineState
that the caller builds, hands to run(), and inspects afterwards. There
is no module-level machine; two states never share storage.
"""

from typing import Iterable, Optional

from .cpu.regs import RegisterFile, CallStack
from .mem.memory import Memory


class MachineState:
    """Memory image, registers, call stack and program counter.

    Every argument is optional and defaults to zero. Pass a Memory or
    raw bytes for the image, an iterable of up to 16 register values,
    and optionally pre-filled stack slots with their stack pointer.

    Usage:
        state = MachineState(registers=[5, 10])
        state.mem.load_words([0x2100, 0x2100], 0x000)
        run(state)
        state.regs[0]
    """

    def __init__(self,
                 memory=None,
                 registers: Optional[Iterable[int]] = None,
                 stack: Optional[Iterable[int]] = None,
                 pc: int = 0,
                 sp: int = 0):
        if isinstance(memory, Memory):
            self.mem = memory
        else:
            self.mem = Memory(memory)
        self.regs = RegisterFile(registers)
        self.stack = CallStack(stack, sp)
        self._pc = 0
        self.pc = pc

    @property
    def pc(self) -> int:
        return self._pc

    @pc.setter
    def pc(self, value: int):
        # Range against memory is checked at fetch time, not here:
        # a skip at the end of memory is legal until the next fetch.
        if value < 0:
            raise ValueError(f"Program counter cannot be negative: {value}")
        self._pc = value

    def display(self) -> str:
        """One-line dump: PC, SP and all registers."""
        return f"PC={self._pc:03X} SP={self.stack.sp:X} {self.regs.display()}"

    def __repr__(self):
        return f"<MachineState {self.display()}>"
