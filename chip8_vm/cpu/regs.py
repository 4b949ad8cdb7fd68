"""
CHIP-8 VM — Register File + Call Stack

Register model:
  V0–VF  — 16 independent 8-bit general-purpose registers
  PC     — program counter (held by MachineState)
  SP     — call-stack pointer, index of the next free slot (0–16)

VF is an ordinary register here. No carry/borrow flag is written to it
because ADD wraps without a flag (see alu.add8).

Both containers check every index. An out-of-range index raises
RegisterIndexError instead of reading a neighbouring slot.
"""

from typing import Iterable, List, Optional

from ..config import NUM_REGISTERS, STACK_DEPTH, WORD_MASK
from ..faults import RegisterIndexError, StackOverflow, StackUnderflow


class RegisterFile:
    """16 × 8-bit registers addressed by a 4-bit index."""

    __slots__ = ('_v',)

    def __init__(self, values: Optional[Iterable[int]] = None):
        self._v: List[int] = [0] * NUM_REGISTERS
        if values is not None:
            values = list(values)
            if len(values) > NUM_REGISTERS:
                raise ValueError(
                    f"{len(values)} register values given, machine has {NUM_REGISTERS}")
            for i, value in enumerate(values):
                self[i] = value

    def _check(self, index: int):
        if not 0 <= index < NUM_REGISTERS:
            raise RegisterIndexError(index)

    def __getitem__(self, index: int) -> int:
        self._check(index)
        return self._v[index]

    def __setitem__(self, index: int, value: int):
        self._check(index)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"V{index:X}: value out of 8-bit range: {value}")
        self._v[index] = value

    def __len__(self) -> int:
        return NUM_REGISTERS

    def as_list(self) -> List[int]:
        return list(self._v)

    def display(self) -> str:
        """Format register state for debugging."""
        return ' '.join(f"V{i:X}={v:02X}" for i, v in enumerate(self._v))


class CallStack:
    """Bounded LIFO of 16-bit return addresses.

    sp is the next free slot: 0 means empty, STACK_DEPTH means full.
    push/pop check the bound before touching anything, so a failed CALL
    or RET leaves the stack exactly as it was.
    """

    DEPTH = STACK_DEPTH

    __slots__ = ('_slots', '_sp')

    def __init__(self, slots: Optional[Iterable[int]] = None, sp: int = 0):
        self._slots: List[int] = [0] * self.DEPTH
        if slots is not None:
            slots = list(slots)
            if len(slots) > self.DEPTH:
                raise ValueError(
                    f"{len(slots)} stack slots given, stack depth is {self.DEPTH}")
            for i, addr in enumerate(slots):
                self[i] = addr
        if not 0 <= sp <= self.DEPTH:
            raise ValueError(f"Stack pointer out of range: {sp}")
        self._sp = sp

    @property
    def sp(self) -> int:
        return self._sp

    @property
    def full(self) -> bool:
        return self._sp == self.DEPTH

    @property
    def empty(self) -> bool:
        return self._sp == 0

    def __len__(self) -> int:
        return self._sp

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < self.DEPTH:
            raise RegisterIndexError(index, "stack slot")
        return self._slots[index]

    def __setitem__(self, index: int, addr: int):
        if not 0 <= index < self.DEPTH:
            raise RegisterIndexError(index, "stack slot")
        if not 0 <= addr <= WORD_MASK:
            raise ValueError(f"Return address out of 16-bit range: {addr}")
        self._slots[index] = addr

    def push(self, addr: int, pc: Optional[int] = None):
        """Push a return address. pc is only used to label a fault."""
        if self.full:
            raise StackOverflow(self.DEPTH, pc)
        self[self._sp] = addr
        self._sp += 1

    def pop(self, pc: Optional[int] = None) -> int:
        """Pop the most recently pushed return address."""
        if self.empty:
            raise StackUnderflow(pc)
        self._sp -= 1
        return self._slots[self._sp]

    def peek(self) -> int:
        if self.empty:
            raise StackUnderflow()
        return self._slots[self._sp - 1]

    def frames(self) -> List[int]:
        """Live return addresses, oldest first."""
        return self._slots[:self._sp]
