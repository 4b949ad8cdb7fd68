"""
CHIP-8 VM — Fatal Machine Conditions

Every exception here means the running program (or the caller that set
it up) is broken. The interpreter never catches these: the faulting
instruction leaves the machine state untouched and the exception goes
straight to whoever called run().

Anything that is NOT a MachineFault escaping the interpreter is a bug in
the interpreter itself.
"""

from typing import Optional

__all__ = [
    'MachineFault', 'StackOverflow', 'StackUnderflow',
    'UnimplementedOpcode', 'MemoryAccessError', 'RegisterIndexError',
]


class MachineFault(Exception):
    """Base class for unrecoverable machine conditions."""
    def __init__(self, message: str, pc: Optional[int] = None):
        self.pc = pc
        super().__init__(f"${pc:03X}: {message}" if pc is not None else message)


class StackOverflow(MachineFault):
    """CALL with every call-stack slot in use."""
    def __init__(self, depth: int, pc: Optional[int] = None):
        self.depth = depth
        super().__init__(f"Stack overflow (depth {depth})", pc)


class StackUnderflow(MachineFault):
    """RET with an empty call stack."""
    def __init__(self, pc: Optional[int] = None):
        super().__init__("Stack underflow", pc)


class UnimplementedOpcode(MachineFault):
    """Fetched word matches no entry in the dispatch table."""
    def __init__(self, opcode: int, pc: Optional[int] = None):
        self.opcode = opcode
        super().__init__(f"Unimplemented opcode ${opcode:04X}", pc)


class MemoryAccessError(MachineFault):
    """Read or write outside the memory image."""
    def __init__(self, addr: int, size: int = 1, pc: Optional[int] = None):
        self.addr = addr
        self.size = size
        super().__init__(
            f"Memory access out of range: {size} byte(s) at ${addr:X}", pc)


class RegisterIndexError(MachineFault):
    """Register or stack-slot index outside 0–15."""
    def __init__(self, index: int, what: str = "register"):
        self.index = index
        super().__init__(f"{what} index out of range: {index}")
