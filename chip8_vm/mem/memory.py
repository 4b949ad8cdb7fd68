"""
CHIP-8 VM — 4K Flat Memory Image

One bytearray, no regions, no I/O routing. Every access is bounds
checked: an address outside $000–$FFF raises MemoryAccessError instead
of wrapping, so a runaway PC stops the machine rather than aliasing back
to low memory.

Words are big-endian (high byte at the lower address), matching how
instructions are fetched.
"""

from typing import Dict, Optional

from ..config import MEMORY_SIZE
from ..faults import MemoryAccessError


class Memory:
    """4096-byte memory image with checked byte and word access."""

    SIZE = MEMORY_SIZE

    def __init__(self, image: Optional[bytes] = None):
        self._mem = bytearray(self.SIZE)
        if image is not None:
            if len(image) > self.SIZE:
                raise ValueError(
                    f"Memory image is {len(image)} bytes, limit is {self.SIZE}")
            self._mem[:len(image)] = image

    def __len__(self) -> int:
        return self.SIZE

    def __getitem__(self, addr: int) -> int:
        return self.read8(addr)

    def __setitem__(self, addr: int, value: int):
        self.write8(addr, value)

    def _check(self, addr: int, size: int = 1, pc: Optional[int] = None):
        if addr < 0 or addr + size > self.SIZE:
            raise MemoryAccessError(addr, size, pc)

    # --- Core read/write ---

    def read8(self, addr: int) -> int:
        self._check(addr)
        return self._mem[addr]

    def write8(self, addr: int, value: int):
        """Write one byte. Values outside 0–255 are rejected, not masked."""
        self._check(addr)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Byte value out of range: {value}")
        self._mem[addr] = value

    def read16(self, addr: int, pc: Optional[int] = None) -> int:
        """Read a big-endian word (the instruction fetch path).

        pc only labels a fault; pass it when fetching an instruction.
        """
        self._check(addr, 2, pc)
        return (self._mem[addr] << 8) | self._mem[addr + 1]

    def write16(self, addr: int, value: int):
        """Write a big-endian word."""
        self._check(addr, 2)
        if not 0 <= value <= 0xFFFF:
            raise ValueError(f"Word value out of range: {value}")
        self._mem[addr] = (value >> 8) & 0xFF
        self._mem[addr + 1] = value & 0xFF

    # --- Bulk load ---

    def load(self, data: bytes, base_addr: int = 0):
        """Copy raw bytes into memory starting at base_addr.

        The whole block must fit; nothing is written if it doesn't.
        Empty data is a no-op.
        """
        data = bytes(data)
        if not data:
            return
        self._check(base_addr, len(data))
        self._mem[base_addr:base_addr + len(data)] = data

    def load_words(self, words, base_addr: int = 0):
        """Poke a sequence of instruction words starting at base_addr."""
        data = bytearray()
        for word in words:
            if not 0 <= word <= 0xFFFF:
                raise ValueError(f"Word value out of range: {word}")
            data += bytes(((word >> 8) & 0xFF, word & 0xFF))
        self.load(bytes(data), base_addr)

    # --- Snapshots ---

    def snapshot(self) -> bytes:
        """Copy of the full image."""
        return bytes(self._mem)

    def diff(self, before: bytes) -> Dict[int, tuple]:
        """Compare a snapshot to current memory, return {addr: (old, new)}."""
        changes = {}
        for addr, old in enumerate(before[:self.SIZE]):
            if old != self._mem[addr]:
                changes[addr] = (old, self._mem[addr])
        return changes

    # --- Hex dump ---

    def hexdump(self, start: int, length: int = 64) -> str:
        """Produce a hex dump of memory for debugging."""
        self._check(start, max(length, 1))
        lines = []
        end = start + length
        for addr in range(start, end, 16):
            row = self._mem[addr:min(addr + 16, end)]
            hex_bytes = ' '.join(f'{b:02X}' for b in row)
            ascii_bytes = ''.join(chr(b) if 0x20 <= b < 0x7F else '.' for b in row)
            lines.append(f'{addr:03X}  {hex_bytes:<47}  {ascii_bytes}')
        return '\n'.join(lines)
