"""
CHIP-8 VM — 8-bit ALU

Plain functions on register values. Every result is masked back to
8 bits; nothing here raises on overflow and nothing sets a flag
register. VF is left alone by ADD (the classic carry-into-VF behavior is
not modeled).
"""

from ..config import REGISTER_MASK


def add8(a: int, b: int) -> int:
    """Wrapping 8-bit add: (a + b) mod 256."""
    return (a + b) & REGISTER_MASK


def carry8(a: int, b: int) -> bool:
    """True when a + b would carry out of bit 7. Informational only."""
    return a + b > REGISTER_MASK


def or8(a: int, b: int) -> int:
    return (a | b) & REGISTER_MASK


def and8(a: int, b: int) -> int:
    return (a & b) & REGISTER_MASK


def xor8(a: int, b: int) -> int:
    return (a ^ b) & REGISTER_MASK
