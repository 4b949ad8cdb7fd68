"""
CHIP-8 VM — Reference Program

Hand-assembled regression program:

  $000  21 00   CALL 0x100
  $002  21 00   CALL 0x100
  $004  00 00   HALT
  ...
  $100  80 14   ADD V0, V1
  $102  80 14   ADD V0, V1
  $104  00 EE   RET

With V0 = 5 and V1 = 10 the subroutine adds V1 twice per call, so after
two calls V0 = 5 + (10 * 2) + (10 * 2) = 45.
"""

from .state import MachineState

INITIAL_REGISTERS = [5, 10]

MAIN_ORG = 0x000
MAIN_CODE = bytes([
    0x21, 0x00,  # CALL 0x100
    0x21, 0x00,  # CALL 0x100
])

SUBROUTINE_ORG = 0x100
SUBROUTINE_CODE = bytes([
    0x80, 0x14,  # ADD V0, V1
    0x80, 0x14,  # ADD V0, V1
    0x00, 0xEE,  # RET
])

EXPECTED_V0 = 45
HALT_ADDR = MAIN_ORG + len(MAIN_CODE)


def build_reference_state() -> MachineState:
    """Fresh state with the reference program poked in and V0/V1 seeded."""
    state = MachineState(registers=INITIAL_REGISTERS, pc=MAIN_ORG)
    state.mem.load(MAIN_CODE, MAIN_ORG)
    state.mem.load(SUBROUTINE_CODE, SUBROUTINE_ORG)
    return state


def describe(state: MachineState, v0: int, v1: int) -> str:
    """Result line printed by the command-line harness.

    v0 and v1 are the register values the run started from. ADD wraps,
    so a sum past 255 is marked as modular.
    """
    line = f"{v0} + ({v1} * 2) + ({v1} * 2) = {state.regs[0]}"
    if v0 + 4 * v1 > 0xFF:
        line += " (mod 256)"
    return line
