"""
CHIP-8 VM — Machine Geometry + Run Defaults

Fixed sizes for the machine state. Nothing here is resized at runtime;
MachineState allocates exactly these amounts at construction.

Memory map:
  $000–$FFF  Flat program/data memory (4096 bytes)

No interpreter-reserved low area is modeled (the classic $000–$1FF font
and interpreter region is not set aside), so programs may start at $000.
"""

# ── Machine geometry ──
MEMORY_SIZE = 0x1000        # 4096 bytes
NUM_REGISTERS = 16          # V0–VF
STACK_DEPTH = 16            # return-address slots
INSTRUCTION_SIZE = 2        # every instruction is one big-endian word

REGISTER_MASK = 0xFF
WORD_MASK = 0xFFFF

# Interpreter-specific stop sentinel (not a classic CHIP-8 instruction)
HALT_WORD = 0x0000

# ── Logging ──
DEFAULT_LOG_NAME = "chip8_vm"
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
