"""
CHIP-8 VM — Interpreter

Fetch/decode/dispatch loop over a caller-owned MachineState.

Execution model (one step):
  1. Fetch the big-endian word at PC (MemoryAccessError past $FFE)
  2. Decode fields and look up the mnemonic (UnimplementedOpcode)
  3. Advance PC by 2
  4. Dispatch to the handler, which mutates registers / PC / stack

run() repeats this until HALT ($0000) is fetched. It does not stop for
any other reason: there is no cycle limit and no breakpoint. A fault
propagates to the caller with the state exactly as it was before the
faulting instruction, PC still pointing at it.

Skips add another 2 to PC (net +4). CALL pushes the already-advanced PC,
so RET resumes at the instruction after the CALL.
"""

import logging
from typing import List

from .config import INSTRUCTION_SIZE
from .cpu import alu
from .cpu.decoder import decode_opcode, disassemble
from .faults import MachineFault
from .state import MachineState

log = logging.getLogger(__name__)


class Interpreter:
    """Executes instructions against a MachineState.

    Holds no machine state itself, only the dispatch table, the step
    counter and the optional trace buffer.

    Usage:
        state = MachineState(registers=[5, 10])
        state.mem.load_words([0x2100, 0x2100], 0x000)
        state.mem.load_words([0x8014, 0x8014, 0x00EE], 0x100)
        Interpreter().run(state)
        assert state.regs[0] == 45
    """

    def __init__(self, trace: bool = False):
        self.steps = 0
        self._trace = trace
        self.trace: List[str] = []
        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self, state: MachineState) -> bool:
        """Execute one instruction. Returns True if it was HALT."""
        pc = state.pc
        instr, mnem, _ = decode_opcode(state.mem, pc)

        if self._trace or log.isEnabledFor(logging.DEBUG):
            line = f"${pc:03X}: {instr.raw:04X}  {disassemble(instr.raw):<14s} {state.display()}"
            if self._trace:
                self.trace.append(line)
            log.debug(line)

        state.pc = pc + INSTRUCTION_SIZE
        self.steps += 1

        try:
            self._dispatch[mnem](state, instr)
        except _HaltException:
            return True
        except MachineFault:
            # Handlers check before mutating; only PC has moved.
            state.pc = pc
            self.steps -= 1
            raise
        return False

    def run(self, state: MachineState):
        """Run until HALT. Faults propagate unchanged."""
        start = self.steps
        try:
            while not self.step(state):
                pass
        except MachineFault as exc:
            log.warning("Machine fault after %d instructions: %s",
                        self.steps - start, exc)
            raise
        log.info("HALT at $%03X after %d instructions",
                 state.pc - INSTRUCTION_SIZE, self.steps - start)

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    # Handler signature: handler(state, instr)
    # PC has already been advanced past the instruction.

    def _build_dispatch(self) -> dict:
        """Build mnemonic → handler dispatch table."""
        return {
            # ── Control ──
            'HALT':  self._op_halt,
            'CLS':   self._op_cls,
            'RET':   self._op_ret,
            'JP':    self._op_jp,
            'CALL':  self._op_call,

            # ── Conditional skip ──
            'SE':    self._op_se,
            'SNE':   self._op_sne,
            'SE_V':  self._op_se_v,

            # ── Load / arithmetic ──
            'LD':    self._op_ld,
            'ADD':   self._op_add,
            'LD_V':  self._op_ld_v,
            'OR':    self._op_or,
            'AND':   self._op_and,
            'XOR':   self._op_xor,
            'ADD_V': self._op_add_v,
        }

    def _skip(self, state: MachineState):
        state.pc += INSTRUCTION_SIZE

    # ── Control ──

    def _op_halt(self, state, instr):
        raise _HaltException()

    def _op_cls(self, state, instr):
        pass

    def _op_ret(self, state, instr):
        state.pc = state.stack.pop(pc=state.pc - INSTRUCTION_SIZE)

    def _op_jp(self, state, instr):
        state.pc = instr.addr

    def _op_call(self, state, instr):
        state.stack.push(state.pc, pc=state.pc - INSTRUCTION_SIZE)
        state.pc = instr.addr

    # ── Conditional skip ──
    # 3xkk/4xkk compare the VALUE in Vx with kk, not the index x.

    def _op_se(self, state, instr):
        if state.regs[instr.x] == instr.kk:
            self._skip(state)

    def _op_sne(self, state, instr):
        if state.regs[instr.x] != instr.kk:
            self._skip(state)

    def _op_se_v(self, state, instr):
        if state.regs[instr.x] == state.regs[instr.y]:
            self._skip(state)

    # ── Load / arithmetic ──

    def _op_ld(self, state, instr):
        state.regs[instr.x] = instr.kk

    def _op_add(self, state, instr):
        vx = state.regs[instr.x]
        if alu.carry8(vx, instr.kk):
            log.debug("ADD V%X, 0x%02X wraps (%d + %d)", instr.x, instr.kk, vx, instr.kk)
        state.regs[instr.x] = alu.add8(vx, instr.kk)

    def _op_ld_v(self, state, instr):
        state.regs[instr.x] = state.regs[instr.y]

    def _op_or(self, state, instr):
        state.regs[instr.x] = alu.or8(state.regs[instr.x], state.regs[instr.y])

    def _op_and(self, state, instr):
        state.regs[instr.x] = alu.and8(state.regs[instr.x], state.regs[instr.y])

    def _op_xor(self, state, instr):
        state.regs[instr.x] = alu.xor8(state.regs[instr.x], state.regs[instr.y])

    def _op_add_v(self, state, instr):
        vx, vy = state.regs[instr.x], state.regs[instr.y]
        if alu.carry8(vx, vy):
            log.debug("ADD V%X, V%X wraps (%d + %d)", instr.x, instr.y, vx, vy)
        state.regs[instr.x] = alu.add8(vx, vy)

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def enable_trace(self, enable: bool = True):
        """Record one line per executed instruction in self.trace."""
        self._trace = enable

    def get_trace(self) -> str:
        return '\n'.join(self.trace)

    def clear_trace(self):
        self.trace.clear()


def run(state: MachineState, trace: bool = False):
    """Run state until HALT with a fresh Interpreter."""
    Interpreter(trace=trace).run(state)


# Internal exception for flow control
class _HaltException(Exception):
    pass
