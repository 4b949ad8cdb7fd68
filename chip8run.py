#!/usr/bin/env python3
"""
chip8run — CHIP-8 VM command-line harness

Usage:
    python chip8run.py                              # run the reference program
    python chip8run.py --words 6005 7003 0000       # poke words at --org, run
                       [--org 0x200] [--reg V0=5 ...]
                       [--trace] [--dump 0x000:32] [--verbose] [--log-file run.log]

Values accept hex (0x.. or $..) or decimal.

Exit status:
    0  program halted cleanly
    1  machine fault (stack overflow/underflow, unimplemented opcode,
       out-of-range access) or bad --words/--reg/--dump value
    2  usage error

Examples:
    python chip8run.py --trace
    python chip8run.py --words 2100 2100 --reg V0=5 --reg V1=10
    python chip8run.py --words 600A 3A0A 7001 0000 --dump 0:16
"""

import argparse
import logging
import sys
import os

# Allow running from project root without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from chip8_vm import __version__
from chip8_vm import demo
from chip8_vm.emu import Interpreter
from chip8_vm.faults import MachineFault
from chip8_vm.log_setup import setup_logging
from chip8_vm.state import MachineState


def parse_int_arg(value: str) -> int:
    """Parse an integer argument that may be hex (0x...), $ prefix, or decimal."""
    value = value.strip()
    if value.startswith("0x") or value.startswith("0X"):
        return int(value, 16)
    if value.startswith("$"):
        return int(value[1:], 16)
    return int(value)


def parse_reg_arg(value: str):
    """Parse 'Vx=VALUE' into (index, value)."""
    name, sep, raw = value.partition("=")
    name = name.strip().upper()
    if not sep or not name.startswith("V") or len(name) != 2:
        raise ValueError(f"Expected Vx=VALUE, got '{value}'")
    return int(name[1], 16), parse_int_arg(raw)


def parse_dump_arg(value: str):
    """Parse 'START:LEN' into (start, length)."""
    start, sep, length = value.partition(":")
    if not sep:
        raise ValueError(f"Expected START:LEN, got '{value}'")
    return parse_int_arg(start), parse_int_arg(length)


def build_state(args) -> MachineState:
    if not args.words:
        return demo.build_reference_state()

    org = parse_int_arg(args.org)
    words = [int(w, 16) for w in args.words]
    state = MachineState(pc=org)
    state.mem.load_words(words, org)
    return state


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chip8run",
        description="Run a CHIP-8 VM program until HALT",
    )
    parser.add_argument("--words", nargs="+", metavar="HEX",
                        help="Instruction words to poke at --org (default: reference program)")
    parser.add_argument("--org", default="0x000",
                        help="Load address and start PC for --words (default 0x000)")
    parser.add_argument("--reg", action="append", default=[], metavar="Vx=VALUE",
                        help="Seed a register before the run (repeatable)")
    parser.add_argument("--trace", action="store_true",
                        help="Print one line per executed instruction")
    parser.add_argument("--dump", metavar="START:LEN",
                        help="Hex dump a memory range after the run")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Console log level: -v info, -vv debug")
    parser.add_argument("--log-file",
                        help="Also write a DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"chip8run {__version__}")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose >= 2:
        console_level = logging.DEBUG
    elif args.verbose == 1:
        console_level = logging.INFO
    else:
        console_level = logging.WARNING
    setup_logging(console_level=console_level, log_file=args.log_file)

    try:
        state = build_state(args)
        for reg in args.reg:
            index, value = parse_reg_arg(reg)
            state.regs[index] = value
        dump = parse_dump_arg(args.dump) if args.dump else None
        seeded_v0, seeded_v1 = state.regs[0], state.regs[1]
    except (ValueError, MachineFault) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    interp = Interpreter(trace=args.trace)
    try:
        interp.run(state)
    except MachineFault as e:
        if args.trace:
            print(interp.get_trace())
        print(f"Error: {e}", file=sys.stderr)
        print(f"State: {state.display()}", file=sys.stderr)
        return 1

    if args.trace:
        print(interp.get_trace())

    if not args.words:
        print(demo.describe(state, seeded_v0, seeded_v1))
    print(state.display())
    print(f"Halted after {interp.steps} instructions")

    if dump:
        try:
            print(state.mem.hexdump(*dump))
        except MachineFault as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
