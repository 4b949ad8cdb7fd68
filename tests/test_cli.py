"""
chip8run CLI Tests.

Drives main(argv) directly and checks stdout/stderr and exit status.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

import pytest
from rich.logging import RichHandler

import chip8run
from chip8_vm.log_setup import setup_logging


class TestArgParsing:

    def test_parse_int_arg(self):
        assert chip8run.parse_int_arg("0x200") == 0x200
        assert chip8run.parse_int_arg("$1F") == 0x1F
        assert chip8run.parse_int_arg("42") == 42

    def test_parse_reg_arg(self):
        assert chip8run.parse_reg_arg("V0=5") == (0, 5)
        assert chip8run.parse_reg_arg("vf=0xFF") == (15, 255)
        with pytest.raises(ValueError):
            chip8run.parse_reg_arg("A=1")
        with pytest.raises(ValueError):
            chip8run.parse_reg_arg("V0")

    def test_parse_dump_arg(self):
        assert chip8run.parse_dump_arg("0x100:16") == (0x100, 16)
        with pytest.raises(ValueError):
            chip8run.parse_dump_arg("0x100")


class TestMain:

    def test_reference_program(self, capsys):
        assert chip8run.main([]) == 0
        out = capsys.readouterr().out
        assert "5 + (10 * 2) + (10 * 2) = 45" in out
        assert "PC=006" in out
        assert "Halted after 9 instructions" in out

    def test_reference_program_with_seeded_registers(self, capsys):
        """--reg V1=1 changes the equation the result line prints."""
        assert chip8run.main(["--reg", "V1=1"]) == 0
        out = capsys.readouterr().out
        assert "5 + (1 * 2) + (1 * 2) = 9" in out
        assert "(10 * 2)" not in out
        assert "V0=09" in out

    def test_reference_program_wraps(self, capsys):
        """V1=100: 5 + 400 wraps to 149."""
        assert chip8run.main(["--reg", "V0=5", "--reg", "V1=100"]) == 0
        out = capsys.readouterr().out
        assert "5 + (100 * 2) + (100 * 2) = 149 (mod 256)" in out
        assert "V0=95" in out

    def test_words(self, capsys):
        """LD V0, 5; ADD V0, 3; HALT"""
        assert chip8run.main(["--words", "6005", "7003", "0000"]) == 0
        out = capsys.readouterr().out
        assert "V0=08" in out
        assert "= 45" not in out

    def test_words_with_org_and_regs(self, capsys):
        """ADD V0, V1; HALT at $200 with V0=1, V1=2"""
        rc = chip8run.main(["--words", "8014", "0000", "--org", "0x200",
                            "--reg", "V0=1", "--reg", "V1=2"])
        assert rc == 0
        out = capsys.readouterr().out
        assert "PC=204" in out
        assert "V0=03" in out

    def test_trace(self, capsys):
        assert chip8run.main(["--trace"]) == 0
        out = capsys.readouterr().out
        assert "$000: 2100  CALL 0x100" in out

    def test_dump(self, capsys):
        assert chip8run.main(["--dump", "0x100:6"]) == 0
        out = capsys.readouterr().out
        assert "100  80 14 80 14 00 EE" in out

    def test_fault_exit_status(self, capsys):
        assert chip8run.main(["--words", "9000"]) == 1
        err = capsys.readouterr().err
        assert "Unimplemented opcode $9000" in err
        assert "State: PC=000" in err

    def test_underflow_exit_status(self, capsys):
        assert chip8run.main(["--words", "00EE"]) == 1
        assert "Stack underflow" in capsys.readouterr().err

    def test_bad_word(self, capsys):
        assert chip8run.main(["--words", "XYZ"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_bad_register_value(self, capsys):
        assert chip8run.main(["--reg", "V0=300"]) == 1
        assert "out of 8-bit range" in capsys.readouterr().err

    def test_usage_error(self):
        with pytest.raises(SystemExit) as exc:
            chip8run.main(["--no-such-flag"])
        assert exc.value.code == 2

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "run.log"
        assert chip8run.main(["--log-file", str(log_file)]) == 0
        for handler in logging.getLogger("chip8_vm").handlers:
            handler.flush()
        assert "HALT at $004" in log_file.read_text(encoding="utf-8")


class TestLogSetup:

    def test_rich_console_handler(self):
        logger = setup_logging(name="chip8_vm.test_rich")
        assert any(isinstance(h, RichHandler) for h in logger.handlers)

    def test_idempotent(self):
        logger = setup_logging(name="chip8_vm.test_idem")
        count = len(logger.handlers)
        again = setup_logging(name="chip8_vm.test_idem", console_level=logging.DEBUG)
        assert again is logger
        assert len(logger.handlers) == count
        assert logger.level == logging.DEBUG

    def test_plain_console(self):
        logger = setup_logging(name="chip8_vm.test_plain", rich_console=False)
        assert not any(isinstance(h, RichHandler) for h in logger.handlers)
