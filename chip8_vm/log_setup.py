"""
CHIP-8 VM — Logging Setup

Library modules only call logging.getLogger(__name__); nothing is
configured at import. The command-line harness (or a test, or an
embedding application) calls setup_logging().

Console output goes through rich's RichHandler. A plain-text file
handler is added when log_file is given; it always captures DEBUG so a
full instruction trace lands in the file even when the console only
shows warnings.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import DEFAULT_LOG_NAME, FILE_LOG_FORMAT, FILE_DATE_FORMAT


def setup_logging(
    name: str = DEFAULT_LOG_NAME,
    console_level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    rich_console: bool = True,
) -> logging.Logger:
    """Configure and return the package logger.

    Safe to call more than once: an existing console handler only gets
    its level updated, and a file handler is added once per path.
    """
    logger = logging.getLogger(name)
    consoles = [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]
    files = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]

    # ── Console handler: only important stuff (WARNING+ default) ──
    if consoles:
        for ch in consoles:
            ch.setLevel(console_level)
    else:
        if rich_console:
            ch = RichHandler(
                level=console_level,
                console=Console(stderr=True),
                show_time=True,
                show_path=False,
                rich_tracebacks=True,
            )
        else:
            ch = logging.StreamHandler(sys.stderr)
            ch.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        ch.setLevel(console_level)
        logger.addHandler(ch)

    # ── File handler: captures everything (DEBUG+) ──
    if log_file:
        log_path = Path(log_file).resolve()
        if not any(Path(h.baseFilename) == log_path for h in files):
            log_path.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(str(log_path), encoding="utf-8")
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt=FILE_DATE_FORMAT))
            logger.addHandler(fh)
            files.append(fh)

    logger.setLevel(logging.DEBUG if files else console_level)
    if log_file:
        logger.info("Log file: %s", log_file)
    return logger
