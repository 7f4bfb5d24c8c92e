"""Logging configuration for the interactive shell.

Full detail goes to a log file; the terminal only sees warnings and above
so the redrawn listing is not interleaved with chatter.
"""
from __future__ import annotations
import logging
import sys
from pathlib import Path

FORMAT = '%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s'
DATEFMT = '%Y-%m-%d %H:%M:%S'


def setup_logging(log_file: str | Path, level: str = 'INFO', console_level: int = logging.WARNING) -> None:
    """Install handlers on the root logger, replacing any existing ones.
    Call once, before the first log record."""
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=FORMAT, datefmt=DATEFMT)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding='utf-8')
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
