# src/bob_tracker/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

CONSOLE_FLOORS: dict[str, int] = {
    "bob_tracker.storage": logging.ERROR,
    "bob_tracker.tasks.task_list": logging.ERROR,
}


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the REPL readable on stderr.

    bob_tracker loggers pass, except those listed in `floors`, which need at
    least the given level (storage chatter and per-record load skips belong in
    the log file, not between replies). Everything else needs ERROR+.
    """

    def __init__(self, floors: dict[str, int] | None = None) -> None:
        super().__init__()
        self._floors = dict(CONSOLE_FLOORS if floors is None else floors)

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith("bob_tracker."):
            return record.levelno >= logging.ERROR

        for prefix, floor in self._floors.items():
            if name == prefix or name.startswith(prefix + "."):
                return record.levelno >= floor
        return True


def setup_logging(
    *,
    log_dir: str | Path = ".local/bob",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    console_floors: dict[str, int] | None = None,
) -> Path:
    """
    Configure logging with:
    - Console handler: stderr, filtered, so log lines never mix into replies on stdout
    - File handler: full logs for debugging

    Returns the log file path.

    Call this ONCE, very early (before first logger.info).
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "bob.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter(console_floors))
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
    return log_file
