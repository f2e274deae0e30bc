"""
notewhisper.logging - Logging setup for the CLI.

Whisper's stderr and failure details go to the `notewhisper` logger; the
user only sees short notices. Pass a log file to keep those details around
after the run.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger("notewhisper")

LOG_FORMAT = "%(levelname)s: %(message)s"
FILE_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """Configure the notewhisper logger.

    Args:
        verbose: If True, enable DEBUG level logging; otherwise WARNING level
        log_file: Optional file that receives the same records, with timestamps
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.setLevel(level)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        logger.addHandler(handler)
