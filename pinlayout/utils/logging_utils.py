"""Simple logging utilities for pinlayout.

Standard Logger Initialization Pattern
--------------------------------------
Modules use the standard Python pattern:

    import logging
    logger = logging.getLogger(__name__)

Handlers are attached once, by the CLI, through setup_cli_logging().
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

# Max log file size: 5MB, keep 2 backups
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 2

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _log_dir() -> Path:
    # Inline path instead of config.constants to keep logging import-safe
    log_dir = Path.home() / ".config" / "pinlayout"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def setup_cli_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[Path] = None
) -> logging.Logger:
    """Configure the "pinlayout" logger for a CLI run.

    The log file always receives INFO and above. stderr shows WARNING by
    default, DEBUG with --verbose and only ERROR with --quiet.

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("pinlayout")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stderr_handler = logging.StreamHandler(sys.stderr)
    if verbose:
        stderr_handler.setLevel(logging.DEBUG)
    elif quiet:
        stderr_handler.setLevel(logging.ERROR)
    else:
        stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(stderr_handler)

    try:
        file_handler = RotatingFileHandler(
            log_file or _log_dir() / "pinlayout.log",
            maxBytes=_MAX_LOG_BYTES,
            backupCount=_BACKUP_COUNT,
        )
    except OSError as e:
        # Fallback to stderr only; logging is what's failing
        print(f"Warning: log file setup failed: {e}", file=sys.stderr)
    else:
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(file_handler)

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger
