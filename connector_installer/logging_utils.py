from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from colorama import Fore, Style

from .settings import DEFAULT_LOG_PATH

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"

_LEVEL_COLORS = {
    logging.DEBUG: Fore.CYAN,
    logging.INFO: Fore.LIGHTYELLOW_EX,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}


class ColorFormatter(logging.Formatter):
    """Timestamped console lines, coloured by level."""

    def __init__(self, fmt: str = CONSOLE_FORMAT, datefmt: str = CONSOLE_DATEFMT, use_color: bool = True):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if not self.use_color:
            return text
        color = _LEVEL_COLORS.get(record.levelno, Fore.LIGHTYELLOW_EX)
        return f"{color}{text}{Style.RESET_ALL}"


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging.

    Everything goes to ``log_path``. If that location is not writable we fall
    back to a file in the working directory. Console output is coloured when
    stdout is a terminal.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_connector_installer_configured", False):
        return getattr(logger, "_connector_installer_log_path", log_path)

    chosen_path = log_path
    handlers: list[logging.Handler] = []

    file_fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
    except OSError:
        chosen_path = str(Path.cwd() / "fyde-connector-installer.log")
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(file_fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(ColorFormatter(use_color=console.stream.isatty()))
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_connector_installer_configured", True)
    setattr(logger, "_connector_installer_log_path", chosen_path)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
