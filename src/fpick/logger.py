"""
Logging configuration for fpick
Console output goes to stderr so it never mixes with the menu or the
selected path; file output is optional
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional, Union


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output"""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'       # Reset
    }

    def format(self, record):
        # Color a copy so file handlers keep the plain level name
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.COLORS['RESET']}"

        return super().format(record)


def setup_logger(name: Optional[str] = None, level: str = "WARNING", log_to_file: bool = False,
                 log_dir: Optional[Union[str, Path]] = None) -> logging.Logger:
    """Setup logger with console and file handlers"""

    if name is None:
        name = "fpick"

    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(logging.DEBUG if log_to_file else numeric_level)

    console_formatter = ColoredFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(funcName)s() - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_to_file:
        try:
            logs_dir = Path(log_dir).expanduser() if log_dir else default_log_dir()
            logs_dir.mkdir(parents=True, exist_ok=True)

            timestamp = datetime.now().strftime("%Y%m%d")
            log_file = logs_dir / f"fpick_{timestamp}.log"

            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always DEBUG for file
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)

            logger.debug(f"Logging to file: {log_file}")

        except OSError as e:
            logger.warning(f"Could not setup file logging: {e}")

    return logger


def default_log_dir() -> Path:
    return Path.home() / ".cache" / "fpick" / "logs"


def reset_logger(name: str = "fpick") -> None:
    """Remove and close all handlers so setup_logger can run again"""
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def set_debug_mode():
    """Enable debug mode for all loggers"""
    logger = logging.getLogger("fpick")
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG)
