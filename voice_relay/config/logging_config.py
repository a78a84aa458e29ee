"""
Logging setup for the relay process.

One application logger (``voice_relay``) writes to stdout and, unless disabled,
to a rotating file. The HTTP and websocket libraries under the Gemini SDK log
every frame at DEBUG/INFO, so their loggers are held at WARNING unless the relay
itself runs at DEBUG.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from voice_relay.config.constants import LOGGER_NAME

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "voice_relay.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5

NOISY_LOGGERS = ("httpx", "httpcore", "websockets", "google_genai")


def _quiet_libraries(level: int) -> None:
    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def configure_logging(level: Optional[str] = None,
                      log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configure the application logger.

    Args:
        level: Level name; defaults to LOG_LEVEL, then INFO. Unknown names mean INFO.
        log_dir: Directory for the rotating log file; defaults to LOG_DIR, then
            "logs". An empty string disables the file handler.

    Returns:
        logging.Logger: The configured logger instance
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if log_dir is None:
        log_dir = os.getenv("LOG_DIR", "logs")

    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Reconfiguring replaces handlers rather than stacking them
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        try:
            path = Path(log_dir)
            path.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                path / LOG_FILE_NAME,
                maxBytes=MAX_LOG_SIZE,
                backupCount=BACKUP_COUNT,
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not set up file logging in {log_dir}: {e}")

    logger.propagate = False
    _quiet_libraries(numeric_level)

    logger.info(f"Logging configured at {logging.getLevelName(numeric_level)}")
    return logger
