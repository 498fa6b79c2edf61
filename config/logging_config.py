"""
Logging Configuration for the Spot Availability Engine
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .settings import LOG_DIR, LOG_LEVEL


def setup_logging(
    level=LOG_LEVEL,
    log_file="spot_engine.log",
    log_dir=LOG_DIR,
    max_bytes=10485760,  # 10MB
    backup_count=5,
    quiet=("urllib3", "fsspec"),
):
    """
    Configure logging for the engine and the scripts that drive it

    Args:
        level: Logging level name or number (DEBUG, INFO, WARNING, ...)
        log_file: Name of log file; None disables the file handler
        log_dir: Directory for log files
        max_bytes: Maximum size of log file before rotation
        backup_count: Number of backup files to keep
        quiet: Third-party loggers capped at WARNING

    Returns:
        Configured root logger
    """
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path / log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name):
    """
    Get logger for specific module

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
