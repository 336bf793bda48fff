"""
Logging configuration for production use.

Provides structured logging with file and console output.
Integrates with config for environment-specific log levels.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

from .config import config


def setup_logging(
    logger_name: str = "defect_insight",
    level: Optional[str] = None,
    log_dir: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Module loggers (``logging.getLogger(__name__)``) inside the package
    propagate to the "defect_insight" logger, so configuring it once is enough.

    Args:
        logger_name: Name of the logger
        level: Log level override (defaults to config.log_level)
        log_dir: Directory for the rotating log file (defaults to config.logs_dir)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Don't add handlers if logger already configured
    if logger.handlers:
        return logger

    level = level or config.log_level
    log_dir = Path(log_dir) if log_dir is not None else config.logs_dir
    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        log_dir / f"{logger_name}.log",
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger
