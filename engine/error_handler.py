"""
Centralized error handling and logging.

This module provides:
- The package logger, writing detailed logs to files and warnings to the console
- Custom exception types for the configuration and wire layers
- A helper for logging caught errors with context
"""
import logging
import traceback
from pathlib import Path
from typing import Optional
from datetime import datetime

# Setup logging directory
LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
LOG_DIR.mkdir(exist_ok=True)

# Configure logger
logger = logging.getLogger("daycycle")
logger.setLevel(logging.DEBUG)

# Prevent duplicate handlers
if not logger.handlers:
    # File handler for detailed logs
    log_file = LOG_DIR / f"daycycle_{datetime.now().strftime('%Y%m%d')}.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )

    # Console handler for warnings/errors
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(
        logging.Formatter('%(levelname)s: %(message)s')
    )

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a child of the package logger (e.g. "daycycle.controller")."""
    return logger.getChild(name)


class DayCycleError(Exception):
    """Base exception for day cycle errors."""
    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message


class ConfigError(DayCycleError):
    """Error when a configuration value fails validation."""
    pass


class PacketError(DayCycleError):
    """Error when a time packet cannot be decoded."""
    pass


def log_error(error: Exception, context: str = "") -> None:
    """
    Log an error with context information.

    Args:
        error: The exception that occurred
        context: Where the error occurred (e.g., "broadcast_time", "load_config")
    """
    error_type = type(error).__name__
    trace = traceback.format_exc()

    logger.error(f"Error in {context}: {error_type}: {error}\n{trace}")
