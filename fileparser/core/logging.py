import logging
import sys
from typing import Optional


def setup_logger(log_level: Optional[str] = None) -> logging.Logger:
    """
    Configure and return the package logger.
    
    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to the LOG_LEVEL setting.
    
    Returns:
        Configured logger instance
    """
    if log_level is None:
        from fileparser.core.config import settings
        log_level = settings.LOG_LEVEL
    
    level = getattr(logging, log_level.upper(), logging.INFO)
    
    # Create logger
    logger = logging.getLogger("fileparser")
    logger.setLevel(level)
    
    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()
    
    # Console handler on stderr so stdout stays free for results
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    
    # Create formatter with timestamp, level, and message
    formatter = logging.Formatter(
        fmt="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    handler.setFormatter(formatter)
    
    # Add handler to logger
    logger.addHandler(handler)
    
    return logger
