"""
Spdr Query Builder - Structured Logging
Provides JSON-formatted logging so builder events can be filtered by field.
"""

import logging
import sys
from typing import Optional
from pythonjsonlogger import jsonlogger

from .config import LOG_LEVEL, config


def setup_logger(name: str = __name__) -> logging.Logger:
    """
    Configure structured JSON logger.

    Args:
        name: Logger name (typically __name__ from calling module)

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger(__name__)
        >>> logger.debug("Query cleared", extra={
        ...     "category": "sort",
        ...     "history_size": 3
        ... })
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers
    if logger.hasHandlers():
        return logger

    level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = jsonlogger.JsonFormatter(
        '%(asctime)s %(name)s %(levelname)s %(message)s',
        datefmt='%Y-%m-%dT%H:%M:%S'
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    # Don't propagate to root logger
    logger.propagate = False

    return logger


# Global logger instance
logger = setup_logger('spdr_query_builder')


def log_query_cleared(category: Optional[str], previous_query: str, history_size: int):
    """Log a clear() call and the query string pushed to history."""
    logger.debug("Query cleared", extra={
        "event_type": "query_cleared",
        "category": category or "all",
        "previous_query": previous_query,
        "history_size": history_size,
        "environment": config.environment
    })


def log_params_removed(property_name: str, category: Optional[str], removed: int):
    """Log a remove() call with the number of params dropped."""
    logger.debug("Params removed", extra={
        "event_type": "params_removed",
        "property": property_name,
        "category": category or "all",
        "removed_count": removed
    })


def log_history_cleared(dropped: int):
    """Log a history reset."""
    logger.debug("History cleared", extra={
        "event_type": "history_cleared",
        "dropped_count": dropped
    })
