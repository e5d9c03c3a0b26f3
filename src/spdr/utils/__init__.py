"""Configuration and logging shared by the builder."""

from .config import Config, DEFAULT_OPERAND, config
from .logger import logger, setup_logger

__all__ = ["Config", "DEFAULT_OPERAND", "config", "logger", "setup_logger"]
