"""
Spdr Query Builder - Configuration Management
Reads environment configuration, with python-dotenv for local development.
"""

import os
import logging
from typing import Optional
from dotenv import load_dotenv

# Load .env file for local development
load_dotenv()

# Query string delimiter used when nothing else is configured
DEFAULT_OPERAND = '&'


class Config:
    """
    Configuration manager backed by environment variables.

    Values come from the process environment, which python-dotenv
    populates from a .env file when one is present.
    """

    def __init__(self):
        self.environment = os.getenv('ENVIRONMENT', 'local')

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Fetch configuration value from the environment.

        Args:
            key: Configuration key name
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return os.getenv(key, default)

    def get_operand(self, key: str = 'SPDR_QUERY_OPERAND', default: str = DEFAULT_OPERAND) -> str:
        """
        Get the query-string delimiter.

        Args:
            key: Configuration key name
            default: Delimiter used when the key is unset or empty

        Returns:
            Delimiter string
        """
        value = self.get(key, default)
        if not value:
            # Log warning but don't crash - use default instead
            logging.warning(
                f"Empty delimiter for config key '{key}'. "
                f"Using default='{default}'."
            )
            return default
        return value


# Global configuration instance
config = Config()


# Logging configuration
LOG_LEVEL = config.get('LOG_LEVEL', 'INFO')
