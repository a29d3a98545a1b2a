"""
Core infrastructure for the dynamic field engine.

This module provides the foundational components: settings, the DuckDB
connection manager, logging setup, and custom exceptions.
"""

from .config import DatabaseSettings, DisplaySettings, LogSettings, QuerySettings, Settings
from .database import DatabaseManager, get_database_manager, reset_database_manager
from .exceptions import (
    ConfigurationError,
    DatabaseError,
    DataSourceError,
    DynamicFieldError,
    SecurityError,
    ValidationError,
)
from .logging_config import configure_from_settings, setup_logging

__all__ = [
    # Configuration
    'QuerySettings',
    'DisplaySettings',
    'DatabaseSettings',
    'LogSettings',
    'Settings',

    # Database
    'DatabaseManager',
    'get_database_manager',
    'reset_database_manager',

    # Exceptions
    'DynamicFieldError',
    'ConfigurationError',
    'DatabaseError',
    'DataSourceError',
    'SecurityError',
    'ValidationError',

    # Logging
    'setup_logging',
    'configure_from_settings',
]

# Version info
__version__ = "1.0.0"
