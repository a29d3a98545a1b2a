"""
Configuration management for the dynamic field engine.

Settings are split into focused sections (query, display, database,
log, strings) and persisted as a TOML file.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

import toml

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
KNOWN_SECTIONS = ('query', 'display', 'database', 'log', 'strings')


@dataclass
class QuerySettings:
    """Column names every option query must return."""

    identity_column: str = 'id'
    data_column: str = 'data'

    def validate(self) -> List[str]:
        """Validate the query settings and return any errors."""
        errors = []

        if not self.identity_column:
            errors.append("identity_column cannot be empty")

        if not self.data_column:
            errors.append("data_column cannot be empty")

        if self.identity_column and self.identity_column == self.data_column:
            errors.append("identity_column and data_column must differ")

        return errors


@dataclass
class DisplaySettings:
    """Settings for option label formatting."""

    language: str = 'en'

    def validate(self) -> List[str]:
        """Validate the display settings and return any errors."""
        errors = []

        if not self.language:
            errors.append("language cannot be empty")

        return errors


@dataclass
class DatabaseSettings:
    """Settings for the DuckDB-backed data source."""

    path: str = ':memory:'
    read_only: bool = False

    def validate(self) -> List[str]:
        """Validate the database settings and return any errors."""
        errors = []

        if not self.path:
            errors.append("database path cannot be empty")

        if self.read_only and self.path == ':memory:':
            errors.append("an in-memory database cannot be opened read-only")

        return errors


@dataclass
class LogSettings:
    """Settings passed to core.logging_config.setup_logging."""

    level: str = 'INFO'
    log_file: str = ''
    log_dir: str = 'logs'

    def validate(self) -> List[str]:
        """Validate the logging settings and return any errors."""
        errors = []

        if self.level.upper() not in VALID_LOG_LEVELS:
            errors.append(f"level must be one of {list(VALID_LOG_LEVELS)}")

        return errors


@dataclass
class Settings:
    """Main settings class that combines all configuration sections."""

    config_file_path: str = "dynamic_field.toml"

    query: QuerySettings = field(default_factory=QuerySettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    log: LogSettings = field(default_factory=LogSettings)
    strings: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Return the settings in their TOML layout."""
        return {
            'query': {
                'identity_column': self.query.identity_column,
                'data_column': self.query.data_column,
            },
            'display': {
                'language': self.display.language,
            },
            'database': {
                'path': self.database.path,
                'read_only': self.database.read_only,
            },
            'log': {
                'level': self.log.level,
                'log_file': self.log.log_file,
                'log_dir': self.log.log_dir,
            },
            'strings': dict(self.strings),
        }

    def save_config(self) -> None:
        """Save current settings to the TOML file."""
        try:
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                toml.dump(self.to_dict(), f)
            logging.info(f"Configuration saved to {self.config_file_path}")
        except OSError as e:
            error_msg = f"Error saving configuration: {e}"
            logging.error(error_msg)
            raise ConfigurationError(error_msg, config_file=self.config_file_path)

    def load_config(self) -> None:
        """
        Load settings from the TOML file.

        A missing file leaves the defaults in place.

        Raises:
            ConfigurationError: If the file exists but cannot be decoded
        """
        try:
            with open(self.config_file_path, encoding='utf-8') as f:
                config_data = toml.load(f)
        except FileNotFoundError:
            logging.info(f"{self.config_file_path} not found. Using default settings.")
            return
        except toml.TomlDecodeError as e:
            error_msg = f"Error decoding {self.config_file_path}: {e}"
            logging.error(error_msg)
            raise ConfigurationError(error_msg, config_file=self.config_file_path)

        for section in config_data:
            if section not in KNOWN_SECTIONS:
                logging.warning(f"Ignoring unknown section [{section}] in {self.config_file_path}")

        if 'query' in config_data:
            query_config = config_data['query']
            self.query.identity_column = query_config.get('identity_column', self.query.identity_column)
            self.query.data_column = query_config.get('data_column', self.query.data_column)

        if 'display' in config_data:
            self.display.language = config_data['display'].get('language', self.display.language)

        if 'database' in config_data:
            database_config = config_data['database']
            self.database.path = database_config.get('path', self.database.path)
            self.database.read_only = bool(database_config.get('read_only', self.database.read_only))

        if 'log' in config_data:
            log_config = config_data['log']
            self.log.level = log_config.get('level', self.log.level)
            self.log.log_file = log_config.get('log_file', self.log.log_file)
            self.log.log_dir = log_config.get('log_dir', self.log.log_dir)

        if 'strings' in config_data:
            strings_config = config_data['strings']
            if not isinstance(strings_config, dict):
                raise ConfigurationError(
                    "[strings] must be a table of message templates",
                    config_file=self.config_file_path,
                    field='strings'
                )
            self.strings.update({str(k): str(v) for k, v in strings_config.items()})

        logging.info(f"Configuration loaded from {self.config_file_path}")

    def validate(self) -> List[str]:
        """Validate all configuration sections and return any errors."""
        errors = []
        errors.extend(self.query.validate())
        errors.extend(self.display.validate())
        errors.extend(self.database.validate())
        errors.extend(self.log.validate())
        return errors

    @classmethod
    def from_file(cls, config_file_path: str) -> 'Settings':
        """Create settings, load them from ``config_file_path`` and log any validation errors."""
        settings = cls(config_file_path=config_file_path)
        settings.load_config()
        for error in settings.validate():
            logging.warning(f"Invalid setting in {config_file_path}: {error}")
        return settings
