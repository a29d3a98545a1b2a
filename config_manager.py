"""
Centralized settings manager to avoid multiple Settings instances.
"""
import os

from core.config import Settings
from core.logging_config import configure_from_settings

CONFIG_PATH_ENV = 'DYNAMIC_FIELD_CONFIG'
DEFAULT_CONFIG_PATH = 'dynamic_field.toml'

# Global settings instance - loaded once
_settings_instance = None


def get_settings() -> Settings:
    """Get the global settings instance, loading it on first use."""
    global _settings_instance
    if _settings_instance is None:
        path = os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)
        _settings_instance = Settings.from_file(path)
        configure_from_settings(_settings_instance.log)
    return _settings_instance


def refresh_settings() -> Settings:
    """Force a reload of the global settings instance."""
    global _settings_instance
    _settings_instance = None
    return get_settings()
