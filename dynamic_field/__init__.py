"""
Dynamic option-set field engine.

A custom field whose options come from an administrator supplied read-only
query. This package validates and sanitizes the query, turns its result
into options, and checks the configured default selection.
"""

from .controller import DynamicFieldController, create_controller
from .defaults import validate_default
from .form import FormFieldSpec, config_form_definition
from .formatting import MultilangFormatter, PlainFormatter, TextFormatter
from .models import (
    DEFAULT_VALUE_FIELD,
    QUERY_FIELD,
    FieldConfig,
    MaterializeResult,
    OptionEntry,
    OptionSet,
    OptionsError,
    ValidationErrors,
)
from .options import get_options, materialize
from .sanitizer import FORBIDDEN_KEYWORDS, find_forbidden_keywords, normalize_query, sanitize_query
from .sources import DataSource, DuckDBDataSource, StaticDataSource
from .strings import DEFAULT_STRINGS, Localizer, StringTable
from .validation import validate_config
from .values import default_selection, export_value, join_selection, parse_selection

__all__ = [
    # Controller
    'DynamicFieldController',
    'create_controller',

    # Data model
    'FieldConfig',
    'OptionEntry',
    'OptionSet',
    'OptionsError',
    'MaterializeResult',
    'ValidationErrors',
    'QUERY_FIELD',
    'DEFAULT_VALUE_FIELD',

    # Pipeline
    'sanitize_query',
    'normalize_query',
    'find_forbidden_keywords',
    'FORBIDDEN_KEYWORDS',
    'materialize',
    'get_options',
    'validate_default',
    'validate_config',

    # Collaborators
    'DataSource',
    'DuckDBDataSource',
    'StaticDataSource',
    'TextFormatter',
    'MultilangFormatter',
    'PlainFormatter',
    'Localizer',
    'StringTable',
    'DEFAULT_STRINGS',

    # Config form and stored values
    'FormFieldSpec',
    'config_form_definition',
    'parse_selection',
    'join_selection',
    'default_selection',
    'export_value',
]

# Version info
__version__ = "1.0.0"
