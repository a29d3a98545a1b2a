"""
User-facing strings for the dynamic field engine.

Templates use ``str.format`` placeholders. Hosts can override any template
through the ``[strings]`` table of the settings file.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from typing_extensions import Protocol

logger = logging.getLogger(__name__)

DEFAULT_STRINGS: Dict[str, str] = {
    'choose': 'Choose...',
    'specific_settings': 'Dynamic field settings',
    'query': 'SQL query',
    'query_help': 'A SELECT query returning an "id" column and a "data" column.',
    'autocomplete': 'Autocomplete',
    'autocomplete_help': 'Let users type to search the options instead of scrolling a list.',
    'default_value': 'Default value',
    'default_value_help': 'Key of the option selected by default. Separate several keys with commas when multiselect is enabled.',
    'multiselect': 'Enable multiselect',
    'required': 'You must supply a value here.',
    'query_unsafe': 'The query failed the safety check. Only a single SELECT statement is allowed.',
    'query_execution_failed': 'Query execution error: {error}',
    'query_empty': 'The query returned an empty result set.',
    'query_id_missing': 'The identity column "{column}" is missing from the query result.',
    'query_data_missing': 'The data column "{column}" is missing from the query result.',
    'default_multiple': 'Only one default value is allowed for a single-select field, {count} were given.',
    'default_missing': 'The default value "{value}" was not found among the options.',
    'query_error': 'SQL error: {error}',
}


class Localizer(Protocol):
    """Resolves a message key and its arguments to display text."""

    def message(self, key: str, **args: Any) -> str:
        ...


class StringTable:
    """
    Localizer backed by a dictionary of templates.

    Args:
        overrides: Templates replacing or extending DEFAULT_STRINGS
    """

    def __init__(self, overrides: Optional[Mapping[str, str]] = None):
        self.strings: Dict[str, str] = dict(DEFAULT_STRINGS)
        if overrides:
            self.strings.update(overrides)

    def message(self, key: str, **args: Any) -> str:
        """
        Render the template for ``key``.

        Raises:
            KeyError: If no template exists for ``key``
        """
        template = self.strings[key]
        if not args:
            return template
        try:
            return template.format(**args)
        except (KeyError, IndexError, ValueError) as e:
            # A broken override should not hide the message entirely
            logger.warning(f"Could not format string {key!r}: {e}")
            return template
