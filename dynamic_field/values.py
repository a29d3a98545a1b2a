"""
Helpers for values stored in a dynamic field.

A stored value is one option key, or several keys joined with commas for a
multi-select field.
"""

from typing import Iterable, List, Optional, Union

from .defaults import DEFAULT_SEPARATOR
from .models import FieldConfig, OptionSet

EXPORT_SEPARATOR = ', '


def parse_selection(value: Optional[Union[str, Iterable[str]]]) -> List[str]:
    """
    Split a stored value into option keys.

    Empty items are dropped; a list of keys is returned as a list.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(DEFAULT_SEPARATOR)
    else:
        items = [str(item) for item in value]
    return [item for item in items if item != '']


def join_selection(keys: Iterable[str]) -> str:
    """Inverse of parse_selection for storage."""
    return DEFAULT_SEPARATOR.join(key for key in keys if key != '')


def default_selection(config: FieldConfig) -> List[str]:
    """
    Keys pre-selected when a record has no value yet.

    A single-select field treats the whole default as one key.
    """
    if not config.default_value:
        return []
    if not config.multiselect:
        return [config.default_value]
    return parse_selection(config.default_value)


def export_value(value: Optional[Union[str, Iterable[str]]], options: OptionSet) -> str:
    """
    Turn a stored value into display text.

    Keys are replaced by their option labels; keys no longer among the
    options are shown as stored.
    """
    labels = []
    for key in parse_selection(value):
        label = options.label_for(key)
        labels.append(key if label is None else label)
    return EXPORT_SEPARATOR.join(labels)
