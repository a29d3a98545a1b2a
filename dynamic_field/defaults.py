"""
Default value validation for dynamic fields.
"""

from typing import Optional

from .models import OptionSet
from .strings import Localizer

DEFAULT_SEPARATOR = ','


def validate_default(
    default_value: str,
    multiselect: bool,
    options: OptionSet,
    localizer: Localizer
) -> Optional[str]:
    """
    Check a configured default against the select mode and the options.

    Candidates are compared exactly as typed, without trimming.

    Args:
        default_value: Raw default, possibly comma separated
        multiselect: Whether the field allows several selections
        options: Options produced by the field query
        localizer: Resolves error messages

    Returns:
        An error message, or None if the default is acceptable
    """
    if not default_value:
        return None

    candidates = default_value.split(DEFAULT_SEPARATOR)

    if multiselect:
        # Multi-select defaults are not checked against the options: they may
        # be resolved by a later filtering stage.
        return None

    if len(candidates) > 1:
        return localizer.message('default_multiple', count=len(candidates))

    if default_value not in options:
        return localizer.message('default_missing', value=default_value)

    return None
