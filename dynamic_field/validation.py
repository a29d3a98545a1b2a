"""
Validation of submitted dynamic field configuration.

validate_config() runs the safety check, the option query and the default
value check in order and collects one message per form field. It never
raises: every failure, including data source faults, ends up in the
returned map.
"""

import logging
from typing import Any, Mapping

from core.exceptions import DynamicFieldError

from .defaults import validate_default
from .formatting import TextFormatter
from .models import DEFAULT_VALUE_FIELD, QUERY_FIELD, FieldConfig, OptionsError, ValidationErrors
from .options import DEFAULT_DATA_COLUMN, DEFAULT_IDENTITY_COLUMN, materialize
from .sanitizer import sanitize_query
from .sources import DataSource
from .strings import Localizer

logger = logging.getLogger(__name__)


def options_error_message(error: OptionsError, detail: str, localizer: Localizer) -> str:
    """Message shown on the query field for a materialization error."""
    if error is OptionsError.QUERY_EXECUTION_FAILED:
        return localizer.message('query_execution_failed', error=detail or '')
    if error is OptionsError.EMPTY_RESULT_SET:
        return localizer.message('query_empty')
    if error is OptionsError.MISSING_IDENTITY_COLUMN:
        return localizer.message('query_id_missing', column=detail or DEFAULT_IDENTITY_COLUMN)
    return localizer.message('query_data_missing', column=detail or DEFAULT_DATA_COLUMN)


def validate_config(
    raw_form_data: Mapping[str, Any],
    data_source: DataSource,
    formatter: TextFormatter,
    localizer: Localizer,
    identity_column: str = DEFAULT_IDENTITY_COLUMN,
    data_column: str = DEFAULT_DATA_COLUMN
) -> ValidationErrors:
    """
    Validate submitted config form data.

    Args:
        raw_form_data: Submitted form data, ``{'configdata': {...}}``
        data_source: Executes the query once it passed the safety check
        formatter: Display formatting for option keys and labels
        localizer: Resolves error messages
        identity_column: Row field holding option keys
        data_column: Row field holding option labels

    Returns:
        Field path -> message; empty when the configuration may be saved
    """
    errors: ValidationErrors = {}

    try:
        config = FieldConfig.from_form_data(raw_form_data)

        if not config.query.strip():
            errors[QUERY_FIELD] = localizer.message('required')
            return errors

        if not sanitize_query(config.query):
            errors[QUERY_FIELD] = localizer.message('query_unsafe')
            return errors

        result = materialize(config.query, data_source, formatter, localizer, identity_column, data_column)
        if not result.ok:
            errors[QUERY_FIELD] = options_error_message(result.error, result.detail, localizer)
            return errors

        if config.default_value:
            message = validate_default(config.default_value, config.multiselect, result.options, localizer)
            if message:
                errors[DEFAULT_VALUE_FIELD] = message

    except DynamicFieldError as e:
        logger.error(f"Config validation failed: {e}")
        errors[QUERY_FIELD] = localizer.message('query_error', error=e.message)
    except Exception as e:
        logger.exception("Unexpected error while validating field configuration")
        errors[QUERY_FIELD] = localizer.message('query_error', error=str(e))

    return errors
