"""
Options materialization for dynamic fields.

Runs a field's query through a data source and turns each result row into
an OptionEntry. Problems with the query result are returned as an
OptionsError on the MaterializeResult instead of being raised.
"""

import logging
from typing import Any, List

from core.exceptions import DataSourceError

from .formatting import TextFormatter
from .models import FieldConfig, MaterializeResult, OptionEntry, OptionSet, OptionsError
from .sanitizer import sanitize_query
from .sources import DataSource
from .strings import Localizer

logger = logging.getLogger(__name__)

DEFAULT_IDENTITY_COLUMN = 'id'
DEFAULT_DATA_COLUMN = 'data'


def _display_text(value: Any, formatter: TextFormatter) -> str:
    return formatter.format('' if value is None else str(value))


def materialize(
    query: str,
    data_source: DataSource,
    formatter: TextFormatter,
    localizer: Localizer,
    identity_column: str = DEFAULT_IDENTITY_COLUMN,
    data_column: str = DEFAULT_DATA_COLUMN
) -> MaterializeResult:
    """
    Execute a sanitized query and build its option set.

    Only call this with a query that sanitize_query() accepted.

    Args:
        query: The field query
        data_source: Collaborator that executes the query
        formatter: Display formatting applied to keys and labels
        localizer: Provides the sentinel "choose" label
        identity_column: Row field used for option keys
        data_column: Row field used for option labels

    Returns:
        MaterializeResult whose options always start with the sentinel
    """
    empty = OptionSet.build(localizer.message('choose'))

    try:
        rows = data_source.execute_readonly_query(query)
    except DataSourceError as e:
        logger.info(f"Option query failed: {e.message}")
        return MaterializeResult(options=empty, error=OptionsError.QUERY_EXECUTION_FAILED, detail=e.message)

    if not rows:
        return MaterializeResult(options=empty, error=OptionsError.EMPTY_RESULT_SET)

    # Column presence is decided by the first row
    first_row = rows[0]
    if identity_column not in first_row:
        return MaterializeResult(options=empty, error=OptionsError.MISSING_IDENTITY_COLUMN,
                                 detail=identity_column, row_count=len(rows))
    if data_column not in first_row:
        return MaterializeResult(options=empty, error=OptionsError.MISSING_DATA_COLUMN,
                                 detail=data_column, row_count=len(rows))

    entries: List[OptionEntry] = [
        OptionEntry(
            key=_display_text(row.get(identity_column), formatter),
            label=_display_text(row.get(data_column), formatter),
        )
        for row in rows
    ]

    logger.debug(f"Materialized {len(entries)} options")
    return MaterializeResult(options=OptionSet.build(empty.sentinel.label, entries), row_count=len(rows))


def get_options(
    config: FieldConfig,
    data_source: DataSource,
    formatter: TextFormatter,
    localizer: Localizer,
    identity_column: str = DEFAULT_IDENTITY_COLUMN,
    data_column: str = DEFAULT_DATA_COLUMN
) -> OptionSet:
    """
    Return the options to render for a field.

    A blank query, a query refused by the safety check, or a query whose
    result cannot be turned into options yields the sentinel alone. Faults
    raised by the data source or formatter are logged and never propagate.
    """
    if not config.query or not config.query.strip():
        return OptionSet.build(localizer.message('choose'))

    if not sanitize_query(config.query):
        logger.warning("Field query refused by the safety check; rendering no options")
        return OptionSet.build(localizer.message('choose'))

    try:
        result = materialize(config.query, data_source, formatter, localizer, identity_column, data_column)
    except Exception as e:
        logger.warning(f"Option query failed while rendering: {e}")
        return OptionSet.build(localizer.message('choose'))

    if not result.ok:
        logger.warning(f"Could not build options: {result.error.value} "
                       f"({result.detail or 'no detail'}, {result.row_count} rows)")
    else:
        logger.debug(f"Rendering {result.row_count} options")

    return result.options
