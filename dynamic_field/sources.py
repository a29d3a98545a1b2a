"""
Data sources that execute option queries.

A data source runs an already sanitized, read-only query and returns one
mapping per row. Failures are reported by raising DataSourceError.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from typing_extensions import Protocol

from core.database import DatabaseManager
from core.exceptions import DatabaseError, DataSourceError, SecurityError

from .sanitizer import sanitize_query

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


class DataSource(Protocol):
    """Executes a read-only query and returns its rows."""

    def execute_readonly_query(self, query: str) -> Sequence[Row]:
        ...


class DuckDBDataSource:
    """
    Data source backed by a DuckDB connection.

    The query is checked again before execution so that the connection is
    never handed text the sanitizer refused.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def execute_readonly_query(self, query: str) -> List[Dict[str, Any]]:
        """
        Execute ``query`` and return its rows as dictionaries.

        Raises:
            SecurityError: If the query does not pass the safety check
            DataSourceError: If the database rejects or fails the query
        """
        if not sanitize_query(query):
            raise SecurityError("Refusing to execute query", security_check='sanitize_query', input_value=query)

        try:
            df = self.db_manager.execute_query_df(query)
        except DatabaseError as e:
            logger.warning(f"Option query failed: {e.message}")
            raise DataSourceError(e.message, query=query)

        # NaN/NaT become None so missing values stay distinguishable from text
        df = df.astype(object).where(df.notna(), None)
        return df.to_dict('records')


class StaticDataSource:
    """In-memory data source returning a fixed list of rows."""

    def __init__(self, rows: Optional[Sequence[Row]] = None, error: Optional[Exception] = None):
        self.rows = list(rows or [])
        self.error = error
        self.queries: List[str] = []

    def execute_readonly_query(self, query: str) -> List[Row]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self.rows)
