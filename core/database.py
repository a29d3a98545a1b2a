"""
Database connection management for the dynamic field engine.

This module provides a database manager that owns one lazily opened
DuckDB connection and converts driver failures into DatabaseError.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Optional, Any, Generator

import duckdb
import pandas as pd

from .exceptions import DatabaseError


class DatabaseManager:
    """
    Owner of a single DuckDB connection.

    The connection is created on first use and guarded by a lock so that a
    manager can be shared between request handlers.
    """

    def __init__(self, connection_string: str = ':memory:', read_only: bool = False):
        """Initialize the database manager."""
        self.connection_string = connection_string
        self.read_only = read_only
        self._connection: Optional[duckdb.DuckDBPyConnection] = None
        self._connection_lock = threading.Lock()

        logging.info(f"DatabaseManager initialized with connection: {connection_string}")

    def get_connection(self) -> duckdb.DuckDBPyConnection:
        """
        Get a database connection, creating it if necessary.

        Returns:
            DuckDB connection object

        Raises:
            DatabaseError: If connection creation fails
        """
        if self._connection is None:
            with self._connection_lock:
                if self._connection is None:
                    try:
                        self._connection = duckdb.connect(
                            database=self.connection_string,
                            read_only=self.read_only
                        )
                        logging.info("Created new DuckDB connection")
                    except duckdb.Error as e:
                        raise DatabaseError(f"Failed to create database connection: {e}")

        return self._connection

    @contextmanager
    def get_connection_context(self) -> Generator[duckdb.DuckDBPyConnection, None, None]:
        """
        Context manager for database connections.

        Yields:
            DuckDB connection object

        Example:
            with db_manager.get_connection_context() as conn:
                rows = conn.execute("SELECT id, name AS data FROM users").fetchall()
        """
        connection = self.get_connection()
        try:
            yield connection
        except duckdb.Error as e:
            logging.error(f"Database operation failed: {e}")
            raise DatabaseError(f"Database operation failed: {e}")

    def execute_query(self, query: str, params: Optional[list] = None) -> Any:
        """
        Execute a query with parameters and fetch every row as a tuple.

        Raises:
            DatabaseError: If query execution fails
        """
        try:
            with self.get_connection_context() as conn:
                if params:
                    result = conn.execute(query, params)
                else:
                    result = conn.execute(query)
                return result.fetchall()
        except DatabaseError as e:
            raise DatabaseError(f"Query execution failed: {e.message}", query=query, params=params)

    def execute_query_df(self, query: str, params: Optional[list] = None) -> pd.DataFrame:
        """
        Execute a query and return the result as a DataFrame.

        Args:
            query: SQL query string
            params: Query parameters (optional)

        Returns:
            DataFrame with one column per selected expression

        Raises:
            DatabaseError: If query execution fails
        """
        try:
            with self.get_connection_context() as conn:
                if params:
                    result = conn.execute(query, params)
                else:
                    result = conn.execute(query)
                return result.df()
        except DatabaseError as e:
            raise DatabaseError(f"Query execution failed: {e.message}", query=query, params=params)

    def reset_connection(self):
        """Close the connection; the next call reopens it."""
        with self._connection_lock:
            if self._connection:
                try:
                    self._connection.close()
                except duckdb.Error as e:
                    logging.warning(f"Error closing database connection: {e}")
                finally:
                    self._connection = None
            logging.info("Database connection reset")

    def is_connected(self) -> bool:
        """Check if database connection is active."""
        return self._connection is not None

    def get_connection_info(self) -> dict:
        """Get information about the current database connection."""
        if not self._connection:
            return {'status': 'disconnected'}

        try:
            self._connection.execute("SELECT 1")
            return {
                'status': 'connected',
                'connection_string': self.connection_string,
                'read_only': self.read_only,
                'database_type': 'duckdb'
            }
        except duckdb.Error as e:
            return {
                'status': 'error',
                'error': str(e),
                'connection_string': self.connection_string
            }


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_database_manager(connection_string: str = ':memory:', read_only: bool = False) -> DatabaseManager:
    """
    Get the global database manager instance.

    The arguments only apply when the manager is first created.
    """
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(connection_string, read_only=read_only)
    return _db_manager


def reset_database_manager():
    """Reset the global database manager (useful for testing)."""
    global _db_manager
    if _db_manager:
        _db_manager.reset_connection()
        _db_manager = None
