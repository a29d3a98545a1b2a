"""
Shared fixtures for the dynamic field tests.
"""
import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.database import DatabaseManager
from dynamic_field.formatting import PlainFormatter
from dynamic_field.sources import StaticDataSource
from dynamic_field.strings import StringTable

USERS = [
    {'id': 1, 'data': 'Alice'},
    {'id': 2, 'data': 'Bob'},
]


@pytest.fixture
def localizer():
    """Default English strings."""
    return StringTable()


@pytest.fixture
def formatter():
    """Formatter that leaves text untouched."""
    return PlainFormatter()


@pytest.fixture
def users_source():
    """In-memory source returning two users."""
    return StaticDataSource(USERS)


@pytest.fixture
def db_manager():
    """In-memory DuckDB with a small users table."""
    manager = DatabaseManager(':memory:')
    conn = manager.get_connection()
    conn.execute("CREATE TABLE users (id INTEGER, name VARCHAR, updated_at TIMESTAMP)")
    conn.execute(
        "INSERT INTO users VALUES (1, 'Alice', '2024-01-01 10:00:00'), (2, 'Bob', NULL)"
    )
    yield manager
    manager.reset_connection()
