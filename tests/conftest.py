"""Shared fixtures: an in-memory SQLite connection with a seeded users table."""

import pytest

from querylite import Connection, DB

SQLITE_CONFIG = {'driver': 'sqlite', 'database': ':memory:'}

USERS_DDL = '''
    CREATE TABLE users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        email TEXT UNIQUE,
        status TEXT,
        created_at TEXT
    )
'''

SEED_USERS = [
    {'name': 'Ada', 'email': 'ada@example.com', 'status': 'active', 'created_at': '2024-01-01 10:00:00'},
    {'name': 'Bob', 'email': 'bob@example.com', 'status': 'inactive', 'created_at': '2024-02-01 10:00:00'},
    {'name': 'Cy', 'email': 'cy@example.com', 'status': 'active', 'created_at': '2024-03-01 10:00:00'},
]


@pytest.fixture
def conn():
    """Empty in-memory database with a users table."""
    c = Connection(SQLITE_CONFIG)
    c.execute(USERS_DDL)
    yield c
    c.close()


@pytest.fixture
def seeded(conn):
    """Connection whose users table holds SEED_USERS (ids 1..3)."""
    for row in SEED_USERS:
        conn.table('users').insert(row)
    return conn


@pytest.fixture(autouse=True)
def reset_facade():
    """Keep the process-wide DB facade from leaking between tests."""
    DB.disconnect()
    yield
    DB.disconnect()
