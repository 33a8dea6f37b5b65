"""Minimal fluent SQL query builder over a single database connection."""

from .conn import Connection, build_url
from .query_builder import QueryBuilder, Value
from .conditions import Condition, InCondition
from .db import DB
from .audit import Audit, audited
from .errors import QueryLiteError, ConnectionError, UninitializedError, QueryError
from .mappings import placeholders, quote_chars

__version__ = '0.1.0'

__all__ = [
    'Connection', 'build_url', 'QueryBuilder', 'Value', 'Condition', 'InCondition',
    'DB', 'Audit', 'audited', 'QueryLiteError', 'ConnectionError',
    'UninitializedError', 'QueryError', 'placeholders', 'quote_chars'
]
