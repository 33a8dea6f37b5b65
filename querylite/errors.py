"""Exception types raised by querylite."""

from typing import Any, Optional


class QueryLiteError(Exception):
    """Base class for querylite errors."""


class ConnectionError(QueryLiteError):
    """Raised when the database connection cannot be established."""
    def __init__(self, message: str, code: Any = 0):
        super().__init__(message)
        self.code = code


class UninitializedError(QueryLiteError):
    """Raised when the DB facade is used before DB.connect()."""


class QueryError(QueryLiteError):
    """Raised when a statement fails to execute."""
    def __init__(self, message: str, sql: str = '', params: Optional[dict] = None, code: Any = 0):
        super().__init__(message)
        self.sql = sql
        self.params = params or {}
        self.code = code
