"""Process-wide facade over a single Connection.

Example::

    DB.connect({'host': '127.0.0.1', 'database': 'demo', 'username': 'root', 'password': ''})
    DB.table('users').where('status', 'active').get()
"""

import logging
from typing import Any, Mapping, Optional
from .conn import Connection
from .errors import UninitializedError
from .query_builder import QueryBuilder

logger = logging.getLogger(__name__)


class DB:
    """Static entry point holding zero or one Connection."""
    _connection: Optional[Connection] = None

    @classmethod
    def connect(cls, config: Mapping[str, Any]) -> Connection:
        """Open a Connection and make it the shared one.

        A previously stored connection is replaced, not closed.
        """
        cls._connection = Connection(config)
        return cls._connection

    @classmethod
    def connection(cls) -> Connection:
        if cls._connection is None:
            raise UninitializedError('Database connection has not been initialised. Call DB.connect() first.')
        return cls._connection

    @classmethod
    def table(cls, name: str) -> QueryBuilder:
        """Fresh query builder for ``name`` on the shared connection."""
        return QueryBuilder(cls.connection(), name)

    @classmethod
    def disconnect(cls):
        """Close and forget the shared connection, if any."""
        if cls._connection is not None:
            cls._connection.close()
            logger.info('Shared connection closed')
        cls._connection = None
