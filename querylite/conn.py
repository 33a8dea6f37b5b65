"""Connection wrapper holding a single database handle."""

import sqlite3
import pandas as pd
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Connection as SAConnection, CursorResult
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool
from .audit import Audit, audited
from .errors import ConnectionError, QueryError
from .query_builder import QueryBuilder
from .mappings import default_driver, default_host, default_charset, quote_chars, charset_dialects
import logging

logger = logging.getLogger(__name__)


def _driver_code(e: Exception) -> Any:
    """Extract the driver error code from a wrapped DBAPI exception."""
    orig = getattr(e, 'orig', None)
    if orig is not None and orig.args and isinstance(orig.args[0], int):
        return orig.args[0]
    return getattr(orig, 'sqlite_errorcode', 0) if orig is not None else 0


def _driver_message(e: Exception) -> str:
    orig = getattr(e, 'orig', None)
    return str(orig) if orig is not None else str(e)


def build_url(config: Mapping[str, Any]) -> URL:
    """Build the SQLAlchemy URL from a connection config mapping."""
    driver = config.get('driver') or default_driver
    backend = driver.split('+')[0]
    if backend == 'sqlite':
        return URL.create(driver, database=config.get('database') or None)
    query = {}
    if backend in charset_dialects:
        query['charset'] = config.get('charset') or default_charset
    return URL.create(
        driver,
        username=config.get('username') or None,
        password=config.get('password') or None,
        host=config.get('host') or default_host,
        port=config.get('port'),
        database=config.get('database') or None,
        query=query,
    )


class Connection:
    """Owns one database connection for its whole lifetime.

    The config mapping takes ``host``, ``database``, ``username``,
    ``password`` and ``charset`` (default utf8mb4), plus the optional
    ``driver`` (default ``mysql+pymysql``), ``port``, ``echo``, ``debug``
    and ``audit_db`` keys.

    Statements run in autocommit mode and rows are returned as dicts. A
    failed connect raises :class:`querylite.errors.ConnectionError`; there
    is no retry and no pool.
    """
    def __init__(self, config: Mapping[str, Any]):
        self.url = build_url(config)
        self.debug = bool(config.get('debug', False))
        self.engine = None
        try:
            self.engine = create_engine(
                self.url, poolclass=NullPool, isolation_level='AUTOCOMMIT',
                echo=bool(config.get('echo', False))
            )
            self._handle = self.engine.connect()
        except (SQLAlchemyError, ImportError) as e:
            if self.engine is not None:
                self.engine.dispose()
            raise ConnectionError(f'Database connection failed: {_driver_message(e)}', _driver_code(e)) from e
        self.audit_obj = None
        audit_db = config.get('audit_db')
        try:
            self.audit_obj = Audit(audit_db) if audit_db else None
        except sqlite3.Error as e:
            self.close()
            raise ConnectionError(f'Audit database unavailable: {e}', getattr(e, 'sqlite_errorcode', 0)) from e
        self.dialect = self.engine.dialect.name.lower()
        self.quote_char = quote_chars.get(self.dialect, '`')
        logger.info('Connected to %s', self.url.render_as_string(hide_password=True))

    @property
    def handle(self) -> SAConnection:
        """The raw SQLAlchemy connection."""
        return self._handle

    def _log(self, sql: str, params: Any):
        """Log SQL and params if debug enabled."""
        if self.debug:
            logger.debug(f'SQL: {sql} | Params: {params}')

    @audited
    def execute(self, sql: str, params: Optional[Dict[str, Any]] = None) -> CursorResult:
        """Execute one statement and return the SQLAlchemy result."""
        params = params or {}
        self._log(sql, params)
        try:
            return self._handle.execute(text(sql), params)
        except SQLAlchemyError as e:
            raise QueryError(_driver_message(e), sql, params, _driver_code(e)) from e

    def fetch_all(self, sql: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Execute a query and return its rows as a list of dicts."""
        result = self.execute(sql, params)
        return [dict(row) for row in result.mappings().all()] if result.returns_rows else []

    @audited
    def fetch_df(self, sql: str, params: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
        """Fetch query results as DataFrame."""
        params = params or {}
        self._log(sql, params)
        try:
            return pd.read_sql(text(sql), self._handle, params=params)
        except SQLAlchemyError as e:
            raise QueryError(_driver_message(e), sql, params, _driver_code(e)) from e

    def quote(self, identifier: str) -> str:
        """Quote a table or column name for this dialect."""
        q = self.quote_char
        return f'{q}{identifier.replace(q, q + q)}{q}'

    def table(self, name: str) -> QueryBuilder:
        """Return a fresh query builder for ``name`` bound to this connection."""
        return QueryBuilder(self, name)

    def close(self):
        """Close the handle and dispose of engine resources."""
        self._handle.close()
        self.engine.dispose()
        if self.audit_obj is not None:
            self.audit_obj.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
