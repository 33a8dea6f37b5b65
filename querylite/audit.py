"""Statement audit trail stored in a local SQLite database."""

import sqlite3
import logging
import functools
import inspect
from threading import Lock
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

_DDL = '''
    CREATE TABLE IF NOT EXISTS statements (
        id INTEGER PRIMARY KEY,
        at TEXT DEFAULT CURRENT_TIMESTAMP,
        op TEXT,
        sql TEXT,
        params TEXT,
        ok INTEGER,
        error TEXT,
        caller TEXT
    )
'''


class Audit:
    """One SQLite file recording every statement a Connection runs.

    The file is opened once; an unusable path raises ``sqlite3.Error``
    straight from the constructor.
    """
    def __init__(self, path: str):
        self.path = path
        self._lock = Lock()
        self._db = sqlite3.connect(path, check_same_thread=False, isolation_level=None)
        self._db.row_factory = sqlite3.Row
        self._db.execute(_DDL)

    def record(self, op: str, sql: str, params: str, caller: str, error: Optional[str] = None):
        with self._lock:
            self._db.execute(
                'INSERT INTO statements (op, sql, params, ok, error, caller) VALUES (?, ?, ?, ?, ?, ?)',
                (op, sql, params, int(error is None), error, caller)
            )

    def entries(self) -> List[Dict[str, Any]]:
        """All recorded statements, oldest first."""
        with self._lock:
            return [dict(r) for r in self._db.execute('SELECT * FROM statements ORDER BY id')]

    def close(self):
        self._db.close()


def _caller() -> str:
    """Name of the first calling module outside querylite."""
    for info in inspect.stack()[2:]:
        module = inspect.getmodule(info.frame)
        name = module.__name__ if module else '__main__'
        if not name.startswith('querylite'):
            return name
    return 'unknown'


def audited(fn):
    """Record each call of a ``(sql, params)`` Connection method in ``self.audit_obj``."""
    @functools.wraps(fn)
    def wrapper(self, sql, params=None):
        if self.audit_obj is None:
            return fn(self, sql, params)
        shown = str(params or {})[:1000]
        caller = _caller()
        try:
            result = fn(self, sql, params)
        except Exception as e:
            self.audit_obj.record(fn.__name__, sql, shown, caller, str(e))
            raise
        self.audit_obj.record(fn.__name__, sql, shown, caller)
        return result
    return wrapper
