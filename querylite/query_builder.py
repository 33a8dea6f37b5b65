"""Fluent per-table query builder.

Example::

    conn.table('users') \\
        .where('status', 'active') \\
        .order_by('created_at', 'desc') \\
        .limit(10) \\
        .get()
"""

import itertools
import re
import logging
from datetime import date, datetime, time
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple, Union
import pandas as pd
from .conditions import Condition, InCondition
from .mappings import placeholders

if TYPE_CHECKING:
    from .conn import Connection

logger = logging.getLogger(__name__)

Value = Union[str, int, float, bool, None, Decimal, date, datetime, time, bytes]

_MISSING = object()


class QueryBuilder:
    """Accumulates SELECT state for one table and compiles it to SQL.

    Mutators return the builder so calls can be chained. Terminal methods
    (get, first, find, insert, update, delete) execute against the bound
    connection. A builder is meant for a single query: state keeps
    accumulating if it is reused after a terminal call.
    """
    def __init__(self, connection: 'Connection', table: str):
        self.connection = connection
        self.table = table
        self.columns: List[str] = ['*']
        self.wheres: List[Union[Condition, InCondition]] = []
        self._bindings: Dict[str, Value] = {}
        self.orders: List[Tuple[str, str]] = []
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None
        self._ids = itertools.count(1)

    @property
    def bindings(self) -> Dict[str, Value]:
        """Current placeholder -> value map."""
        return dict(self._bindings)

    def _placeholder(self, kind: str, column: str = '') -> str:
        """Allocate a placeholder name unique within this builder."""
        prefix = placeholders[kind].format(column=re.sub(r'\W', '_', column))
        return f'{prefix}_{next(self._ids)}'

    def _quote(self, identifier: str) -> str:
        return self.connection.quote(identifier)

    # Mutators

    def select(self, *columns: str) -> 'QueryBuilder':
        """Replace the selected columns; no arguments keeps the current list."""
        if columns:
            self.columns = list(columns)
        return self

    def where(self, column: str, operator_or_value: Any, value: Any = _MISSING, boolean: str = 'AND') -> 'QueryBuilder':
        """Add a comparison predicate.

        ``where('status', 'active')`` compares with ``=``;
        ``where('age', '>', 18)`` uses the given operator.
        """
        if value is _MISSING:
            operator, value = '=', operator_or_value
        else:
            operator = operator_or_value
        ph = self._placeholder('where')
        self.wheres.append(Condition(boolean, column, operator, ph))
        self._bindings[ph] = value
        return self

    def or_where(self, column: str, operator_or_value: Any, value: Any = _MISSING) -> 'QueryBuilder':
        """Same as where() joined with OR."""
        return self.where(column, operator_or_value, value, 'OR')

    def where_in(self, column: str, values: List[Value], boolean: str = 'AND') -> 'QueryBuilder':
        """Add a set-membership predicate.

        An empty ``values`` list compiles to ``IN ()``: MySQL rejects it
        as a syntax error while SQLite treats it as always false.
        """
        phs = []
        for v in values:
            ph = self._placeholder('where_in')
            phs.append(ph)
            self._bindings[ph] = v
        self.wheres.append(InCondition(boolean, column, phs))
        return self

    def order_by(self, column: str, direction: str = 'asc') -> 'QueryBuilder':
        """Order by ``column``; anything but 'desc' (any case) sorts ascending."""
        direction = 'DESC' if direction.upper() == 'DESC' else 'ASC'
        self.orders.append((column, direction))
        return self

    def limit(self, n: int) -> 'QueryBuilder':
        self._limit = n
        return self

    def offset(self, n: int) -> 'QueryBuilder':
        self._offset = n
        return self

    # Compilation

    def _compile_where(self) -> str:
        if not self.wheres:
            return ''
        parts = [w.to_sql('WHERE' if i == 0 else w.boolean, self._quote) for i, w in enumerate(self.wheres)]
        return ' ' + ' '.join(parts)

    def _where_params(self) -> Dict[str, Value]:
        params = {}
        for w in self.wheres:
            for ph in (w.placeholders if isinstance(w, InCondition) else [w.placeholder]):
                params[ph] = self._bindings[ph]
        return params

    def _compile_order(self) -> str:
        if not self.orders:
            return ''
        return ' ORDER BY ' + ', '.join(f'{self._quote(c)} {d}' for c, d in self.orders)

    def _compile_limit_offset(self) -> str:
        sql = ''
        if self._limit is not None:
            sql += f' LIMIT {int(self._limit)}'
        if self._offset is not None:
            sql += f' OFFSET {int(self._offset)}'
        return sql

    def compile_select(self) -> Tuple[str, Dict[str, Value]]:
        """Build the SELECT statement and its parameters."""
        sql = f'SELECT {", ".join(self.columns)} FROM {self._quote(self.table)}'
        sql += self._compile_where()
        sql += self._compile_order()
        sql += self._compile_limit_offset()
        return sql, self._where_params()

    def to_sql(self) -> str:
        """Compiled SELECT text for the current state; nothing is executed."""
        return self.compile_select()[0]

    def _warn_full_table(self, op: str):
        if not self.wheres:
            logger.warning('%s on %s without WHERE affects every row', op, self.table)

    # Terminal operations

    def get(self) -> List[Dict[str, Any]]:
        """Run the SELECT and return all rows as dicts."""
        sql, params = self.compile_select()
        return self.connection.fetch_all(sql, params)

    def get_df(self) -> pd.DataFrame:
        """Run the SELECT and return the rows as a DataFrame."""
        sql, params = self.compile_select()
        return self.connection.fetch_df(sql, params)

    def first(self) -> Optional[Dict[str, Any]]:
        """First row of the SELECT, or None. Forces LIMIT 1."""
        self.limit(1)
        rows = self.get()
        return rows[0] if rows else None

    def find(self, id_: Value) -> Optional[Dict[str, Any]]:
        """Row whose ``id`` column equals ``id_``, combined with any existing predicates."""
        return self.where('id', id_).first()

    def insert(self, data: Mapping[str, Value]) -> int:
        """Insert one row and return the generated primary key."""
        params = {}
        for column, v in data.items():
            ph = self._placeholder('insert', column)
            params[ph] = v
        self._bindings.update(params)
        cols = ', '.join(self._quote(c) for c in data)
        phs = ', '.join(f':{ph}' for ph in params)
        sql = f'INSERT INTO {self._quote(self.table)} ({cols}) VALUES ({phs})'
        result = self.connection.execute(sql, params)
        return int(result.lastrowid)

    def update(self, data: Mapping[str, Value]) -> int:
        """Update rows matching the current predicates; returns the affected row count.

        Without predicates every row in the table is updated.
        """
        params = {}
        sets = []
        for column, v in data.items():
            ph = self._placeholder('update', column)
            sets.append(f'{self._quote(column)} = :{ph}')
            params[ph] = v
        self._bindings.update(params)
        self._warn_full_table('UPDATE')
        sql = f'UPDATE {self._quote(self.table)} SET {", ".join(sets)}{self._compile_where()}'
        params.update(self._where_params())
        return self.connection.execute(sql, params).rowcount

    def delete(self) -> int:
        """Delete rows matching the current predicates; returns the affected row count.

        Without predicates every row in the table is deleted.
        """
        self._warn_full_table('DELETE')
        sql = f'DELETE FROM {self._quote(self.table)}{self._compile_where()}'
        return self.connection.execute(sql, self._where_params()).rowcount
