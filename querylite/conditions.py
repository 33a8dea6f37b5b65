"""Predicate entries for WHERE clauses."""

from typing import Callable, List


class Condition:
    """A single comparison predicate (e.g. `status` = :w_1)."""
    __slots__ = ('boolean', 'column', 'operator', 'placeholder')

    def __init__(self, boolean: str, column: str, operator: str, placeholder: str):
        self.boolean = boolean
        self.column = column
        self.operator = operator
        self.placeholder = placeholder

    def to_sql(self, keyword: str, quote: Callable[[str], str]) -> str:
        """Render the fragment, opened by ``keyword`` (WHERE, AND or OR)."""
        return f'{keyword} {quote(self.column)} {self.operator} :{self.placeholder}'

    def __repr__(self):
        return f'Condition({self.boolean!r}, {self.column!r}, {self.operator!r}, {self.placeholder!r})'


class InCondition:
    """A set-membership predicate (e.g. `id` IN (:in_1, :in_2))."""
    __slots__ = ('boolean', 'column', 'placeholders')

    def __init__(self, boolean: str, column: str, placeholders: List[str]):
        self.boolean = boolean
        self.column = column
        self.placeholders = placeholders

    def to_sql(self, keyword: str, quote: Callable[[str], str]) -> str:
        """Render the fragment. An empty placeholder list renders as ``IN ()``."""
        keys = ', '.join(f':{p}' for p in self.placeholders)
        return f'{keyword} {quote(self.column)} IN ({keys})'

    def __repr__(self):
        return f'InCondition({self.boolean!r}, {self.column!r}, {self.placeholders!r})'
