"""
Statement classification and argument normalization.

Only the leading keyword of a statement is inspected; the SQL text is
otherwise passed to the driver untouched.
"""
from enum import Enum, auto
from typing import Any

MUTATING_KEYWORDS = ('insert', 'update', 'delete')


class StatementKind(Enum):
    """Kind of statement, decided by its leading keyword."""
    MUTATING = auto()
    QUERY = auto()


def classify_statement(sql: str) -> StatementKind:
    """Classify a statement as mutating or row producing.

    Anything that does not start with insert, update or delete is assumed
    to be a query; malformed SQL fails later in the driver.

    >>> classify_statement('  INSERT INTO t VALUES (1)')
    <StatementKind.MUTATING: 1>
    >>> classify_statement('select 1')
    <StatementKind.QUERY: 2>
    >>> classify_statement('with x as (delete from t) select 1')
    <StatementKind.QUERY: 2>
    """
    if sql.strip().lower().startswith(MUTATING_KEYWORDS):
        return StatementKind.MUTATING
    return StatementKind.QUERY


def is_mutating(sql: str) -> bool:
    """Check if a statement is an insert, update or delete."""
    return classify_statement(sql) is StatementKind.MUTATING


def flatten_args(args: tuple[Any, ...]) -> tuple[Any, ...]:
    """Flatten a single list/tuple argument into positional arguments.

    Callers may pass a pre-built argument list instead of spreading it:
    ``q(cn, sql, [1, 2])`` is the same as ``q(cn, sql, 1, 2)``.

    >>> flatten_args(([1, 2, 3],))
    (1, 2, 3)
    >>> flatten_args(((4, 5),))
    (4, 5)
    >>> flatten_args(('abc',))
    ('abc',)
    >>> flatten_args(([1], [2]))
    ([1], [2])
    >>> flatten_args(())
    ()
    """
    if len(args) == 1 and isinstance(args[0], (list, tuple)):
        return tuple(args[0])
    return tuple(args)


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
