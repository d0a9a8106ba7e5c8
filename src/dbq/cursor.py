"""
Cursor handling: statement execution and row assembly.

A cursor belongs to exactly one call. ``scoped_cursor`` guarantees it is
closed on every exit path; a close failure after a successful call is
reported as CursorError, while a close failure during another error is
logged and the original error propagates.
"""
import logging
import time
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from functools import wraps
from typing import Any

from dbq.adapters.type_conversion import ParsePolicy, convert_row
from dbq.exceptions import CursorError
from dbq.strategy import get_db_strategy

logger = logging.getLogger(__name__)

FETCH_SIZE = 5000


@dataclass(frozen=True)
class ExecResult:
    """Outcome of an insert, update or delete."""
    rows_affected: int
    last_insert_id: int | None = None


def dumpsql(func):
    """Decorator for logging SQL statements, parameters and timing."""
    @wraps(func)
    def wrapper(cursor: Any, sql: str, args: tuple, *a: Any, **kw: Any):
        start = time.time()
        logger.debug(f'SQL:\n{sql}\nargs: {args}')
        try:
            return func(cursor, sql, args, *a, **kw)
        except Exception:
            logger.error(f'Error with query:\nSQL:\n{sql}\nargs: {args}')
            raise
        finally:
            logger.debug(f'Query time: {time.time() - start:.4f}s')
    return wrapper


@contextmanager
def scoped_cursor(cn: Any) -> Iterator[Any]:
    """Open a cursor on the connection and always close it."""
    cursor = cn.cursor()
    try:
        yield cursor
    except BaseException:
        try:
            cursor.close()
        except Exception as e:
            logger.error(f'Error closing cursor after failure: {e}')
        raise
    try:
        cursor.close()
    except Exception as e:
        raise CursorError(f'Error closing cursor: {e}') from e


@dumpsql
def run_statement(cursor: Any, sql: str, args: tuple) -> None:
    """Execute a statement, passing parameters only when there are any."""
    if args:
        cursor.execute(sql, args)
    else:
        cursor.execute(sql)


def exec_result(cursor: Any) -> ExecResult:
    """Build the outcome of a mutating statement from its cursor."""
    result = ExecResult(
        rows_affected=cursor.rowcount,
        last_insert_id=getattr(cursor, 'lastrowid', None),
    )
    logger.debug(f'Statement affected {result.rows_affected} rows')
    return result


def fetch_rows(cursor: Any, size: int = FETCH_SIZE) -> list[Sequence[Any]]:
    """Fetch every remaining row, in cursor order."""
    rows: list[Sequence[Any]] = []
    while True:
        chunk = cursor.fetchmany(size)
        if not chunk:
            break
        rows.extend(row_values(row) for row in chunk)
    return rows


def row_values(row: Any) -> Sequence[Any]:
    """Get a row's values in column order, whatever the row factory."""
    if isinstance(row, dict):
        return list(row.values())
    if hasattr(row, 'keys') and callable(row.keys):
        return [row[key] for key in row.keys()]  # noqa: SIM118
    return row


def load_rows(cn: Any, cursor: Any,
              policy: ParsePolicy = ParsePolicy.PERMISSIVE) -> list[dict[str, Any]]:
    """Build one row mapping per cursor row.

    Columns are described by the connection's dialect strategy, then every
    cell is coerced according to its column.
    """
    if cursor.description is None:
        return []
    rows = fetch_rows(cursor)
    columns = get_db_strategy(cn).describe_columns(cursor, rows)
    logger.debug(f'Loaded {len(rows)} rows with columns {columns}')
    return [convert_row(columns, row, policy) for row in rows]
