"""
Query operations.

``query`` runs any statement against a DB-API connection:

- insert, update and delete return an ExecResult
- everything else returns a list of row mappings (column name → value),
  or a list of target records when ``Options.target_type`` is set

"No rows" is never an error: an empty list is returned, or None with
``Options.single_result``.
"""
import logging
from typing import Any

from dbq.cursor import ExecResult, exec_result, load_rows, run_statement
from dbq.cursor import scoped_cursor
from dbq.decoder import RecordDecoder
from dbq.exceptions import FatalError, ProgrammingError
from dbq.options import Options
from dbq.sql import StatementKind, classify_statement, flatten_args

DataRow = dict[str, Any]
ResultSet = list[DataRow]

logger = logging.getLogger(__name__)


def query(cn: Any, sql: str, *args: Any, options: Options | None = None) -> ResultSet | list[Any] | Any | ExecResult | None:
    """Execute a statement and return its normalized result.

    A single list or tuple argument is spread into positional arguments, so
    ``query(cn, sql, [1, 2])`` behaves like ``query(cn, sql, 1, 2)``.

    Args:
        cn: DB-API connection
        sql: Statement text, using the driver's placeholder style
        *args: Statement parameters
        options: Decoding and shaping options

    Returns
        ExecResult for insert/update/delete; otherwise the list of rows, or
        with ``single_result`` the first row or None

    Raises
        FatalError: With ``panic``, carrying the error that occurred
    """
    o = options or Options()
    try:
        return _run(cn, sql, flatten_args(args), o)
    except Exception as e:
        if o.panic:
            raise FatalError(e) from e
        raise


def _run(cn: Any, sql: str, args: tuple, o: Options) -> Any:
    sql = sql.strip()

    if classify_statement(sql) is StatementKind.MUTATING:
        with scoped_cursor(cn) as cursor:
            run_statement(cursor, sql, args)
            return exec_result(cursor)

    decoder = RecordDecoder(o.target_type, o.decoder_config) if o.target_type else None

    with scoped_cursor(cn) as cursor:
        run_statement(cursor, sql, args)
        rows = load_rows(cn, cursor, o.parse_policy)

    result = decoder.decode_all(rows) if decoder else rows
    logger.debug(f'Query returned {len(result)} rows')

    if o.single_result:
        return result[0] if result else None
    return result


def execute(cn: Any, sql: str, *args: Any, options: Options | None = None) -> ExecResult:
    """Execute an insert, update or delete and return its outcome.

    Raises
        FatalError: Carrying ProgrammingError when the statement is not an
            insert, update or delete; nothing is executed
    """
    if classify_statement(sql) is not StatementKind.MUTATING:
        raise FatalError(ProgrammingError('incorrect query type'))
    return query(cn, sql, *args, options=options)


q = query
e = execute
