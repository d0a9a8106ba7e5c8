"""
SQL result normalization for DB-API connections.

Rows come back as dicts of native Python values chosen from the type name
the driver reports for each column, with None only where the column is
nullable. Rows can also be decoded straight into record types.

    import dbq

    rows = dbq.q(cn, 'select id, name from users where id in (?, ?)', [1, 2])
    user = dbq.q(cn, 'select * from users where id = ?', 1,
                 options=dbq.Options(target_type=User, single_result=True))
    outcome = dbq.e(cn, 'delete from users where id = ?', 1)
"""
__version__ = '0.1.0'

from dbq.adapters import Column, ParsePolicy, TypeClass
from dbq.config import TypeMappingConfig
from dbq.cursor import ExecResult
from dbq.exceptions import CursorError, DatabaseError, DbConnectionError
from dbq.exceptions import DecodeError, FatalError, IntegrityError
from dbq.exceptions import NullValueError, OperationalError, ProgrammingError
from dbq.exceptions import TypeConversionError
from dbq.options import PANIC, SINGLE_RESULT, DecoderConfig, Options
from dbq.query import e, execute, q, query
from dbq.sql import StatementKind, classify_statement, flatten_args

__all__ = [
    'query',
    'execute',
    'q',
    'e',
    'Options',
    'DecoderConfig',
    'SINGLE_RESULT',
    'PANIC',
    'ExecResult',
    'Column',
    'ParsePolicy',
    'TypeClass',
    'TypeMappingConfig',
    'StatementKind',
    'classify_statement',
    'flatten_args',
    'DatabaseError',
    'CursorError',
    'DecodeError',
    'TypeConversionError',
    'NullValueError',
    'ProgrammingError',
    'FatalError',
    'DbConnectionError',
    'IntegrityError',
    'OperationalError',
]
