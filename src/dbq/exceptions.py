"""
Database-specific exception classes.
"""
import sqlite3

import psycopg


class DatabaseError(Exception):
    """Base class for all recoverable dbq errors.
    """


class CursorError(DatabaseError):
    """Error fetching rows from or closing a cursor.
    """


class DecodeError(DatabaseError):
    """Error decoding a row mapping into a target record type.
    """


class TypeConversionError(DatabaseError):
    """Error converting a raw cell into a Python value.
    """


class NullValueError(TypeConversionError):
    """SQL NULL found in a column reported as non-nullable.
    """


class ProgrammingError(DatabaseError):
    """Entry point called with a statement it does not accept.
    """


class FatalError(BaseException):
    """Fatal fault carrying the error that caused it.

    Derives from BaseException so generic ``except Exception`` handlers
    do not swallow it.
    """

    def __init__(self, error: BaseException) -> None:
        super().__init__(error)
        self.error = error

    def __str__(self) -> str:
        return str(self.error)


DbConnectionError = (
    psycopg.OperationalError,
    psycopg.InterfaceError,
    sqlite3.OperationalError,
    sqlite3.InterfaceError,
    )

IntegrityError = (
    psycopg.IntegrityError,
    sqlite3.IntegrityError,
    )

OperationalError = (
    psycopg.OperationalError,
    sqlite3.OperationalError,
    )
