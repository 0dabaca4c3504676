"""
Driver exception groups.

funcdb never wraps or translates driver errors. These tuples group the
equivalent sqlite3 and psycopg classes so callers can catch them without
caring which driver is in use:

    try:
        update(cn, sql)
    except IntegrityError:
        ...
"""
import sqlite3

import psycopg

__all__ = [
    'DatabaseError',
    'DbConnectionError',
    'IntegrityError',
    'ProgrammingError',
    'OperationalError',
    'UniqueViolation',
]

DatabaseError = (
    psycopg.DatabaseError,       # Base of all Postgres server-side errors
    sqlite3.DatabaseError,       # Base of all SQLite database errors
)

DbConnectionError = (
    psycopg.OperationalError,    # Connection/timeout issues
    psycopg.InterfaceError,      # Connection interface issues
    sqlite3.OperationalError,    # SQLite connection issues
    sqlite3.InterfaceError,      # SQLite interface issues
)

IntegrityError = (
    psycopg.IntegrityError,      # Postgres constraint violations
    sqlite3.IntegrityError,      # SQLite constraint violations
)

ProgrammingError = (
    psycopg.ProgrammingError,    # Postgres syntax/query errors
    sqlite3.ProgrammingError,    # SQLite API misuse, e.g. wrong binding count
    sqlite3.OperationalError,    # SQLite reports syntax errors as operational
)

OperationalError = (
    psycopg.OperationalError,    # Postgres operational issues
    sqlite3.OperationalError,    # SQLite operational issues
)

UniqueViolation = (
    psycopg.errors.UniqueViolation,    # Postgres specific unique violation error
    sqlite3.IntegrityError,            # SQLite error for unique/primary key violations
)
