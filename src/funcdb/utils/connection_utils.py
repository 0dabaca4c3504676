"""Low-level connection utilities with no internal dependencies.

These utilities work with any connection type (raw DBAPI connections,
SQLAlchemy pool proxies and SQLAlchemy connections) and import nothing from
other funcdb modules, making them safe to import without circular
dependency concerns.
"""
import logging
from typing import Any

__all__ = [
    'get_dialect_name',
    'find_dialect_name',
    'get_raw_connection',
]

logger = logging.getLogger(__name__)


def get_dialect_name(obj: Any) -> str:
    """Get dialect name for a database connection or engine.

    Args:
        obj: Connection object, engine, or pool proxy

    Returns
        str: Dialect name ('postgresql' or 'sqlite')

    Raises
        AttributeError: If dialect cannot be determined
    """
    # SQLAlchemy engine or connection with dialect
    if hasattr(obj, 'dialect'):
        dialect = obj.dialect
        if isinstance(dialect, str):
            return dialect.lower()
        return str(dialect.name).lower()

    # SQLAlchemy pool proxy (_ConnectionFairy) - unwrap to DBAPI connection
    if hasattr(obj, 'dbapi_connection'):
        return get_dialect_name(obj.dbapi_connection)

    # Raw DBAPI connection - check type name
    type_name = f'{type(obj).__module__}.{type(obj).__name__}'
    if 'psycopg' in type_name:
        return 'postgresql'
    if 'sqlite3' in type_name:
        return 'sqlite'

    raise AttributeError(f'Cannot determine dialect for {type(obj)}')


def find_dialect_name(obj: Any) -> str | None:
    """Like `get_dialect_name`, but None for connections of unknown drivers.
    """
    try:
        return get_dialect_name(obj)
    except AttributeError:
        logger.debug(f'Unknown dialect for {type(obj).__name__}, using SQL as written')
        return None


def get_raw_connection(connection: Any) -> Any:
    """Extract the raw DBAPI connection from pool proxies and wrappers.

    Wrappers may be nested; each level is unwrapped through its
    `driver_connection` or `dbapi_connection` attribute.
    """
    for attr in ('driver_connection', 'dbapi_connection'):
        inner = getattr(connection, attr, None)
        if inner is not None and inner is not connection:
            return get_raw_connection(inner)
    return connection
