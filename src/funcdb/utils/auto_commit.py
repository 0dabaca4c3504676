"""
Helper functions for managing auto-commit across different database drivers.
"""
import logging
from typing import Any

from funcdb.utils.connection_utils import get_raw_connection

logger = logging.getLogger(__name__)


def _find_strategy(connection: Any):
    # Imported here, strategy imports this package
    from funcdb.strategy import find_db_strategy
    return find_db_strategy(connection)


def get_auto_commit(connection: Any) -> bool:
    """Report whether a connection is in auto-commit mode.

    Works with:
    - SQLAlchemy pool proxies
    - psycopg (PostgreSQL)
    - sqlite3
    - Raw DBAPI connections exposing `autocommit` or `isolation_level`
    """
    raw_conn = get_raw_connection(connection)

    strategy = _find_strategy(connection)
    if strategy is not None:
        return strategy.get_autocommit(raw_conn)

    if hasattr(raw_conn, 'autocommit'):
        return bool(raw_conn.autocommit)

    if hasattr(raw_conn, 'isolation_level'):
        return raw_conn.isolation_level is None

    return False


def enable_auto_commit(connection: Any) -> None:
    """Enable auto-commit mode for any database connection.
    """
    raw_conn = get_raw_connection(connection)

    strategy = _find_strategy(connection)
    if strategy is not None:
        strategy.enable_autocommit(raw_conn)
    elif hasattr(raw_conn, 'autocommit'):
        raw_conn.autocommit = True
    elif hasattr(raw_conn, 'isolation_level'):
        raw_conn.isolation_level = None
    else:
        logger.debug(f'No auto-commit control on {type(raw_conn).__name__}')


def disable_auto_commit(connection: Any) -> None:
    """Disable auto-commit mode for any database connection.
    """
    raw_conn = get_raw_connection(connection)

    strategy = _find_strategy(connection)
    if strategy is not None:
        strategy.disable_autocommit(raw_conn)
    elif hasattr(raw_conn, 'autocommit'):
        raw_conn.autocommit = False
    elif hasattr(raw_conn, 'isolation_level'):
        raw_conn.isolation_level = 'DEFERRED'
    else:
        logger.debug(f'No auto-commit control on {type(raw_conn).__name__}')


def set_auto_commit(connection: Any, enabled: bool) -> None:
    """Switch auto-commit mode on or off."""
    if enabled:
        enable_auto_commit(connection)
    else:
        disable_auto_commit(connection)
