"""
Connection factory.

SQLAlchemy is used only to turn `DatabaseOptions` into a DBAPI connection:
the engine is created with `NullPool`, so closing the returned connection
closes the driver connection and nothing is kept around between calls.

The returned object is SQLAlchemy's pool proxy around the DBAPI connection.
It supports the DBAPI methods used throughout funcdb (`cursor`, `commit`,
`rollback`, `close`) and exposes the driver connection as
`driver_connection`.
"""
import logging
from typing import Any

import sqlalchemy as sa
from funcdb.options import DatabaseOptions, load_options
from funcdb.strategy import get_strategy
from funcdb.utils import get_raw_connection
from sqlalchemy.pool import NullPool

__all__ = [
    'connect',
    'create_engine_for_options',
]

logger = logging.getLogger(__name__)


def create_engine_for_options(options: DatabaseOptions, **kwargs: Any) -> sa.Engine:
    """Create an unpooled SQLAlchemy engine for the given options.
    """
    strategy = get_strategy(options.drivername)
    engine_kwargs: dict[str, Any] = {'echo': False, 'poolclass': NullPool}
    engine_kwargs.update(strategy.get_engine_kwargs(options))
    engine_kwargs.update(kwargs)
    return sa.create_engine(options.url, **engine_kwargs)


def connect(options: DatabaseOptions | dict[str, Any] | None = None, **kw: Any) -> Any:
    """Connect to a database and return a configured DBAPI connection

    Args:
        options: Can be:
                - DatabaseOptions object
                - Dictionary of options
                - None, with options specified as keyword arguments
        **kw: Additional keyword arguments to override options

    Returns
        DBAPI connection in auto-commit mode. SQLite connections return rows
        as `sqlite3.Row`.

    Examples
        cn = connect(drivername='sqlite', database=':memory:')
        cn = connect({'drivername': 'postgresql', 'hostname': 'localhost', ...})
    """
    options = load_options(options, **kw)
    engine = create_engine_for_options(options)

    cn = engine.raw_connection()
    get_strategy(options.drivername).configure_connection(get_raw_connection(cn))
    logger.debug(f'Connected to {options.drivername} database {options.database}')
    return cn
