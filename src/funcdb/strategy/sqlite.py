"""
SQLite-specific strategy implementation.

sqlite3 has no `autocommit` switch in its legacy transaction control mode;
auto-commit is expressed through `isolation_level`, where `None` means every
statement commits on its own and any other value opens implicit transactions
before DML statements.
"""
import logging
import sqlite3
from typing import TYPE_CHECKING, Any

from funcdb.strategy.base import DatabaseStrategy, register_strategy

if TYPE_CHECKING:
    from funcdb.options import DatabaseOptions

logger = logging.getLogger(__name__)


@register_strategy('sqlite')
class SQLiteStrategy(DatabaseStrategy):
    """SQLite-specific operations.
    """

    @property
    def dialect_name(self) -> str:
        """Return the dialect identifier for SQLite."""
        return 'sqlite'

    def build_connection_url(self, options: 'DatabaseOptions') -> str:
        """Build the SQLAlchemy connection URL for SQLite."""
        return f'sqlite:///{options.database}'

    def get_engine_kwargs(self, options: 'DatabaseOptions') -> dict[str, Any]:
        """Return SQLAlchemy create_engine kwargs for SQLite."""
        kwargs: dict[str, Any] = {
            'connect_args': {
                'detect_types': sqlite3.PARSE_DECLTYPES | sqlite3.PARSE_COLNAMES
            }
        }
        if options.timeout:
            kwargs['connect_args']['timeout'] = options.timeout
        return kwargs

    def configure_connection(self, raw_conn: Any) -> None:
        """Configure connection settings for SQLite.

        Rows come back as `sqlite3.Row` so extractors can read columns by
        position or by name.
        """
        raw_conn.execute('PRAGMA foreign_keys = ON')
        raw_conn.row_factory = sqlite3.Row
        self.enable_autocommit(raw_conn)

    def get_autocommit(self, raw_conn: Any) -> bool:
        """SQLite is in auto-commit mode when isolation_level is None.
        """
        return raw_conn.isolation_level is None

    def enable_autocommit(self, raw_conn: Any) -> None:
        """Enable auto-commit mode for SQLite.
        """
        raw_conn.isolation_level = None

    def disable_autocommit(self, raw_conn: Any) -> None:
        """Disable auto-commit mode for SQLite.
        """
        raw_conn.isolation_level = 'DEFERRED'

    @classmethod
    def get_required_options(cls) -> list[str]:
        """Return required options for SQLite connections."""
        return ['database']
