"""
Base strategy interface for dialect-specific behaviour.

Defines the abstract base class that all database-specific strategy
implementations must inherit from. The strategy pattern keeps the few
places where drivers disagree (auto-commit control, placeholder markers,
connection URLs) out of the statement, query and transaction code, which
works with any connection through this consistent interface.
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from funcdb.sql import standardize_placeholders

if TYPE_CHECKING:
    from funcdb.options import DatabaseOptions

# Registry of dialect name -> strategy class
# Defined here to avoid circular imports (concrete strategies import from base)
_STRATEGY_REGISTRY: dict[str, type['DatabaseStrategy']] = {}


def register_strategy(dialect: str):
    """Decorator to register a strategy class for a dialect.

    Usage:
        @register_strategy('postgresql')
        class PostgresStrategy(DatabaseStrategy):
            ...
    """
    def decorator(cls: type['DatabaseStrategy']) -> type['DatabaseStrategy']:
        _STRATEGY_REGISTRY[dialect] = cls
        return cls
    return decorator


class DatabaseStrategy(ABC):
    """Base class for database-specific operations.
    """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the dialect identifier (e.g., 'postgresql', 'sqlite')."""

    @abstractmethod
    def build_connection_url(self, options: 'DatabaseOptions') -> str:
        """Build the database connection URL for this dialect.

        Args:
            options: DatabaseOptions containing connection parameters

        Returns
            Connection URL string suitable for SQLAlchemy
        """

    def get_engine_kwargs(self, options: 'DatabaseOptions') -> dict[str, Any]:
        """Return SQLAlchemy create_engine kwargs for this dialect.

        Args:
            options: DatabaseOptions containing connection parameters

        Returns
            Dictionary of keyword arguments for create_engine
        """
        return {}

    @abstractmethod
    def configure_connection(self, raw_conn: Any) -> None:
        """Configure connection settings.

        Args:
            raw_conn: The raw DBAPI connection to configure
        """

    @abstractmethod
    def get_autocommit(self, raw_conn: Any) -> bool:
        """Report whether auto-commit mode is on for a raw connection.

        Args:
            raw_conn: The raw DBAPI connection (not wrapped)
        """

    @abstractmethod
    def enable_autocommit(self, raw_conn: Any) -> None:
        """Enable auto-commit mode on a raw database connection.

        Args:
            raw_conn: The raw DBAPI connection (not wrapped)
        """

    @abstractmethod
    def disable_autocommit(self, raw_conn: Any) -> None:
        """Disable auto-commit mode on a raw database connection.

        Args:
            raw_conn: The raw DBAPI connection (not wrapped)
        """

    def standardize_sql(self, sql: str) -> str:
        """Rewrite qmark placeholders for this dialect's driver."""
        return standardize_placeholders(sql, self.dialect_name)

    @classmethod
    @abstractmethod
    def get_required_options(cls) -> list[str]:
        """Return list of required option field names for this dialect.

        Returns
            List of field names that must have non-None/non-zero values
        """

    @classmethod
    def validate_options(cls, options: 'DatabaseOptions') -> None:
        """Validate options for this dialect.

        Args:
            options: DatabaseOptions to validate

        Raises
            ValueError: If any required field is None or 0
        """
        missing = [name for name in cls.get_required_options()
                   if not getattr(options, name, None)]
        if missing:
            raise ValueError(f'{options.drivername} requires: {", ".join(missing)}')
