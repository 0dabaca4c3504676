from dataclasses import dataclass, field, fields
from typing import Any

from funcdb.strategy import get_available_dialects, get_strategy
from funcdb.strategy import get_strategy_class, is_supported_dialect

__all__ = [
    'DatabaseOptions',
    'load_options',
]


@dataclass
class DatabaseOptions:
    """Options

    supported driver names: `postgresql`, `sqlite`

    - drivername: Dialect of the database (default: postgresql)
    - hostname, port: Server location (PostgreSQL only)
    - username, password: Credentials (PostgreSQL only)
    - database: Database name, or file path / `:memory:` for SQLite
    - timeout: Connect timeout in seconds, 0 for the driver default
    """
    drivername: str = 'postgresql'
    hostname: str = None
    username: str = None
    password: str = field(default=None, repr=False)
    database: str = None
    port: int = 0
    timeout: int = 0

    def __post_init__(self):
        if not is_supported_dialect(self.drivername):
            available = get_available_dialects()
            raise ValueError(f'drivername must be one of: {available}')
        strategy_cls = get_strategy_class(self.drivername)
        strategy_cls.validate_options(self)

    @property
    def url(self) -> str:
        """SQLAlchemy URL for these options."""
        return get_strategy(self.drivername).build_connection_url(self)


def load_options(options: DatabaseOptions | dict[str, Any] | None = None,
                 **kw: Any) -> DatabaseOptions:
    """Build DatabaseOptions from an options object, a dict, or keywords.

    Keyword arguments override values from `options`. Unknown keys raise
    TypeError.
    """
    if isinstance(options, DatabaseOptions):
        if not kw:
            return options
        values = {f.name: getattr(options, f.name) for f in fields(options)}
    else:
        values = dict(options or {})
    values.update(kw)
    return DatabaseOptions(**values)
