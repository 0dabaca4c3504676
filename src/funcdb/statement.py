"""
SQL statements with late-bound parameters.

A `Statement` pairs SQL text written with `?` placeholders and a binder, a
callable that receives a `PreparedStatement` just before execution and
binds a value to each placeholder position:

    words = Statement('SELECT * FROM WORDS WHERE COUNT < ?',
                      lambda ps: ps.set_int(1, limit))

The binder is called again on every execution, so values it reads from
enclosing scope or from its own state are re-read each time. A binder can be
any callable, including an instance of a class defining `__call__`:

    class CountAtMost:
        def __init__(self, value=0):
            self.value = value

        def __call__(self, ps):
            ps.set_int(1, self.value)

    count_at_most = CountAtMost()
    statement = Statement('SELECT * FROM WORDS WHERE COUNT <= ?', count_at_most)
    count_at_most.value = 2     # next execution binds 2
"""
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from funcdb.strategy import get_strategy, is_supported_dialect

__all__ = [
    'Binder',
    'PreparedStatement',
    'Statement',
]

Binder = Callable[['PreparedStatement'], None]
"""A function that binds values to the `?`s of a statement's SQL."""


class PreparedStatement:
    """Parameter values collected for one execution of a statement.

    Positions are 1-based and follow the order of the `?` placeholders in
    the SQL text. Binding the same position twice keeps the last value.
    """

    __slots__ = ('sql', 'dialect', '_values')

    def __init__(self, sql: str, dialect: str | None = None) -> None:
        self.sql = sql
        self.dialect = dialect
        self._values: dict[int, Any] = {}

    def set(self, position: int, value: Any) -> None:
        """Bind a value to a placeholder position."""
        if position < 1:
            raise ValueError(f'Parameter positions start at 1, got {position}')
        self._values[position] = value

    def __setitem__(self, position: int, value: Any) -> None:
        self.set(position, value)

    def set_int(self, position: int, value: int | None) -> None:
        self.set(position, None if value is None else int(value))

    def set_float(self, position: int, value: float | None) -> None:
        self.set(position, None if value is None else float(value))

    def set_string(self, position: int, value: str | None) -> None:
        self.set(position, None if value is None else str(value))

    def set_bool(self, position: int, value: bool | None) -> None:
        self.set(position, None if value is None else bool(value))

    def set_null(self, position: int) -> None:
        self.set(position, None)

    @property
    def parameters(self) -> tuple[Any, ...]:
        """Bound values ordered by position.

        Raises
            ValueError: If a position below the highest bound one has no value
        """
        if not self._values:
            return ()
        count = max(self._values)
        missing = [p for p in range(1, count + 1) if p not in self._values]
        if missing:
            raise ValueError(f'No value bound for parameter position(s) {missing}')
        return tuple(self._values[p] for p in range(1, count + 1))

    @property
    def text(self) -> str:
        """SQL as it is handed to the driver.

        Placeholders are only rewritten when there are values to bind, so
        statements without parameters reach the driver exactly as written.
        """
        if not self._values or not is_supported_dialect(self.dialect):
            return self.sql
        return get_strategy(self.dialect).standardize_sql(self.sql)

    def __repr__(self) -> str:
        return f'PreparedStatement({self.sql!r}, values={self._values!r})'


@dataclass(frozen=True, slots=True)
class Statement:
    """SQL text with `?` placeholders and an optional binder.

    Attributes
        text: The SQL, never modified after construction
        binder: Callable binding values to the placeholders, or None
    """
    text: str
    binder: Binder | None = None

    def prepare(self, dialect: str | None = None) -> PreparedStatement:
        """Create a PreparedStatement and run the binder against it.
        """
        prepared = PreparedStatement(self.text, dialect)
        if self.binder is not None:
            self.binder(prepared)
        return prepared
