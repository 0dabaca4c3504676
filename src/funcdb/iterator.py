"""
Lazy iteration over query results.

`ResultSetIterator` wraps an executed DBAPI cursor and an extractor. Rows are
pulled from the cursor one at a time, only when asked for:

    has_next()   UNKNOWN   --fetchone() returns row-->  AVAILABLE
                 UNKNOWN   --fetchone() returns None-> EXHAUSTED (cursor closed)
    next()       AVAILABLE --extractor(row)---------->  UNKNOWN

Asking whether there is a next row requires fetching it, and fetching is also
how the row is obtained, so the fetched row is held until `next()` consumes
it. Repeated `has_next()` calls therefore never skip a row.
"""
import logging
from collections.abc import Callable
from enum import Enum, auto
from typing import Any, Generic, Self, TypeVar

__all__ = [
    'Extractor',
    'Lookahead',
    'ResultSetIterator',
]

logger = logging.getLogger(__name__)

T = TypeVar('T')

Extractor = Callable[[Any], T]
"""A function that turns one cursor row into a value."""


class Lookahead(Enum):
    """Whether the cursor has been advanced past the last consumed row."""
    UNKNOWN = auto()
    AVAILABLE = auto()
    EXHAUSTED = auto()


class ResultSetIterator(Generic[T]):
    """Single-pass iterator applying an extractor to each row of a cursor.

    The iterator owns the cursor: it is closed when the rows run out, when
    `close()` is called, or when a `with` block around the iterator ends.

    Examples
        with ResultSetIterator(cursor, lambda row: row[0]) as words:
            for word in words:
                ...
    """

    def __init__(self, cursor: Any, extractor: Extractor[T]) -> None:
        self._cursor = cursor
        self._extractor = extractor
        self._lookahead = Lookahead.UNKNOWN
        self._row: Any = None
        self._closed = False

    @property
    def lookahead(self) -> Lookahead:
        return self._lookahead

    @property
    def closed(self) -> bool:
        return self._closed

    def has_next(self) -> bool:
        """Return True if the iteration has more elements.

        Advances the cursor only if the previously fetched row has been
        consumed.
        """
        if self._lookahead is Lookahead.UNKNOWN:
            self._row = self._cursor.fetchone()
            if self._row is None:
                self._lookahead = Lookahead.EXHAUSTED
                self.close()
            else:
                self._lookahead = Lookahead.AVAILABLE
        return self._lookahead is Lookahead.AVAILABLE

    def __next__(self) -> T:
        """Return the extractor's value for the next row.

        Raises
            StopIteration: If there are no more rows
        """
        if not self.has_next():
            raise StopIteration
        self._lookahead = Lookahead.UNKNOWN
        row, self._row = self._row, None
        return self._extractor(row)

    def __iter__(self) -> Self:
        return self

    def close(self) -> None:
        """Close the cursor. Calling close more than once has no effect.
        """
        if self._closed:
            return
        self._closed = True
        self._row = None
        self._cursor.close()
        logger.debug('Closed result set cursor')

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None,
                 exc_tb: Any | None) -> None:
        self.close()
