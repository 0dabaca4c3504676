"""
Statement execution on DBAPI connections.

All functions take the connection as first argument and either a plain SQL
string or a `Statement`:

- update(cn, sql) - Execute and return the affected row count
- update_batch(cn, sql, *binders) - Execute once per binder, return row counts
- query(cn, sql, extractor) - Execute and return a lazy ResultSetIterator
- query(cn, sql, extractor, processor) - Execute and return processor(rows)
- find(cn, sql, extractor) - Execute and return the extracted rows as a list
- stream(cn, sql, extractor) - Async generator of the extracted rows

Driver errors are raised unchanged. Every cursor opened here is closed on
every path out of the function that opened it, except for the iterator
returned by `query` without a processor, which the caller owns.
"""
import asyncio
import logging
import time
from collections.abc import AsyncIterator, Callable, Iterator
from contextlib import closing
from functools import wraps
from typing import Any, TypeVar

from funcdb.iterator import Extractor, ResultSetIterator
from funcdb.statement import Binder, PreparedStatement, Statement
from funcdb.utils import find_dialect_name

__all__ = [
    'ResultsProcessor',
    'update',
    'update_batch',
    'query',
    'find',
    'stream',
]

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')

ResultsProcessor = Callable[[Iterator[T]], R]
"""A function consuming the extracted rows and returning a result."""


def dumpsql(func):
    """Decorator for logging SQL queries and parameters."""
    @wraps(func)
    def wrapper(cursor: Any, prepared: PreparedStatement) -> None:
        start = time.time()
        logger.debug(f'SQL:\n{prepared.sql}\nargs: {prepared.parameters}')
        try:
            return func(cursor, prepared)
        except Exception:
            logger.error(f'Error with query:\nSQL:\n{prepared.sql}\nargs: {prepared.parameters}')
            raise
        finally:
            logger.debug(f'Query time: {time.time() - start:.4f}s')
    return wrapper


@dumpsql
def _execute(cursor: Any, prepared: PreparedStatement) -> None:
    params = prepared.parameters
    if params:
        cursor.execute(prepared.text, params)
    else:
        cursor.execute(prepared.text)


def _prepare(cn: Any, sql: str | Statement) -> PreparedStatement:
    """Bind a statement for the connection's dialect."""
    statement = sql if isinstance(sql, Statement) else Statement(sql)
    return statement.prepare(find_dialect_name(cn))


def update(cn: Any, sql: str | Statement) -> int:
    """Execute a statement that modifies the database.

    Args:
        cn: DBAPI connection
        sql: SQL string or Statement

    Returns
        The number of rows affected, as reported by the driver
    """
    prepared = _prepare(cn, sql)
    with closing(cn.cursor()) as cursor:
        _execute(cursor, prepared)
        rowcount = cursor.rowcount
    logger.debug(f'Update affected {rowcount} rows')
    return rowcount


def update_batch(cn: Any, sql: str, *binders: Binder) -> list[int]:
    """Execute the same SQL once for each binder.

    Args:
        cn: DBAPI connection
        sql: SQL string with `?` placeholders
        *binders: One binder per execution

    Returns
        Row counts, one per binder, in binder order
    """
    dialect = find_dialect_name(cn)
    counts = []
    with closing(cn.cursor()) as cursor:
        for binder in binders:
            _execute(cursor, Statement(sql, binder).prepare(dialect))
            counts.append(cursor.rowcount)
    logger.debug(f'Batch of {len(counts)} updates affected {sum(counts)} rows')
    return counts


def query(cn: Any, sql: str | Statement, extractor: Extractor[T],
          processor: ResultsProcessor[T, R] | None = None) -> ResultSetIterator[T] | R:
    """Execute a query and extract a value from each row.

    Args:
        cn: DBAPI connection
        sql: SQL string or Statement
        extractor: Function turning a row into a value
        processor: Optional function consuming the extracted values

    Returns
        Without a processor, a lazy ResultSetIterator the caller must close
        (or use in a `with` block). With a processor, whatever the processor
        returns; the cursor is closed before returning.

    Examples
        with query(cn, 'SELECT WORD FROM WORDS', lambda row: row[0]) as words:
            for word in words:
                ...

        total = query(cn, 'SELECT COUNT FROM WORDS', lambda row: row[0], sum)
    """
    prepared = _prepare(cn, sql)
    cursor = cn.cursor()
    try:
        _execute(cursor, prepared)
    except Exception:
        cursor.close()
        raise

    rows = ResultSetIterator(cursor, extractor)
    if processor is None:
        return rows

    with rows:
        return processor(rows)


def find(cn: Any, sql: str | Statement, extractor: Extractor[T]) -> list[T]:
    """Execute a query and return the extracted rows.

    The cursor is closed before returning, also when the extractor raises,
    in which case the rows extracted so far are discarded.
    """
    return query(cn, sql, extractor, list)


async def stream(cn: Any, sql: str | Statement,
                 extractor: Extractor[T]) -> AsyncIterator[T]:
    """Execute a query and yield the extracted rows one at a time.

    The query runs when iteration starts. Rows are read and yielded in
    cursor order with nothing buffered, and control returns to the event loop
    after each row. The database calls themselves block.

    Stopping early releases the cursor once the generator is closed, so
    consumers that may break out of the loop should close it explicitly:

        async with aclosing(stream(cn, sql, extractor)) as rows:
            async for row in rows:
                ...
    """
    with query(cn, sql, extractor) as rows:
        for value in rows:
            yield value
            await asyncio.sleep(0)
