"""
Ready-made results processors for `query(cn, sql, extractor, processor)`.

A processor receives the iterator of extracted values and returns whatever
the caller needs. The DataFrame processors always return a DataFrame, never
None, with the given columns preserved for empty results.
"""
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, TypeVar

import pandas as pd
import pyarrow as pa

__all__ = [
    'to_list',
    'to_dict',
    'first',
    'count',
    'pandas_numpy_processor',
    'pandas_pyarrow_processor',
]

T = TypeVar('T')
K = TypeVar('K')
V = TypeVar('V')


def to_list(rows: Iterable[T]) -> list[T]:
    return list(rows)


def to_dict(rows: Iterable[tuple[K, V]]) -> dict[K, V]:
    """Build a dict from (key, value) pairs; later keys win."""
    return dict(rows)


def first(rows: Iterable[T]) -> T | None:
    """Return the first value, or None. Remaining rows are not read."""
    return next(iter(rows), None)


def count(rows: Iterable[Any]) -> int:
    return sum(1 for _ in rows)


def _column_values(data: list[Any], columns: Sequence[str]) -> list[list[Any]]:
    """Transpose rows (mappings or sequences) into one list per column."""
    return [[row[col] if isinstance(row, Mapping) else row[i] for row in data]
            for i, col in enumerate(columns)]


def pandas_numpy_processor(columns: Sequence[str]) -> Callable[[Iterable[Any]], pd.DataFrame]:
    """Standard pandas DataFrame processor using NumPy.

    Extracted values may be mappings keyed by column name or sequences in
    column order.
    """
    columns = list(columns)

    def processor(rows: Iterable[Any]) -> pd.DataFrame:
        data = list(rows)
        if not data:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame(dict(zip(columns, _column_values(data, columns))), columns=columns)

    return processor


def pandas_pyarrow_processor(columns: Sequence[str]) -> Callable[[Iterable[Any]], pd.DataFrame]:
    """PyArrow-backed pandas DataFrame processor.
    """
    columns = list(columns)

    def processor(rows: Iterable[Any]) -> pd.DataFrame:
        data = list(rows)
        if not data:
            return pd.DataFrame(columns=columns)
        table = pa.table(_column_values(data, columns), names=columns)
        return table.to_pandas(types_mapper=pd.ArrowDtype)

    return processor
