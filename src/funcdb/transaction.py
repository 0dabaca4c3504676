"""
Transaction handling for database operations.
"""
import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

from funcdb.utils import disable_auto_commit, get_auto_commit, get_raw_connection
from funcdb.utils import set_auto_commit

__all__ = [
    'Transaction',
    'transaction',
]

logger = logging.getLogger(__name__)

T = TypeVar('T')

_local = threading.local()


def _active_transactions() -> set[int]:
    if not hasattr(_local, 'active_transactions'):
        _local.active_transactions = set()
    return _local.active_transactions


class Transaction:
    """Context manager running a block of statements in one transaction.

    Entering switches auto-commit off. Leaving commits if the block
    completed, or rolls back and lets the exception propagate if it did not.
    The auto-commit setting found on entry is restored last, whatever
    happened.

    Transaction state is tracked per thread and per driver connection, so a
    transaction on a pool proxy and one on the connection it wraps count as
    nested. Nested transactions are not supported.

    Examples
        with Transaction(cn):
            update(cn, 'delete from ...')
            update(cn, 'update ...')
    """

    def __init__(self, cn: Any) -> None:
        self.connection = cn
        self._key = id(get_raw_connection(cn))
        self._auto_commit: bool | None = None

    def __enter__(self) -> Any:
        active = _active_transactions()
        if self._key in active:
            raise RuntimeError('Nested transactions are not supported')

        self._auto_commit = get_auto_commit(self.connection)
        disable_auto_commit(self.connection)
        active.add(self._key)
        logger.debug(f'Started transaction for connection {id(self.connection)}')

        return self.connection

    def __exit__(self, exc_type: type | None, value: Exception | None, traceback: Any | None) -> None:
        try:
            if exc_type is not None:
                self._rollback()
                return

            try:
                self.connection.commit()
            except Exception:
                self._rollback()
                raise
            logger.debug(f'Committed transaction for connection {id(self.connection)}')
        finally:
            _active_transactions().discard(self._key)
            set_auto_commit(self.connection, self._auto_commit)
            logger.debug(f'Restored auto-commit={self._auto_commit} for connection {id(self.connection)}')

    def _rollback(self) -> None:
        """Roll back through the connection, then through the driver connection
        it wraps if that fails.

        A failed rollback leaves the transaction open, and restoring
        auto-commit on sqlite3 would commit it.
        """
        logger.warning('Rolling back the current transaction')
        handles = [self.connection]
        raw_conn = get_raw_connection(self.connection)
        if raw_conn is not self.connection:
            handles.append(raw_conn)

        for handle in handles:
            try:
                handle.rollback()
                return
            except Exception as e:
                # the error that caused the rollback is the one callers see
                logger.error(f'Rollback failed on {type(handle).__name__}: {e}')


def transaction(cn: Any, block: Callable[[Any], T]) -> T:
    """Run `block(cn)` in a transaction and return its result.

    Commits when the block returns, rolls back and re-raises when it raises.
    """
    with Transaction(cn) as tx:
        return block(tx)
