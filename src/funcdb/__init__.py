"""
Functional helpers over DBAPI connections for SQLite and PostgreSQL.

Statements are plain SQL with `?` placeholders plus an optional binder;
results are pulled lazily through an extractor:

    import funcdb as db

    cn = db.connect(drivername='sqlite', database=':memory:')
    db.update(cn, 'CREATE TABLE WORDS (WORD VARCHAR(20), COUNT INTEGER)')
    db.update(cn, db.Statement('INSERT INTO WORDS VALUES (?, ?)',
                               lambda ps: (ps.set_string(1, 'a'), ps.set_int(2, 1))))
    words = db.find(cn, 'SELECT WORD FROM WORDS', lambda row: row['WORD'])

    db.transaction(cn, lambda tx: db.update(tx, 'DELETE FROM WORDS'))
"""
__version__ = '0.9.1'

from funcdb.connection import connect
from funcdb.exceptions import DatabaseError, DbConnectionError, IntegrityError
from funcdb.exceptions import OperationalError, ProgrammingError
from funcdb.exceptions import UniqueViolation
from funcdb.iterator import Extractor, Lookahead, ResultSetIterator
from funcdb.options import DatabaseOptions
from funcdb.query import ResultsProcessor, find, query, stream, update
from funcdb.query import update_batch
from funcdb.statement import Binder, PreparedStatement, Statement
from funcdb.transaction import Transaction, transaction

__all__ = [
    'connect',
    'DatabaseOptions',
    'Statement',
    'PreparedStatement',
    'Binder',
    'Extractor',
    'ResultsProcessor',
    'ResultSetIterator',
    'Lookahead',
    'update',
    'update_batch',
    'query',
    'find',
    'stream',
    'transaction',
    'Transaction',
    'DatabaseError',
    'DbConnectionError',
    'IntegrityError',
    'OperationalError',
    'ProgrammingError',
    'UniqueViolation',
]
