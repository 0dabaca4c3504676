"""
Unit tests for the lazy result set iterator.
"""
import pytest
from funcdb.iterator import Lookahead, ResultSetIterator


def first_column(row):
    return row[0]


class TestResultSetIterator:
    """Test suite for ResultSetIterator lookahead handling"""

    def test_iterates_rows_in_order(self, fake_cursor):
        """Test that every row is produced once, in cursor order"""
        rows = ResultSetIterator(fake_cursor([('a',), ('b',), ('c',)]), first_column)

        assert list(rows) == ['a', 'b', 'c']

    def test_has_next_is_idempotent(self, fake_cursor):
        """Test that repeated has_next calls advance the cursor only once"""
        cursor = fake_cursor([('a',), ('b',), ('c',)])
        rows = ResultSetIterator(cursor, first_column)

        assert next(rows) == 'a'
        assert rows.has_next()
        assert rows.has_next()
        assert rows.has_next()
        assert cursor.fetches == 2
        assert next(rows) == 'b'
        assert next(rows) == 'c'
        assert not rows.has_next()

    def test_next_without_has_next(self, fake_cursor):
        """Test that next advances the cursor itself when needed"""
        cursor = fake_cursor([('a',), ('b',)])
        rows = ResultSetIterator(cursor, first_column)

        assert next(rows) == 'a'
        assert next(rows) == 'b'
        assert cursor.fetches == 2

    def test_lookahead_states(self, fake_cursor):
        """Test the lookahead state after each step"""
        rows = ResultSetIterator(fake_cursor([('a',)]), first_column)
        assert rows.lookahead is Lookahead.UNKNOWN

        rows.has_next()
        assert rows.lookahead is Lookahead.AVAILABLE

        next(rows)
        assert rows.lookahead is Lookahead.UNKNOWN

        rows.has_next()
        assert rows.lookahead is Lookahead.EXHAUSTED

    def test_exhausted_raises_stop_iteration(self, fake_cursor):
        """Test that next on an exhausted iterator raises StopIteration"""
        rows = ResultSetIterator(fake_cursor([('a',)]), first_column)
        next(rows)

        with pytest.raises(StopIteration):
            next(rows)

    def test_exhausted_stays_exhausted(self, fake_cursor):
        """Test that an exhausted iterator never fetches again"""
        cursor = fake_cursor([])
        rows = ResultSetIterator(cursor, first_column)

        assert not rows.has_next()
        assert not rows.has_next()
        with pytest.raises(StopIteration):
            next(rows)
        assert cursor.fetches == 1

    def test_exhaustion_closes_cursor(self, fake_cursor):
        """Test that running out of rows releases the cursor"""
        cursor = fake_cursor([('a',)])
        rows = ResultSetIterator(cursor, first_column)

        assert list(rows) == ['a']
        assert cursor.closed
        assert rows.closed

    def test_does_not_fetch_until_asked(self, fake_cursor):
        """Test that construction does not touch the cursor"""
        cursor = fake_cursor([('a',)])
        ResultSetIterator(cursor, first_column)

        assert cursor.fetches == 0

    def test_close_is_idempotent(self, fake_cursor):
        """Test that closing twice closes the cursor once and keeps values"""
        cursor = fake_cursor([('a',), ('b',)])
        rows = ResultSetIterator(cursor, first_column)
        value = next(rows)

        rows.close()
        rows.close()

        assert cursor.close_calls == 1
        assert value == 'a'

    def test_close_after_exhaustion(self, fake_cursor):
        """Test that an explicit close after exhaustion is a no-op"""
        cursor = fake_cursor([])
        rows = ResultSetIterator(cursor, first_column)
        list(rows)

        rows.close()

        assert cursor.close_calls == 1

    def test_context_manager_closes(self, fake_cursor):
        """Test that leaving a with block closes the cursor early"""
        cursor = fake_cursor([('a',), ('b',), ('c',)])

        with ResultSetIterator(cursor, first_column) as rows:
            assert next(rows) == 'a'

        assert cursor.close_calls == 1
        assert cursor.fetches == 1

    def test_extractor_error_propagates(self, fake_cursor):
        """Test that extractor errors surface immediately without re-delivery"""
        seen = []

        def extractor(row):
            seen.append(row[0])
            if row[0] == 'b':
                raise ValueError('bad row')
            return row[0]

        rows = ResultSetIterator(fake_cursor([('a',), ('b',), ('c',)]), extractor)

        assert next(rows) == 'a'
        with pytest.raises(ValueError, match='bad row'):
            next(rows)
        assert next(rows) == 'c'
        assert seen == ['a', 'b', 'c']

    def test_extractor_may_return_none(self, fake_cursor):
        """Test that None values from the extractor are ordinary elements"""
        rows = ResultSetIterator(fake_cursor([('a',), ('b',), ('c',)]),
                                 lambda row: None if row[0] == 'b' else row[0])

        assert list(rows) == ['a', None, 'c']
