"""
Unit tests for SQL placeholder handling and script splitting.
"""
import pytest
from funcdb.sql import TokenType, split_statements
from funcdb.sql import standardize_placeholders, tokenize_sql


class TestTokenize:
    """Test suite for the SQL tokenizer"""

    def test_round_trip_text(self):
        sql = "SELECT 'it''s ?' AS s, ? -- trailing ?\nFROM t; /* ; */"
        assert ''.join(t.text for t in tokenize_sql(sql)) == sql

    def test_token_types(self):
        tokens = tokenize_sql("SELECT 'x' FROM t WHERE a = ?;")
        types = [t.type for t in tokens]

        assert types == [
            TokenType.SQL_TEXT,
            TokenType.STRING_LITERAL,
            TokenType.SQL_TEXT,
            TokenType.POSITIONAL_PH,
            TokenType.SEMICOLON,
        ]

    def test_doubled_quote_stays_in_literal(self):
        tokens = tokenize_sql("'it''s'")

        assert len(tokens) == 1
        assert tokens[0].type is TokenType.STRING_LITERAL


class TestStandardizePlaceholders:
    """Test suite for dialect placeholder conversion"""

    @pytest.mark.parametrize(('sql', 'expected'), [
        ('SELECT * FROM WORDS WHERE WORD = ?',
         'SELECT * FROM WORDS WHERE WORD = %s'),
        ('INSERT INTO WORDS (WORD, COUNT) VALUES (?, ?)',
         'INSERT INTO WORDS (WORD, COUNT) VALUES (%s, %s)'),
        ("SELECT * FROM WORDS WHERE WORD = '?' AND COUNT = ?",
         "SELECT * FROM WORDS WHERE WORD = '?' AND COUNT = %s"),
        ("SELECT * FROM WORDS WHERE WORD LIKE 'a%' AND COUNT = ?",
         "SELECT * FROM WORDS WHERE WORD LIKE 'a%%' AND COUNT = %s"),
        ('SELECT COUNT % 2 FROM WORDS WHERE WORD = ?',
         'SELECT COUNT %% 2 FROM WORDS WHERE WORD = %s'),
        ('SELECT ? -- what?\n',
         'SELECT %s -- what?\n'),
    ])
    def test_postgresql(self, sql, expected):
        assert standardize_placeholders(sql, 'postgresql') == expected

    @pytest.mark.parametrize('dialect', ['sqlite', None, 'other'])
    def test_other_dialects_unchanged(self, dialect):
        sql = "SELECT * FROM WORDS WHERE WORD LIKE 'a%' AND COUNT = ?"
        assert standardize_placeholders(sql, dialect) == sql

    def test_empty(self):
        assert standardize_placeholders('', 'postgresql') == ''


class TestSplitStatements:
    """Test suite for splitting scripts into statements"""

    def test_split_on_semicolons(self):
        script = """
        CREATE TABLE WORDS (WORD VARCHAR(20));
        INSERT INTO WORDS (WORD) VALUES ('a');
        """
        assert split_statements(script) == [
            'CREATE TABLE WORDS (WORD VARCHAR(20))',
            "INSERT INTO WORDS (WORD) VALUES ('a')",
        ]

    def test_last_statement_without_semicolon(self):
        assert split_statements('SELECT 1; SELECT 2') == ['SELECT 1', 'SELECT 2']

    def test_semicolon_in_literal(self):
        assert split_statements("INSERT INTO WORDS (WORD) VALUES ('a;b');") == [
            "INSERT INTO WORDS (WORD) VALUES ('a;b')",
        ]

    def test_semicolon_in_comment(self):
        script = '-- drop; everything\nDROP TABLE WORDS;'
        assert split_statements(script) == ['-- drop; everything\nDROP TABLE WORDS']

    def test_drops_empty_and_comment_only_statements(self):
        script = 'SELECT 1;;\n-- nothing here\n;  ;'
        assert split_statements(script) == ['SELECT 1']

    def test_empty_script(self):
        assert split_statements('') == []
