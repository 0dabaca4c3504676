"""
SQL text handling.

Statements are written with qmark (`?`) placeholders. Before execution the
text is rewritten for the connection's dialect:

    SQL → Tokenize → Rewrite placeholders → Driver
           (once)     (dialect specific)

Main entry points:
- `standardize_placeholders(sql, dialect)` - Convert `?` to the driver's marker
- `split_statements(sql)` - Split a script into individual statements

String literals and comments are never rewritten or split.
"""
import re
from dataclasses import dataclass
from enum import Enum, auto

__all__ = [
    'TokenType',
    'Token',
    'tokenize_sql',
    'standardize_placeholders',
    'split_statements',
]


class TokenType(Enum):
    """Token types identified during SQL parsing."""
    SQL_TEXT = auto()
    STRING_LITERAL = auto()
    COMMENT = auto()
    POSITIONAL_PH = auto()      # ?
    SEMICOLON = auto()


@dataclass(slots=True)
class Token:
    """Token from SQL parsing."""
    type: TokenType
    text: str
    start: int
    end: int


_TOKENIZE = re.compile(r"""
    (?P<string>'(?:[^']|'')*'|"(?:[^"]|"")*")
    |(?P<comment>--[^\n]*|/\*.*?\*/)
    |(?P<qmark>\?)
    |(?P<semicolon>;)
""", re.VERBOSE | re.DOTALL)

_GROUP_TYPES = {
    'string': TokenType.STRING_LITERAL,
    'comment': TokenType.COMMENT,
    'qmark': TokenType.POSITIONAL_PH,
    'semicolon': TokenType.SEMICOLON,
}


def tokenize_sql(sql: str) -> list[Token]:
    """Split SQL into tokens in a single scan.

    Text between recognised tokens is returned as SQL_TEXT, so joining the
    text of all tokens reproduces the input exactly.
    """
    tokens: list[Token] = []
    pos = 0
    for match in _TOKENIZE.finditer(sql):
        if match.start() > pos:
            tokens.append(Token(TokenType.SQL_TEXT, sql[pos:match.start()], pos, match.start()))
        tokens.append(Token(_GROUP_TYPES[match.lastgroup], match.group(), match.start(), match.end()))
        pos = match.end()
    if pos < len(sql):
        tokens.append(Token(TokenType.SQL_TEXT, sql[pos:], pos, len(sql)))
    return tokens


def standardize_placeholders(sql: str, dialect: str | None = 'sqlite') -> str:
    """Convert `?` placeholders to the marker the dialect's driver expects.

    psycopg uses the `format` paramstyle, so for PostgreSQL every `?` becomes
    `%s` and every other `%` is doubled. SQLite and unknown dialects take the
    text unchanged.

    Parameters
        sql: SQL query string
        dialect: Database dialect

    Returns
        SQL with standardized placeholders
    """
    if not sql or dialect != 'postgresql':
        return sql

    if '?' not in sql and '%' not in sql:
        return sql

    result = []
    for token in tokenize_sql(sql):
        if token.type is TokenType.POSITIONAL_PH:
            result.append('%s')
        else:
            result.append(token.text.replace('%', '%%'))
    return ''.join(result)


def split_statements(sql: str) -> list[str]:
    """Split a script into statements on `;` outside literals and comments.

    Empty statements and statements holding nothing but comments are dropped.
    """
    statements = []
    current: list[str] = []
    has_content = False

    for token in tokenize_sql(sql):
        if token.type is TokenType.SEMICOLON:
            if has_content:
                statements.append(''.join(current).strip())
            current, has_content = [], False
            continue
        current.append(token.text)
        if token.type is not TokenType.COMMENT and token.text.strip():
            has_content = True

    if has_content:
        statements.append(''.join(current).strip())
    return statements
