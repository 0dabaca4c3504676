"""
SQL script helpers for tests.

Classes declare the scripts that set up (or tear down) their database with
the `sql` decorator; fixtures look them up with `sql_for` and run them with
`run_scripts`:

    @sql('tests/resources/db/migrations')
    @sql('tests/resources/db/cleanup', phase=ExecutionPhase.AFTER_TEST_METHOD)
    class TestWords:
        ...

    run_scripts(cn, sql_for(TestWords))

A path may name a single `.sql` file or a directory, which is walked
recursively for `.sql` files in sorted order.
"""
import logging
import pathlib
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from funcdb.query import update
from funcdb.sql import split_statements

__all__ = [
    'FILE_EXTENSION',
    'ExecutionPhase',
    'SqlScripts',
    'sql',
    'sql_for',
    'sql_scripts',
    'run_scripts',
]

logger = logging.getLogger(__name__)

FILE_EXTENSION = '.sql'


class ExecutionPhase(Enum):
    """Whether scripts run before or after each test method."""
    BEFORE_TEST_METHOD = auto()
    AFTER_TEST_METHOD = auto()


@dataclass(frozen=True)
class SqlScripts:
    """Script paths declared on a class for one execution phase."""
    paths: tuple[str, ...]
    phase: ExecutionPhase = ExecutionPhase.BEFORE_TEST_METHOD


def sql(*paths: str | pathlib.Path, phase: ExecutionPhase = ExecutionPhase.BEFORE_TEST_METHOD):
    """Class decorator associating SQL scripts with a class.

    Decorators may be stacked; declarations are kept top to bottom and
    subclasses inherit those of their bases after their own.
    """
    def decorator(cls: type) -> type:
        inherited = getattr(cls, '__sql_scripts__', ())
        declared = SqlScripts(tuple(str(p) for p in paths), phase)
        cls.__sql_scripts__ = (declared, *inherited)
        return cls
    return decorator


def sql_for(obj: Any, phase: ExecutionPhase = ExecutionPhase.BEFORE_TEST_METHOD) -> list[pathlib.Path]:
    """List the SQL script files declared on a class (or an instance's class).

    Parameters
        obj: A class decorated with `sql`, or an instance of one
        phase: Which declarations to resolve

    Returns
        Script files in declaration order
    """
    cls = obj if isinstance(obj, type) else type(obj)
    scripts = []
    for declared in getattr(cls, '__sql_scripts__', ()):
        if declared.phase is not phase:
            continue
        for path in declared.paths:
            scripts.extend(sql_scripts(path))
    return scripts


def sql_scripts(path: str | pathlib.Path) -> list[pathlib.Path]:
    """Return the SQL scripts a path refers to.

    A file with a `.sql` extension (any case) is returned as is. A directory
    is walked and its SQL scripts returned sorted. Anything else, including
    a missing path, gives an empty list.
    """
    path = pathlib.Path(path)
    if path.is_file():
        return [path] if path.suffix.lower() == FILE_EXTENSION else []
    if path.is_dir():
        return sorted(p for p in path.rglob('*')
                      if p.is_file() and p.suffix.lower() == FILE_EXTENSION)
    return []


def run_scripts(cn: Any, scripts: list[str | pathlib.Path]) -> int:
    """Execute each script's statements in order.

    Returns
        Number of statements executed
    """
    executed = 0
    for script in scripts:
        statements = split_statements(pathlib.Path(script).read_text())
        logger.debug(f'Running {len(statements)} statements from {script}')
        for statement in statements:
            update(cn, statement)
        executed += len(statements)
    return executed
