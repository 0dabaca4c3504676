"""
Import each funcdb module on its own to catch circular imports.

Every module is imported in a fresh interpreter, so a module that only
imports cleanly after some other module was loaded first is reported.
"""
import subprocess
import sys

import pytest

MODULES = [
    # No internal dependencies
    'funcdb.utils.connection_utils',
    'funcdb.sql',
    'funcdb.exceptions',

    # Dialect support
    'funcdb.utils.auto_commit',
    'funcdb.utils',
    'funcdb.strategy.base',
    'funcdb.strategy.sqlite',
    'funcdb.strategy.postgres',
    'funcdb.strategy',
    'funcdb.options',
    'funcdb.connection',

    # Statements and results
    'funcdb.statement',
    'funcdb.iterator',
    'funcdb.query',
    'funcdb.transaction',
    'funcdb.processors',
    'funcdb.testing',

    # Main package
    'funcdb',
]


@pytest.mark.parametrize('module', MODULES)
def test_module_imports_alone(module):
    """Test that the module imports without any other module loaded first"""
    result = subprocess.run([sys.executable, '-c', f'import {module}'],
                            capture_output=True, text=True)

    assert result.returncode == 0, f'{module} failed to import:\n{result.stderr}'
