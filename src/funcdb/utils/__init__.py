from funcdb.utils.auto_commit import disable_auto_commit
from funcdb.utils.auto_commit import enable_auto_commit, get_auto_commit
from funcdb.utils.auto_commit import set_auto_commit
from funcdb.utils.connection_utils import find_dialect_name, get_dialect_name
from funcdb.utils.connection_utils import get_raw_connection

__all__ = [
    'disable_auto_commit',
    'enable_auto_commit',
    'get_auto_commit',
    'set_auto_commit',
    'find_dialect_name',
    'get_dialect_name',
    'get_raw_connection',
]
