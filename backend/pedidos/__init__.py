# =============================================================================
# PEDIDOS v1.0 - Main package
# =============================================================================

from .config import config
from .database_pg import get_connection, transaction, QueryParam, SqlType

__version__ = "1.0.0"
__all__ = [
    'config',
    'get_connection',
    'transaction',
    'QueryParam',
    'SqlType',
]
