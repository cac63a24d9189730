# =============================================================================
# PEDIDOS v1.0 - PERSISTENCE PACKAGE
# =============================================================================
# Persistence layer
#
#   database_pg.py               - Pool, connections, transaction scope
#   persistence/repositories/    - Repository pattern per aggregate
# =============================================================================

from ..database_pg import (
    init_pool,
    close_pool,
    get_connection,
    transaction,
)

__all__ = [
    'init_pool',
    'close_pool',
    'get_connection',
    'transaction',
]
