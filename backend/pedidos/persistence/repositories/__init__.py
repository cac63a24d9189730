# =============================================================================
# PEDIDOS v1.0 - REPOSITORIES PACKAGE
# =============================================================================
# Repository pattern for database access
#
# Structure:
#   - base.py: BaseRepository bound to the request connection
#   - orders.py: OrdersRepository (header, items, trucks, drivers)
# =============================================================================

from .base import BaseRepository
from .orders import OrdersRepository


__all__ = [
    'BaseRepository',
    'OrdersRepository',
]
