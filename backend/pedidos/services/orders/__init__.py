# =============================================================================
# PEDIDOS v1.0 - ORDERS SERVICE PACKAGE
# =============================================================================
#   orders/queries.py  - Read side (get_order_detail)
#   orders/commands.py - Write side (update_order)
# =============================================================================

from .queries import (
    get_order_detail,
    build_order_detail,
)

from .commands import (
    update_order,
    UPDATE_OK_MESSAGE,
)


__all__ = [
    'get_order_detail',
    'build_order_detail',
    'update_order',
    'UPDATE_OK_MESSAGE',
]
