# =============================================================================
# PEDIDOS v1.0 - SERVICES PACKAGE
# =============================================================================
#   services/orders/ - order reader and writer
#   services/cache.py - cache tag invalidation
# =============================================================================

from .orders import (
    get_order_detail,
    update_order,
)

from .cache import (
    invalidator,
    revalidate_tag,
    order_tag,
    ORDERS_TAG,
)

__all__ = [
    'get_order_detail',
    'update_order',
    'invalidator',
    'revalidate_tag',
    'order_tag',
    'ORDERS_TAG',
]
