# =============================================================================
# PEDIDOS v1.0 - ROUTERS PACKAGE
# =============================================================================

from . import orders

__all__ = [
    'orders',
]
