# =============================================================================
# PEDIDOS v1.0 - UTILS PACKAGE
# =============================================================================
#   utils/conversions.py - parse_order_id, to_number
# =============================================================================

from .conversions import (
    parse_order_id,
    to_number,
)

__all__ = [
    'parse_order_id',
    'to_number',
]
