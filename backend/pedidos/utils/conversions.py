# =============================================================================
# PEDIDOS v1.0 - UTILS/CONVERSIONS
# =============================================================================
# Parsing of path ids and numeric columns
# =============================================================================

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..exceptions import InvalidOrderIdError


_INTEGER_PREFIX = re.compile(r'^\s*([+-]?\d+)')


def parse_order_id(value: Any) -> int:
    """
    Parse an order id taken from a path segment.

    Leading whitespace and sign are accepted and parsing stops at the first
    non-digit, so "12abc" is 12 and "1.5" is 1. Only a segment without a
    leading integer ("abc", "-", "") is rejected.

    Raises:
        InvalidOrderIdError
    """
    match = _INTEGER_PREFIX.match(str(value)) if value is not None else None
    if match is None:
        raise InvalidOrderIdError()
    return int(match.group(1))


def to_number(value: Any) -> Optional[float]:
    """
    Convert a numeric column to float.

    The driver may hand back Decimal, int or text ("10.50"). None stays None.

    Raises:
        ValueError: text that is not a number
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(Decimal(str(value).strip()))
    except InvalidOperation:
        raise ValueError(f"Not a number: {value!r}")
