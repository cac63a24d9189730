# =============================================================================
# PEDIDOS v1.0 - CACHE TAG INVALIDATION
# =============================================================================
# Fire-and-forget notifications telling downstream caches which tagged
# responses are stale after a mutation
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional


logger = logging.getLogger("pedidos.cache")

ORDERS_TAG = "orders"

Listener = Callable[[str], None]


def order_tag(order_id: int) -> str:
    """Item-level tag of a single order."""
    return f"order-{order_id}"


class TagInvalidator:
    """
    Registry of invalidation listeners.

    Usage:
        unsubscribe = invalidator.subscribe(lambda tag: cache.drop(tag))
        invalidator.revalidate_tag("orders")

    A listener that raises is logged and skipped; the caller never sees
    the failure.
    """

    def __init__(self):
        self._listeners: List[Listener] = []
        self._invalidated_at: Dict[str, datetime] = {}

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def revalidate_tag(self, tag: str) -> None:
        self._invalidated_at[tag] = datetime.now(timezone.utc)
        logger.debug("Invalidated cache tag %s", tag)

        for listener in list(self._listeners):
            try:
                listener(tag)
            except Exception:
                logger.exception("Cache listener failed for tag %s", tag)

    def invalidated_at(self, tag: str) -> Optional[datetime]:
        """Last invalidation time of a tag, None if never invalidated."""
        return self._invalidated_at.get(tag)

    def reset(self) -> None:
        self._listeners.clear()
        self._invalidated_at.clear()


# Singleton instance
invalidator = TagInvalidator()


def revalidate_tag(tag: str) -> None:
    invalidator.revalidate_tag(tag)
