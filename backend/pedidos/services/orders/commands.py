# =============================================================================
# PEDIDOS v1.0 - ORDERS COMMANDS
# =============================================================================
# Write side of the order resource: header update and replacement of the
# item, truck and driver collections in a single transaction
# =============================================================================

import logging
from typing import Dict, Any

from ...database_pg import transaction
from ...exceptions import OrderNotFoundError
from ...models import OrderUpdate
from ...persistence.repositories import OrdersRepository
from ..cache import revalidate_tag, ORDERS_TAG, order_tag


logger = logging.getLogger("pedidos.orders")

UPDATE_OK_MESSAGE = "Pedido actualizado correctamente"


def update_order(db, order_id: int, data: OrderUpdate) -> Dict[str, Any]:
    """
    Replace an order with the submitted payload.

    Phases, all in one transaction:
    1. header fields + updated_at
    2. items: delete all, insert submitted
    3. truck links: delete all, insert submitted
    4. driver links: delete all, insert submitted

    Any failure rolls back every phase. Cache tags are invalidated only
    after commit.

    Raises:
        OrderNotFoundError: no order with this id (nothing written)
    """
    with transaction(db):
        repo = OrdersRepository(db)

        if not repo.update_header(order_id, data):
            raise OrderNotFoundError()

        repo.replace_items(order_id, data.items)
        repo.replace_trucks(order_id, data.truck_ids)
        repo.replace_drivers(order_id, data.driver_ids)

    logger.info(
        "Order %s updated: %d items, %d trucks, %d drivers",
        order_id, len(data.items), len(data.truck_ids), len(data.driver_ids)
    )

    revalidate_tag(ORDERS_TAG)
    revalidate_tag(order_tag(order_id))

    return {"message": UPDATE_OK_MESSAGE, "id": order_id}
