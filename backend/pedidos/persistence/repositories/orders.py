# =============================================================================
# PEDIDOS v1.0 - ORDERS REPOSITORY
# =============================================================================
# SQL for the order aggregate: header, items, truck and driver links
# =============================================================================

from typing import Optional, List, Iterable

from ...config import config
from ...database_pg import QueryParam, SqlType
from ...models import (
    OrderHeaderRow,
    OrderItemRow,
    TruckRow,
    DriverRow,
    OrderItemInput,
    OrderUpdate,
)
from .base import BaseRepository


S = config.DB_SCHEMA
INV = config.INVOICE_SCHEMA


# =============================================================================
# READ STATEMENTS
# =============================================================================

ORDER_HEADER_SQL = f"""
    SELECT
        p.id, p.order_number, p.status, p.created_at, p.updated_at, p.notes,
        p.customer_id, p.destination_id, p.total,
        p.invoice_series, p.invoice_number, p.invoice_n,
        c.name AS client_name, c.rfc,
        d.name AS destino_name,
        f.numserie AS serie, f.numfactura AS folio
    FROM {S}.app_pedidos p
    JOIN {S}.vw_app_clientes c ON c.id = p.customer_id
    LEFT JOIN {S}.app_destinos d ON d.id = p.destination_id
    LEFT JOIN {INV}.facturasventa f ON f.numserie = p.invoice_series
                                   AND f.numfactura = p.invoice_number
                                   AND f.n = p.invoice_n
    WHERE p.id = @id
"""

ORDER_ITEMS_SQL = f"""
    SELECT
        i.id, i.quantity, i.price_per_unit, i.unit,
        prod.id AS product_id,
        prod.name AS product_name,
        prod.unit AS product_unit
    FROM {S}.app_pedidos_items i
    JOIN {S}.vw_app_productos prod ON prod.id = i.product_id
    WHERE i.order_id = @id
    ORDER BY i.id
"""

ORDER_TRUCKS_SQL = f"""
    SELECT t.id, t.placa, t.brand, t.model
    FROM {S}.app_pedidos_camiones pc
    JOIN {S}.app_camiones t ON t.id = pc.camion_id
    WHERE pc.pedido_id = @id
    ORDER BY t.id
"""

ORDER_DRIVERS_SQL = f"""
    SELECT ch.id, ch.name, ch.docid AS "docId"
    FROM {S}.app_pedidos_choferes pch
    JOIN {S}.app_choferes ch ON ch.id = pch.chofer_id
    WHERE pch.pedido_id = @id
    ORDER BY ch.id
"""


# =============================================================================
# WRITE STATEMENTS
# =============================================================================

# RETURNING tells a missing order apart; the UPDATE also takes the row lock
UPDATE_ORDER_SQL = f"""
    UPDATE {S}.app_pedidos
    SET customer_id = @customer_id,
        destination_id = @destination_id,
        total = @total,
        invoice_series = @invoice_series,
        invoice_number = @invoice_number,
        invoice_n = @invoice_n,
        updated_at = CURRENT_TIMESTAMP
    WHERE id = @id
    RETURNING id
"""

DELETE_ITEMS_SQL = f"DELETE FROM {S}.app_pedidos_items WHERE order_id = @id"

INSERT_ITEM_SQL = f"""
    INSERT INTO {S}.app_pedidos_items (order_id, product_id, quantity, price_per_unit, unit)
    VALUES (@order_id, @product_id, @quantity, @price_per_unit, @unit)
"""

DELETE_TRUCKS_SQL = f"DELETE FROM {S}.app_pedidos_camiones WHERE pedido_id = @id"

INSERT_TRUCK_SQL = f"""
    INSERT INTO {S}.app_pedidos_camiones (pedido_id, camion_id)
    VALUES (@pedido_id, @camion_id)
"""

DELETE_DRIVERS_SQL = f"DELETE FROM {S}.app_pedidos_choferes WHERE pedido_id = @id"

INSERT_DRIVER_SQL = f"""
    INSERT INTO {S}.app_pedidos_choferes (pedido_id, chofer_id)
    VALUES (@pedido_id, @chofer_id)
"""


def _id_param(order_id: int) -> List[QueryParam]:
    return [QueryParam("id", SqlType.INT, order_id)]


class OrdersRepository(BaseRepository):
    """Repository for app_pedidos and its child tables."""

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_header(self, order_id: int) -> Optional[OrderHeaderRow]:
        """
        Order header with client, destination and invoice columns.

        Returns:
            OrderHeaderRow or None if the order (or its client) does not exist
        """
        row = self._execute_one(ORDER_HEADER_SQL, _id_param(order_id))
        return OrderHeaderRow.model_validate(row) if row else None

    def get_items(self, order_id: int) -> List[OrderItemRow]:
        rows = self._execute_query(ORDER_ITEMS_SQL, _id_param(order_id))
        return [OrderItemRow.model_validate(row) for row in rows]

    def get_trucks(self, order_id: int) -> List[TruckRow]:
        rows = self._execute_query(ORDER_TRUCKS_SQL, _id_param(order_id))
        return [TruckRow.model_validate(row) for row in rows]

    def get_drivers(self, order_id: int) -> List[DriverRow]:
        rows = self._execute_query(ORDER_DRIVERS_SQL, _id_param(order_id))
        return [DriverRow.model_validate(row) for row in rows]

    # -------------------------------------------------------------------------
    # Writes (caller owns the transaction)
    # -------------------------------------------------------------------------

    def update_header(self, order_id: int, data: OrderUpdate) -> bool:
        """
        Update the mutable header fields and updated_at.

        Returns:
            True if the order exists
        """
        row = self._execute_one(UPDATE_ORDER_SQL, [
            QueryParam("id", SqlType.INT, order_id),
            QueryParam("customer_id", SqlType.INT, data.customer_id),
            QueryParam("destination_id", SqlType.INT, data.destination_id),
            QueryParam("total", SqlType.DECIMAL, data.resolved_total()),
            QueryParam("invoice_series", SqlType.NVARCHAR, data.invoice_series),
            QueryParam("invoice_number", SqlType.INT, data.invoice_number),
            QueryParam("invoice_n", SqlType.INT, data.invoice_n),
        ])
        return row is not None

    def replace_items(self, order_id: int, items: Iterable[OrderItemInput]) -> None:
        """Delete every item of the order, then insert the submitted ones in order."""
        self._execute(DELETE_ITEMS_SQL, _id_param(order_id))
        for item in items:
            self._execute(INSERT_ITEM_SQL, [
                QueryParam("order_id", SqlType.INT, order_id),
                QueryParam("product_id", SqlType.INT, item.product_id),
                QueryParam("quantity", SqlType.DECIMAL, item.quantity),
                QueryParam("price_per_unit", SqlType.DECIMAL, item.price_per_unit),
                QueryParam("unit", SqlType.NVARCHAR, item.unit),
            ])

    def replace_trucks(self, order_id: int, truck_ids: Iterable[int]) -> None:
        self._execute(DELETE_TRUCKS_SQL, _id_param(order_id))
        for truck_id in truck_ids:
            self._execute(INSERT_TRUCK_SQL, [
                QueryParam("pedido_id", SqlType.INT, order_id),
                QueryParam("camion_id", SqlType.INT, truck_id),
            ])

    def replace_drivers(self, order_id: int, driver_ids: Iterable[int]) -> None:
        self._execute(DELETE_DRIVERS_SQL, _id_param(order_id))
        for driver_id in driver_ids:
            self._execute(INSERT_DRIVER_SQL, [
                QueryParam("pedido_id", SqlType.INT, order_id),
                QueryParam("chofer_id", SqlType.INT, driver_id),
            ])
