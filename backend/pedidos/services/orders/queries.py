# =============================================================================
# PEDIDOS v1.0 - ORDERS QUERIES
# =============================================================================
# Read side of the order resource: header lookup and aggregate assembly
# =============================================================================

from typing import List

from ...exceptions import OrderNotFoundError
from ...models import (
    OrderHeaderRow,
    OrderItemRow,
    TruckRow,
    DriverRow,
    OrderDetail,
    ClientOut,
    InvoiceOut,
    OrderItemOut,
    ProductOut,
)
from ...persistence.repositories import OrdersRepository


def get_order_detail(db, order_id: int) -> OrderDetail:
    """
    Load the full order aggregate.

    The header is a prerequisite: if it is missing no child query is issued.

    Raises:
        OrderNotFoundError
    """
    repo = OrdersRepository(db)

    header = repo.get_header(order_id)
    if header is None:
        raise OrderNotFoundError()

    items = repo.get_items(order_id)
    trucks = repo.get_trucks(order_id)
    drivers = repo.get_drivers(order_id)

    return build_order_detail(header, items, trucks, drivers)


def build_order_detail(
    header: OrderHeaderRow,
    items: List[OrderItemRow],
    trucks: List[TruckRow],
    drivers: List[DriverRow]
) -> OrderDetail:
    """Merge header fields with client, invoice, items, trucks and drivers."""
    invoice = None
    if header.has_invoice():
        invoice = InvoiceOut(
            serie=header.invoice_series,
            folio=header.invoice_number,
            n=header.invoice_n,
        )

    return OrderDetail(
        **header.model_dump(),
        client=ClientOut(
            id=header.customer_id,
            name=header.client_name,
            rfc=header.rfc,
        ),
        invoice=invoice,
        items=[
            OrderItemOut(
                id=item.id,
                quantity=item.quantity,
                price_per_unit=item.price_per_unit,
                unit=item.unit,
                product=ProductOut(
                    id=item.product_id,
                    name=item.product_name,
                    unit=item.product_unit,
                ),
            )
            for item in items
        ],
        trucks=trucks,
        drivers=drivers,
    )
