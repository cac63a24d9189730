# =============================================================================
# PEDIDOS v1.0 - ORDERS ROUTER
# =============================================================================
# GET  /orders/{id} - full order aggregate
# PUT  /orders/{id} - replace header, items, trucks and drivers
# =============================================================================

import logging

from fastapi import APIRouter, Depends, Request, Response
from pydantic import ValidationError

from ..database_pg import get_connection
from ..exceptions import AppException, InternalError, OrderValidationError
from ..models import OrderDetail, OrderUpdate, OrderUpdateResult, validation_errors
from ..services.orders import get_order_detail, update_order
from ..utils.conversions import parse_order_id


logger = logging.getLogger("pedidos.orders")

router = APIRouter(prefix="/orders")


# =============================================================================
# DEPENDENCIES
# =============================================================================
# Declared before get_connection on each endpoint: input errors are
# reported before a connection is borrowed.

def valid_order_id(order_id: str) -> int:
    """Path segment -> int, or InvalidOrderIdError (400)."""
    return parse_order_id(order_id)


async def valid_order_update(request: Request) -> OrderUpdate:
    """Request body -> OrderUpdate, or OrderValidationError (400 + error list)."""
    raw = await request.body()
    try:
        return OrderUpdate.model_validate_json(raw)
    except ValidationError as e:
        raise OrderValidationError(validation_errors(e))


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get("/{order_id}", response_model=OrderDetail)
def get_order(
    response: Response,
    pk: int = Depends(valid_order_id),
    db=Depends(get_connection)
) -> OrderDetail:
    """
    Order with nested client, invoice, items, trucks and drivers.

    - 400: id is not an integer
    - 404: order not found
    - 500: any other failure (logged, not exposed)
    """
    try:
        detail = get_order_detail(db, pk)
    except AppException:
        raise
    except Exception:
        logger.exception("[API_ORDERS_ID_GET] order %s", pk)
        raise InternalError()

    response.headers["Cache-Control"] = "no-store"
    return detail


@router.put("/{order_id}", response_model=OrderUpdateResult)
def put_order(
    pk: int = Depends(valid_order_id),
    payload: OrderUpdate = Depends(valid_order_update),
    db=Depends(get_connection)
) -> OrderUpdateResult:
    """
    Replace the order header and its item, truck and driver collections.

    - 400: id is not an integer (text) or body fails validation (JSON list)
    - 404: order not found, nothing written
    - 500: any other failure, every phase rolled back
    """
    try:
        result = update_order(db, pk, payload)
    except AppException:
        raise
    except Exception:
        logger.exception("[API_ORDERS_ID_PUT] order %s", pk)
        raise InternalError()

    return OrderUpdateResult(**result)
