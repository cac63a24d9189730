# =============================================================================
# PEDIDOS v1.0 - ORDER MODELS
# =============================================================================
# Pydantic models for the order resource.
#
# STRUCTURE:
# - Request models (OrderItemInput, OrderUpdate) + validation_errors()
# - Row models: one per query, built once in the repository
# - Response models (OrderDetail and nested objects)
# =============================================================================

from datetime import datetime
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, ValidationError, field_validator

from .utils.conversions import to_number


# =============================================================================
# REQUEST MODELS
# =============================================================================

class OrderItemInput(BaseModel):
    """One submitted line item."""
    product_id: PositiveInt
    quantity: float = Field(..., gt=0, allow_inf_nan=False)
    price_per_unit: float = Field(..., ge=0, allow_inf_nan=False)
    unit: str = Field(..., min_length=1, max_length=20)


class OrderUpdate(BaseModel):
    """
    Request body for PUT /orders/{id}.

    Full replacement payload: header fields plus the three child
    collections. Unknown fields are ignored.

    Validations:
    - customer_id: required, positive
    - items: at least one
    - truck_ids / driver_ids: positive ids, duplicates collapsed
    - total: optional; when missing it is derived from the items
    """
    customer_id: PositiveInt
    destination_id: Optional[PositiveInt] = None
    total: Optional[float] = Field(None, ge=0, allow_inf_nan=False)

    invoice_series: Optional[str] = Field(None, min_length=1, max_length=20)
    invoice_number: Optional[int] = None
    invoice_n: Optional[int] = None

    items: List[OrderItemInput] = Field(..., min_length=1)
    truck_ids: List[PositiveInt] = Field(default_factory=list)
    driver_ids: List[PositiveInt] = Field(default_factory=list)

    @field_validator('truck_ids', 'driver_ids')
    @classmethod
    def unique_ids(cls, v):
        """Link tables hold sets: keep the first occurrence of each id."""
        return list(dict.fromkeys(v))

    def resolved_total(self) -> float:
        """Submitted total, or the sum of quantity * price_per_unit."""
        if self.total is not None:
            return self.total
        return round(sum(item.quantity * item.price_per_unit for item in self.items), 2)


def validation_errors(exc: ValidationError) -> List[Dict[str, Any]]:
    """Flatten a pydantic ValidationError into [{path, message, code}]."""
    return [
        {
            "path": list(err["loc"]),
            "message": err["msg"],
            "code": err["type"],
        }
        for err in exc.errors()
    ]


# =============================================================================
# ROW MODELS
# =============================================================================
# Text columns are passed through as-is: numbers found there become strings.

_ROW_CONFIG = ConfigDict(coerce_numbers_to_str=True)


class OrderHeaderRow(BaseModel):
    """Order header joined with client, destination and invoice."""
    model_config = _ROW_CONFIG

    id: int
    order_number: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    notes: Optional[str] = None
    customer_id: int
    destination_id: Optional[int] = None
    total: Optional[float] = None
    invoice_series: Optional[str] = None
    invoice_number: Optional[int] = None
    invoice_n: Optional[int] = None
    client_name: Optional[str] = None
    rfc: Optional[str] = None
    destino_name: Optional[str] = None
    serie: Optional[str] = None
    folio: Optional[int] = None

    @field_validator('total', mode='before')
    @classmethod
    def numeric_total(cls, v):
        return to_number(v)

    def has_invoice(self) -> bool:
        return self.invoice_series is not None and self.invoice_number is not None


class OrderItemRow(BaseModel):
    model_config = _ROW_CONFIG

    id: int
    quantity: float
    price_per_unit: float
    unit: Optional[str] = None
    product_id: int
    product_name: Optional[str] = None
    product_unit: Optional[str] = None

    @field_validator('quantity', 'price_per_unit', mode='before')
    @classmethod
    def numeric(cls, v):
        return to_number(v)


class TruckRow(BaseModel):
    model_config = _ROW_CONFIG

    id: int
    placa: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None


class DriverRow(BaseModel):
    model_config = _ROW_CONFIG

    id: int
    name: Optional[str] = None
    docId: Optional[str] = None


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class ClientOut(BaseModel):
    id: int
    name: Optional[str] = None
    rfc: Optional[str] = None


class InvoiceOut(BaseModel):
    serie: str
    folio: int
    n: Optional[int] = None


class ProductOut(BaseModel):
    id: int
    name: Optional[str] = None
    unit: Optional[str] = None


class OrderItemOut(BaseModel):
    id: int
    quantity: float
    price_per_unit: float
    unit: Optional[str] = None
    product: ProductOut


class OrderDetail(OrderHeaderRow):
    """Aggregate returned by GET /orders/{id}: header fields plus nested objects."""
    client: ClientOut
    invoice: Optional[InvoiceOut] = None
    items: List[OrderItemOut] = []
    trucks: List[TruckRow] = []
    drivers: List[DriverRow] = []


class OrderUpdateResult(BaseModel):
    message: str
    id: int
