# =============================================================================
# PEDIDOS v1.0 - CENTRALIZED EXCEPTIONS
# =============================================================================
# Custom exceptions mapped to HTTP responses by the handlers in main.py
# =============================================================================

from typing import Optional, Dict, Any, List


class AppException(Exception):
    """
    Base exception for the application.

    Every custom exception extends this class. The handlers in main.py
    render `detail` as a plain-text body with `status_code`.
    """
    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    detail: str = "Error interno del servidor"

    def __init__(self, detail: Optional[str] = None, extra: Dict[str, Any] = None):
        self.detail = detail or self.__class__.detail
        self.extra = extra or {}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Dict form for logging."""
        return {
            "code": self.code,
            "status_code": self.status_code,
            "message": self.detail,
            **self.extra
        }


# =============================================================================
# STANDARD HTTP EXCEPTIONS
# =============================================================================

class InvalidInputError(AppException):
    """Malformed input (400)."""
    status_code = 400
    code = "INVALID_INPUT"
    detail = "Solicitud inválida"


class NotFoundError(AppException):
    """Resource not found (404)."""
    status_code = 404
    code = "NOT_FOUND"
    detail = "Recurso no encontrado"


class InternalError(AppException):
    """Unexpected failure (500). Detail is never the original error."""
    status_code = 500
    code = "INTERNAL_ERROR"
    detail = "Error interno del servidor"


# =============================================================================
# ORDER DOMAIN EXCEPTIONS
# =============================================================================

class InvalidOrderIdError(InvalidInputError):
    """Order id path segment is not an integer."""
    code = "INVALID_ORDER_ID"
    detail = "ID de pedido inválido"


class OrderValidationError(InvalidInputError):
    """Update payload rejected by the schema; rendered as a JSON error list."""
    code = "ORDER_VALIDATION_ERROR"
    detail = "Datos de pedido inválidos"

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__(extra={"errors": errors})
        self.errors = errors


class OrderNotFoundError(NotFoundError):
    """Order not found."""
    code = "ORDER_NOT_FOUND"
    detail = "Pedido no encontrado"
