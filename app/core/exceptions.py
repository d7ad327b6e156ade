"""
Application Exception Handling

Single AppException class for all API errors with FastAPI integration.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppException(Exception):
    """
    Unified application exception rendered as a JSON error response.

    Usage:
        raise AppException("Member not found", "MEMBER_NOT_FOUND", 404)
        raise AppException("Only 5 left", "INSUFFICIENT_STOCK", 409, {"stock_quantity": 5})

    Error Codes:
        Authentication:
            - INVALID_CREDENTIALS (401)
            - TOKEN_EXPIRED (401)
            - TOKEN_INVALID (401)
            - INVALID_ARGUMENT (400)

        Lookup:
            - MEMBER_NOT_FOUND (404)
            - ITEM_NOT_FOUND (404)

        Ordering:
            - ITEM_NOT_IN_CART (400)
            - INVALID_ORDER_COUNT (400)
            - INSUFFICIENT_STOCK (409)

        General:
            - DATA_INTEGRITY_ERROR (500)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "ITEM_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException to a consistent JSON error response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def invalid_credentials() -> AppException:
    """Create invalid credentials exception."""
    return AppException("Invalid email or password", "INVALID_CREDENTIALS", 401)


def token_expired() -> AppException:
    """Create token expired exception."""
    return AppException("Token has expired", "TOKEN_EXPIRED", 401)


def token_invalid() -> AppException:
    """Create invalid token exception."""
    return AppException("Invalid or malformed token", "TOKEN_INVALID", 401)


def invalid_argument(message: str) -> AppException:
    """Create a client error that forwards the underlying message verbatim."""
    return AppException(message, "INVALID_ARGUMENT", 400)


def member_not_found(member_id: Optional[Any] = None) -> AppException:
    """Create member not found exception."""
    details = {"member_id": member_id} if member_id is not None else {}
    return AppException("Member not found", "MEMBER_NOT_FOUND", 404, details)


def item_not_found(item_id: Optional[Any] = None) -> AppException:
    """Create item not found exception."""
    details = {"item_id": item_id} if item_id is not None else {}
    return AppException("Item not found", "ITEM_NOT_FOUND", 404, details)


def item_not_in_cart(item_name: str, item_id: Any) -> AppException:
    return AppException(
        f"'{item_name}' is not in the cart",
        "ITEM_NOT_IN_CART",
        400,
        {"item_id": item_id, "item_name": item_name}
    )


def invalid_order_count(item_id: Any, count: int) -> AppException:
    return AppException(
        f"Order count must be at least 1, got {count}",
        "INVALID_ORDER_COUNT",
        400,
        {"item_id": item_id, "count": count}
    )


def empty_order() -> AppException:
    return AppException(
        "An order must contain at least one item",
        "INVALID_ORDER_COUNT",
        400
    )


def insufficient_stock(item_name: str, stock_quantity: int) -> AppException:
    """Create insufficient stock exception carrying the current stock."""
    return AppException(
        f"Only {stock_quantity} of '{item_name}' left in stock",
        "INSUFFICIENT_STOCK",
        409,
        {"item_name": item_name, "stock_quantity": stock_quantity}
    )


def data_integrity_error(message: str) -> AppException:
    return AppException(message, "DATA_INTEGRITY_ERROR", 500)
