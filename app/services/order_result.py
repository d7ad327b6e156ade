"""
==============================================================================
Order Placement Outcomes
==============================================================================

Order placement reports its outcome as a value instead of raising:

    OrderResult.success(order)           → ok, carries the persisted Order
    OrderResult.failed(OrderFailure...)  → rejected, nothing was written

Every failure has a kind the caller can branch on:

    NOT_FOUND           member or item does not exist
    INVALID_REQUEST     item not in the cart, empty order, bad count
    INSUFFICIENT_STOCK  requested count exceeds the current stock

The HTTP layer calls unwrap(), which raises the AppException describing the
failure so it is rendered like every other API error.

==============================================================================
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.core import exceptions
from app.core.exceptions import AppException
from app.db.models import Order


class OrderErrorKind(str, enum.Enum):
    """Categories of rejected order placements."""

    NOT_FOUND = "not_found"
    INVALID_REQUEST = "invalid_request"
    INSUFFICIENT_STOCK = "insufficient_stock"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OrderFailure:
    """Why an order placement was rejected."""

    kind: OrderErrorKind
    error: AppException

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def details(self) -> Dict[str, Any]:
        return self.error.details

    def to_exception(self) -> AppException:
        return self.error

    # =========================================================================
    # FACTORIES
    # =========================================================================

    @classmethod
    def member_not_found(cls, member_id: Any) -> "OrderFailure":
        return cls(OrderErrorKind.NOT_FOUND, exceptions.member_not_found(member_id))

    @classmethod
    def item_not_found(cls, item_id: Any) -> "OrderFailure":
        return cls(OrderErrorKind.NOT_FOUND, exceptions.item_not_found(item_id))

    @classmethod
    def item_not_in_cart(cls, item_name: str, item_id: Any) -> "OrderFailure":
        return cls(
            OrderErrorKind.INVALID_REQUEST,
            exceptions.item_not_in_cart(item_name, item_id)
        )

    @classmethod
    def invalid_count(cls, item_id: Any, count: int) -> "OrderFailure":
        return cls(
            OrderErrorKind.INVALID_REQUEST,
            exceptions.invalid_order_count(item_id, count)
        )

    @classmethod
    def empty_order(cls) -> "OrderFailure":
        return cls(OrderErrorKind.INVALID_REQUEST, exceptions.empty_order())

    @classmethod
    def insufficient_stock(cls, item_name: str, stock_quantity: int) -> "OrderFailure":
        return cls(
            OrderErrorKind.INSUFFICIENT_STOCK,
            exceptions.insufficient_stock(item_name, stock_quantity)
        )


@dataclass(frozen=True)
class OrderResult:
    """
    Outcome of one order placement.

    Example:
        >>> result = service.process_order(member_id, items)
        >>> if not result.ok:
        ...     print(result.failure.kind, result.failure.message)
    """

    order: Optional[Order] = None
    failure: Optional[OrderFailure] = None

    @classmethod
    def success(cls, order: Order) -> "OrderResult":
        return cls(order=order)

    @classmethod
    def failed(cls, failure: OrderFailure) -> "OrderResult":
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> Order:
        """
        Return the placed order.

        Raises:
            AppException: The error describing the failure, if any
        """
        if self.failure is not None:
            raise self.failure.to_exception()
        return self.order
