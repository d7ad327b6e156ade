"""
==============================================================================
Order Service Module
==============================================================================

Order placement and order history for shop members.

This module implements:
- OrderService.process_order: place an order from cart contents
- OrderService.save_order: place an immediate ("buy now") order
- OrderService.get_orders_by_member: every order on one synthetic page
- OrderService.get_orders_by_member_paged: one real page of orders

Placement Flow:
--------------
    ┌──────────────┐
    │ Find Member  │──▶ NOT_FOUND
    └──────┬───────┘
           │  for each requested line, in caller order
    ┌──────▼───────┐
    │  Find Item   │──▶ NOT_FOUND
    └──────┬───────┘
    ┌──────▼───────┐
    │ In Cart?     │──▶ INVALID_REQUEST   (cart orders only)
    └──────┬───────┘
    ┌──────▼───────┐
    │ Stock >= n?  │──▶ INSUFFICIENT_STOCK
    └──────┬───────┘
    ┌──────▼───────┐
    │ Save Order   │
    └──────┬───────┘
    ┌──────▼───────┐
    │ Clear Cart   │   (cart orders only, requested items only)
    └──────┬───────┘
    ┌──────▼───────┐
    │   Commit     │
    └──────────────┘

All checks run before anything is written, and the whole placement is one
transaction: a rejected or failing placement leaves no order and no cart
deletions behind. Stock is read, never decremented, here.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from app.core import exceptions
from app.db.models import Cart, Member, Order, OrderItem
from app.repositories import CartRepository, OrderRepository, PageRequest
from app.schemas.order import (
    OrderItemRequest,
    OrderItemResponse,
    OrderPageResponse,
    OrderRequest,
    OrderResponse,
)
from app.services.entity_validation_service import EntityValidationService
from app.services.order_result import OrderFailure, OrderResult


# Module logger
logger = logging.getLogger(__name__)


class OrderService:
    """
    Order workflow over the member, item, cart and order stores.

    Collaborators are passed in explicitly; when omitted they are built on
    the same session so that every step shares one transaction.

    Attributes:
        _db: Database session owning the transaction
        _validator: Member/item lookups
        _carts: Cart store
        _orders: Order store

    Example:
        >>> service = OrderService(db_session)
        >>> result = service.process_order(member.id, [OrderItemRequest(item_id=1, count=2)])
        >>> order = result.unwrap()
    """

    def __init__(
        self,
        db: Session,
        validator: Optional[EntityValidationService] = None,
        cart_repository: Optional[CartRepository] = None,
        order_repository: Optional[OrderRepository] = None
    ) -> None:
        self._db = db
        self._validator = validator or EntityValidationService(db)
        self._carts = cart_repository or CartRepository(db)
        self._orders = order_repository or OrderRepository(db)

    # =========================================================================
    # PLACEMENT
    # =========================================================================

    def process_order(
        self,
        member_id: int,
        order_items: Sequence[OrderItemRequest]
    ) -> OrderResult:
        """
        Place an order for items currently in the member's cart.

        Every requested item must exist, be in the member's cart and have
        enough stock. On success the cart entries of the requested items
        (and only those) are removed.

        Args:
            member_id: Member placing the order
            order_items: Requested lines, processed in the given order

        Returns:
            OrderResult with the saved Order, or the first failure found
        """
        try:
            member = self._validator.find_member(member_id)
            if member is None:
                return self._reject(member_id, OrderFailure.member_not_found(member_id))

            cart_map = self._carts.find_cart_map(member_id)

            lines, failure = self._build_order_items(order_items, cart_map)
            if failure is not None:
                return self._reject(member_id, failure)

            order = self._orders.save(Order.create_order(member, lines))

            item_ids = [request.item_id for request in order_items]
            self._carts.delete_all_by_member_id_and_item_ids(member_id, item_ids)

            self._db.commit()

        except Exception:
            self._db.rollback()
            raise

        logger.info(
            f"✅ Cart order {order.id} placed by member {member_id}: "
            f"{len(lines)} line(s), total {order.total_price}"
        )
        return OrderResult.success(order)

    def save_order(self, member_id: int, request: OrderRequest) -> OrderResult:
        """
        Place an immediate order that bypasses the cart.

        Same checks as process_order() except cart membership; the cart is
        neither read nor modified.

        Args:
            member_id: Member placing the order
            request: Requested lines

        Returns:
            OrderResult with the saved Order, or the first failure found
        """
        try:
            member = self._validator.find_member(member_id)
            if member is None:
                return self._reject(member_id, OrderFailure.member_not_found(member_id))

            lines, failure = self._build_order_items(request.order_items, None)
            if failure is not None:
                return self._reject(member_id, failure)

            order = self._orders.save(Order.create_order(member, lines))

            self._db.commit()

        except Exception:
            self._db.rollback()
            raise

        logger.info(
            f"✅ Immediate order {order.id} placed by member {member_id}: "
            f"total {order.total_price}"
        )
        return OrderResult.success(order)

    def _build_order_items(
        self,
        requests: Sequence[OrderItemRequest],
        cart_map: Optional[Dict[int, Cart]]
    ) -> Tuple[List[OrderItem], Optional[OrderFailure]]:
        """
        Validate requested lines and snapshot them as OrderItems.

        Args:
            requests: Requested lines in caller order
            cart_map: Member's cart keyed by item id, or None to skip the
                cart membership check

        Returns:
            Tuple of (order_items, failure); failure is None when every
            line passed
        """
        if not requests:
            return [], OrderFailure.empty_order()

        order_items: List[OrderItem] = []

        for request in requests:
            item = self._validator.find_item(request.item_id)
            if item is None:
                return [], OrderFailure.item_not_found(request.item_id)

            if cart_map is not None and request.item_id not in cart_map:
                return [], OrderFailure.item_not_in_cart(item.name, item.id)

            if request.count < 1:
                return [], OrderFailure.invalid_count(item.id, request.count)

            if not item.has_stock_for(request.count):
                return [], OrderFailure.insufficient_stock(item.name, item.stock_quantity)

            order_items.append(
                OrderItem.create_order_item(item, item.name, item.price, request.count)
            )

        return order_items, None

    def _reject(self, member_id: int, failure: OrderFailure) -> OrderResult:
        self._db.rollback()
        logger.warning(
            f"Order rejected for member {member_id}: "
            f"{failure.kind} ({failure.code}) {failure.message}"
        )
        return OrderResult.failed(failure)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_orders_by_member(self, member_id: int) -> OrderPageResponse:
        """
        Every order of a member, presented as one synthetic page.

        Raises:
            AppException: MEMBER_NOT_FOUND if the member does not exist
            AppException: DATA_INTEGRITY_ERROR for a line with count < 1
        """
        member = self._validator.validate_member(member_id)

        orders = self._orders.find_orders_with_items_by_member(member)
        total_order_price = self._total_order_price(member)

        content = [self._to_order_response(order) for order in orders]

        return OrderPageResponse.single_page(content, total_order_price)

    def get_orders_by_member_paged(
        self,
        member_id: int,
        page: int,
        size: int
    ) -> OrderPageResponse:
        """
        One page of a member's orders, newest first.

        The grand total covers all of the member's orders, whatever page is
        requested.

        Args:
            member_id: Owner of the orders
            page: Zero-based page index
            size: Orders per page

        Raises:
            AppException: MEMBER_NOT_FOUND if the member does not exist
            AppException: DATA_INTEGRITY_ERROR for a line with count < 1
            ValueError: If page is negative or size is not positive
        """
        member = self._validator.validate_member(member_id)

        total_order_price = self._total_order_price(member)

        orders_page = self._orders.search_orders_by_member(
            member.id,
            PageRequest(page=page, size=size)
        )

        content = [self._to_order_response(order) for order in orders_page]

        return OrderPageResponse.from_page(orders_page, content, total_order_price)

    def _total_order_price(self, member: Member) -> int:
        return sum(order.total_price for order in self._orders.find_by_member(member))

    def _to_order_response(self, order: Order) -> OrderResponse:
        return OrderResponse(
            order_id=order.id,
            order_items=[self._to_item_response(line) for line in order.order_items],
            total_price=order.total_price,
            created_at=order.created_at,
        )

    @staticmethod
    def _to_item_response(order_item: OrderItem) -> OrderItemResponse:
        if order_item.count < 1:
            logger.error(
                f"Order item {order_item.id} has invalid count {order_item.count}"
            )
            raise exceptions.data_integrity_error(
                f"Order item {order_item.id} has a non-positive quantity"
            )

        return OrderItemResponse(
            item_name=order_item.name,
            quantity=order_item.count,
            item_price=order_item.total_price // order_item.count,
            total_price=order_item.total_price,
            item_image_url=order_item.rep_img_url,
        )
