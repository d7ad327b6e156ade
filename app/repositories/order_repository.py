"""
==============================================================================
Order Repository Module
==============================================================================

Data access for orders. Orders are appended and queried by member; there is
no update or delete path.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session, joinedload, selectinload

from app.db.models import Member, Order
from app.repositories.pagination import Page, PageRequest


# Module logger
logger = logging.getLogger(__name__)


class OrderRepository:
    """
    Order store backed by the ``orders`` and ``order_items`` tables.

    Listings are ordered newest first, with the id breaking ties between
    orders created in the same instant.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def save(self, order: Order) -> Order:
        """Stage ``order`` and flush so it receives an id."""
        self._db.add(order)
        self._db.flush()
        logger.debug(f"Order staged: {order.id}")
        return order

    def find_by_member(self, member: Member) -> List[Order]:
        """All orders of ``member``; items load lazily on access."""
        return self._db.query(Order).filter(
            Order.member_id == member.id
        ).all()

    def find_orders_with_items_by_member(self, member: Member) -> List[Order]:
        """All orders of ``member`` with their items fetched in the same query."""
        return (
            self._db.query(Order)
            .options(joinedload(Order.order_items))
            .filter(Order.member_id == member.id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )

    def search_orders_by_member(
        self,
        member_id: int,
        page_request: PageRequest
    ) -> Page[Order]:
        """
        Fetch one page of a member's orders.

        Args:
            member_id: Owner of the orders
            page_request: Zero-based page index and size

        Returns:
            Page of orders with items loaded, plus the overall count
        """
        base_query = self._db.query(Order).filter(Order.member_id == member_id)

        total = base_query.count()

        content = (
            base_query
            .options(selectinload(Order.order_items))
            .order_by(Order.created_at.desc(), Order.id.desc())
            .offset(page_request.offset)
            .limit(page_request.size)
            .all()
        )

        return Page(content=content, page_request=page_request, total_elements=total)
