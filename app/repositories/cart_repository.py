"""
==============================================================================
Cart Repository Module
==============================================================================

Data access for cart entries, keyed by (member, item).

Cart rows are written by the cart management flow; the order workflow
reads them to check membership and deletes the ones it consumed.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session, joinedload

from app.db.models import Cart


# Module logger
logger = logging.getLogger(__name__)


class CartRepository:
    """
    Cart store backed by the ``carts`` table.

    The repository never commits; the calling service owns the transaction.

    Example:
        >>> carts = CartRepository(db_session)
        >>> entries = carts.find_cart_map(member_id)
        >>> carts.delete_all_by_member_id_and_item_ids(member_id, [1, 2])
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_cart_details(
        self,
        member_id: int,
        item_id: Optional[int] = None
    ) -> List[Cart]:
        """
        Load a member's cart entries together with their items.

        Args:
            member_id: Owner of the cart
            item_id: Restrict to one item when given

        Returns:
            Cart entries ordered by insertion
        """
        query = self._db.query(Cart).options(joinedload(Cart.item)).filter(
            Cart.member_id == member_id
        )

        if item_id is not None:
            query = query.filter(Cart.item_id == item_id)

        return query.order_by(Cart.id).all()

    def find_cart_map(self, member_id: int) -> Dict[int, Cart]:
        """Map item id to cart entry for one member."""
        return {cart.item_id: cart for cart in self.find_cart_details(member_id)}

    def delete_all_by_member_id_and_item_ids(
        self,
        member_id: int,
        item_ids: Iterable[int]
    ) -> int:
        """
        Delete one member's cart entries for the given items.

        Entries belonging to other members, or to items outside
        ``item_ids``, are left untouched.

        Args:
            member_id: Owner of the cart entries
            item_ids: Items whose entries are removed

        Returns:
            Number of rows deleted
        """
        ids = set(item_ids)
        if not ids:
            return 0

        deleted = self._db.query(Cart).filter(
            Cart.member_id == member_id,
            Cart.item_id.in_(ids)
        ).delete(synchronize_session="fetch")

        logger.debug(f"Removed {deleted} cart entries for member {member_id}")
        return deleted
