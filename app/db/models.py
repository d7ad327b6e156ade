"""
==============================================================================
SQLAlchemy ORM Models Module
==============================================================================

ORM models for the shop: members, catalog items, carts and orders.

Database Schema:
---------------

    ┌──────────────────────────────┐        ┌──────────────────────────────┐
    │           members            │        │            items             │
    ├──────────────────────────────┤        ├──────────────────────────────┤
    │ id (INTEGER, PK)             │        │ id (INTEGER, PK)             │
    │ email (VARCHAR, UNIQUE)      │        │ name (VARCHAR)               │
    │ name (VARCHAR)               │        │ price (INTEGER)              │
    │ password_hash (VARCHAR)      │        │ stock_quantity (INTEGER)     │
    │ created_at (DATETIME)        │        │ rep_img_url (VARCHAR, NULL)  │
    └──────────────┬───────────────┘        └──────────────┬───────────────┘
                   │ 1:N                                   │ 1:N
                   ▼                                       ▼
    ┌──────────────────────────────────────────────────────────────────────┐
    │ carts: id, member_id (FK), item_id (FK), quantity                    │
    │        UNIQUE (member_id, item_id)                                   │
    └──────────────────────────────────────────────────────────────────────┘

    ┌──────────────────────────────┐  1:N   ┌──────────────────────────────┐
    │            orders            │ ─────▶ │         order_items          │
    ├──────────────────────────────┤        ├──────────────────────────────┤
    │ id (INTEGER, PK)             │        │ id (INTEGER, PK)             │
    │ member_id (FK → members.id)  │        │ order_id (FK → orders.id)    │
    │ created_at (DATETIME)        │        │ item_id (FK → items.id, NULL)│
    └──────────────────────────────┘        │ name, price, count           │
                                            │ total_price, rep_img_url     │
                                            └──────────────────────────────┘

Snapshot Semantics:
------------------
An OrderItem copies the item's name, unit price and image at the moment the
order is placed. Catalog edits made afterwards never reach placed orders.

=============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, relationship

from app.db.database import Base


# =============================================================================
# MEMBER MODEL
# =============================================================================

class Member(Base):
    """
    Shopper account.

    The email is the subject of every token issued to the member.
    Members are only read by the order workflow.
    """

    __tablename__ = "members"

    id: int = Column(Integer, primary_key=True, autoincrement=True)

    email: str = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        doc="Login email, also the token subject"
    )

    name: str = Column(String(50), nullable=False)

    password_hash: str = Column(
        String(255),
        nullable=False,
        doc="Bcrypt hashed password"
    )

    created_at: datetime = Column(DateTime, default=func.now(), nullable=False)

    orders: Mapped[List["Order"]] = relationship(
        "Order",
        back_populates="member",
        doc="Orders placed by this member"
    )

    cart_entries: Mapped[List["Cart"]] = relationship(
        "Cart",
        back_populates="member",
        cascade="all, delete-orphan",
        doc="Pending cart selections"
    )

    def __repr__(self) -> str:
        return f"Member(id={self.id!r}, email={self.email!r})"


# =============================================================================
# ITEM MODEL
# =============================================================================

class Item(Base):
    """
    Catalog entry.

    Attributes:
        id: Auto-incrementing primary key
        name: Display name
        price: Current unit price
        stock_quantity: Units currently available
        rep_img_url: Representative image URL (optional)
    """

    __tablename__ = "items"

    id: int = Column(Integer, primary_key=True, autoincrement=True)

    name: str = Column(String(255), nullable=False)

    price: int = Column(Integer, nullable=False, doc="Current unit price")

    stock_quantity: int = Column(
        Integer,
        default=0,
        nullable=False,
        doc="Units currently available"
    )

    rep_img_url: Optional[str] = Column(String(500), nullable=True)

    def has_stock_for(self, count: int) -> bool:
        """Check whether ``count`` units can be ordered right now."""
        return self.stock_quantity >= count

    def __repr__(self) -> str:
        return (
            f"Item(id={self.id!r}, name={self.name!r}, "
            f"price={self.price}, stock={self.stock_quantity})"
        )


# =============================================================================
# CART MODEL
# =============================================================================

class Cart(Base):
    """A member's pending selection of one item."""

    __tablename__ = "carts"
    __table_args__ = (
        UniqueConstraint("member_id", "item_id", name="uq_cart_member_item"),
    )

    id: int = Column(Integer, primary_key=True, autoincrement=True)

    member_id: int = Column(
        Integer,
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    item_id: int = Column(
        Integer,
        ForeignKey("items.id", ondelete="CASCADE"),
        nullable=False
    )

    quantity: int = Column(Integer, default=1, nullable=False)

    member: Mapped["Member"] = relationship("Member", back_populates="cart_entries")

    item: Mapped["Item"] = relationship("Item")

    def __repr__(self) -> str:
        return (
            f"Cart(member_id={self.member_id!r}, "
            f"item_id={self.item_id!r}, quantity={self.quantity})"
        )


# =============================================================================
# ORDER MODELS
# =============================================================================

class Order(Base):
    """
    Completed purchase owned by one member.

    Orders are created once through create_order() and never updated.

    Example:
        >>> order_item = OrderItem.create_order_item(item, item.name, item.price, 2)
        >>> order = Order.create_order(member, [order_item])
        >>> session.add(order)
    """

    __tablename__ = "orders"

    id: int = Column(Integer, primary_key=True, autoincrement=True)

    member_id: int = Column(
        Integer,
        ForeignKey("members.id"),
        nullable=False,
        index=True
    )

    created_at: datetime = Column(DateTime, default=func.now(), nullable=False)

    member: Mapped["Member"] = relationship("Member", back_populates="orders")

    order_items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
        doc="Snapshot line items, in the order they were requested"
    )

    @classmethod
    def create_order(cls, member: Member, order_items: List["OrderItem"]) -> "Order":
        """
        Build an order for ``member`` owning ``order_items``.

        Args:
            member: Member placing the order
            order_items: Line items in the caller's order

        Returns:
            New, unsaved Order
        """
        order = cls(member=member)
        for order_item in order_items:
            order.order_items.append(order_item)
        return order

    @property
    def total_price(self) -> int:
        """Sum of all line item totals."""
        return sum(order_item.total_price for order_item in self.order_items)

    def __repr__(self) -> str:
        return (
            f"Order(id={self.id!r}, member_id={self.member_id!r}, "
            f"items={len(self.order_items)}, total={self.total_price})"
        )


class OrderItem(Base):
    """
    Price and quantity snapshot of one item within one order.

    ``item_id`` keeps a soft link back to the catalog; every other column is
    copied at order time so later catalog changes never leak in.
    """

    __tablename__ = "order_items"

    id: int = Column(Integer, primary_key=True, autoincrement=True)

    order_id: int = Column(
        Integer,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    item_id: Optional[int] = Column(
        Integer,
        ForeignKey("items.id", ondelete="SET NULL"),
        nullable=True
    )

    name: str = Column(String(255), nullable=False, doc="Item name at order time")

    price: int = Column(Integer, nullable=False, doc="Unit price at order time")

    count: int = Column(Integer, nullable=False)

    total_price: int = Column(Integer, nullable=False, doc="price x count")

    rep_img_url: Optional[str] = Column(String(500), nullable=True)

    order: Mapped["Order"] = relationship("Order", back_populates="order_items")

    @classmethod
    def create_order_item(
        cls,
        item: Item,
        name: str,
        price: int,
        count: int
    ) -> "OrderItem":
        """
        Snapshot ``item`` for an order line.

        Args:
            item: Catalog item being ordered
            name: Item name to record
            price: Unit price to record
            count: Quantity ordered

        Returns:
            New, unsaved OrderItem
        """
        return cls(
            item_id=item.id,
            name=name,
            price=price,
            count=count,
            total_price=price * count,
            rep_img_url=item.rep_img_url,
        )

    def __repr__(self) -> str:
        return (
            f"OrderItem(id={self.id!r}, name={self.name!r}, "
            f"price={self.price}, count={self.count})"
        )
