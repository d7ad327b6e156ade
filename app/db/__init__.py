"""
==============================================================================
Database Package
==============================================================================

SQLAlchemy database infrastructure and ORM models.

Architecture:
------------
├── database.py   - DatabaseManager class, session factory
├── models.py     - Member, Item, Cart, Order, OrderItem
└── init_db.py    - DatabaseInitializer for startup

==============================================================================
"""

from .database import DatabaseManager, Base, get_db
from .models import Member, Item, Cart, Order, OrderItem
from .init_db import DatabaseInitializer, init_db

__all__ = [
    # Database management
    "DatabaseManager",
    "Base",
    "get_db",
    # Models
    "Member",
    "Item",
    "Cart",
    "Order",
    "OrderItem",
    # Initialization
    "DatabaseInitializer",
    "init_db",
]
